"""Text and JSON renderings of commit records.

The plaintext layout matches the blocks already present in existing
``commits.log`` files and must not change. The JSON log is a sequence of
indented documents separated by a blank line, not a single JSON value
and not JSON lines.
"""
from commit_relay.models.commit import CommitRecord, FileStatus, PushEvent
from typing import List
import json

DETAILS_RULE = "==================== COMMIT DETAILS ===================="
FILES_RULE = "============ CHANGED FILES ============"
DIFF_RULE = "============ DIFF OUTPUT ============"
CLOSING_RULE = "==========================================="
RECORD_SEPARATOR = "\n\n"

STATUS_SYMBOLS = {
    FileStatus.ADDED: "+",
    FileStatus.DELETED: "-",
}

def status_symbol(status: FileStatus) -> str:
    return STATUS_SYMBOLS.get(status, "~")

def format_plaintext(record: CommitRecord) -> str:
    lines = [
        DETAILS_RULE,
        f"Committer: {record.committer.name} <{record.committer.email}>",
        f"Commit ID: {record.id}",
        f"Previous Commit: {record.previous_id}",
        f"Date: {record.timestamp}",
        f"Message: {record.message}",
        "",
        FILES_RULE,
    ]
    for changed in record.files_changed:
        lines.append(f"{status_symbol(changed.status)} {changed.path}")
    lines.append("")
    lines.append(DIFF_RULE)
    lines.append(record.diff)
    lines.append(CLOSING_RULE)

    return "\n".join(lines) + "\n\n"

def format_json(record: CommitRecord) -> str:
    payload = record.model_dump(by_alias=True)
    return json.dumps(payload, indent=2, ensure_ascii=False) + RECORD_SEPARATOR

def parse_json_log(text: str) -> List[CommitRecord]:
    """read back every record of a JSON commit log

    Records are decoded one after another rather than split on blank lines,
    a diff may itself contain blank lines.
    """
    decoder = json.JSONDecoder()
    records = []
    index = 0
    length = len(text)
    while True:
        while index < length and text[index].isspace():
            index += 1
        if index >= length:
            break
        payload, index = decoder.raw_decode(text, index)
        records.append(CommitRecord.model_validate(payload))
    return records

def format_push_header(event: PushEvent, pushed_at: str) -> str:
    lines = [
        f"Repository: {event.repository.full_name}",
        f"Branch: {event.branch}",
        f"Pushed by: {event.pusher.name} ({event.pusher.email or ''})",
        f"Date: {pushed_at}",
    ]
    return "\n".join(lines) + "\n\n"
