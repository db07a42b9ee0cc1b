"""Commit processing entry point for the post-commit hook.

The hook calls::

    commit-relay-process <commit-id> <previous-commit> <committer-name> <committer-email> <commit-message...>

The commit is enriched from the git CLI, appended to both commit logs and,
when configured, mirrored to the Google Doc.
"""
from commit_relay.core.config import Settings, get_settings
from commit_relay.core.logging import setup_logging, get_logger
from commit_relay.models.commit import CommitRecord, Committer
from commit_relay.services.docs_sync import DocSyncClient
from commit_relay.services.formatter import format_plaintext
from commit_relay.services.git_collector import GitMetadataCollector
from commit_relay.services.log_store import CommitLogStore, LogStoreError
from datetime import datetime, timezone
from typing import Optional, Tuple
import sys

import click

logger = get_logger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def process_commit(
    commit_id: str,
    previous_commit: str,
    committer_name: str,
    committer_email: str,
    message: str,
    collector: GitMetadataCollector,
    store: CommitLogStore,
    doc_sync: DocSyncClient,
) -> CommitRecord:
    """Build, store and mirror the record for a freshly made commit.

    Git metadata is best-effort; a failure there leaves fallback values in
    the record. Log store errors propagate.
    """
    logger.info("processing commit", commit_id=commit_id)

    metadata = collector.collect(commit_id)
    record = CommitRecord(
        id=commit_id,
        previous_id=previous_commit,
        committer=Committer(name=committer_name, email=committer_email),
        message=message,
        timestamp=utc_timestamp(),
        files_changed=metadata.files_changed,
        diff=metadata.diff,
    )

    store.append(record)

    synced = doc_sync.try_append_text(format_plaintext(record))
    if synced:
        logger.info("synced commit to google docs", commit_id=commit_id)
    elif doc_sync.enabled:
        logger.warning("failed to sync commit to google docs", commit_id=commit_id, reason=synced.reason)

    logger.info("commit processing complete", commit_id=commit_id, repo_root=metadata.repo_root)
    return record


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("commit_id", required=False)
@click.argument("previous_commit", required=False, default="")
@click.argument("committer_name", required=False, default="")
@click.argument("committer_email", required=False, default="")
@click.argument("message_parts", nargs=-1, type=click.UNPROCESSED)
@click.option("--logs-dir", type=click.Path(file_okay=False), default=None, help="Directory for the commit logs.")
def main(
    commit_id: Optional[str],
    previous_commit: str,
    committer_name: str,
    committer_email: str,
    message_parts: Tuple[str, ...],
    logs_dir: Optional[str],
):
    """Record a commit in the commit logs."""
    settings: Settings = get_settings()
    setup_logging(settings.DEBUG)

    if not commit_id:
        click.echo("Missing commit ID argument", err=True)
        sys.exit(1)

    collector = GitMetadataCollector(timeout=settings.GIT_TIMEOUT)
    store = CommitLogStore(logs_dir or settings.LOGS_DIR)
    doc_sync = DocSyncClient(settings.GOOGLE_DOCS_ID, settings.GOOGLE_APPLICATION_CREDENTIALS)

    try:
        process_commit(
            commit_id,
            previous_commit,
            committer_name,
            committer_email,
            " ".join(message_parts),
            collector=collector,
            store=store,
            doc_sync=doc_sync,
        )
    except LogStoreError as e:
        logger.error("error processing commit", commit_id=commit_id, error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
