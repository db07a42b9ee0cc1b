from commit_relay.core.logging import get_logger
from commit_relay.models.commit import CommitRecord
from commit_relay.services.formatter import format_plaintext, format_json, parse_json_log
from pathlib import Path
from typing import Dict, List, Union

logger = get_logger(__name__)

PLAINTEXT_LOG = "commits.log"
JSON_LOG = "processed-commits.log"

class LogStoreError(Exception):
    """one or both commit log sinks could not be written"""

    def __init__(self, failures: Dict[str, Exception]):
        self.failures = failures
        details = "; ".join(f"{path}: {error}" for path, error in failures.items())
        super().__init__(f"failed to write commit log: {details}")

class CommitLogStore:
    """append-only writer for the plaintext and JSON commit logs

    Appends from concurrent requests are not coordinated; each record is a
    single append-mode write per file, which is enough for one process and
    commit-rate traffic.
    """

    def __init__(self, logs_dir: Union[str, Path]):
        self.logs_dir = Path(logs_dir)
        self.plaintext_path = self.logs_dir / PLAINTEXT_LOG
        self.json_path = self.logs_dir / JSON_LOG

    def ensure_dir_exists(self) -> None:
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def append(self, record: CommitRecord) -> None:
        try:
            self.ensure_dir_exists()
        except OSError as e:
            # both sinks are still attempted and report their own errors
            logger.error("could not create logs directory", logs_dir=str(self.logs_dir), error=str(e))

        failures = {}
        sinks = [
            (self.plaintext_path, format_plaintext),
            (self.json_path, format_json),
        ]
        for path, render in sinks:
            try:
                # lone surrogates from JSON escapes are written as \uXXXX
                with open(path, "a", encoding="utf-8", errors="backslashreplace") as handle:
                    handle.write(render(record))
            except (OSError, ValueError) as e:
                logger.error("error writing commit log", path=str(path), commit_id=record.id, error=str(e))
                failures[str(path)] = e

        if failures:
            raise LogStoreError(failures)

        logger.info("commit information saved", commit_id=record.id, logs_dir=str(self.logs_dir))

    def read_records(self) -> List[CommitRecord]:
        if not self.json_path.exists():
            return []
        return parse_json_log(self.json_path.read_text(encoding="utf-8"))
