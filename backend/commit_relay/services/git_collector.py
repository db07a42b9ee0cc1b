from commit_relay.core.logging import get_logger
from commit_relay.models.commit import ChangedFile
from commit_relay.models.result import OperationResult
from pydantic import BaseModel
from typing import List, Optional
import os
import subprocess

logger = get_logger(__name__)

DIFF_UNAVAILABLE = "Diff unavailable"

class GitCommandError(Exception):
    pass

class GitMetadata(BaseModel):
    repo_root: str
    files_changed: List[ChangedFile] = []
    diff: str = DIFF_UNAVAILABLE
    warnings: List[str] = []

def parse_name_status(output: str) -> List[ChangedFile]:
    """parse `git diff-tree --name-status` output

    Renames and copies list the source and destination paths, the
    destination is kept.
    """
    files = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t")
        status = parts[0].strip()
        path = parts[-1] if len(parts) > 1 else ""
        files.append(ChangedFile(status_code=status, path=path))
    return files

class GitMetadataCollector:
    """best-effort commit metadata from the git CLI

    Every call falls back to a fixed value when git fails, is missing or
    hangs past the timeout; the failure is logged and returned alongside.
    """

    def __init__(self, timeout: float = 10.0, cwd: Optional[str] = None):
        self.timeout = timeout
        self.cwd = cwd

    def _run_git(self, args: List[str]) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=self.cwd,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise GitCommandError("git executable not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise GitCommandError(f"git {args[0]} timed out after {self.timeout}s") from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise GitCommandError(f"git {args[0]} exited with {exc.returncode}: {stderr}") from exc
        return result.stdout or ""

    def run_repo_root(self) -> OperationResult:
        fallback = self.cwd or os.getcwd()
        try:
            return OperationResult.success(self._run_git(["rev-parse", "--show-toplevel"]).strip())
        except GitCommandError as e:
            logger.warning("could not determine git repository root", error=str(e))
            return OperationResult.failure(str(e), value=fallback)

    def run_changed_files(self, commit_id: str) -> OperationResult:
        try:
            output = self._run_git(["diff-tree", "--no-commit-id", "--name-status", "-r", commit_id])
            return OperationResult.success(parse_name_status(output))
        except GitCommandError as e:
            logger.warning("could not retrieve changed files", commit_id=commit_id, error=str(e))
            return OperationResult.failure(str(e), value=[])

    def run_diff(self, commit_id: str) -> OperationResult:
        try:
            return OperationResult.success(self._run_git(["show", commit_id, "--color=never"]))
        except GitCommandError as e:
            logger.warning("could not retrieve diff", commit_id=commit_id, error=str(e))
            return OperationResult.failure(str(e), value=DIFF_UNAVAILABLE)

    def repo_root(self) -> str:
        return self.run_repo_root().value

    def changed_files(self, commit_id: str) -> List[ChangedFile]:
        return self.run_changed_files(commit_id).value

    def diff(self, commit_id: str) -> str:
        return self.run_diff(commit_id).value

    def collect(self, commit_id: str) -> GitMetadata:
        root = self.run_repo_root()
        files = self.run_changed_files(commit_id)
        diff = self.run_diff(commit_id)

        warnings = [result.reason for result in (root, files, diff) if not result.ok]
        return GitMetadata(
            repo_root=root.value,
            files_changed=files.value,
            diff=diff.value,
            warnings=warnings
        )
