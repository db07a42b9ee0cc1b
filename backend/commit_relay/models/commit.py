from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from enum import Enum

class FileStatus(str, Enum):
    ADDED = "Added"
    MODIFIED = "Modified"
    DELETED = "Deleted"
    OTHER = "Other"

    @classmethod
    def from_code(cls, code: str) -> "FileStatus":
        """classify a git status letter; R100, C75, T and unknown codes are OTHER"""
        return {
            "A": cls.ADDED,
            "M": cls.MODIFIED,
            "D": cls.DELETED,
        }.get((code or "").strip().upper(), cls.OTHER)

class Committer(BaseModel):
    name: str = ""
    email: str = ""

    @field_validator("name", "email", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    class Config:
        frozen = True

class ChangedFile(BaseModel):
    """one entry of a commit's name-status listing"""
    status_code: str = Field("", alias="status")
    path: str = Field("", alias="file")

    @property
    def status(self) -> FileStatus:
        return FileStatus.from_code(self.status_code)

    class Config:
        frozen = True
        populate_by_name = True

class CommitRecord(BaseModel):
    """commit metadata as written to the commit logs

    Field aliases are the key names of the existing JSON log, declared in
    the order the log expects them.
    """
    id: str
    previous_id: str = Field("", alias="previousCommit")
    committer: Committer = Committer()
    message: str = ""
    timestamp: str = ""
    files_changed: List[ChangedFile] = Field(default_factory=list, alias="filesChanged")
    diff: str = ""

    class Config:
        frozen = True
        populate_by_name = True

class Repository(BaseModel):
    full_name: str = ""

class Pusher(BaseModel):
    name: str = ""
    email: Optional[str] = None

class PushCommit(BaseModel):
    """commit entry of a github push payload; no diff is included"""
    id: str
    message: str = ""
    timestamp: str = ""
    author: Optional[Committer] = None
    committer: Optional[Committer] = None
    added: List[str] = []
    removed: List[str] = []
    modified: List[str] = []

class PushEvent(BaseModel):
    ref: str = ""
    before: str = ""
    after: str = ""
    repository: Repository = Repository()
    pusher: Pusher = Pusher()
    commits: List[PushCommit] = []

    @property
    def branch(self) -> str:
        return self.ref.replace("refs/heads/", "", 1)

    def to_records(self) -> List[CommitRecord]:
        #each commit's parent is the one pushed before it
        records = []
        previous_id = self.before
        for commit in self.commits:
            person = commit.committer or commit.author or Committer()
            files = (
                [ChangedFile(status_code="A", path=path) for path in commit.added]
                + [ChangedFile(status_code="M", path=path) for path in commit.modified]
                + [ChangedFile(status_code="D", path=path) for path in commit.removed]
            )
            records.append(CommitRecord(
                id=commit.id,
                previous_id=previous_id,
                committer=Committer(name=person.name, email=person.email),
                message=commit.message,
                timestamp=commit.timestamp,
                files_changed=files,
                diff=""
            ))
            previous_id = commit.id
        return records
