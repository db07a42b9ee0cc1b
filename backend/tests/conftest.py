"""Shared fixtures for commit-relay tests."""

import hashlib
import hmac
import json
from types import SimpleNamespace
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from commit_relay.core.config import Settings
from commit_relay.main import create_app
from commit_relay.models.commit import ChangedFile, CommitRecord, Committer
from commit_relay.services.ai_service import AIService
from commit_relay.services.docs_sync import DocSyncClient
from commit_relay.services.log_store import CommitLogStore


# ---------------------------------------------------------------------------
# Settings and services
# ---------------------------------------------------------------------------


def make_settings(**overrides) -> Settings:
    values = {
        "GITHUB_WEBHOOK_SECRET": None,
        "OPENAI_API_KEY": None,
        "GOOGLE_DOCS_ID": None,
        "GOOGLE_APPLICATION_CREDENTIALS": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_completion(content: str = "Generated text", prompt_tokens: int = 12, completion_tokens: int = 30):
    """Shape of an openai ChatCompletion as far as the service reads it."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        ),
    )


def sign(body: bytes, secret: str) -> str:
    return "sha256=" + hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


@pytest.fixture
def logs_dir(tmp_path):
    return tmp_path / "logs"


@pytest.fixture
def store(logs_dir):
    return CommitLogStore(logs_dir)


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion()
    return client


@pytest.fixture
def docs_service():
    """Mock googleapiclient docs resource with a one-paragraph document."""
    service = MagicMock()
    service.documents.return_value.get.return_value.execute.return_value = {
        "body": {"content": [{"endIndex": 1}, {"endIndex": 42}]}
    }
    service.documents.return_value.batchUpdate.return_value.execute.return_value = {}
    return service


@pytest.fixture
def app_factory(logs_dir, openai_client):
    def factory(doc_sync: Optional[DocSyncClient] = None, **overrides):
        overrides.setdefault("LOGS_DIR", str(logs_dir))
        settings = make_settings(**overrides)
        return create_app(
            settings,
            ai_service=AIService(settings, client=openai_client),
            doc_sync=doc_sync,
        )

    return factory


@pytest.fixture
def client(app_factory):
    with TestClient(app_factory()) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------


@pytest.fixture
def record() -> CommitRecord:
    return CommitRecord(
        id="3f2a9c1",
        previous_id="0b7e4d2",
        committer=Committer(name="Ada Lovelace", email="ada@example.com"),
        message="Add analytical engine notes",
        timestamp="2024-05-01T10:15:00.000Z",
        files_changed=[
            ChangedFile(status_code="A", path="notes/engine.md"),
            ChangedFile(status_code="M", path="README.md"),
            ChangedFile(status_code="D", path="old.txt"),
            ChangedFile(status_code="R100", path="docs/new-name.md"),
        ],
        diff='diff --git a/README.md b/README.md\n+"quoted" line\n\n+\ttabbed\\backslash',
    )


def push_payload(commits=None) -> Dict[str, Any]:
    if commits is None:
        commits = [
            {
                "id": "a" * 40,
                "message": "Fix login redirect",
                "timestamp": "2024-05-01T12:00:00+02:00",
                "author": {"name": "Grace Hopper", "email": "grace@example.com", "username": "grace"},
                "committer": {"name": "Grace Hopper", "email": "grace@example.com", "username": "grace"},
                "added": ["src/login.py"],
                "removed": ["src/legacy.py"],
                "modified": ["README.md"],
            },
            {
                "id": "b" * 40,
                "message": "Bump version",
                "timestamp": "2024-05-01T12:05:00+02:00",
                "author": {"name": "Grace Hopper", "email": "grace@example.com"},
                "committer": {"name": "GitHub", "email": "noreply@github.com"},
                "added": [],
                "removed": [],
                "modified": ["pyproject.toml"],
            },
        ]
    return {
        "ref": "refs/heads/main",
        "before": "0" * 40,
        "after": "b" * 40,
        "repository": {"full_name": "octo/relay", "private": False},
        "pusher": {"name": "grace", "email": "grace@example.com"},
        "commits": commits,
    }


def encode(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")
