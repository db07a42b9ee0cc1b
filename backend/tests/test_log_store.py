"""Tests for the append-only commit log store."""

import os
from unittest.mock import patch

import pytest

from commit_relay.models.commit import CommitRecord
from commit_relay.services.formatter import format_json, format_plaintext
from commit_relay.services.log_store import CommitLogStore, LogStoreError


def test_ensure_dir_exists_is_idempotent(store, logs_dir):
    store.ensure_dir_exists()
    store.ensure_dir_exists()

    assert logs_dir.is_dir()


def test_append_writes_both_sinks(store, record):
    store.append(record)

    assert store.plaintext_path.name == "commits.log"
    assert store.json_path.name == "processed-commits.log"
    assert store.plaintext_path.read_text(encoding="utf-8") == format_plaintext(record)
    assert store.json_path.read_text(encoding="utf-8") == format_json(record)


def test_append_never_truncates(store, record):
    second = CommitRecord(id="next", previous_id=record.id, message="second")

    store.append(record)
    store.append(second)

    assert store.plaintext_path.read_text(encoding="utf-8") == (
        format_plaintext(record) + format_plaintext(second)
    )
    assert store.read_records() == [record, second]


def test_existing_log_content_is_kept(store, logs_dir, record):
    logs_dir.mkdir(parents=True)
    store.plaintext_path.write_text("earlier entry\n", encoding="utf-8")

    store.append(record)

    assert store.plaintext_path.read_text(encoding="utf-8").startswith("earlier entry\n")


def test_read_records_without_log(store):
    assert store.read_records() == []


def test_one_failing_sink_does_not_block_the_other(store, logs_dir, record):
    # a directory in place of the plaintext log makes that open() fail
    logs_dir.mkdir(parents=True)
    os.mkdir(store.plaintext_path)

    with pytest.raises(LogStoreError) as excinfo:
        store.append(record)

    assert list(excinfo.value.failures) == [str(store.plaintext_path)]
    assert store.read_records() == [record]


def test_both_sinks_failing_reports_both(tmp_path, record):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    store = CommitLogStore(blocker / "logs")

    with pytest.raises(LogStoreError) as excinfo:
        store.append(record)

    assert set(excinfo.value.failures) == {str(store.plaintext_path), str(store.json_path)}


def test_lone_surrogate_is_written_to_both_sinks_and_round_trips(store):
    # a "\ud800" escape in a push payload decodes to an unpaired surrogate
    record = CommitRecord(id="c1", message="bad \ud800 surrogate")

    store.append(record)

    assert "bad \\ud800 surrogate" in store.plaintext_path.read_text(encoding="utf-8")
    assert store.read_records() == [record]


def test_encoding_error_in_one_sink_still_writes_the_other(store, record):
    with patch("commit_relay.services.log_store.format_plaintext", side_effect=ValueError("cannot encode")):
        with pytest.raises(LogStoreError) as excinfo:
            store.append(record)

    assert list(excinfo.value.failures) == [str(store.plaintext_path)]
    assert isinstance(excinfo.value.failures[str(store.plaintext_path)], ValueError)
    assert store.read_records() == [record]
