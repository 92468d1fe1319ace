# Area: Persistence
"""Tests for the SQLite document store and session record store."""

import os
import tempfile

import pytest

from lexigame.errors import BackendFailure, PersistenceWriteFailure
from lexigame._persistence.database import SCHEMA_VERSION, get_connection, init_database
from lexigame._persistence.repo_documents import SqliteDocumentStore
from lexigame._persistence.repo_sessions import SqliteSessionRecordStore


def started_record(**overrides):
    record = {
        "document_id": "doc-1",
        "owner_id": "user-1",
        "game_type": "Personalized Practice",
        "difficulty": "easy",
        "score": 0,
        "started_at": "2026-01-01T10:00:00.000Z",
    }
    record.update(overrides)
    return record


def completed_record(**overrides):
    record = {
        "final_score": 48,
        "termination_reason": "rounds_exhausted",
        "rounds_completed": 5,
        "rounds_total": 5,
        "main_words_found": 0,
        "bonus_words_found": 0,
        "best_streak": 4,
        "completed_at": "2026-01-01T10:05:00.000Z",
    }
    record.update(overrides)
    return record


class TestSqliteDocumentStore:

    @pytest.fixture
    def store(self, db_path):
        return SqliteDocumentStore(db_path)

    def test_create_and_get(self, store):
        document_id = store.create_document("user-1", "Cells", "Mitochondria ...", "Science")
        document = store.get_document(document_id)
        assert document["title"] == "Cells"
        assert document["owner_id"] == "user-1"
        assert document["category"] == "Science"
        assert document["created_at"].endswith("Z")

    def test_get_missing(self, store):
        assert store.get_document("nope") is None

    def test_list_by_owner(self, store):
        store.create_document("user-1", "A", "text")
        store.create_document("user-1", "B", "text")
        store.create_document("user-2", "C", "text")
        titles = {d["title"] for d in store.list_documents("user-1")}
        assert titles == {"A", "B"}
        assert store.list_documents("nobody") == []

    def test_update(self, store):
        document_id = store.create_document("user-1", "A", "text")
        store.update_document(document_id, category="Mathematics", title="Algebra")
        document = store.get_document(document_id)
        assert document["category"] == "Mathematics"
        assert document["title"] == "Algebra"

    def test_update_unknown_field(self, store):
        document_id = store.create_document("user-1", "A", "text")
        with pytest.raises(ValueError):
            store.update_document(document_id, owner_id="someone-else")

    def test_update_missing_document(self, store):
        with pytest.raises(BackendFailure):
            store.update_document("nope", title="x")

    def test_delete(self, store):
        document_id = store.create_document("user-1", "A", "text")
        store.delete_document(document_id)
        assert store.get_document(document_id) is None

    def test_uninitialized_database_raises_backend_failure(self):
        fd, path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        try:
            with pytest.raises(BackendFailure):
                SqliteDocumentStore(path).list_documents("user-1")
        finally:
            os.unlink(path)


class TestSqliteSessionRecordStore:

    @pytest.fixture
    def store(self, db_path):
        return SqliteSessionRecordStore(db_path)

    def test_started_then_completed(self, store):
        record_id = store.record_started(started_record())
        row = store.get_record(record_id)
        assert row["score"] == 0
        assert row["completed_at"] is None

        store.record_completed(record_id, completed_record())
        row = store.get_record(record_id)
        assert row["score"] == 48
        assert row["termination_reason"] == "rounds_exhausted"
        assert row["best_streak"] == 4

    def test_completed_for_unknown_record(self, store):
        with pytest.raises(PersistenceWriteFailure) as exc_info:
            store.record_completed("nope", completed_record())
        assert exc_info.value.record_kind == "completed"

    def test_started_with_missing_field(self, store):
        record = started_record()
        del record["owner_id"]
        with pytest.raises(PersistenceWriteFailure):
            store.record_started(record)

    def test_list_records(self, store):
        store.record_started(started_record())
        store.record_started(started_record(owner_id="user-2"))
        assert len(store.list_records("user-1")) == 1


class TestInitDatabase:

    def test_init_is_repeatable(self, db_path):
        init_database(db_path)
        assert SqliteDocumentStore(db_path).list_documents("user-1") == []

    def test_schema_version_stamped(self, db_path):
        conn = get_connection(db_path)
        try:
            assert conn.execute("PRAGMA user_version").fetchone()[0] == SCHEMA_VERSION
        finally:
            conn.close()
