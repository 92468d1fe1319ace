# Area: Persistence
"""
lexigame._persistence.repo_sessions — Session Records Repository
================================================================

SQLite ``SessionRecordStore``. A started record becomes one row; the
completion record fills in the remaining columns of that row.
"""

import sqlite3
import uuid
from typing import Any, Dict, List, Optional

from ..backends import SessionRecordStore
from ..errors import PersistenceWriteFailure
from ..types import SessionCompletedRecord, SessionStartedRecord
from .database import BaseRepository


class SqliteSessionRecordStore(BaseRepository, SessionRecordStore):
    """Repository for the game_sessions table."""

    def record_started(self, record: SessionStartedRecord) -> str:
        record_id = uuid.uuid4().hex
        query = """
            INSERT INTO game_sessions
            (record_id, document_id, owner_id, game_type, difficulty, score, started_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """
        try:
            self._write(query, (
                record_id, record["document_id"], record["owner_id"], record["game_type"],
                record["difficulty"], record["score"], record["started_at"],
            ))
        except (sqlite3.Error, KeyError) as exc:
            raise PersistenceWriteFailure("started", dict(record)) from exc
        return record_id

    def record_completed(self, record_id: str, record: SessionCompletedRecord) -> None:
        query = """
            UPDATE game_sessions
            SET score = ?, termination_reason = ?, rounds_completed = ?, rounds_total = ?,
                main_words_found = ?, bonus_words_found = ?, best_streak = ?, completed_at = ?
            WHERE record_id = ?
        """
        try:
            updated = self._write(query, (
                record["final_score"], record["termination_reason"],
                record["rounds_completed"], record["rounds_total"],
                record["main_words_found"], record["bonus_words_found"],
                record["best_streak"], record["completed_at"], record_id,
            ))
        except (sqlite3.Error, KeyError) as exc:
            raise PersistenceWriteFailure("completed", dict(record)) from exc
        if not updated:
            raise PersistenceWriteFailure("completed", dict(record))

    def get_record(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Get a session row by ID."""
        return self._query_one("SELECT * FROM game_sessions WHERE record_id = ?", (record_id,))

    def list_records(self, owner_id: str) -> List[Dict[str, Any]]:
        """All session rows for an owner, newest first."""
        query = "SELECT * FROM game_sessions WHERE owner_id = ? ORDER BY started_at DESC"
        return self._query(query, (owner_id,))
