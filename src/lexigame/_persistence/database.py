# Area: Persistence
"""
lexigame._persistence.database — SQLite schema and base repository
==================================================================

One database file holds both tables. Every repository call opens its own
short-lived connection, so stores are safe to share between threads.
"""

import sqlite3
import logging
from contextlib import closing
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger("lexigame.persistence.database")

SCHEMA_VERSION = 1

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    document_id   TEXT PRIMARY KEY,
    owner_id      TEXT NOT NULL,
    title         TEXT NOT NULL,
    content       TEXT NOT NULL,
    category      TEXT NOT NULL DEFAULT '',
    created_at    TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_documents_owner
    ON documents (owner_id, created_at);

CREATE TABLE IF NOT EXISTS game_sessions (
    record_id           TEXT PRIMARY KEY,
    document_id         TEXT NOT NULL,
    owner_id            TEXT NOT NULL,
    game_type           TEXT NOT NULL,
    difficulty          TEXT NOT NULL,
    score               INTEGER NOT NULL DEFAULT 0,
    started_at          TEXT NOT NULL,
    termination_reason  TEXT,
    rounds_completed    INTEGER,
    rounds_total        INTEGER,
    main_words_found    INTEGER,
    bonus_words_found   INTEGER,
    best_streak         INTEGER,
    completed_at        TEXT
);

CREATE INDEX IF NOT EXISTS idx_game_sessions_owner
    ON game_sessions (owner_id, started_at);
"""



def get_connection(db_path: str = "lexigame.db") -> sqlite3.Connection:
    """Open ``db_path`` with rows addressable by column name."""
    conn = sqlite3.connect(db_path, timeout=5.0)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = "lexigame.db") -> None:
    """
    Create the tables if they do not exist yet and stamp the schema version.

    Safe to call on every start-up.
    """
    with closing(get_connection(db_path)) as conn:
        conn.executescript(SCHEMA)
        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        conn.commit()
    logger.info(f"Database initialized at {db_path} (schema v{SCHEMA_VERSION})")


class BaseRepository:
    """Shared query helpers for the table repositories."""

    def __init__(self, db_path: str = "lexigame.db"):
        self.db_path = db_path

    def _query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a SELECT and return every row as a dict."""
        with closing(get_connection(self.db_path)) as conn:
            return [dict(row) for row in conn.execute(sql, params).fetchall()]

    def _query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        rows = self._query(sql, params)
        return rows[0] if rows else None

    def _write(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT/UPDATE/DELETE in its own transaction; return the affected row count."""
        with closing(get_connection(self.db_path)) as conn:
            with conn:
                return conn.execute(sql, params).rowcount
