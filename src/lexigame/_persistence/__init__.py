# Area: Persistence
"""
SQLite bindings for the document store and the session record store.

This package contains:
- Database initialization and the base repository
- Documents repository
- Session records repository
"""

from .database import BaseRepository, get_connection, init_database
from .repo_documents import SqliteDocumentStore
from .repo_sessions import SqliteSessionRecordStore

__all__ = [
    "BaseRepository",
    "get_connection",
    "init_database",
    "SqliteDocumentStore",
    "SqliteSessionRecordStore",
]
