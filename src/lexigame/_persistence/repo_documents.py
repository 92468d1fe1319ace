# Area: Persistence
"""
lexigame._persistence.repo_documents — Documents Repository
===========================================================

SQLite ``DocumentStore``. Documents are listed per owner, newest first.
"""

import logging
import sqlite3
import uuid
from typing import Any, List, Optional

from .._shared import current_timestamp
from ..backends import DocumentStore
from ..errors import BackendFailure
from ..types import DocumentRecord
from .database import BaseRepository

logger = logging.getLogger("lexigame.persistence.documents")

_UPDATABLE = ("title", "content", "category")


class SqliteDocumentStore(BaseRepository, DocumentStore):
    """Repository for the documents table."""

    name = "documents"

    def get_document(self, document_id: str) -> Optional[DocumentRecord]:
        query = "SELECT * FROM documents WHERE document_id = ?"
        try:
            return self._query_one(query, (document_id,))
        except sqlite3.Error as exc:
            raise BackendFailure(self.name, f"read failed: {exc}") from exc

    def list_documents(self, owner_id: str) -> List[DocumentRecord]:
        query = "SELECT * FROM documents WHERE owner_id = ? ORDER BY created_at DESC"
        try:
            return self._query(query, (owner_id,))
        except sqlite3.Error as exc:
            raise BackendFailure(self.name, f"read failed: {exc}") from exc

    def create_document(self, owner_id: str, title: str, content: str,
                        category: str = "") -> str:
        document_id = uuid.uuid4().hex
        query = """
            INSERT INTO documents
            (document_id, owner_id, title, content, category, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """
        try:
            self._write(query, (document_id, owner_id, title, content, category,
                                  current_timestamp()))
        except sqlite3.Error as exc:
            raise BackendFailure(self.name, f"write failed: {exc}") from exc
        logger.info(f"Document {document_id} created for {owner_id}")
        return document_id

    def update_document(self, document_id: str, **fields: Any) -> None:
        """
        Update title, content and/or category.

        Raises:
            ValueError: If an unknown field is given
            BackendFailure: If the document does not exist or the write fails
        """
        unknown = sorted(set(fields) - set(_UPDATABLE))
        if unknown:
            raise ValueError(f"Cannot update fields: {unknown}")
        if not fields:
            return

        assignments = ", ".join(f"{key} = ?" for key in fields)
        query = f"UPDATE documents SET {assignments} WHERE document_id = ?"
        try:
            updated = self._write(query, (*fields.values(), document_id))
        except sqlite3.Error as exc:
            raise BackendFailure(self.name, f"write failed: {exc}") from exc
        if not updated:
            raise BackendFailure(self.name, f"document {document_id} not found")

    def delete_document(self, document_id: str) -> None:
        query = "DELETE FROM documents WHERE document_id = ?"
        try:
            self._write(query, (document_id,))
        except sqlite3.Error as exc:
            raise BackendFailure(self.name, f"write failed: {exc}") from exc
