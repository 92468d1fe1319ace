# Area: Backends
"""
lexigame.backends — Collaborator interfaces the host application binds
======================================================================

The library never talks to a model provider or a database directly.
It calls these four interfaces; the host passes concrete instances
(see ``lexigame.clients``, ``lexigame.demo_backend`` and the SQLite
stores in ``lexigame._persistence``).

Every method signals failure by raising ``BackendFailure`` (or, for the
session record store, ``PersistenceWriteFailure``). Returning an empty
value instead of raising is not allowed.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .types import DocumentRecord, SessionCompletedRecord, SessionStartedRecord


class GenerationBackend(ABC):
    """Structured text generation."""

    name: str = "generation"

    # ──────────────────────────────────────────────────────────────
    @abstractmethod
    def generate(self, instructions: str, output_schema: Dict[str, Any]) -> Dict[str, Any]:
        """
        Produce a JSON object for ``instructions``.

        Parameters
        ----------
        instructions : str
            Natural-language instructions.
        output_schema : dict
            JSON schema the result should follow. Conformance is not
            guaranteed; callers validate.

        Returns
        -------
        dict
            The decoded JSON object.

        Raises
        ------
        BackendFailure
            On transport errors, empty replies, or undecodable output.
        """
        ...


class ImageBackend(ABC):
    """Illustration generation."""

    name: str = "image"

    @abstractmethod
    def generate_image(self, prompt: str) -> str:
        """Return an image reference (data URI or URL) for ``prompt``."""
        ...


class DocumentStore(ABC):
    """Document persistence, queried by owner."""

    @abstractmethod
    def get_document(self, document_id: str) -> Optional[DocumentRecord]:
        ...

    @abstractmethod
    def list_documents(self, owner_id: str) -> List[DocumentRecord]:
        """Documents owned by ``owner_id``, newest first."""
        ...

    @abstractmethod
    def create_document(self, owner_id: str, title: str, content: str,
                        category: str = "") -> str:
        """Store a document and return its identifier."""
        ...

    @abstractmethod
    def update_document(self, document_id: str, **fields: Any) -> None:
        ...

    @abstractmethod
    def delete_document(self, document_id: str) -> None:
        ...


class SessionRecordStore(ABC):
    """
    Write-only sink for session results.

    A session writes here at most twice: once when it starts and once
    when it reaches Terminal.
    """

    @abstractmethod
    def record_started(self, record: SessionStartedRecord) -> str:
        """Persist the started record and return its identifier."""
        ...

    @abstractmethod
    def record_completed(self, record_id: str, record: SessionCompletedRecord) -> None:
        """Attach the completion record to a started record."""
        ...
