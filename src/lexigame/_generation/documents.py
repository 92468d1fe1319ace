# Area: Generation
"""
lexigame._generation.documents — Document screening and analysis
================================================================

Runs before a document is offered for play:

* ``validate_document`` — is this learnable text at all?
* ``categorize_document`` — which category drives game suggestions?
* ``extract_vocabulary`` — key terms, retried like session generation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..backends import GenerationBackend
from ..catalog import DocumentCategory
from ..errors import BackendFailure, GenerationFailure
from ..letters import normalize_words
from .prompts import (
    CATEGORIZE_PROMPT,
    CATEGORIZE_SCHEMA,
    VALIDATE_PROMPT,
    VALIDATE_SCHEMA,
    VOCABULARY_PROMPT,
    VOCABULARY_SCHEMA,
)
from .retry import RetryPolicy

logger = logging.getLogger("lexigame.generation.documents")

MIN_DOCUMENT_CHARS = 50
MAX_ANALYSIS_CHARS = 4000
TOO_SHORT_REASON = "The document is too short to create a meaningful game."
UNCHECKED_REASON = "The document could not be checked right now."


@dataclass(frozen=True)
class DocumentVerdict:
    is_valid: bool
    reason: str = ""


class DocumentAnalyzer:
    """Backend-driven document checks."""

    def __init__(self, backend: GenerationBackend, retry_policy: Optional[RetryPolicy] = None):
        self.backend = backend
        self.retry_policy = retry_policy or RetryPolicy()

    def validate_document(self, text: str) -> DocumentVerdict:
        """Reject short or unusable documents. Backend failures give an invalid verdict."""
        if len((text or "").strip()) < MIN_DOCUMENT_CHARS:
            return DocumentVerdict(False, TOO_SHORT_REASON)

        try:
            raw = self.backend.generate(
                VALIDATE_PROMPT.format(document_text=text[:MAX_ANALYSIS_CHARS]),
                VALIDATE_SCHEMA,
            )
        except BackendFailure as exc:
            logger.warning(f"Document validation failed: {exc}")
            return DocumentVerdict(False, UNCHECKED_REASON)

        if not isinstance(raw.get("is_valid"), bool):
            logger.warning(f"Document validation returned no verdict: {raw!r}")
            return DocumentVerdict(False, UNCHECKED_REASON)
        if raw["is_valid"]:
            return DocumentVerdict(True, "")
        return DocumentVerdict(False, str(raw.get("reason") or "").strip() or UNCHECKED_REASON)

    def categorize_document(self, text: str) -> DocumentCategory:
        """Classify the first part of the document. Failures fall back to General."""
        try:
            raw = self.backend.generate(
                CATEGORIZE_PROMPT.format(document_text=text[:MAX_ANALYSIS_CHARS]),
                CATEGORIZE_SCHEMA,
            )
        except BackendFailure as exc:
            logger.warning(f"Categorization failed, using {DocumentCategory.GENERAL.value}: {exc}")
            return DocumentCategory.GENERAL

        category = DocumentCategory.parse(str(raw.get("category") or ""))
        logger.info(f"Document categorized as {category.value!r}")
        return category

    def extract_vocabulary(self, text: str) -> List[str]:
        """
        Key terms from the document, case-folded and de-duplicated.

        Raises
        ------
        GenerationFailure
            After the retry policy is exhausted.
        """
        instructions = VOCABULARY_PROMPT.format(document_text=text[:MAX_ANALYSIS_CHARS])
        attempts = 0

        def attempt() -> List[str]:
            nonlocal attempts
            attempts += 1
            raw = self.backend.generate(instructions, VOCABULARY_SCHEMA)
            words = raw.get("vocabulary")
            if not isinstance(words, list):
                raise BackendFailure(self.backend.name, "reply has no vocabulary list")
            return normalize_words(words)

        try:
            return self.retry_policy.call(attempt)
        except BackendFailure as exc:
            logger.error(f"Vocabulary extraction failed after {attempts} attempt(s): {exc!r}")
            raise GenerationFailure(attempts=attempts) from exc
