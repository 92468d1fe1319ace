# Area: Generation
"""
lexigame._generation.hints — Contextual hints
=============================================

One backend call per request, no retries. A hint is optional help, so
every failure becomes ``HintUnavailable`` and play continues.
"""

from __future__ import annotations

import logging

from ..backends import GenerationBackend
from ..errors import BackendFailure, HintUnavailable
from .prompts import HINT_PROMPT, HINT_SCHEMA

logger = logging.getLogger("lexigame.generation.hints")

MAX_CONTEXT_CHARS = 4000


class HintAdvisor:
    """Asks the generation backend for a hint that does not give the answer away."""

    def __init__(self, backend: GenerationBackend):
        self.backend = backend

    def get_hint(self, document_context: str, target_term: str) -> str:
        """
        Return a one or two sentence hint for ``target_term``.

        Raises
        ------
        HintUnavailable
            If the backend fails or returns no usable hint.
        """
        instructions = HINT_PROMPT.format(
            target_term=target_term,
            document_context=document_context[:MAX_CONTEXT_CHARS],
        )
        try:
            raw = self.backend.generate(instructions, HINT_SCHEMA)
        except BackendFailure as exc:
            logger.warning(f"Hint request failed for {target_term!r}: {exc}")
            raise HintUnavailable(target_term) from exc

        hint = raw.get("hint") if isinstance(raw, dict) else None
        if not isinstance(hint, str) or not hint.strip():
            logger.warning(f"Hint backend returned no hint for {target_term!r}")
            raise HintUnavailable(target_term)
        return hint.strip()
