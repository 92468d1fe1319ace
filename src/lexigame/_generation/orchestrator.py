# Area: Generation
"""
lexigame._generation.orchestrator — Session generation with retries
===================================================================

``SessionGenerator.generate_session`` is the single entry point the host
calls to turn a document into a playable payload:

1. resolve the game type against the catalog,
2. build the instructions and pick the output contract,
3. call the generation backend,
4. validate or repair the reply,
5. resolve image placeholders (sequential sessions only).

Steps 3-5 form one attempt. Any failure inside an attempt consumes it;
the retry policy decides whether another attempt is made. When attempts
run out the caller gets ``GenerationFailure`` (``ImageResolutionFailure``
when the last attempt failed on images) carrying the generic user
message, with the backend error chained as ``__cause__``.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..backends import GenerationBackend, ImageBackend
from ..catalog import Difficulty, DocumentCategory, GameDefinition, get_game
from ..config import GameRules
from ..errors import (
    BackendFailure,
    GenerationFailure,
    ImageResolutionFailure,
)
from ..rounds import OutputContract, SessionPayload, WordPoolPayload, output_schema
from .images import resolve_images
from .prompts import build_session_instructions
from .repair import parse_word_pool, validate_session_rounds
from .retry import RetryPolicy

logger = logging.getLogger("lexigame.generation.orchestrator")


class SessionGenerator:
    """Turns document text into a validated session payload."""

    def __init__(
        self,
        backend: GenerationBackend,
        image_backend: Optional[ImageBackend] = None,
        retry_policy: Optional[RetryPolicy] = None,
        rules: Optional[GameRules] = None,
    ):
        self.backend = backend
        self.image_backend = image_backend
        self.rules = rules or GameRules()
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=self.rules.generation_attempts,
            delay_seconds=self.rules.retry_delay_seconds,
        )

    def generate_session(
        self,
        document_text: str,
        category: Union[DocumentCategory, str],
        game_type: str,
        difficulty: Union[Difficulty, str],
    ) -> Union[SessionPayload, WordPoolPayload]:
        """
        Generate a session for the given document.

        Raises
        ------
        GenerationFailure
            After every attempt failed.
        ImageResolutionFailure
            When the last attempt failed while generating images.
        """
        if isinstance(category, str):
            category = DocumentCategory.parse(category)
        if isinstance(difficulty, str):
            difficulty = Difficulty(difficulty.strip().lower())
        game = get_game(game_type)

        instructions = build_session_instructions(
            document_text,
            category,
            game,
            difficulty,
            max_chars=self.rules.max_document_chars,
            min_rounds=self.rules.min_rounds,
            max_rounds=self.rules.max_rounds,
        )
        schema = output_schema(game.contract)

        attempts = 0

        def attempt() -> Union[SessionPayload, WordPoolPayload]:
            nonlocal attempts
            attempts += 1
            logger.info(
                f"Generating {game.name!r} session (attempt {attempts}/{self.retry_policy.max_attempts})",
                extra={"attempt": attempts, "game_type": game.name},
            )
            return self._attempt(instructions, schema, game, difficulty)

        try:
            payload = self.retry_policy.call(attempt)
        except ImageResolutionFailure as exc:
            logger.error(f"Session generation failed on images after {attempts} attempt(s): {exc!r}")
            raise ImageResolutionFailure(exc.word, attempts=attempts) from exc
        except (BackendFailure, GenerationFailure) as exc:
            logger.error(f"Session generation failed after {attempts} attempt(s): {exc!r}")
            raise GenerationFailure(attempts=attempts) from exc

        logger.info(f"Session {payload.title!r} ready after {attempts} attempt(s)")
        return payload

    def _attempt(self, instructions, schema, game: GameDefinition,
                 difficulty: Difficulty) -> Union[SessionPayload, WordPoolPayload]:
        raw = self.backend.generate(instructions, schema)
        backend_name = self.backend.name

        if game.contract is OutputContract.POOL:
            return parse_word_pool(raw, game, backend=backend_name)

        payload = validate_session_rounds(
            raw,
            game,
            difficulty,
            min_rounds=self.rules.min_rounds,
            max_rounds=self.rules.max_rounds,
            backend=backend_name,
        )
        return resolve_images(payload, self.image_backend, self.rules.max_image_workers)
