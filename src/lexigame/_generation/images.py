# Area: Generation
"""
lexigame._generation.images — Concurrent illustration fan-out
=============================================================

Replaces every ``IMAGE_FOR_WORD_<word>`` placeholder in a session with a
real image reference. One backend call is made per distinct word
(case-insensitive); all calls run concurrently and are joined before the
new payload is returned.

The join is all-or-nothing: the first failure cancels calls that have not
started yet and raises ``ImageResolutionFailure``. A session with a
placeholder left in it is never returned.
"""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Dict, Optional

from ..backends import ImageBackend
from ..clients import IMAGE_PROMPT_TEMPLATE
from ..errors import BackendFailure, ImageResolutionFailure
from ..rounds import SessionPayload, WordImageMatchRound, is_image_placeholder

logger = logging.getLogger("lexigame.generation.images")


def _placeholder_words(payload: SessionPayload) -> Dict[str, str]:
    """Case-folded word -> first spelling seen, for rounds awaiting an image."""
    words: Dict[str, str] = {}
    for game_round in payload.rounds:
        if isinstance(game_round, WordImageMatchRound) and is_image_placeholder(game_round.image_ref):
            words.setdefault(game_round.word.casefold(), game_round.word)
    return words


def resolve_images(
    payload: SessionPayload,
    image_backend: Optional[ImageBackend],
    max_workers: int = 8,
) -> SessionPayload:
    """
    Return a copy of ``payload`` with every image placeholder resolved.

    Raises
    ------
    ImageResolutionFailure
        On the first failed image call; ``__cause__`` holds the backend error.
    """
    words = _placeholder_words(payload)
    if not words:
        return payload

    if image_backend is None:
        word = next(iter(words.values()))
        raise ImageResolutionFailure(word) from BackendFailure("image", "no image backend configured")

    logger.info(f"Generating {len(words)} image(s)")
    resolved: Dict[str, str] = {}

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(words)))) as executor:
        futures = {
            executor.submit(image_backend.generate_image, IMAGE_PROMPT_TEMPLATE.format(word=word)): key
            for key, word in words.items()
        }
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)

        for future in done:
            exc = future.exception()
            if exc is not None:
                for other in pending:
                    other.cancel()
                word = words[futures[future]]
                logger.warning(f"Image generation failed for {word!r}: {exc}")
                raise ImageResolutionFailure(word) from exc
            resolved[futures[future]] = future.result()

    rounds = [
        game_round.model_copy(update={"image_ref": resolved[game_round.word.casefold()]})
        if isinstance(game_round, WordImageMatchRound) and is_image_placeholder(game_round.image_ref)
        else game_round
        for game_round in payload.rounds
    ]
    return payload.model_copy(update={"rounds": rounds})
