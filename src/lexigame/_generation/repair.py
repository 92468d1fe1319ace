# Area: Generation
"""
lexigame._generation.repair — Post-generation checks and repairs
================================================================

Generated output is untrusted. This module turns a raw backend reply
into a payload the session controller can rely on, or raises
``ContractViolation`` so the orchestrator spends another attempt.

Sequential sessions
    Every round must validate against its variant schema. One bad round
    fails the whole attempt; partially valid sessions are never played.

Pool sessions
    Words that cannot be spelled from the tiles are dropped rather than
    rejected, since a usable pool usually survives.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..catalog import Difficulty, GameDefinition
from ..errors import ContractViolation
from ..letters import is_formable, normalize_words
from ..rounds import (
    DISCRIMINANT_FIELD,
    MASK_CHAR,
    RoundKind,
    SessionPayload,
    WordPoolPayload,
    format_validation_errors,
    image_placeholder,
    validate_round,
)

logger = logging.getLogger("lexigame.generation.repair")

EASY_MAX_MASKED = 2


def repair_word_pool(pool: WordPoolPayload, backend: str = "generation") -> WordPoolPayload:
    """
    Return a pool whose word lists are consistent with its letters.

    * words not formable from ``letters`` are dropped,
    * both lists are trimmed, case-folded and de-duplicated,
    * bonus words that are also main words are dropped.

    Applying it twice gives the same result as applying it once.

    Raises
    ------
    ContractViolation
        If no main word survives.
    """
    letters = [letter.strip().casefold() for letter in pool.letters if letter.strip()]

    main_words = [w for w in normalize_words(pool.main_words) if is_formable(w, letters)]
    main_set = set(main_words)
    bonus_words = [
        w for w in normalize_words(pool.bonus_words)
        if w not in main_set and is_formable(w, letters)
    ]

    dropped = (len(pool.main_words) - len(main_words)) + (len(pool.bonus_words) - len(bonus_words))
    if dropped:
        logger.info(f"Word pool repair dropped {dropped} word(s)")

    if not main_words:
        raise ContractViolation(
            backend,
            ["main_words: no word can be formed from the letter pool"],
            output_payload=pool.model_dump(),
        )

    return pool.model_copy(update={
        "letters": letters,
        "main_words": main_words,
        "bonus_words": bonus_words,
    })


def _with_placeholder(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Force image rounds to carry the placeholder token before resolution."""
    if raw.get(DISCRIMINANT_FIELD) != RoundKind.WORD_IMAGE_MATCH.value:
        return raw
    word = raw.get("word")
    if not isinstance(word, str) or not word.strip():
        return raw
    return {**raw, "image_ref": image_placeholder(word.strip())}


def validate_session_rounds(
    raw: Dict[str, Any],
    game: GameDefinition,
    difficulty: Difficulty,
    min_rounds: int,
    max_rounds: int,
    backend: str = "generation",
) -> SessionPayload:
    """
    Validate a raw sequential reply and build its ``SessionPayload``.

    Raises
    ------
    ContractViolation
        Listing every problem found in the reply.
    """
    if not isinstance(raw, dict):
        raise ContractViolation(backend, [f"Expected object, got {type(raw).__name__}"], raw)

    rounds = raw.get("rounds")
    if not isinstance(rounds, list):
        raise ContractViolation(backend, ["rounds: missing or not a list"], raw)

    rounds = [_with_placeholder(r) if isinstance(r, dict) else r for r in rounds]
    errors: List[str] = []

    if not min_rounds <= len(rounds) <= max_rounds:
        errors.append(f"rounds: expected {min_rounds}-{max_rounds} rounds, got {len(rounds)}")

    for index, round_raw in enumerate(rounds):
        for error in validate_round(round_raw):
            errors.append(f"rounds.{index}: {error}")

        if not isinstance(round_raw, dict):
            continue
        tag = round_raw.get(DISCRIMINANT_FIELD)
        if game.exclusive_kind is not None and tag != game.exclusive_kind.value:
            errors.append(
                f"rounds.{index}: {tag!r} not allowed in {game.name} "
                f"(only {game.exclusive_kind.value!r})"
            )
        mask_error = _easy_mask_error(round_raw, difficulty)
        if mask_error:
            errors.append(f"rounds.{index}: {mask_error}")

    if errors:
        raise ContractViolation(backend, errors, raw)

    try:
        payload = SessionPayload.model_validate({**raw, "rounds": rounds})
    except ValidationError as exc:
        raise ContractViolation(backend, format_validation_errors(exc), raw) from exc

    if payload.game_type != game.name:
        logger.warning(
            f"Backend echoed game_type {payload.game_type!r}, expected {game.name!r}"
        )
        payload = payload.model_copy(update={"game_type": game.name})
    return payload


def _easy_mask_error(round_raw: Dict[str, Any], difficulty: Difficulty) -> Optional[str]:
    if difficulty is not Difficulty.EASY:
        return None
    if round_raw.get(DISCRIMINANT_FIELD) != RoundKind.SPELLING_COMPLETION.value:
        return None
    masked = round_raw.get("masked_form")
    if not isinstance(masked, str):
        return None
    blanks = masked.count(MASK_CHAR)
    if not 1 <= blanks <= EASY_MAX_MASKED:
        return f"easy spelling rounds must mask 1-{EASY_MAX_MASKED} letters, got {blanks}"
    return None


def parse_word_pool(raw: Dict[str, Any], game: GameDefinition,
                    backend: str = "generation") -> WordPoolPayload:
    """Validate a raw pool reply, then repair it."""
    if not isinstance(raw, dict):
        raise ContractViolation(backend, [f"Expected object, got {type(raw).__name__}"], raw)
    try:
        pool = WordPoolPayload.model_validate(raw)
    except ValidationError as exc:
        raise ContractViolation(backend, format_validation_errors(exc), raw) from exc
    if pool.game_type != game.name:
        pool = pool.model_copy(update={"game_type": game.name})
    return repair_word_pool(pool, backend)
