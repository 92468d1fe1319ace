# Area: Session
"""
lexigame._session.round_behaviors — Per-kind round behaviour table
==================================================================

Everything the controller needs to know about a round kind lives in one
``RoundBehavior`` entry:

* ``check(round, answer)`` — is the submitted answer correct?
* ``canonical(round)`` — the answer shown after a miss or a reveal,
* ``hint_term(round)`` — the term a hint is asked about,
* ``scratch(round, rng)`` — pieces offered to the player on entering
  the round, freshly shuffled each time.

Adding a round kind means adding its model in ``lexigame.rounds`` and
one entry here.

Accepted answer shapes:

============================  =========================================
word/translation/trace        ``str``
spelling-completion           ``str`` (whole word) or ``list`` of letters
true-false-challenge          ``bool`` or ``"true"``/``"false"``
formula-scramble              ``str`` or ``list`` of assembled parts
timeline-teaser               ``list`` of items in order
============================  =========================================
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..rounds import (
    FormulaScrambleRound,
    RoundKind,
    Round,
    SpellingCompletionRound,
    TimelineTeaserRound,
    TrueFalseChallengeRound,
    WordTranslationMatchRound,
)

_TRUE_WORDS = ("true", "t", "yes", "y", "1")
_FALSE_WORDS = ("false", "f", "no", "n", "0")


def normalize_answer(raw: Any) -> str:
    """Trim and case-fold a text answer."""
    return str(raw).strip().casefold()


def _compact(text: str) -> str:
    return "".join(text.split()).casefold()


def _parse_bool(raw: Any) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    text = normalize_answer(raw)
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return None


# ──────────────────────────────────────────────────────────────
# Checkers
# ──────────────────────────────────────────────────────────────

def _check_word(game_round: Any, answer: Any) -> bool:
    if not isinstance(answer, str):
        return False
    return normalize_answer(answer) == normalize_answer(game_round.word)


def _check_translation(game_round: WordTranslationMatchRound, answer: Any) -> bool:
    if not isinstance(answer, str):
        return False
    return normalize_answer(answer) == normalize_answer(game_round.correct_translation)


def _check_spelling(game_round: SpellingCompletionRound, answer: Any) -> bool:
    if isinstance(answer, (list, tuple)):
        answer = game_round.fill([str(letter).strip() for letter in answer])
    return _check_word(game_round, answer)


def _check_true_false(game_round: TrueFalseChallengeRound, answer: Any) -> bool:
    return _parse_bool(answer) is game_round.is_correct


def _check_formula(game_round: FormulaScrambleRound, answer: Any) -> bool:
    if isinstance(answer, (list, tuple)):
        answer = "".join(str(part) for part in answer)
    if not isinstance(answer, str):
        return False
    return _compact(answer) == _compact(game_round.correct_formula)


def _check_timeline(game_round: TimelineTeaserRound, answer: Any) -> bool:
    if not isinstance(answer, (list, tuple)):
        return False
    return [str(item).strip() for item in answer] == [item.strip() for item in game_round.correct_order]


# ──────────────────────────────────────────────────────────────
# Scratch initialisers
# ──────────────────────────────────────────────────────────────

def _shuffled(items: List[str], rng: random.Random) -> List[str]:
    pieces = list(items)
    rng.shuffle(pieces)
    return pieces


def _no_scratch(game_round: Any, rng: random.Random) -> List[str]:
    return []


def _spelling_tiles(game_round: SpellingCompletionRound, rng: random.Random) -> List[str]:
    return _shuffled(game_round.missing_letters + game_round.decoy_letters, rng)


def _formula_parts(game_round: FormulaScrambleRound, rng: random.Random) -> List[str]:
    return _shuffled(game_round.scrambled_parts, rng)


def _timeline_items(game_round: TimelineTeaserRound, rng: random.Random) -> List[str]:
    return _shuffled(game_round.scrambled_order, rng)


@dataclass(frozen=True)
class RoundBehavior:
    check: Callable[[Any, Any], bool]
    canonical: Callable[[Any], str]
    hint_term: Callable[[Any], str]
    scratch: Callable[[Any, random.Random], List[str]] = _no_scratch


ROUND_BEHAVIORS: Dict[RoundKind, RoundBehavior] = {
    RoundKind.WORD_IMAGE_MATCH: RoundBehavior(
        check=_check_word,
        canonical=lambda r: r.word,
        hint_term=lambda r: r.word,
    ),
    RoundKind.WORD_TRANSLATION_MATCH: RoundBehavior(
        check=_check_translation,
        canonical=lambda r: r.correct_translation,
        hint_term=lambda r: r.word,
    ),
    RoundKind.SPELLING_COMPLETION: RoundBehavior(
        check=_check_spelling,
        canonical=lambda r: r.word,
        hint_term=lambda r: r.word,
        scratch=_spelling_tiles,
    ),
    RoundKind.TRACE_OR_TYPE: RoundBehavior(
        check=_check_word,
        canonical=lambda r: r.word,
        hint_term=lambda r: r.word,
    ),
    RoundKind.TRUE_FALSE_CHALLENGE: RoundBehavior(
        check=_check_true_false,
        canonical=lambda r: "True" if r.is_correct else "False",
        hint_term=lambda r: r.word,
    ),
    RoundKind.FORMULA_SCRAMBLE: RoundBehavior(
        check=_check_formula,
        canonical=lambda r: r.correct_formula,
        hint_term=lambda r: r.correct_formula,
        scratch=_formula_parts,
    ),
    RoundKind.TIMELINE_TEASER: RoundBehavior(
        check=_check_timeline,
        canonical=lambda r: " → ".join(r.correct_order),
        hint_term=lambda r: r.correct_order[0],
        scratch=_timeline_items,
    ),
}


def behavior_for(game_round: Round) -> RoundBehavior:
    return ROUND_BEHAVIORS[game_round.kind]
