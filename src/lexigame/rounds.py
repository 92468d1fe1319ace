# Area: Rounds
"""
lexigame.rounds — Round schema registry
=======================================

Defines the closed set of mini-game round shapes and the two session
output contracts:

* ``SessionPayload`` — an ordered list of rounds played in sequence.
* ``WordPoolPayload`` — a letter pool with main and bonus words.

Every round carries the ``mini_game_type`` discriminant. Models are
frozen: a payload is immutable once generated, and later stages
(image resolution) build new rounds with ``model_copy``.

Validation follows the rest of the package: ``validate_round`` returns a
list of human-readable errors, empty when the round is valid.
"""

from __future__ import annotations

import json
from collections import Counter
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import SessionDataUnavailable


DISCRIMINANT_FIELD = "mini_game_type"
IMAGE_PLACEHOLDER_PREFIX = "IMAGE_FOR_WORD_"
MASK_CHAR = "_"
DISTRACTOR_COUNT = 3


class RoundKind(Enum):
    """Mini-game kinds, valued by their wire discriminant."""
    WORD_IMAGE_MATCH = "word-image-match"
    WORD_TRANSLATION_MATCH = "word-translation-match"
    SPELLING_COMPLETION = "spelling-completion"
    TRACE_OR_TYPE = "trace-or-type"
    TRUE_FALSE_CHALLENGE = "true-false-challenge"
    FORMULA_SCRAMBLE = "formula-scramble"
    TIMELINE_TEASER = "timeline-teaser"


class OutputContract(Enum):
    """Top-level shape the generation backend is asked to produce."""
    SEQUENTIAL = "sequential"
    POOL = "pool"


def image_placeholder(word: str) -> str:
    """Placeholder token written into ``image_ref`` until an image is resolved."""
    return f"{IMAGE_PLACEHOLDER_PREFIX}{word}"


def is_image_placeholder(value: str) -> bool:
    return value.startswith(IMAGE_PLACEHOLDER_PREFIX)


def _strip_whitespace(text: str) -> str:
    return "".join(text.split())


def _check_distractors(answer: str, distractors: List[str], field_name: str) -> None:
    folded = answer.casefold()
    if any(d.casefold() == folded for d in distractors):
        raise ValueError(f"{field_name} must not contain the correct answer")
    if len({d.casefold() for d in distractors}) != len(distractors):
        raise ValueError(f"{field_name} must not repeat an option")


# ══════════════════════════════════════════════════════════════
# ROUND VARIANTS
# ══════════════════════════════════════════════════════════════

class _RoundBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    prompt: str = Field(min_length=1, description="Instruction shown to the player.")

    @property
    def kind(self) -> RoundKind:
        return RoundKind(getattr(self, DISCRIMINANT_FIELD))


class WordImageMatchRound(_RoundBase):
    mini_game_type: Literal["word-image-match"] = "word-image-match"
    word: str = Field(min_length=1, description="Concrete noun shown as an illustration.")
    image_ref: str = Field(
        min_length=1,
        description=f"Leave as '{IMAGE_PLACEHOLDER_PREFIX}<word>'; the image is generated later.",
    )
    distractor_words: List[str] = Field(min_length=DISTRACTOR_COUNT, max_length=DISTRACTOR_COUNT)

    @model_validator(mode="after")
    def _distractors_exclude_answer(self) -> "WordImageMatchRound":
        _check_distractors(self.word, self.distractor_words, "distractor_words")
        return self


class WordTranslationMatchRound(_RoundBase):
    mini_game_type: Literal["word-translation-match"] = "word-translation-match"
    word: str = Field(min_length=1)
    correct_translation: str = Field(min_length=1)
    distractor_translations: List[str] = Field(
        min_length=DISTRACTOR_COUNT, max_length=DISTRACTOR_COUNT
    )

    @model_validator(mode="after")
    def _distractors_exclude_answer(self) -> "WordTranslationMatchRound":
        _check_distractors(self.correct_translation, self.distractor_translations,
                           "distractor_translations")
        return self


class SpellingCompletionRound(_RoundBase):
    mini_game_type: Literal["spelling-completion"] = "spelling-completion"
    word: str = Field(min_length=1)
    masked_form: str = Field(
        min_length=1,
        description=f"The word with each removed letter replaced by '{MASK_CHAR}'.",
    )
    missing_letters: List[str] = Field(min_length=1, description="Removed letters, left to right.")
    decoy_letters: List[str] = Field(default_factory=list)

    @field_validator("missing_letters", "decoy_letters")
    @classmethod
    def _single_characters(cls, value: List[str]) -> List[str]:
        for letter in value:
            if len(letter) != 1:
                raise ValueError(f"letters must be single characters, got {letter!r}")
        return value

    @model_validator(mode="after")
    def _mask_reconstructs_word(self) -> "SpellingCompletionRound":
        if len(self.masked_form) != len(self.word):
            raise ValueError("masked_form must have the same length as word")
        blanks = self.masked_form.count(MASK_CHAR)
        if blanks != len(self.missing_letters):
            raise ValueError(
                f"masked_form has {blanks} blanks but {len(self.missing_letters)} missing_letters"
            )
        if self.fill(self.missing_letters).casefold() != self.word.casefold():
            raise ValueError("missing_letters do not reconstruct word")
        return self

    def fill(self, letters: List[str]) -> str:
        """Fill the blanks of ``masked_form`` with ``letters`` in order."""
        supply = iter(letters)
        return "".join(
            next(supply, MASK_CHAR) if char == MASK_CHAR else char
            for char in self.masked_form
        )


class TraceOrTypeRound(_RoundBase):
    mini_game_type: Literal["trace-or-type"] = "trace-or-type"
    word: str = Field(min_length=1)


class TrueFalseChallengeRound(_RoundBase):
    mini_game_type: Literal["true-false-challenge"] = "true-false-challenge"
    word: str = Field(min_length=1)
    statement: str = Field(min_length=1)
    is_correct: bool


class FormulaScrambleRound(_RoundBase):
    mini_game_type: Literal["formula-scramble"] = "formula-scramble"
    correct_formula: str = Field(min_length=1)
    scrambled_parts: List[str] = Field(min_length=1)

    @model_validator(mode="after")
    def _parts_cover_formula(self) -> "FormulaScrambleRound":
        parts = Counter(_strip_whitespace("".join(self.scrambled_parts)).casefold())
        formula = Counter(_strip_whitespace(self.correct_formula).casefold())
        if parts != formula:
            raise ValueError("scrambled_parts must use exactly the characters of correct_formula")
        return self


class TimelineTeaserRound(_RoundBase):
    mini_game_type: Literal["timeline-teaser"] = "timeline-teaser"
    correct_order: List[str] = Field(min_length=2)
    scrambled_order: List[str] = Field(min_length=2)

    @model_validator(mode="after")
    def _scrambled_is_permutation(self) -> "TimelineTeaserRound":
        if sorted(self.scrambled_order) != sorted(self.correct_order):
            raise ValueError("scrambled_order must be a permutation of correct_order")
        return self


Round = Annotated[
    Union[
        WordImageMatchRound,
        WordTranslationMatchRound,
        SpellingCompletionRound,
        TraceOrTypeRound,
        TrueFalseChallengeRound,
        FormulaScrambleRound,
        TimelineTeaserRound,
    ],
    Field(discriminator=DISCRIMINANT_FIELD),
]

ROUND_MODELS: Dict[RoundKind, type] = {
    RoundKind.WORD_IMAGE_MATCH: WordImageMatchRound,
    RoundKind.WORD_TRANSLATION_MATCH: WordTranslationMatchRound,
    RoundKind.SPELLING_COMPLETION: SpellingCompletionRound,
    RoundKind.TRACE_OR_TYPE: TraceOrTypeRound,
    RoundKind.TRUE_FALSE_CHALLENGE: TrueFalseChallengeRound,
    RoundKind.FORMULA_SCRAMBLE: FormulaScrambleRound,
    RoundKind.TIMELINE_TEASER: TimelineTeaserRound,
}

_ROUND_ADAPTER: TypeAdapter = TypeAdapter(Round)


# ══════════════════════════════════════════════════════════════
# SESSION CONTRACTS
# ══════════════════════════════════════════════════════════════

class SessionPayload(BaseModel):
    """Ordered rounds for a sequential session."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(min_length=1, description="Fun, encouraging session title.")
    game_type: str = Field(min_length=1, description="Must echo the requested game type.")
    rounds: List[Round] = Field(min_length=1)


class WordPoolPayload(BaseModel):
    """Letter pool and target words for a pool game."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(min_length=1)
    game_type: str = Field(min_length=1)
    letters: List[str] = Field(min_length=1, description="Letter tiles, repeated letters listed twice.")
    main_words: List[str] = Field(default_factory=list)
    bonus_words: List[str] = Field(default_factory=list)


Payload = Union[SessionPayload, WordPoolPayload]

CONTRACT_MODELS: Dict[OutputContract, type] = {
    OutputContract.SEQUENTIAL: SessionPayload,
    OutputContract.POOL: WordPoolPayload,
}


# ══════════════════════════════════════════════════════════════
# VALIDATION
# ══════════════════════════════════════════════════════════════

def format_validation_errors(exc: ValidationError) -> List[str]:
    """Flatten a pydantic ValidationError into 'location: message' strings."""
    errors: List[str] = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        errors.append(f"{location}: {err['msg']}" if location else err["msg"])
    return errors


def validate_round(raw: Any) -> List[str]:
    """
    Validate one raw round dict against its variant schema.

    Returns
    -------
    List[str]
        Validation error messages. Empty if valid.
    """
    if not isinstance(raw, dict):
        return [f"Expected dict, got {type(raw).__name__}"]

    tag = raw.get(DISCRIMINANT_FIELD)
    if not isinstance(tag, str) or tag not in {kind.value for kind in RoundKind}:
        return [f"Unknown {DISCRIMINANT_FIELD}: {tag!r}"]

    try:
        _ROUND_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        return format_validation_errors(exc)
    return []


def parse_round(raw: Dict[str, Any]) -> Round:
    """Parse a raw round dict. Raises pydantic ValidationError if invalid."""
    return _ROUND_ADAPTER.validate_python(raw)


def output_schema(contract: OutputContract) -> Dict[str, Any]:
    """JSON schema for the given output contract, as handed to the backend."""
    return CONTRACT_MODELS[contract].model_json_schema()


def load_payload(raw: Union[str, bytes, Dict[str, Any], None]) -> Payload:
    """
    Rebuild a stored payload (JSON text or dict).

    Raises
    ------
    SessionDataUnavailable
        If the data is missing, not JSON, or fails validation.
    """
    if raw is None or raw == "" or raw == b"":
        raise SessionDataUnavailable("no stored payload")

    data: Any = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except UnicodeDecodeError as exc:
            raise SessionDataUnavailable(f"stored payload is not UTF-8 ({exc.reason})") from exc
        except json.JSONDecodeError as exc:
            raise SessionDataUnavailable(f"stored payload is not JSON ({exc.msg})") from exc

    if not isinstance(data, dict):
        raise SessionDataUnavailable(f"stored payload is {type(data).__name__}, not an object")

    model = WordPoolPayload if "letters" in data else SessionPayload
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise SessionDataUnavailable(
            "stored payload failed validation: " + "; ".join(format_validation_errors(exc))
        ) from exc
