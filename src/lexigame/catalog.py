# Area: Rounds
"""
lexigame.catalog — Game types, categories, and difficulties
===========================================================

The catalog decides, per requested game type:

* which output contract the backend is asked for (sequential or pool),
* whether the whole session is restricted to one round kind,
* whether the session clock can end the game.

Unknown game types are treated as mixed practice sessions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .rounds import OutputContract, RoundKind


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DocumentCategory(Enum):
    SCIENCE = "Science"
    HISTORY = "History & Social Science"
    MATHEMATICS = "Mathematics"
    COMPUTER_SCIENCE = "Computer Science & Coding"
    ENGINEERING = "Engineering"
    LANGUAGE = "Language Learning & Literature"
    GENERAL = "General & Other"

    @classmethod
    def parse(cls, value: str) -> "DocumentCategory":
        """Match a category name case-insensitively; fall back to GENERAL."""
        folded = (value or "").strip().casefold()
        for category in cls:
            if category.value.casefold() == folded:
                return category
        for category in cls:
            # Short forms such as "Science" or "History"
            if folded and category.value.casefold().startswith(folded):
                return category
        return cls.GENERAL


@dataclass(frozen=True)
class GameDefinition:
    """One playable game type."""
    game_id: str
    name: str
    description: str
    improves: Tuple[str, ...]
    contract: OutputContract = OutputContract.SEQUENTIAL
    exclusive_kind: Optional[RoundKind] = None
    clock_bound: bool = True
    supported_categories: Tuple[DocumentCategory, ...] = field(default_factory=tuple)

    def supports(self, category: DocumentCategory) -> bool:
        """An empty category list means every category is supported."""
        return not self.supported_categories or category in self.supported_categories


PERSONALIZED_PRACTICE = "Personalized Practice"
FORMULA_SCRAMBLE = "Formula Scramble"
CODE_COMPLETION = "Code Completion Challenge"
TIMELINE_TEASER = "Timeline Teaser"
WORD_COOKIES = "Word Cookies"


GAMES: Tuple[GameDefinition, ...] = (
    GameDefinition(
        game_id="game-1",
        name=PERSONALIZED_PRACTICE,
        description="A dynamic, 5-minute session with varied mini-games to rapidly "
                    "boost vocabulary from your document.",
        improves=("Recall", "Spelling", "Context"),
    ),
    GameDefinition(
        game_id="game-2",
        name=FORMULA_SCRAMBLE,
        description="Unscramble key formulas and equations from your document.",
        improves=("Recall", "Logic", "Pattern Recognition"),
        exclusive_kind=RoundKind.FORMULA_SCRAMBLE,
        supported_categories=(
            DocumentCategory.MATHEMATICS,
            DocumentCategory.SCIENCE,
            DocumentCategory.ENGINEERING,
        ),
    ),
    GameDefinition(
        game_id="game-3",
        name=CODE_COMPLETION,
        description="Type the missing pieces of keywords and identifiers taken from "
                    "your notes. Perfect for syntax practice.",
        improves=("Spelling", "Syntax", "Memory"),
        exclusive_kind=RoundKind.SPELLING_COMPLETION,
        supported_categories=(DocumentCategory.COMPUTER_SCIENCE,),
    ),
    GameDefinition(
        game_id="game-4",
        name=TIMELINE_TEASER,
        description="Place key events, dates, and figures in the correct "
                    "chronological order.",
        improves=("Recall", "Sequencing", "History"),
        exclusive_kind=RoundKind.TIMELINE_TEASER,
        supported_categories=(DocumentCategory.HISTORY,),
    ),
    GameDefinition(
        game_id="game-5",
        name=WORD_COOKIES,
        description="Spell as many words as you can from a wheel of letters drawn "
                    "from your document.",
        improves=("Spelling", "Vocabulary"),
        contract=OutputContract.POOL,
        clock_bound=False,
        supported_categories=(
            DocumentCategory.LANGUAGE,
            DocumentCategory.GENERAL,
        ),
    ),
)

# Other letter-pool game names accepted as requests.
_POOL_ALIASES = ("wordscapes", "word cookies", "spelling bee")


def get_game(game_type: str) -> GameDefinition:
    """Resolve a requested game type; unknown names become mixed practice."""
    folded = (game_type or "").strip().casefold()
    for game in GAMES:
        if game.name.casefold() == folded or game.game_id == folded:
            return game
    if any(alias in folded for alias in _POOL_ALIASES):
        return GameDefinition(
            game_id=folded,
            name=game_type.strip(),
            description="Letter-pool word game.",
            improves=("Spelling", "Vocabulary"),
            contract=OutputContract.POOL,
            clock_bound=False,
        )
    return GameDefinition(
        game_id=folded or "mixed",
        name=game_type.strip() or PERSONALIZED_PRACTICE,
        description="Mixed practice session.",
        improves=("Recall",),
    )


def games_for_category(category: DocumentCategory) -> List[GameDefinition]:
    """Games offered for a document of the given category."""
    return [game for game in GAMES if game.supports(category)]
