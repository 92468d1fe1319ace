# Area: Generation
"""
lexigame._generation.prompts — Instruction builders
===================================================

All prompt text lives here as module-level constants so it can be tuned
without touching the orchestration logic.

``build_session_instructions`` composes four blocks:

1. the input summary (category, difficulty, truncated document),
2. game-type rules (exclusive kinds, pool games, mixed practice),
3. difficulty tiers for vocabulary and spelling masks,
4. category affinities for mixed practice.
"""

from __future__ import annotations

from typing import Dict

from ..catalog import Difficulty, DocumentCategory, GameDefinition
from ..rounds import IMAGE_PLACEHOLDER_PREFIX, MASK_CHAR, OutputContract, RoundKind


# ═══════════════════════════════════════════════════════════════════
# SESSION GENERATION
# ═══════════════════════════════════════════════════════════════════

SESSION_HEADER = """\
You are a master educational game designer, creating a fun, 5-minute learning \
session based on a user's document.

INPUT:
- Document Category: {category}
- Requested Game Type: {game_type}
- Desired Difficulty: {difficulty}
- Document Text (first {max_chars} characters):
---
{document_text}
---
"""

VOCABULARY_TIERS: Dict[Difficulty, str] = {
    Difficulty.EASY: "Use common, shorter words (3-6 letters). Focus on core concepts. "
                     "Distractors should be obviously different.",
    Difficulty.MEDIUM: "Use moderately complex words (5-9 letters). Combine concepts. "
                       "Distractors should be plausible.",
    Difficulty.HARD: "Use long, complex, domain-specific terms (8+ letters). Test nuanced "
                     "relationships. Distractors should be very similar or conceptually related.",
}

MASK_TIERS: Dict[Difficulty, str] = {
    Difficulty.EASY: "remove only 1-2 letters (prefer vowels)",
    Difficulty.MEDIUM: "remove about 30% of the letters (vowels and common consonants)",
    Difficulty.HARD: "remove about 50% of the letters, including less common consonants",
}

FORMULA_TIERS: Dict[Difficulty, str] = {
    Difficulty.EASY: "short formulas broken into 2-4 parts",
    Difficulty.MEDIUM: "formulas broken into 4-6 parts",
    Difficulty.HARD: "longer formulas broken into 6 or more small, tricky parts",
}

TIMELINE_TIERS: Dict[Difficulty, str] = {
    Difficulty.EASY: "3-4 widely separated items",
    Difficulty.MEDIUM: "4-5 items requiring more specific knowledge",
    Difficulty.HARD: "5-6 nuanced, closely timed or conceptually similar items",
}

POOL_TIERS: Dict[Difficulty, str] = {
    Difficulty.EASY: "6 letters, 4-6 main words of 3-4 letters",
    Difficulty.MEDIUM: "7 letters, 6-8 main words of 3-6 letters",
    Difficulty.HARD: "8 letters, 8-10 main words of 4-8 letters",
}

CATEGORY_AFFINITIES: Dict[DocumentCategory, str] = {
    DocumentCategory.SCIENCE: (
        "Generate true-false-challenge rounds testing relationships. Prioritize "
        "spelling-completion and trace-or-type for key terminology. word-image-match "
        "suits physical objects (a cell, a tool)."
    ),
    DocumentCategory.ENGINEERING: (
        "Generate true-false-challenge rounds testing relationships. Prioritize "
        "spelling-completion and trace-or-type for key terminology. word-image-match "
        "suits physical components."
    ),
    DocumentCategory.MATHEMATICS: (
        "Prefer formula-scramble for key equations and true-false-challenge for "
        "properties. Use spelling-completion for named theorems and terms."
    ),
    DocumentCategory.HISTORY: (
        "Generate true-false-challenge rounds testing facts about events or figures; "
        "'Who am I?' statements are welcome. Use word-translation-match for key terms "
        "and simple definitions, timeline-teaser for ordered events."
    ),
    DocumentCategory.COMPUTER_SCIENCE: (
        "Prioritize spelling-completion and trace-or-type for syntax, keywords and "
        "function names. true-false-challenge can test logic. On hard difficulty "
        "spelling words may include symbols such as underscores or brackets."
    ),
    DocumentCategory.LANGUAGE: (
        "Use a balanced mix of all round types. word-translation-match and "
        "word-image-match are particularly effective."
    ),
    DocumentCategory.GENERAL: (
        "Use a balanced mix of all round types. word-translation-match and "
        "word-image-match are particularly effective."
    ),
}

ROUND_MECHANICS = f"""\
ROUND MECHANICS:
- Every round has a "mini_game_type" field and a short "prompt" shown to the player.
- word-image-match: pick a concrete noun. Set "image_ref" to "{IMAGE_PLACEHOLDER_PREFIX}<word>"; \
the system generates the image. Provide exactly 3 distractor_words from the document.
- word-translation-match: give the correct translation (assume English) and exactly 3 \
plausible but incorrect distractor_translations.
- spelling-completion: "masked_form" is the word with each removed letter replaced by \
"{MASK_CHAR}"; "missing_letters" lists the removed letters left to right; "decoy_letters" \
are plausible wrong letters.
- trace-or-type: just the word to type.
- true-false-challenge: a statement using the word in the document's context and whether \
it is correct.
- formula-scramble: the correct formula and its parts shuffled in "scrambled_parts"; the \
parts must use exactly the formula's characters.
- timeline-teaser: items in "correct_order" and the same items shuffled in "scrambled_order".
"""

SESSION_FOOTER = """\
FINAL INSTRUCTIONS:
1. Create a fun, encouraging title (e.g. "Biology Blitz", "Calculus Scramble").
2. Generate between {min_rounds} and {max_rounds} rounds following all rules above.
3. The "game_type" in your output must be exactly "{game_type}".
"""

POOL_RULES = """\
GAME TYPE RULES:
This is a letter-pool word game. Choose a set of letters ({pool_tier}) from vocabulary \
in the document. List every letter tile in "letters"; a letter used twice in a word must \
appear twice. "main_words" are the words the player must find, "bonus_words" are extra \
valid words. Every word must be spelled only from the given tiles.
"""


def _game_type_rules(game: GameDefinition, difficulty: Difficulty) -> str:
    kind = game.exclusive_kind
    if kind is None:
        return (
            "GAME TYPE RULES:\n"
            "This is a mixed-modality session. Generate a good variety of round types "
            "based on the category and difficulty rules below. Prioritize variety.\n"
        )

    lines = [
        "GAME TYPE RULES:",
        f'THIS IS THE ONLY ROUND TYPE TO GENERATE: every round must be "{kind.value}".',
    ]
    if kind is RoundKind.FORMULA_SCRAMBLE:
        lines.append("Identify key formulas or equations from the document and break each "
                     f"into its logical components: {FORMULA_TIERS[difficulty]}.")
    elif kind is RoundKind.TIMELINE_TEASER:
        lines.append("Identify sets of events, figures, or process steps with a clear "
                     f"chronological order: {TIMELINE_TIERS[difficulty]}.")
    elif kind is RoundKind.SPELLING_COMPLETION:
        lines.append("Use keywords, identifiers and function names from the document.")
    return "\n".join(lines) + "\n"


def build_session_instructions(
    document_text: str,
    category: DocumentCategory,
    game: GameDefinition,
    difficulty: Difficulty,
    max_chars: int,
    min_rounds: int,
    max_rounds: int,
) -> str:
    """Compose the full generation instructions for one session request."""
    parts = [
        SESSION_HEADER.format(
            category=category.value,
            game_type=game.name,
            difficulty=difficulty.value,
            max_chars=max_chars,
            document_text=document_text[:max_chars],
        )
    ]

    if game.contract is OutputContract.POOL:
        parts.append(POOL_RULES.format(pool_tier=POOL_TIERS[difficulty]))
        parts.append(f'Use a fun title. The "game_type" in your output must be exactly "{game.name}".\n')
        return "\n".join(parts)

    parts.append(_game_type_rules(game, difficulty))
    parts.append(
        "DIFFICULTY RULES:\n"
        f"- Vocabulary: {VOCABULARY_TIERS[difficulty]}\n"
        f"- Spelling completion: {MASK_TIERS[difficulty]}.\n"
    )
    if game.exclusive_kind is None:
        parts.append(f"CATEGORY RULES:\n{CATEGORY_AFFINITIES[category]}\n")
    parts.append(ROUND_MECHANICS)
    parts.append(SESSION_FOOTER.format(
        min_rounds=min_rounds, max_rounds=max_rounds, game_type=game.name,
    ))
    return "\n".join(parts)


# ═══════════════════════════════════════════════════════════════════
# HINTS
# ═══════════════════════════════════════════════════════════════════

HINT_PROMPT = """\
You are a game master providing hints to players of word games based on the \
document they uploaded. The player is stuck on the term '{target_term}'.

Document context:
---
{document_context}
---

Give one short hint (one or two sentences) based on the document context. \
Never write the term '{target_term}' itself or any part of it. \
Return JSON: {{"hint": "..."}}\
"""

HINT_SCHEMA = {
    "type": "object",
    "properties": {"hint": {"type": "string"}},
    "required": ["hint"],
}


# ═══════════════════════════════════════════════════════════════════
# DOCUMENT ANALYSIS
# ═══════════════════════════════════════════════════════════════════

VALIDATE_PROMPT = """\
You are an AI assistant for a learning app. Validate that the document content is \
suitable for creating educational games.

The content should be coherent, primarily text-based, and contain learnable \
vocabulary. It should not be gibberish, random characters, raw source code, or \
inappropriate content.

Document Text:
---
{document_text}
---

If the document is not valid, give a concise, user-friendly reason, e.g. "The \
document appears to contain code, not learnable text." If it is valid, the reason \
must be an empty string.\
"""

VALIDATE_SCHEMA = {
    "type": "object",
    "properties": {
        "is_valid": {"type": "boolean"},
        "reason": {"type": "string"},
    },
    "required": ["is_valid", "reason"],
}

CATEGORIZE_PROMPT = """\
You are an expert librarian AI. Classify the text into exactly one of these categories:

- Science (Biology, Chemistry, Physics, etc.)
- History & Social Science (Politics, Sociology, etc.)
- Mathematics
- Computer Science & Coding (Programming, Algorithms, Software, etc.)
- Engineering (Mechanical, Electrical, Civil, etc.)
- Language Learning & Literature (Fiction, Poetry, Grammar, etc.)
- General & Other (News articles, miscellaneous topics, etc.)

Document Text:
---
{document_text}
---\
"""

CATEGORIZE_SCHEMA = {
    "type": "object",
    "properties": {
        "category": {"type": "string", "enum": [c.value for c in DocumentCategory]},
    },
    "required": ["category"],
}

VOCABULARY_PROMPT = """\
You are an expert vocabulary extractor. Identify the key vocabulary words in the \
document that are most relevant and useful for learning games. Return single words \
or short terms only.

Document Text:
---
{document_text}
---\
"""

VOCABULARY_SCHEMA = {
    "type": "object",
    "properties": {
        "vocabulary": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["vocabulary"],
}
