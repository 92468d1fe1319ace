# Area: Backends
"""
lexigame.demo_backend — Offline demo backends
=============================================

Ready-to-use backends that work without API keys. Replies are canned and
picked by the shape of the requested output schema, so every library
operation can be tried end to end.

Usage:
    from lexigame import DemoGenerationBackend, DemoImageBackend, SessionGenerator

    generator = SessionGenerator(DemoGenerationBackend(), DemoImageBackend())
    payload = generator.generate_session(text, "Science", "Personalized Practice", "easy")
"""

import copy
import logging
import re
from typing import Any, Dict, List

from .backends import GenerationBackend, ImageBackend
from .catalog import CODE_COMPLETION, FORMULA_SCRAMBLE, TIMELINE_TEASER

logger = logging.getLogger("lexigame.demo_backend")

# 1x1 transparent PNG
DEMO_IMAGE_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

_GAME_TYPE_RE = re.compile(r"Requested Game Type:\s*(.+)")


def _spelling(word: str, masked: str, missing: List[str], decoys: List[str]) -> Dict[str, Any]:
    return {
        "mini_game_type": "spelling-completion",
        "prompt": "Fill in the missing letters.",
        "word": word,
        "masked_form": masked,
        "missing_letters": missing,
        "decoy_letters": decoys,
    }


def _formula(formula: str, parts: List[str]) -> Dict[str, Any]:
    return {
        "mini_game_type": "formula-scramble",
        "prompt": "Put the pieces of the formula back in order.",
        "correct_formula": formula,
        "scrambled_parts": parts,
    }


def _timeline(prompt: str, order: List[str], scrambled: List[str]) -> Dict[str, Any]:
    return {
        "mini_game_type": "timeline-teaser",
        "prompt": prompt,
        "correct_order": order,
        "scrambled_order": scrambled,
    }


MIXED_SESSION: Dict[str, Any] = {
    "title": "Powerhouse Sprint",
    "rounds": [
        {
            "mini_game_type": "word-image-match",
            "prompt": "Which word matches the picture?",
            "word": "cell",
            "image_ref": "IMAGE_FOR_WORD_cell",
            "distractor_words": ["atom", "leaf", "bone"],
        },
        {
            "mini_game_type": "word-translation-match",
            "prompt": "Pick the meaning of the word.",
            "word": "mitochondria",
            "correct_translation": "organelles that produce energy",
            "distractor_translations": [
                "cells that carry oxygen",
                "proteins that copy DNA",
                "sugars stored in plants",
            ],
        },
        _spelling("energy", "en_rgy", ["e"], ["a", "i"]),
        {
            "mini_game_type": "trace-or-type",
            "prompt": "Type the word you see.",
            "word": "ATP",
        },
        {
            "mini_game_type": "true-false-challenge",
            "prompt": "True or false?",
            "word": "mitochondria",
            "statement": "Mitochondria are known as the powerhouse of the cell.",
            "is_correct": True,
        },
        _timeline(
            "Order the stages of cellular respiration.",
            ["Glycolysis", "Krebs cycle", "Electron transport chain"],
            ["Krebs cycle", "Electron transport chain", "Glycolysis"],
        ),
    ],
}

FORMULA_SESSION: Dict[str, Any] = {
    "title": "Formula Frenzy",
    "rounds": [
        _formula("E = mc^2", ["mc", "E", "^2", "="]),
        _formula("F = ma", ["ma", "=", "F"]),
        _formula("V = IR", ["IR", "V", "="]),
        _formula("P = IV", ["=", "IV", "P"]),
        _formula("a^2 + b^2 = c^2", ["c^2", "a^2", "=", "+", "b^2"]),
    ],
}

CODE_SESSION: Dict[str, Any] = {
    "title": "Syntax Sprint",
    "rounds": [
        _spelling("print", "pr_nt", ["i"], ["e", "a"]),
        _spelling("return", "ret_rn", ["u"], ["o", "a"]),
        _spelling("lambda", "l_mbd_", ["a", "a"], ["e", "o"]),
        _spelling("import", "imp_rt", ["o"], ["a", "u"]),
        _spelling("yield", "yi_ld", ["e"], ["a", "i"]),
    ],
}

TIMELINE_SESSION: Dict[str, Any] = {
    "title": "Time Travel Trials",
    "rounds": [
        _timeline("Order these events.",
                  ["Magna Carta", "Printing press", "French Revolution"],
                  ["French Revolution", "Magna Carta", "Printing press"]),
        _timeline("Order these inventions.",
                  ["Steam engine", "Telephone", "Internet"],
                  ["Internet", "Steam engine", "Telephone"]),
        _timeline("Order these empires by their founding.",
                  ["Roman Empire", "Byzantine Empire", "Ottoman Empire"],
                  ["Ottoman Empire", "Roman Empire", "Byzantine Empire"]),
        _timeline("Order these voyages.",
                  ["Columbus", "Magellan", "Cook"],
                  ["Cook", "Columbus", "Magellan"]),
        _timeline("Order these milestones.",
                  ["First flight", "Moon landing", "First smartphone"],
                  ["Moon landing", "First smartphone", "First flight"]),
    ],
}

WORD_POOL: Dict[str, Any] = {
    "title": "Cat Nap Letters",
    "letters": ["c", "a", "t", "s", "r"],
    "main_words": ["cats", "cast", "star", "cart"],
    "bonus_words": ["art", "rat", "sat", "arts"],
}

CANNED_HINT = "Think about the part of your document where this idea is first explained."
CANNED_VOCABULARY = ["mitochondria", "cell", "energy", "ATP", "respiration"]

_EXCLUSIVE_SESSIONS = {
    FORMULA_SCRAMBLE.casefold(): FORMULA_SESSION,
    CODE_COMPLETION.casefold(): CODE_SESSION,
    TIMELINE_TEASER.casefold(): TIMELINE_SESSION,
}


class DemoGenerationBackend(GenerationBackend):
    """Canned generation replies keyed on the output schema."""

    name = "demo"

    def generate(self, instructions: str, output_schema: Dict[str, Any]) -> Dict[str, Any]:
        properties = output_schema.get("properties", {})
        match = _GAME_TYPE_RE.search(instructions)
        game_type = match.group(1).strip() if match else ""

        if "letters" in properties:
            reply = {**copy.deepcopy(WORD_POOL), "game_type": game_type}
        elif "rounds" in properties:
            session = _EXCLUSIVE_SESSIONS.get(game_type.casefold(), MIXED_SESSION)
            reply = {**copy.deepcopy(session), "game_type": game_type}
        elif "hint" in properties:
            reply = {"hint": CANNED_HINT}
        elif "is_valid" in properties:
            reply = {"is_valid": True, "reason": ""}
        elif "category" in properties:
            reply = {"category": "Science"}
        elif "vocabulary" in properties:
            reply = {"vocabulary": list(CANNED_VOCABULARY)}
        else:
            reply = {}

        logger.debug(f"Demo reply keys: {sorted(reply)}")
        return reply


class DemoImageBackend(ImageBackend):
    """Returns the same tiny PNG for every prompt."""

    name = "demo-images"

    def generate_image(self, prompt: str) -> str:
        return DEMO_IMAGE_URI
