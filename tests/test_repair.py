# Area: Generation
"""Tests for lexigame._generation.repair — pool repair and round validation."""

import pytest

from lexigame.catalog import Difficulty, get_game
from lexigame.errors import ContractViolation
from lexigame._generation.repair import (
    parse_word_pool,
    repair_word_pool,
    validate_session_rounds,
)
from lexigame.rounds import WordPoolPayload


def pool(**overrides):
    data = {
        "title": "Cats",
        "game_type": "Word Cookies",
        "letters": ["c", "a", "t", "s"],
        "main_words": ["cats", "star"],
        "bonus_words": ["at"],
    }
    data.update(overrides)
    return WordPoolPayload.model_validate(data)


def mixed_rounds(count=5):
    rounds = [
        {
            "mini_game_type": "trace-or-type",
            "prompt": "Type it.",
            "word": f"word{i}",
        }
        for i in range(count)
    ]
    return {"title": "Mix", "game_type": "Personalized Practice", "rounds": rounds}


class TestRepairWordPool:
    """Formability filtering and de-duplication."""

    def test_unformable_main_word_dropped(self):
        repaired = repair_word_pool(pool())
        assert repaired.main_words == ["cats"]
        assert repaired.bonus_words == ["at"]

    def test_case_insensitive_dedupe(self):
        repaired = repair_word_pool(pool(main_words=["Cats", "cats", "CAT"], bonus_words=["At", "at"]))
        assert repaired.main_words == ["cats", "cat"]
        assert repaired.bonus_words == ["at"]

    def test_bonus_overlapping_main_removed(self):
        repaired = repair_word_pool(pool(main_words=["cat", "cats"], bonus_words=["CAT", "sat"]))
        assert repaired.main_words == ["cat", "cats"]
        assert repaired.bonus_words == ["sat"]

    def test_idempotent(self):
        once = repair_word_pool(pool(main_words=["Cats", "star", "act"], bonus_words=["ACT", "at", "tsar"]))
        twice = repair_word_pool(once)
        assert twice == once

    def test_no_main_words_left_is_contract_violation(self):
        with pytest.raises(ContractViolation) as exc_info:
            repair_word_pool(pool(main_words=["star", "rats"]))
        assert exc_info.value.validation_errors

    def test_letters_normalized(self):
        repaired = repair_word_pool(pool(letters=["C", " a", "T", "s"]))
        assert repaired.letters == ["c", "a", "t", "s"]


class TestParseWordPool:

    def test_schema_failure_is_contract_violation(self):
        with pytest.raises(ContractViolation):
            parse_word_pool({"title": "x", "game_type": "Word Cookies"}, get_game("Word Cookies"))

    def test_game_type_forced_to_requested(self):
        raw = pool().model_dump()
        raw["game_type"] = "Something else"
        parsed = parse_word_pool(raw, get_game("Word Cookies"))
        assert parsed.game_type == "Word Cookies"


class TestValidateSessionRounds:
    """All-or-nothing validation of sequential replies."""

    def validate(self, raw, game_type="Personalized Practice", difficulty=Difficulty.MEDIUM):
        return validate_session_rounds(raw, get_game(game_type), difficulty, min_rounds=5, max_rounds=10)

    def test_valid_session(self):
        payload = self.validate(mixed_rounds(5))
        assert len(payload.rounds) == 5

    @pytest.mark.parametrize("count", [4, 11])
    def test_round_count_out_of_range(self, count):
        with pytest.raises(ContractViolation) as exc_info:
            self.validate(mixed_rounds(count))
        assert any("rounds" in e for e in exc_info.value.validation_errors)

    def test_one_invalid_round_fails_whole_attempt(self):
        raw = mixed_rounds(6)
        del raw["rounds"][3]["word"]
        with pytest.raises(ContractViolation) as exc_info:
            self.validate(raw)
        assert any(e.startswith("rounds.3") for e in exc_info.value.validation_errors)

    def test_missing_rounds_list(self):
        with pytest.raises(ContractViolation):
            self.validate({"title": "x", "game_type": "Personalized Practice"})

    def test_exclusive_game_rejects_foreign_kinds(self):
        raw = mixed_rounds(5)
        raw["game_type"] = "Formula Scramble"
        with pytest.raises(ContractViolation) as exc_info:
            self.validate(raw, game_type="Formula Scramble")
        assert any("formula-scramble" in e for e in exc_info.value.validation_errors)

    def test_easy_spelling_masks_at_most_two_letters(self):
        raw = mixed_rounds(5)
        raw["rounds"][0] = {
            "mini_game_type": "spelling-completion",
            "prompt": "Fill in.",
            "word": "energy",
            "masked_form": "_n_r_y",
            "missing_letters": ["e", "e", "g"],
        }
        with pytest.raises(ContractViolation):
            self.validate(raw, difficulty=Difficulty.EASY)
        # Same round is fine on hard
        assert self.validate(raw, difficulty=Difficulty.HARD)

    def test_image_round_gets_placeholder(self):
        raw = mixed_rounds(5)
        raw["rounds"][0] = {
            "mini_game_type": "word-image-match",
            "prompt": "Pick.",
            "word": "cell",
            "image_ref": "https://example.com/made-up.png",
            "distractor_words": ["atom", "leaf", "bone"],
        }
        payload = self.validate(raw)
        assert payload.rounds[0].image_ref == "IMAGE_FOR_WORD_cell"

    def test_game_type_echo_corrected(self):
        raw = mixed_rounds(5)
        raw["game_type"] = "Something"
        assert self.validate(raw).game_type == "Personalized Practice"

    def test_unhashable_discriminant_is_contract_violation(self):
        raw = mixed_rounds(5)
        for round_raw in raw["rounds"]:
            round_raw["mini_game_type"] = ["trace-or-type"]
        with pytest.raises(ContractViolation) as exc_info:
            self.validate(raw)
        assert all("mini_game_type" in e for e in exc_info.value.validation_errors)
