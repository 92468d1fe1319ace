# Area: Shared
"""Tests for lexigame.config — config loading and game rules."""

import json
from unittest.mock import patch

import pytest

from lexigame.config import DEFAULTS, GameRules, load_config, rules_from_config, validate_config


@pytest.fixture
def clean_env(tmp_path):
    """Empty environment and an empty .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text("")
    with patch.dict("os.environ", {}, clear=True):
        yield str(env_file)


class TestLoadConfig:

    def test_defaults(self, clean_env):
        config = load_config(env_file=clean_env)
        for key, value in DEFAULTS.items():
            assert config[key] == value

    def test_json_file_overrides_defaults(self, clean_env, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"model": "claude-test", "starting_lives": 5}))
        config = load_config(str(path), env_file=clean_env)
        assert config["model"] == "claude-test"
        assert config["starting_lives"] == 5

    def test_missing_file_warns_and_uses_defaults(self, clean_env):
        config = load_config("/nonexistent/config.json", env_file=clean_env)
        assert config["db_path"] == DEFAULTS["db_path"]

    def test_env_overrides_file(self, clean_env, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"starting_lives": 5}))
        with patch.dict("os.environ", {"LEXIGAME_LIVES": "7", "LEXIGAME_REVEAL_COSTS_LIFE": "false"}):
            config = load_config(str(path), env_file=clean_env)
        assert config["starting_lives"] == 7
        assert config["reveal_costs_life"] is False

    def test_dotenv_file_loaded(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("LEXIGAME_SESSION_SECONDS=120\n")
        with patch.dict("os.environ", {}, clear=True):
            config = load_config(env_file=str(env_file))
        assert config["session_seconds"] == 120

    def test_bad_env_value(self, clean_env):
        with patch.dict("os.environ", {"LEXIGAME_LIVES": "many"}):
            with pytest.raises(ValueError, match="LEXIGAME_LIVES"):
                load_config(env_file=clean_env)


class TestValidateConfig:

    @pytest.mark.parametrize("key", ["starting_lives", "session_seconds", "generation_attempts"])
    def test_non_positive_rejected(self, key):
        with pytest.raises(ValueError, match=key):
            validate_config({key: 0})

    def test_round_bounds_order(self):
        with pytest.raises(ValueError):
            validate_config({"min_rounds": 8, "max_rounds": 6})

    def test_valid(self):
        validate_config({"starting_lives": 3, "min_rounds": 5, "max_rounds": 10})


class TestRulesFromConfig:

    def test_defaults(self):
        rules = rules_from_config({"model": "x"})
        assert rules == GameRules()
        assert rules.starting_lives == 3
        assert rules.session_seconds == 300
        assert rules.pool_reveal_penalty == 25

    def test_overrides(self):
        rules = rules_from_config({"starting_lives": 5, "reveal_costs_life": False})
        assert rules.starting_lives == 5
        assert rules.reveal_costs_life is False
