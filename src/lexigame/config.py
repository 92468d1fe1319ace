# Area: Shared
"""
lexigame.config — Configuration loading and game rules
======================================================

Configuration is a plain dict assembled from, in increasing priority:

1. built-in defaults,
2. an optional JSON config file,
3. a ``.env`` file (loaded with python-dotenv) and the process environment.

``rules_from_config`` turns it into the ``GameRules`` the session
controller and generator consume.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger("lexigame.config")


@dataclass(frozen=True)
class GameRules:
    """Scoring, resource, and timing constants for one session."""
    starting_lives: int = 3
    session_seconds: int = 300
    base_points: int = 10
    streak_bonus: int = 2               # extra points per streak step
    pool_points_per_letter: int = 10
    pool_bonus_points: int = 5
    pool_reveal_penalty: int = 25
    correct_advance_delay: float = 1.2
    incorrect_advance_delay: float = 2.0
    feedback_clear_delay: float = 1.5
    reveal_costs_life: bool = True
    min_rounds: int = 5
    max_rounds: int = 10
    max_document_chars: int = 4000
    generation_attempts: int = 2
    retry_delay_seconds: float = 1.0
    max_image_workers: int = 8


DEFAULTS: Dict[str, Any] = {
    "model": "claude-3-5-haiku-latest",
    "image_model": "dall-e-3",
    "db_path": "lexigame.db",
    "log_file": "lexigame.log",
}

# Environment variable -> (config key, converter)
ENV_MAPPINGS = {
    "LEXIGAME_MODEL": ("model", str),
    "OPENAI_IMAGE_MODEL": ("image_model", str),
    "LEXIGAME_DB_PATH": ("db_path", str),
    "LEXIGAME_LOG_FILE": ("log_file", str),
    "LEXIGAME_LIVES": ("starting_lives", int),
    "LEXIGAME_SESSION_SECONDS": ("session_seconds", int),
    "LEXIGAME_REVEAL_COSTS_LIFE": ("reveal_costs_life", lambda v: v.lower() in ("true", "1", "yes")),
    "LEXIGAME_GENERATION_ATTEMPTS": ("generation_attempts", int),
    "LEXIGAME_RETRY_DELAY": ("retry_delay_seconds", float),
}

_POSITIVE_INT_KEYS = ("starting_lives", "session_seconds", "generation_attempts",
                      "min_rounds", "max_rounds", "max_document_chars", "max_image_workers")


def load_config(config_path: Optional[str] = None, env_file: Optional[str] = None) -> Dict[str, Any]:
    """Load config from defaults, an optional JSON file, and the environment."""
    config: Dict[str, Any] = dict(DEFAULTS)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    load_dotenv(env_file)

    for env_key, (config_key, convert) in ENV_MAPPINGS.items():
        if env_key in os.environ:
            try:
                config[config_key] = convert(os.environ[env_key])
            except ValueError:
                raise ValueError(f"Invalid value for {env_key}: {os.environ[env_key]!r}") from None

    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate rule values in a config dict.

    Raises:
        ValueError: If any rule value is out of range
    """
    bad = [
        key for key in _POSITIVE_INT_KEYS
        if key in config and (not isinstance(config[key], int) or config[key] <= 0)
    ]
    if "min_rounds" in config and "max_rounds" in config and config["min_rounds"] > config["max_rounds"]:
        bad.append("min_rounds>max_rounds")
    if bad:
        raise ValueError(f"Invalid config values: {bad}")


def rules_from_config(config: Dict[str, Any]) -> GameRules:
    """Build GameRules from the config keys that match its fields."""
    fields = GameRules.__dataclass_fields__
    return GameRules(**{key: value for key, value in config.items() if key in fields})
