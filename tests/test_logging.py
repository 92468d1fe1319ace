# Area: Shared
"""Tests for the lexigame logging setup."""

import json
import logging

import pytest

from lexigame._shared.logging_config import (
    JSONLinesFormatter,
    SessionTerminalFormatter,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture
def restore_logger():
    pkg_logger = logging.getLogger("lexigame")
    handlers, level, propagate = list(pkg_logger.handlers), pkg_logger.level, pkg_logger.propagate
    yield pkg_logger
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


def make_record(**extra):
    record = logging.LogRecord("lexigame.session", logging.WARNING, __file__, 1, "lives left: %d", (2,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:

    def test_terminal_tags_session(self):
        line = SessionTerminalFormatter(color=False).format(make_record(session_id="abcdef0123456789"))
        assert "[abcdef01] lexigame.session" in line
        assert line.endswith("lives left: 2")
        assert "\033[" not in line

    def test_terminal_without_session(self):
        line = SessionTerminalFormatter(color=False).format(make_record())
        assert "[" not in line

    def test_json_lines_carry_context(self):
        entry = json.loads(JSONLinesFormatter().format(make_record(session_id="s-1", attempt=2)))
        assert entry["level"] == "WARNING"
        assert entry["message"] == "lives left: 2"
        assert entry["session_id"] == "s-1"
        assert entry["attempt"] == 2
        assert "game_type" not in entry


class TestSetupLogging:

    def test_writes_json_file(self, restore_logger, tmp_path):
        log_file = tmp_path / "logs" / "play.log"
        setup_logging(str(log_file), terminal=False)

        logging.getLogger("lexigame.session").info("Session started", extra={"session_id": "s-9"})
        for handler in restore_logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["message"] == "Session started"
        assert entry["session_id"] == "s-9"
        assert restore_logger.propagate is False

    def test_repeat_setup_replaces_handlers(self, restore_logger, tmp_path):
        setup_logging(str(tmp_path / "a.log"))
        setup_logging(str(tmp_path / "b.log"))
        assert len(restore_logger.handlers) == 2

    def test_from_config(self, restore_logger, tmp_path):
        setup_logging_from_config({"log_file": str(tmp_path / "cfg.log")})
        files = [h.baseFilename for h in restore_logger.handlers if isinstance(h, logging.FileHandler)]
        assert files == [str(tmp_path / "cfg.log")]
