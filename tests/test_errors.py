# Area: Shared
"""Tests for lexigame.errors and the structured error logging helper."""

import logging

from lexigame.errors import (
    HINT_MESSAGE,
    NEW_SESSION_MESSAGE,
    OVERLOADED_MESSAGE,
    BackendFailure,
    ContractViolation,
    GenerationFailure,
    HintUnavailable,
    ImageResolutionFailure,
    PersistenceWriteFailure,
    SessionDataUnavailable,
)
from lexigame._shared import current_timestamp, log_library_error


class TestUserMessages:

    def test_generation_failure_is_overloaded(self):
        assert GenerationFailure(attempts=2).user_message == OVERLOADED_MESSAGE
        assert ImageResolutionFailure("cell").user_message == OVERLOADED_MESSAGE

    def test_session_data_unavailable(self):
        assert SessionDataUnavailable("no payload").user_message == NEW_SESSION_MESSAGE

    def test_hint_unavailable(self):
        assert HintUnavailable("atp").user_message == HINT_MESSAGE

    def test_backend_detail_not_in_user_message(self):
        error = GenerationFailure(attempts=2)
        error.__cause__ = BackendFailure("anthropic", "HTTP 529 from api")
        assert "529" not in error.user_message


class TestFormatErrorLog:

    def test_contract_violation_lists_errors(self):
        error = ContractViolation("anthropic", ["rounds: expected at least 5"], {"rounds": []})
        block = error.format_error_log()
        assert "CONTRACT_VIOLATION" in block
        assert "rounds: expected at least 5" in block

    def test_generation_failure_includes_cause(self):
        cause = ContractViolation("anthropic", ["missing title"])
        error = GenerationFailure(attempts=2)
        error.__cause__ = cause
        block = error.format_error_log()
        assert '"attempts": 2' in block
        assert "missing title" in block

    def test_persistence_failure_includes_record(self):
        block = PersistenceWriteFailure("completed", {"final_score": 48}).format_error_log()
        assert "PERSISTENCE_WRITE_FAILURE" in block
        assert "final_score" in block


class TestLogLibraryError:

    def test_logs_block_with_error_type(self, caplog, monkeypatch):
        pkg_logger = logging.getLogger("lexigame")
        monkeypatch.setattr(pkg_logger, "propagate", True)
        with caplog.at_level(logging.WARNING, logger="lexigame"):
            log_library_error(HintUnavailable("atp"), logging.WARNING)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.error_type == "HintUnavailable"
        assert "LEXIGAME ERROR" in record.getMessage()


def test_current_timestamp_format():
    stamp = current_timestamp()
    assert stamp.endswith("Z")
    assert len(stamp) == len("2026-01-01T10:00:00.000Z")
