# Area: Shared
"""
lexigame.errors — Custom exception classes
==========================================

Defines the exception hierarchy surfaced to the play layer.
Each exception carries a user-facing message that never contains raw
backend diagnostics, plus enough context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


OVERLOADED_MESSAGE = "The AI model is currently overloaded. Please try again in a few moments."
NEW_SESSION_MESSAGE = "Your game session could not be loaded. Please start a new session."
HINT_MESSAGE = "Could not fetch a hint."


class LexiGameError(Exception):
    """Base exception for all lexigame errors."""

    user_message: str = "Something went wrong."

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.__class__.__name__,
            summary=str(self),
            details=None,
            validation_errors=None,
        )


class BackendFailure(LexiGameError):
    """Raised by a generation, image, or storage backend when a call fails."""

    def __init__(self, backend: str, message: str):
        self.backend = backend
        self.message = message
        super().__init__(f"[{backend}] {message}")


class ContractViolation(BackendFailure):
    """Raised when the generation backend returns structurally invalid output."""

    def __init__(self, backend: str, validation_errors: List[str], output_payload: Any = None):
        self.validation_errors = validation_errors
        self.output_payload = output_payload
        super().__init__(backend, f"output failed validation: {validation_errors}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="CONTRACT_VIOLATION",
            summary=str(self),
            details={"output": self.output_payload},
            validation_errors=self.validation_errors,
        )


class GenerationFailure(LexiGameError):
    """Raised when a session could not be generated after exhausting retries."""

    user_message = OVERLOADED_MESSAGE

    def __init__(self, attempts: int, message: str = OVERLOADED_MESSAGE):
        self.attempts = attempts
        super().__init__(message)

    def format_error_log(self) -> str:
        cause = self.__cause__
        return _format_error_block(
            error_type="GENERATION_FAILURE",
            summary=str(self),
            details={
                "attempts": self.attempts,
                "last_error": repr(cause) if cause is not None else None,
            },
            validation_errors=getattr(cause, "validation_errors", None),
        )


class ImageResolutionFailure(GenerationFailure):
    """Raised when an illustration call fails during image fan-out."""

    def __init__(self, word: str, attempts: int = 1, message: str = OVERLOADED_MESSAGE):
        self.word = word
        super().__init__(attempts=attempts, message=message)


class SessionDataUnavailable(LexiGameError):
    """Raised when a session is started or resumed without a usable payload."""

    user_message = NEW_SESSION_MESSAGE

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Session data unavailable: {reason}")


class SessionTerminated(LexiGameError):
    """Raised when an operation is attempted on a session that already ended."""

    user_message = "This game session has already ended."

    def __init__(self, operation: str, termination_reason: Optional[str]):
        self.operation = operation
        self.termination_reason = termination_reason
        super().__init__(
            f"Cannot {operation}: session is terminal ({termination_reason})"
        )


class HintUnavailable(LexiGameError):
    """Raised when the hint backend call fails. Play continues unaffected."""

    user_message = HINT_MESSAGE

    def __init__(self, target_term: str):
        self.target_term = target_term
        super().__init__(f"{HINT_MESSAGE} (term: {target_term!r})")


class PersistenceWriteFailure(LexiGameError):
    """Raised by record stores when a start/completion record cannot be written."""

    user_message = "Your score could not be saved."

    def __init__(self, record_kind: str, record: Dict[str, Any]):
        self.record_kind = record_kind
        self.record = record
        super().__init__(f"Failed to write '{record_kind}' session record")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="PERSISTENCE_WRITE_FAILURE",
            summary=str(self),
            details={"record": self.record},
            validation_errors=None,
        )


def _format_error_block(
    error_type: str,
    summary: str,
    details: Optional[Dict[str, Any]],
    validation_errors: Optional[List[str]],
) -> str:
    """Format a structured error block for the log file."""
    from ._shared import current_timestamp

    timestamp = current_timestamp()

    lines = [
        "",
        "=" * 64,
        " LEXIGAME ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Summary:      {summary}",
    ]

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        lines.append(_indent_json(details))

    if validation_errors:
        lines.append("")
        lines.append(" ── VALIDATION ERRORS " + "─" * 42)
        for error in validation_errors:
            lines.append(f" • {error}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
