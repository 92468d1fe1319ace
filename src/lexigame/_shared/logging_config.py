# Area: Shared
"""
lexigame._shared.logging_config — Structured logging setup
==========================================================

Everything under the ``lexigame`` logger goes to a JSON-lines file.
Hosts running in a terminal also get a colored, session-tagged stream.

Records may carry ``session_id``, ``game_type``, ``attempt`` and
``error_type`` through ``extra=``; both formatters pick them up.
"""

from __future__ import annotations
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from ..errors import LexiGameError

PACKAGE_LOGGER = "lexigame"
CONTEXT_KEYS = ("session_id", "game_type", "attempt", "error_type")

logger = logging.getLogger(PACKAGE_LOGGER)

_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"


class SessionTerminalFormatter(logging.Formatter):
    """``HH:MM:SS │ LEVEL │ [session] logger │ message`` with a colored level."""

    def __init__(self, color: bool = True):
        super().__init__(datefmt="%H:%M:%S")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.color:
            level = f"{_LEVEL_COLORS.get(record.levelno, _RESET)}{level}{_RESET}"
        session_id = getattr(record, "session_id", None)
        tag = f"[{session_id[:8]}] " if session_id else ""
        line = f"{self.formatTime(record, self.datefmt)} │ {level} │ {tag}{record.name} │ {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JSONLinesFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({key: getattr(record, key) for key in CONTEXT_KEYS if hasattr(record, key)})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    log_file_path: str = "lexigame.log",
    level: int = logging.INFO,
    terminal: bool = True,
) -> None:
    """
    Configure the ``lexigame`` logger.

    Parameters
    ----------
    log_file_path : str
        JSON-lines log file. Parent directories are created.
    level : int
        Logging level for both handlers.
    terminal : bool
        Also log to stdout. Colors are used only when stdout is a TTY.
    """
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    if terminal:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(SessionTerminalFormatter(color=sys.stdout.isatty()))
        pkg_logger.addHandler(stream)

    try:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(JSONLinesFormatter())
        pkg_logger.addHandler(file_handler)
    except OSError as e:
        pkg_logger.warning(f"Could not create log file {log_file_path}: {e}")

    pkg_logger.propagate = False


def setup_logging_from_config(config: Dict[str, Any], level: int = logging.INFO) -> None:
    """``setup_logging`` with the ``log_file`` key of a loaded config."""
    setup_logging(config.get("log_file", "lexigame.log"), level)


def log_library_error(error: "LexiGameError", level: int = logging.ERROR) -> None:
    """
    Log a library error with its structured block.

    The block goes to the log handlers only; the user-facing message is
    left for the caller to display.
    """
    logger.log(
        level,
        f"{error.__class__.__name__}: {error}\n{error.format_error_log()}",
        extra={"error_type": error.__class__.__name__},
    )
