# Area: Shared
"""
Shared utilities used by generation and session packages.

This package contains:
- Logging configuration (terminal and JSON-lines file)
- Timestamp helper
"""

from datetime import datetime, timezone

from .logging_config import (
    setup_logging,
    setup_logging_from_config,
    log_library_error,
)


def current_timestamp() -> str:
    """UTC timestamp in ISO-8601 with a trailing Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


__all__ = [
    "setup_logging",
    "setup_logging_from_config",
    "log_library_error",
    "current_timestamp",
]
