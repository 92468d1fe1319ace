# Area: Session
"""
Live play loop for generated sessions.

This package contains:
- Session phases and outcome enums
- Session state
- Per-kind round behaviour table
- Polled timer queue
- Snapshot builder
- The session controller
"""

from .controller import SessionController
from .enums import Judgment, SessionPhase, SubmissionStatus, TerminationReason
from .round_behaviors import ROUND_BEHAVIORS, RoundBehavior, behavior_for
from .snapshot import build_snapshot, restore_state
from .state import SessionState
from .timers import TimerQueue

__all__ = [
    "SessionController",
    "Judgment",
    "SessionPhase",
    "SubmissionStatus",
    "TerminationReason",
    "ROUND_BEHAVIORS",
    "RoundBehavior",
    "behavior_for",
    "build_snapshot",
    "restore_state",
    "SessionState",
    "TimerQueue",
]
