# Area: Session
"""
lexigame._session.enums — Session phases and outcomes
=====================================================
"""

from enum import Enum


class SessionPhase(Enum):
    """Lifecycle of one play session."""
    LOADING     = "loading"      # Waiting for the generated payload
    ACTIVE      = "active"       # Accepting submissions
    TERMINAL    = "terminal"     # No further play; completion recorded


class Judgment(Enum):
    """Feedback for the current sequential round."""
    CORRECT     = "correct"
    INCORRECT   = "incorrect"
    REVEALED    = "revealed"     # Player gave up; counts as incorrect


class SubmissionStatus(Enum):
    """Outcome of a pool-game word submission."""
    CORRECT     = "correct"      # New main word
    BONUS       = "bonus"        # New bonus word
    DUPLICATE   = "duplicate"    # Already found; neutral
    INVALID     = "invalid"      # Not a target word or not formable


class TerminationReason(Enum):
    """Why a session reached Terminal. Exactly one per session."""
    LIVES_EXHAUSTED  = "lives_exhausted"
    CLOCK_EXHAUSTED  = "clock_exhausted"
    ROUNDS_EXHAUSTED = "rounds_exhausted"
    POOL_COMPLETE    = "pool_complete"
