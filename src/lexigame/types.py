"""
lexigame.types — TypedDict schemas for records crossing the library boundary
============================================================================

Documents come in from the document store; session records go out to the
session record store. Snapshots are what a host stores to resume a
session later.

Use __annotations__ to inspect fields:

    >>> SessionStartedRecord.__annotations__
    {'document_id': str, 'owner_id': str, 'game_type': str, ...}
"""

from typing import Any, Dict, List, Optional, TypedDict


# ============================================
# Document store
# ============================================

class DocumentRecord(TypedDict):
    """A stored document as supplied to the generator.

    Fields
    ------
    document_id : str
        Stable identifier.
    owner_id : str
        User that uploaded the document.
    title : str
    content : str
        Extracted plain text.
    category : str
        One of the DocumentCategory values, "" until categorised.
    created_at : str
        ISO-8601 timestamp.
    """
    document_id: str
    owner_id: str
    title: str
    content: str
    category: str
    created_at: str


# ============================================
# Session record store
# ============================================

class SessionStartedRecord(TypedDict):
    """Written once when a session becomes active."""
    document_id: str
    owner_id: str
    game_type: str
    difficulty: str
    score: int              # always 0 at start
    started_at: str


class SessionCompletedRecord(TypedDict):
    """Written exactly once when a session reaches Terminal."""
    final_score: int
    termination_reason: str     # lives_exhausted / clock_exhausted / rounds_exhausted / pool_complete
    rounds_completed: int
    rounds_total: int
    main_words_found: int
    bonus_words_found: int
    best_streak: int
    completed_at: str


# ============================================
# Resume snapshot
# ============================================

class SessionSnapshot(TypedDict):
    """Serializable view of a session, enough to resume it."""
    session_id: str
    phase: str
    payload: Dict[str, Any]
    current_round_index: int
    score: int
    lives_remaining: int
    seconds_remaining: int
    current_streak: int
    best_streak: int
    found_main_words: List[str]
    found_bonus_words: List[str]
    termination_reason: Optional[str]
    record_id: Optional[str]
