# Area: Session
"""
lexigame._session.snapshot — Session snapshot builder
=====================================================

Builds a serializable snapshot of a session and rebuilds state from one.
In-flight feedback and pending timers are not part of a snapshot. A
snapshot taken after the current round was judged resumes at the next
round.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..errors import SessionDataUnavailable
from ..rounds import load_payload
from ..types import SessionSnapshot
from .enums import SessionPhase, TerminationReason
from .state import SessionState


def _resume_index(state: SessionState) -> int:
    """A judged round is already scored, so resume at the next one."""
    if state.round_judged and state.phase is SessionPhase.ACTIVE and not state.is_pool:
        return state.current_round_index + 1
    return state.current_round_index


def build_snapshot(state: SessionState) -> SessionSnapshot:
    """Build a serializable snapshot of ``state``."""
    return {
        "session_id": state.session_id,
        "phase": state.phase.value,
        "payload": state.payload.model_dump(mode="json") if state.payload is not None else {},
        "current_round_index": _resume_index(state),
        "score": state.score,
        "lives_remaining": state.lives_remaining,
        "seconds_remaining": state.seconds_remaining,
        "current_streak": state.current_streak,
        "best_streak": state.best_streak,
        "found_main_words": list(state.found_main_words),
        "found_bonus_words": list(state.found_bonus_words),
        "termination_reason": state.termination_reason.value if state.termination_reason else None,
        "record_id": state.record_id,
    }


def restore_state(snapshot: Mapping[str, Any]) -> SessionState:
    """
    Rebuild session state from a snapshot.

    Raises
    ------
    SessionDataUnavailable
        If the snapshot is missing fields, holds an unusable payload, or
        has out-of-range values.
    """
    if not isinstance(snapshot, Mapping):
        raise SessionDataUnavailable(f"snapshot is {type(snapshot).__name__}, not a mapping")

    payload = load_payload(snapshot.get("payload"))
    try:
        phase = SessionPhase(snapshot["phase"])
        reason_value = snapshot.get("termination_reason")
        reason = TerminationReason(reason_value) if reason_value else None
        state = SessionState(
            session_id=str(snapshot["session_id"]),
            phase=phase,
            payload=payload,
            current_round_index=int(snapshot["current_round_index"]),
            score=int(snapshot["score"]),
            lives_remaining=int(snapshot["lives_remaining"]),
            seconds_remaining=int(snapshot["seconds_remaining"]),
            current_streak=int(snapshot["current_streak"]),
            best_streak=int(snapshot.get("best_streak", 0)),
            found_main_words=[str(w).casefold() for w in snapshot.get("found_main_words", [])],
            found_bonus_words=[str(w).casefold() for w in snapshot.get("found_bonus_words", [])],
            termination_reason=reason,
            record_id=snapshot.get("record_id"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SessionDataUnavailable(f"snapshot is corrupt ({exc!r})") from exc

    if state.phase is SessionPhase.LOADING:
        raise SessionDataUnavailable("snapshot was taken before the session started")
    if (state.phase is SessionPhase.TERMINAL) != (state.termination_reason is not None):
        raise SessionDataUnavailable("snapshot phase and termination reason disagree")
    if min(state.score, state.lives_remaining, state.seconds_remaining,
           state.current_round_index, state.current_streak) < 0:
        raise SessionDataUnavailable("snapshot has negative counters")

    state.rounds_completed = min(state.current_round_index, state.rounds_total)
    return state
