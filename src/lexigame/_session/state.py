# Area: Session
"""
lexigame._session.state — Session state
=======================================

Mutable state of one play session. Only ``SessionController`` mutates
it; hosts read it to render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..rounds import Round, SessionPayload, WordPoolPayload
from .enums import Judgment, SessionPhase, SubmissionStatus, TerminationReason


@dataclass
class SessionState:
    """
    Full state of one play session.

    ``round_judged`` is the already-judged flag: it is set as soon as the
    current round receives a judgment and cleared when the next round
    starts, so a second submission during the feedback delay is ignored.
    """
    session_id: str
    phase: SessionPhase = SessionPhase.LOADING
    payload: Optional[Union[SessionPayload, WordPoolPayload]] = None

    # Resources
    score: int = 0
    lives_remaining: int = 0
    seconds_remaining: int = 0
    current_streak: int = 0
    best_streak: int = 0

    # Sequential games
    current_round_index: int = 0
    rounds_completed: int = 0
    round_judged: bool = False
    last_judgment: Optional[Judgment] = None
    revealed_answer: Optional[str] = None
    scratch: List[str] = field(default_factory=list)          # Shuffled pieces/tiles on offer
    answer_buffer: List[str] = field(default_factory=list)    # Pieces the player has assembled

    # Pool games
    found_main_words: List[str] = field(default_factory=list)
    found_bonus_words: List[str] = field(default_factory=list)
    last_submission: Optional[SubmissionStatus] = None

    # Terminal
    termination_reason: Optional[TerminationReason] = None
    abandoned: bool = False

    # Persistence
    record_id: Optional[str] = None

    @property
    def is_pool(self) -> bool:
        return isinstance(self.payload, WordPoolPayload)

    @property
    def is_terminal(self) -> bool:
        return self.phase is SessionPhase.TERMINAL

    @property
    def rounds_total(self) -> int:
        if isinstance(self.payload, SessionPayload):
            return len(self.payload.rounds)
        return 0

    @property
    def current_round(self) -> Optional[Round]:
        if not isinstance(self.payload, SessionPayload):
            return None
        if 0 <= self.current_round_index < len(self.payload.rounds):
            return self.payload.rounds[self.current_round_index]
        return None

    @property
    def remaining_main_words(self) -> List[str]:
        if not isinstance(self.payload, WordPoolPayload):
            return []
        found = set(self.found_main_words)
        return [word for word in self.payload.main_words if word.casefold() not in found]
