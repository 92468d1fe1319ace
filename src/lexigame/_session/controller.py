# Area: Session
"""
lexigame._session.controller — Session state machine
====================================================

``SessionController`` owns one ``SessionState`` and is the only code that
mutates it. The host drives it with:

* ``start(payload)`` once the generated payload arrives,
* ``submit_answer`` / ``submit_buffer`` / ``reveal_answer`` on input,
* ``tick()`` once per second while the session is on screen,
* ``poll()`` from its loop so delayed advances and feedback clears run,
* ``abandon()`` when the player leaves.

Lifecycle::

    LOADING ──start──▶ ACTIVE ──(lives | clock | rounds | pool)──▶ TERMINAL

The first end condition to trigger decides the termination reason. When
the last life is lost the reason is fixed immediately, even though the
phase only changes after the feedback delay, so a clock expiring during
that delay cannot record a second reason.

Session records are written at most twice (started, completed). A
failing record store is logged and never interrupts play.
"""

from __future__ import annotations

import logging
import random
import uuid
from typing import Any, List, Mapping, Optional, Union

from .._shared import current_timestamp, log_library_error
from ..backends import SessionRecordStore
from ..catalog import GameDefinition, get_game
from ..config import GameRules
from ..errors import HintUnavailable, PersistenceWriteFailure, SessionDataUnavailable, SessionTerminated
from ..letters import is_formable, normalize_words
from ..rounds import SessionPayload, WordPoolPayload, load_payload
from ..types import SessionCompletedRecord, SessionSnapshot, SessionStartedRecord
from .enums import Judgment, SessionPhase, SubmissionStatus, TerminationReason
from .round_behaviors import behavior_for, normalize_answer
from .snapshot import build_snapshot, restore_state
from .state import SessionState
from .timers import TimerQueue

logger = logging.getLogger("lexigame.session.controller")

ADVANCE_TIMER = "advance"
FINISH_TIMER = "finish"
FEEDBACK_TIMER = "feedback"


def _is_blank(answer: Any) -> bool:
    """None, whitespace, or a list of nothing but blank pieces. Booleans are never blank."""
    if answer is None:
        return True
    if isinstance(answer, str):
        return not answer.strip()
    if isinstance(answer, (list, tuple)):
        return all(_is_blank(piece) for piece in answer)
    return False


class SessionController:
    """Drives one play session from payload to final score."""

    def __init__(
        self,
        rules: Optional[GameRules] = None,
        record_store: Optional[SessionRecordStore] = None,
        document_id: str = "",
        owner_id: str = "",
        difficulty: str = "medium",
        session_id: Optional[str] = None,
        rng: Optional[random.Random] = None,
        timers: Optional[TimerQueue] = None,
    ):
        self.rules = rules or GameRules()
        self.record_store = record_store
        self.document_id = document_id
        self.owner_id = owner_id
        self.difficulty = difficulty
        self.rng = rng or random.SystemRandom()
        self.timers = timers or TimerQueue()
        self.state = SessionState(session_id=session_id or uuid.uuid4().hex)
        self.game: Optional[GameDefinition] = None
        self._pending_reason: Optional[TerminationReason] = None
        self._completion_recorded = False

    # ══════════════════════════════════════════════════════════
    # PROPERTIES
    # ══════════════════════════════════════════════════════════

    @property
    def clock_bound(self) -> bool:
        """Pool games and non-clock game types ignore the session clock."""
        return self.game is not None and self.game.clock_bound and not self.state.is_pool

    @property
    def finishing(self) -> bool:
        """True once an end condition has fired, including during the final feedback delay."""
        return self._pending_reason is not None

    # ══════════════════════════════════════════════════════════
    # LIFECYCLE
    # ══════════════════════════════════════════════════════════

    def start(self, payload: Union[SessionPayload, WordPoolPayload, str, bytes, Mapping[str, Any], None]) -> None:
        """
        Move from LOADING to ACTIVE with ``payload``.

        A payload arriving after ``abandon()`` is discarded.

        Raises
        ------
        SessionDataUnavailable
            If ``payload`` is missing or cannot be validated.
        """
        state = self.state
        if state.abandoned:
            logger.info(f"Session {state.session_id} was abandoned; discarding payload")
            return
        if state.phase is not SessionPhase.LOADING:
            logger.warning(f"Session {state.session_id} already started (phase={state.phase.value})")
            return

        if not isinstance(payload, (SessionPayload, WordPoolPayload)):
            payload = load_payload(payload)
        if isinstance(payload, WordPoolPayload) and not normalize_words(payload.main_words):
            raise SessionDataUnavailable("word pool has no main words")

        state.payload = payload
        self.game = get_game(payload.game_type)
        state.lives_remaining = self.rules.starting_lives
        state.seconds_remaining = self.rules.session_seconds
        state.phase = SessionPhase.ACTIVE

        if state.is_pool:
            self._deal_pool_tiles()
        else:
            self._enter_round()

        logger.info(
            f"Session {state.session_id} active: {payload.title!r} ({self.game.name})",
            extra={"session_id": state.session_id, "game_type": self.game.name},
        )
        self._record_started()

    def abandon(self) -> None:
        """Player left: cancel pending timers. No completion record is written."""
        self.timers.clear()
        self.state.abandoned = True
        logger.info(f"Session {self.state.session_id} abandoned (phase={self.state.phase.value})")

    def poll(self) -> List[str]:
        """Fire due timers. Returns the names of the timers that fired."""
        return self.timers.poll()

    def tick(self) -> int:
        """
        Count one second off the session clock.

        Returns the seconds remaining. Ticks on a session that is not
        active are ignored.
        """
        state = self.state
        if state.phase is not SessionPhase.ACTIVE or state.abandoned:
            return state.seconds_remaining

        state.seconds_remaining = max(0, state.seconds_remaining - 1)
        if state.seconds_remaining == 0 and self.clock_bound:
            self._terminate(TerminationReason.CLOCK_EXHAUSTED)
        return state.seconds_remaining

    # ══════════════════════════════════════════════════════════
    # PLAY
    # ══════════════════════════════════════════════════════════

    def submit_answer(self, answer: Any) -> Optional[Union[Judgment, SubmissionStatus]]:
        """
        Judge an answer for the current round or, in pool games, a word.

        Returns
        -------
        Judgment
            For sequential games; ``None`` if the round was already judged.
            Blank answers are ignored and also return ``None``.
        SubmissionStatus
            For pool games.

        Raises
        ------
        SessionTerminated
            If the session has ended or was abandoned.
        """
        self._require_active("submit an answer")
        if _is_blank(answer):
            return None
        if self.state.is_pool:
            return self._submit_word(normalize_answer(answer))
        return self._submit_round(answer)

    def submit_buffer(self) -> Optional[Union[Judgment, SubmissionStatus]]:
        """Submit the pieces the player has assembled in ``answer_buffer``."""
        self._require_active("submit an answer")
        pieces = list(self.state.answer_buffer)
        if _is_blank(pieces):
            return None
        if self.state.is_pool:
            self.clear_buffer()
            return self._submit_word(normalize_answer("".join(pieces)))
        return self._submit_round(pieces)

    def reveal_answer(self) -> Optional[str]:
        """
        Give up on the current round and show its answer.

        Sequential games: counts as incorrect (streak reset, and a life
        when ``rules.reveal_costs_life``). Pool games: reveals one
        unfound main word for a point penalty.

        Returns the revealed answer, or ``None`` if there is nothing to
        reveal (round already judged, or no main word left).
        """
        self._require_active("reveal an answer")
        state = self.state

        if state.is_pool:
            return self._reveal_word()

        if state.round_judged or self.finishing:
            return None
        game_round = state.current_round
        canonical = behavior_for(game_round).canonical(game_round)
        self._judge_miss(Judgment.REVEALED, canonical, costs_life=self.rules.reveal_costs_life)
        return canonical

    def request_hint(self, advisor, document_context: str) -> str:
        """
        Ask ``advisor`` for a hint on the current target term.

        Does not change session state.

        Raises
        ------
        HintUnavailable
            If the advisor fails or there is nothing to hint at.
        """
        self._require_active("request a hint")
        term = self.hint_term()
        if not term:
            raise HintUnavailable("")
        return advisor.get_hint(document_context, term)

    def hint_term(self) -> Optional[str]:
        state = self.state
        if state.is_pool:
            remaining = state.remaining_main_words
            return remaining[0] if remaining else None
        game_round = state.current_round
        if game_round is None:
            return None
        return behavior_for(game_round).hint_term(game_round)

    # ── Answer buffer ─────────────────────────────────────────

    def stage_piece(self, index: int) -> None:
        """Move ``scratch[index]`` to the end of the answer buffer."""
        self._require_active("move a piece")
        if self.state.round_judged:
            return
        self.state.answer_buffer.append(self.state.scratch.pop(index))

    def unstage_piece(self, index: int) -> None:
        """Move ``answer_buffer[index]`` back to the scratch area."""
        self._require_active("move a piece")
        if self.state.round_judged:
            return
        self.state.scratch.append(self.state.answer_buffer.pop(index))

    def clear_buffer(self) -> None:
        self.state.scratch.extend(self.state.answer_buffer)
        self.state.answer_buffer.clear()

    def shuffle_scratch(self) -> None:
        self.rng.shuffle(self.state.scratch)

    # ══════════════════════════════════════════════════════════
    # RESUME
    # ══════════════════════════════════════════════════════════

    def snapshot(self) -> SessionSnapshot:
        """
        Serializable view of the session for resuming later.

        Raises
        ------
        SessionDataUnavailable
            If the session has not started.
        """
        if self.state.payload is None:
            raise SessionDataUnavailable("session has not started")
        return build_snapshot(self.state)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Mapping[str, Any],
        rules: Optional[GameRules] = None,
        record_store: Optional[SessionRecordStore] = None,
        rng: Optional[random.Random] = None,
        timers: Optional[TimerQueue] = None,
    ) -> "SessionController":
        """
        Rebuild a controller from ``snapshot``.

        The current round restarts unjudged. An active snapshot whose end
        condition already holds is terminated on restore.

        Raises
        ------
        SessionDataUnavailable
            If the snapshot is corrupt.
        """
        state = restore_state(snapshot)
        controller = cls(rules=rules, record_store=record_store,
                         session_id=state.session_id, rng=rng, timers=timers)
        controller.state = state
        controller.game = get_game(state.payload.game_type)

        if state.is_terminal:
            controller._pending_reason = state.termination_reason
            controller._completion_recorded = True
            return controller

        logger.info(f"Session {state.session_id} resumed at round {state.current_round_index}")
        if state.is_pool:
            controller._deal_pool_tiles()
            if not state.remaining_main_words:
                controller._terminate(TerminationReason.POOL_COMPLETE)
        elif state.lives_remaining == 0:
            controller._terminate(TerminationReason.LIVES_EXHAUSTED)
        elif state.current_round_index >= state.rounds_total:
            controller._terminate(TerminationReason.ROUNDS_EXHAUSTED)
        elif state.seconds_remaining == 0 and controller.clock_bound:
            controller._terminate(TerminationReason.CLOCK_EXHAUSTED)
        else:
            controller._enter_round()
        return controller

    # ══════════════════════════════════════════════════════════
    # INTERNALS: sequential rounds
    # ══════════════════════════════════════════════════════════

    def _submit_round(self, answer: Any) -> Optional[Judgment]:
        state = self.state
        if state.round_judged or self.finishing:
            logger.debug(f"Round {state.current_round_index} already judged; ignoring submission")
            return None

        game_round = state.current_round
        behavior = behavior_for(game_round)
        if behavior.check(game_round, answer):
            self._judge_correct()
            return Judgment.CORRECT
        self._judge_miss(Judgment.INCORRECT, behavior.canonical(game_round), costs_life=True)
        return Judgment.INCORRECT

    def _judge_correct(self) -> None:
        state = self.state
        state.score += self.rules.base_points + self.rules.streak_bonus * state.current_streak
        state.current_streak += 1
        state.best_streak = max(state.best_streak, state.current_streak)
        state.last_judgment = Judgment.CORRECT
        state.revealed_answer = None
        state.round_judged = True
        self.timers.schedule(ADVANCE_TIMER, self.rules.correct_advance_delay, self._advance)

    def _judge_miss(self, judgment: Judgment, canonical: str, costs_life: bool) -> None:
        state = self.state
        state.current_streak = 0
        if costs_life:
            state.lives_remaining = max(0, state.lives_remaining - 1)
        state.last_judgment = judgment
        state.revealed_answer = canonical
        state.round_judged = True

        if state.lives_remaining == 0:
            self._finish_after(TerminationReason.LIVES_EXHAUSTED, self.rules.incorrect_advance_delay)
        else:
            self.timers.schedule(ADVANCE_TIMER, self.rules.incorrect_advance_delay, self._advance)

    def _advance(self) -> None:
        state = self.state
        if state.phase is not SessionPhase.ACTIVE or state.abandoned or self.finishing:
            return
        state.rounds_completed += 1
        state.current_round_index += 1
        if state.current_round_index >= state.rounds_total:
            self._terminate(TerminationReason.ROUNDS_EXHAUSTED)
            return
        self._enter_round()

    def _enter_round(self) -> None:
        state = self.state
        game_round = state.current_round
        state.round_judged = False
        state.last_judgment = None
        state.revealed_answer = None
        state.answer_buffer = []
        state.scratch = behavior_for(game_round).scratch(game_round, self.rng)

    # ══════════════════════════════════════════════════════════
    # INTERNALS: pool games
    # ══════════════════════════════════════════════════════════

    def _deal_pool_tiles(self) -> None:
        tiles = list(self.state.payload.letters)
        self.rng.shuffle(tiles)
        self.state.scratch = tiles
        self.state.answer_buffer = []

    def _classify_word(self, word: str) -> SubmissionStatus:
        state = self.state
        pool: WordPoolPayload = state.payload
        main_words = {w.strip().casefold() for w in pool.main_words}
        bonus_words = {w.strip().casefold() for w in pool.bonus_words}

        if not word or (word not in main_words and word not in bonus_words):
            return SubmissionStatus.INVALID
        if word in state.found_main_words or word in state.found_bonus_words:
            return SubmissionStatus.DUPLICATE
        if not is_formable(word, pool.letters):
            logger.warning(f"Pool word {word!r} cannot be formed from {pool.letters}; rejecting")
            return SubmissionStatus.INVALID
        return SubmissionStatus.CORRECT if word in main_words else SubmissionStatus.BONUS

    def _submit_word(self, word: str) -> SubmissionStatus:
        state = self.state
        status = self._classify_word(word)

        if status is SubmissionStatus.CORRECT:
            state.found_main_words.append(word)
            state.score += len(word) * self.rules.pool_points_per_letter
        elif status is SubmissionStatus.BONUS:
            state.found_bonus_words.append(word)
            state.score += self.rules.pool_bonus_points
        elif status is SubmissionStatus.INVALID:
            state.current_streak = 0

        if status in (SubmissionStatus.CORRECT, SubmissionStatus.BONUS):
            state.current_streak += 1
            state.best_streak = max(state.best_streak, state.current_streak)

        state.last_submission = status
        self.timers.schedule(FEEDBACK_TIMER, self.rules.feedback_clear_delay, self._clear_feedback)

        if status is SubmissionStatus.CORRECT and not state.remaining_main_words:
            self._terminate(TerminationReason.POOL_COMPLETE)
        return status

    def _reveal_word(self) -> Optional[str]:
        state = self.state
        remaining = state.remaining_main_words
        if not remaining:
            return None

        word = remaining[0].strip().casefold()
        state.found_main_words.append(word)
        state.score = max(0, state.score - self.rules.pool_reveal_penalty)
        state.current_streak = 0
        logger.info(f"Revealed pool word {word!r}")

        if not state.remaining_main_words:
            self._terminate(TerminationReason.POOL_COMPLETE)
        return word

    def _clear_feedback(self) -> None:
        if self.state.phase is SessionPhase.ACTIVE:
            self.state.last_submission = None

    # ══════════════════════════════════════════════════════════
    # INTERNALS: termination and records
    # ══════════════════════════════════════════════════════════

    def _require_active(self, operation: str) -> None:
        state = self.state
        if state.abandoned:
            raise SessionTerminated(operation, "abandoned")
        if state.phase is SessionPhase.TERMINAL:
            raise SessionTerminated(operation, state.termination_reason.value)
        if state.phase is SessionPhase.LOADING:
            raise SessionDataUnavailable("session has not started")

    def _finish_after(self, reason: TerminationReason, delay_seconds: float) -> None:
        if self.finishing:
            return
        self._pending_reason = reason
        self.timers.cancel(ADVANCE_TIMER)
        self.timers.schedule(FINISH_TIMER, delay_seconds, lambda: self._terminate(reason))

    def _terminate(self, reason: TerminationReason) -> None:
        state = self.state
        if state.phase is SessionPhase.TERMINAL or state.abandoned:
            return
        if self._pending_reason is not None and self._pending_reason is not reason:
            # An earlier end condition already decided the outcome
            if FINISH_TIMER in self.timers:
                return
            reason = self._pending_reason

        self._pending_reason = reason
        self.timers.clear()
        state.phase = SessionPhase.TERMINAL
        state.termination_reason = reason
        logger.info(
            f"Session {state.session_id} ended: {reason.value} (score={state.score})",
            extra={"session_id": state.session_id},
        )
        self._record_completed()

    def _record_started(self) -> None:
        if self.record_store is None:
            return
        record: SessionStartedRecord = {
            "document_id": self.document_id,
            "owner_id": self.owner_id,
            "game_type": self.state.payload.game_type,
            "difficulty": self.difficulty,
            "score": 0,
            "started_at": current_timestamp(),
        }
        try:
            self.state.record_id = self.record_store.record_started(record)
        except PersistenceWriteFailure as exc:
            log_library_error(exc, logging.WARNING)

    def _record_completed(self) -> None:
        if self._completion_recorded:
            return
        self._completion_recorded = True
        if self.record_store is None:
            return

        state = self.state
        if state.record_id is None:
            logger.warning(f"Session {state.session_id} has no started record; completion not saved")
            return

        record: SessionCompletedRecord = {
            "final_score": state.score,
            "termination_reason": state.termination_reason.value,
            "rounds_completed": state.rounds_completed,
            "rounds_total": state.rounds_total,
            "main_words_found": len(state.found_main_words),
            "bonus_words_found": len(state.found_bonus_words),
            "best_streak": state.best_streak,
            "completed_at": current_timestamp(),
        }
        try:
            self.record_store.record_completed(state.record_id, record)
        except PersistenceWriteFailure as exc:
            log_library_error(exc, logging.WARNING)
