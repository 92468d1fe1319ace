# Area: Session
"""Tests for session snapshots and resume."""

import json
import random
from unittest.mock import MagicMock

import pytest

from lexigame.backends import SessionRecordStore
from lexigame.errors import SessionDataUnavailable
from lexigame.demo_backend import MIXED_SESSION, WORD_POOL
from lexigame.rounds import SessionPayload, WordPoolPayload
from lexigame._session.controller import SessionController
from lexigame._session.enums import SessionPhase, TerminationReason
from lexigame._session.snapshot import build_snapshot, restore_state


def started(payload_data, model):
    controller = SessionController(rng=random.Random(1))
    controller.start(model.model_validate({**payload_data, "game_type": "Personalized Practice"}))
    return controller


class TestBuildSnapshot:

    def test_snapshot_is_json_serializable(self):
        controller = started(MIXED_SESSION, SessionPayload)
        controller.state.score = 30
        snapshot = controller.snapshot()

        assert json.loads(json.dumps(snapshot))["score"] == 30
        assert snapshot["phase"] == "active"
        assert snapshot["termination_reason"] is None
        assert snapshot["payload"]["title"] == MIXED_SESSION["title"]

    def test_snapshot_before_start(self):
        with pytest.raises(SessionDataUnavailable):
            SessionController().snapshot()


class TestFromSnapshot:

    def test_resume_sequential(self):
        original = started(MIXED_SESSION, SessionPayload)
        original.state.current_round_index = 2
        original.state.score = 22
        original.state.lives_remaining = 2
        original.state.current_streak = 2

        resumed = SessionController.from_snapshot(json.loads(json.dumps(original.snapshot())))

        state = resumed.state
        assert state.phase is SessionPhase.ACTIVE
        assert state.session_id == original.state.session_id
        assert state.current_round_index == 2
        assert state.score == 22
        assert state.lives_remaining == 2
        assert state.round_judged is False
        assert state.current_round.kind.value == "spelling-completion"
        assert sorted(state.scratch) == ["a", "e", "i"]

    def test_resume_pool(self):
        controller = SessionController()
        controller.start(WordPoolPayload.model_validate({**WORD_POOL, "game_type": "Word Cookies"}))
        controller.submit_answer("cats")

        resumed = SessionController.from_snapshot(controller.snapshot())
        assert resumed.state.is_pool
        assert resumed.state.found_main_words == ["cats"]
        assert resumed.state.score == 40
        assert sorted(resumed.state.scratch) == sorted(WORD_POOL["letters"])

    def test_resume_terminal_does_not_record_again(self):
        store = MagicMock(spec=SessionRecordStore)
        controller = started(MIXED_SESSION, SessionPayload)
        controller.state.seconds_remaining = 1
        controller.tick()

        resumed = SessionController.from_snapshot(controller.snapshot(), record_store=store)
        assert resumed.state.termination_reason is TerminationReason.CLOCK_EXHAUSTED
        store.record_completed.assert_not_called()

    def test_snapshot_after_scored_round_resumes_at_next_round(self):
        controller = started(MIXED_SESSION, SessionPayload)
        controller.submit_answer(MIXED_SESSION["rounds"][0]["word"])
        assert controller.state.round_judged is True
        scored = controller.state.score

        resumed = SessionController.from_snapshot(controller.snapshot())

        state = resumed.state
        assert state.current_round_index == 1
        assert state.round_judged is False
        assert state.score == scored
        assert state.rounds_completed == 1

    def test_resume_with_no_lives_terminates(self):
        controller = started(MIXED_SESSION, SessionPayload)
        snapshot = controller.snapshot()
        snapshot["lives_remaining"] = 0
        resumed = SessionController.from_snapshot(snapshot)
        assert resumed.state.termination_reason is TerminationReason.LIVES_EXHAUSTED


class TestRestoreStateErrors:

    def good_snapshot(self):
        return build_snapshot(started(MIXED_SESSION, SessionPayload).state)

    @pytest.mark.parametrize("field", ["session_id", "phase", "score", "current_round_index"])
    def test_missing_field(self, field):
        snapshot = self.good_snapshot()
        del snapshot[field]
        with pytest.raises(SessionDataUnavailable):
            restore_state(snapshot)

    def test_bad_payload(self):
        snapshot = self.good_snapshot()
        snapshot["payload"] = {"title": "x"}
        with pytest.raises(SessionDataUnavailable):
            restore_state(snapshot)

    def test_unknown_phase(self):
        snapshot = self.good_snapshot()
        snapshot["phase"] = "paused"
        with pytest.raises(SessionDataUnavailable):
            restore_state(snapshot)

    def test_terminal_without_reason(self):
        snapshot = self.good_snapshot()
        snapshot["phase"] = "terminal"
        with pytest.raises(SessionDataUnavailable):
            restore_state(snapshot)

    @pytest.mark.parametrize("field", ["current_round_index", "current_streak"])
    def test_negative_position(self, field):
        snapshot = self.good_snapshot()
        snapshot[field] = -1
        with pytest.raises(SessionDataUnavailable):
            SessionController.from_snapshot(snapshot)

    def test_negative_score(self):
        snapshot = self.good_snapshot()
        snapshot["score"] = -5
        with pytest.raises(SessionDataUnavailable):
            restore_state(snapshot)

    def test_not_a_mapping(self):
        with pytest.raises(SessionDataUnavailable):
            restore_state(["not", "a", "snapshot"])
