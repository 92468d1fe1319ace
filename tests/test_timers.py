# Area: Session
"""Tests for TimerQueue — polled one-shot timers."""

from unittest.mock import MagicMock, patch

from lexigame._session.timers import TimerQueue


MOCK_TIME = "lexigame._session.timers.time"


class TestTimerQueue:

    def test_nothing_pending_initially(self):
        assert TimerQueue().poll() == []

    def test_fires_after_delay(self):
        timers = TimerQueue()
        callback = MagicMock()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            timers.schedule("advance", 1.2, callback)

            mock_time.monotonic.return_value = 101.0
            assert timers.poll() == []
            callback.assert_not_called()

            mock_time.monotonic.return_value = 101.5
            assert timers.poll() == ["advance"]
            callback.assert_called_once()
            assert "advance" not in timers

    def test_fires_once(self):
        timers = TimerQueue()
        callback = MagicMock()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            timers.schedule("advance", 1, callback)
            mock_time.monotonic.return_value = 200.0
            timers.poll()
            timers.poll()
        assert callback.call_count == 1

    def test_reschedule_replaces(self):
        timers = TimerQueue()
        first, second = MagicMock(), MagicMock()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            timers.schedule("feedback", 1, first)
            timers.schedule("feedback", 5, second)

            mock_time.monotonic.return_value = 102.0
            assert timers.poll() == []
            mock_time.monotonic.return_value = 106.0
            assert timers.poll() == ["feedback"]
        first.assert_not_called()
        second.assert_called_once()

    def test_earliest_first(self):
        timers = TimerQueue()
        order = []
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            timers.schedule("late", 3, lambda: order.append("late"))
            timers.schedule("early", 1, lambda: order.append("early"))
            mock_time.monotonic.return_value = 110.0
            assert timers.poll() == ["early", "late"]
        assert order == ["early", "late"]

    def test_callback_can_cancel_other_timer(self):
        timers = TimerQueue()
        late = MagicMock()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            timers.schedule("late", 2, late)
            timers.schedule("early", 1, lambda: timers.cancel("late"))
            mock_time.monotonic.return_value = 110.0
            assert timers.poll() == ["early"]
        late.assert_not_called()

    def test_cancel_and_clear(self):
        timers = TimerQueue()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            timers.schedule("a", 1, MagicMock())
            timers.schedule("b", 1, MagicMock())
            timers.cancel("a")
            timers.cancel("unknown")
            assert timers.pending() == ["b"]
            timers.clear()
            mock_time.monotonic.return_value = 200.0
            assert timers.poll() == []
