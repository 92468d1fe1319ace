# Area: Session
"""
lexigame._session.timers — Delayed session callbacks
====================================================

Named one-shot timers on the monotonic clock. Nothing runs in the
background: the host calls ``poll()`` from its own loop and due
callbacks fire there, on the host's thread. Scheduling a name that is
already pending replaces it.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger("lexigame.session.timers")


class TimerQueue:
    """Pending callbacks keyed by name."""

    def __init__(self) -> None:
        self._timers: Dict[str, Tuple[float, Callable[[], None]]] = {}

    def schedule(self, name: str, delay_seconds: float, callback: Callable[[], None]) -> None:
        """Set (or overwrite) a timer."""
        self._timers[name] = (time.monotonic() + delay_seconds, callback)
        logger.debug("Timer set: %s (%.1fs)", name, delay_seconds)

    def poll(self) -> List[str]:
        """
        Fire due timers, earliest first, and return their names.

        Callbacks may schedule new timers; those are not fired in the
        same poll.
        """
        now = time.monotonic()
        due = sorted(
            ((expires_at, name) for name, (expires_at, _) in self._timers.items()
             if now >= expires_at),
        )
        fired: List[str] = []
        for expires_at, name in due:
            entry = self._timers.get(name)
            # Cancelled or rescheduled by an earlier callback
            if entry is None or entry[0] != expires_at:
                continue
            del self._timers[name]
            fired.append(name)
            entry[1]()
        return fired

    def cancel(self, name: str) -> None:
        """Cancel a timer. No-op if not found."""
        if self._timers.pop(name, None) is not None:
            logger.debug("Timer cancelled: %s", name)

    def clear(self) -> None:
        """Remove all pending timers."""
        self._timers.clear()
        logger.debug("All timers cleared")

    def pending(self) -> List[str]:
        return list(self._timers)

    def __contains__(self, name: str) -> bool:
        return name in self._timers
