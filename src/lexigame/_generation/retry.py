# Area: Generation
"""
lexigame._generation.retry — Bounded retry policy for backend calls
===================================================================

Wraps a callable in a tenacity ``Retrying`` loop: a fixed number of
attempts with a fixed delay in between. Only the exception types in
``retry_on`` are retried; anything else propagates immediately. After
the last attempt the final exception is re-raised unchanged so the
caller can translate it.

``sleep`` is injectable so tests do not wait.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Type

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from ..errors import BackendFailure, GenerationFailure

logger = logging.getLogger("lexigame.generation.retry")


@dataclass(frozen=True)
class RetryPolicy:
    """Max attempts and fixed delay between them."""
    max_attempts: int = 2
    delay_seconds: float = 1.0
    retry_on: Tuple[Type[BaseException], ...] = (BackendFailure, GenerationFailure)
    sleep: Callable[[float], None] = time.sleep

    def retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.delay_seconds),
            retry=retry_if_exception_type(self.retry_on),
            sleep=self.sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``fn`` under this policy and return its result."""
        return self.retrying()(fn, *args, **kwargs)
