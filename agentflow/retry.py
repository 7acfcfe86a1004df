"""Retrying a failing call with backoff."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional, TypeVar

T = TypeVar("T")


def _exponential(base: float, factor: float, cap: float) -> Callable[[int], float]:
    def delay(attempt: int) -> float:
        return min(cap, base * factor ** (attempt - 1))

    return delay


@dataclass
class RetryPolicy:
    """How many times to try a call, and how long to wait between tries.

    ``backoff`` maps the number of the attempt that just failed (from 1) to a
    delay in seconds.
    """

    max_attempts: int = 3
    backoff: Optional[Callable[[int], float]] = None
    sleep: Callable[[float], None] = field(
        default=time.sleep, repr=False, compare=False
    )

    @classmethod
    def default(cls) -> "RetryPolicy":
        """Three attempts, backing off from 50 ms, doubling, capped at 500 ms."""
        return cls(max_attempts=3, backoff=_exponential(0.05, 2, 0.5))

    def run(self, fn: Callable[[], T]) -> T:
        """Call ``fn`` until it succeeds; re-raise its last exception."""
        attempts = max(self.max_attempts, 1)
        for attempt in range(1, attempts + 1):
            try:
                return fn()
            except Exception:
                if attempt == attempts:
                    raise
            delay = self.backoff(attempt) if self.backoff is not None else 0.0
            if delay > 0:
                self.sleep(delay)
        raise AssertionError("unreachable")