"""An observer that counts runtime events and measures tool latencies."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .events import RuntimeEvent, RuntimeEventType, ToolCall

_UNKNOWN_TOOL = "unknown"


@dataclass(frozen=True)
class LatencyStats:
    """Latency statistics of one tool, in seconds."""

    count: int
    min: float
    max: float
    p50: float
    p95: float
    p99: float
    average: float


@dataclass(frozen=True)
class Snapshot:
    """A point-in-time view of all metrics."""

    tool_calls: int = 0
    tool_successes: int = 0
    tool_failures: int = 0
    total_errors: int = 0
    total_steps: int = 0
    runs_completed: int = 0
    tool_latencies: dict[str, LatencyStats] = field(default_factory=dict)
    success_rate: float = 0.0


def _percentile(ordered: Sequence[float], p: float) -> float:
    """Linearly interpolated percentile of an ascending sequence."""
    if not ordered:
        return 0.0
    index = (len(ordered) - 1) * p
    lower = int(index)
    upper = lower + 1
    if upper >= len(ordered):
        return ordered[-1]
    fraction = index - lower
    return ordered[lower] + fraction * (ordered[upper] - ordered[lower])


class MetricsObserver:
    """Counts events and records how long each tool call took.

    A tool's latency runs from its TOOL_STARTED event to the TOOL_FINISHED or
    TOOL_FAILED event of the same trace and step, measured with ``clock``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._reset_locked()

    def _reset_locked(self) -> None:
        self._tool_calls = 0
        self._tool_successes = 0
        self._tool_failures = 0
        self._total_errors = 0
        self._total_steps = 0
        self._runs_completed = 0
        self._latencies: dict[str, list[float]] = {}
        self._started: dict[tuple[str, int], tuple[float, str]] = {}

    def observe(self, event: RuntimeEvent) -> None:
        key = (event.trace_id, event.step)
        kind = event.type
        with self._lock:
            if kind == RuntimeEventType.TOOL_STARTED:
                name = (
                    event.payload.name
                    if isinstance(event.payload, ToolCall)
                    else _UNKNOWN_TOOL
                )
                self._started[key] = (self._clock(), name)
                self._tool_calls += 1
            elif kind == RuntimeEventType.TOOL_FINISHED:
                self._tool_successes += 1
                self._record_latency(key)
            elif kind == RuntimeEventType.TOOL_FAILED:
                self._tool_failures += 1
                self._record_latency(key)
            elif kind == RuntimeEventType.ERROR:
                self._total_errors += 1
            elif kind == RuntimeEventType.STATE_UPDATED:
                self._total_steps += 1
            elif kind == RuntimeEventType.COMPLETED:
                self._runs_completed += 1

    def _record_latency(self, key: tuple[str, int]) -> None:
        started = self._started.pop(key, None)
        if started is None:
            return
        start, name = started
        self._latencies.setdefault(name, []).append(self._clock() - start)

    def snapshot(self) -> Snapshot:
        """Return the current counters and per-tool latency statistics."""
        with self._lock:
            latencies = {
                name: self._stats(values)
                for name, values in self._latencies.items()
                if values
            }
            success_rate = (
                self._tool_successes / self._tool_calls if self._tool_calls else 0.0
            )
            return Snapshot(
                tool_calls=self._tool_calls,
                tool_successes=self._tool_successes,
                tool_failures=self._tool_failures,
                total_errors=self._total_errors,
                total_steps=self._total_steps,
                runs_completed=self._runs_completed,
                tool_latencies=latencies,
                success_rate=success_rate,
            )

    @staticmethod
    def _stats(values: Sequence[float]) -> LatencyStats:
        ordered = sorted(values)
        return LatencyStats(
            count=len(ordered),
            min=ordered[0],
            max=ordered[-1],
            p50=_percentile(ordered, 0.50),
            p95=_percentile(ordered, 0.95),
            p99=_percentile(ordered, 0.99),
            average=sum(ordered) / len(ordered),
        )

    def reset(self) -> None:
        """Clear every counter and recorded latency."""
        with self._lock:
            self._reset_locked()