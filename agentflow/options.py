"""Runner configuration and the logging, tracing and metrics interfaces."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

from .events import RuntimeEvent
from .protocols import LLM, Memory, Observer
from .retry import RetryPolicy


@runtime_checkable
class Logger(Protocol):
    """Anything that logs a message with %-style arguments."""

    def info(self, msg: str, *args: Any) -> None: ...


@runtime_checkable
class Tracer(Protocol):
    """Starts named spans; the returned callable ends the span."""

    def start_span(self, name: str) -> Callable[[], None]: ...


@runtime_checkable
class MetricsRecorder(Protocol):
    """Records metrics from the events of a run."""

    def observe(self, event: RuntimeEvent) -> None: ...


def _default_logger() -> logging.Logger:
    return logging.getLogger("agentflow")


@dataclass
class Config:
    """Settings of a runner. The defaults are those of ``default_config``."""

    max_steps: int = 8
    logger: Logger = field(default_factory=_default_logger)
    tracer: Optional[Tracer] = None
    memory: Optional[Memory] = None
    retry_policy: Optional[RetryPolicy] = field(default_factory=RetryPolicy.default)
    observers: list[Observer] = field(default_factory=list)
    llm: Optional[LLM] = None
    metrics: Optional[MetricsRecorder] = None


def default_config() -> Config:
    """Eight steps, the package logger and the default retry policy."""
    return Config()