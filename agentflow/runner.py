"""Runs an agent step by step, calling its tools and streaming events."""

from __future__ import annotations

import contextlib
import queue
import threading
import uuid
from collections.abc import Iterator
from typing import Any, Optional

from .errors import ContextCanceledError, MaxStepsExceededError, ToolNotFoundError
from .events import RuntimeEvent, RuntimeEventType
from .options import Config, default_config
from .protocols import Agent
from .retry import RetryPolicy
from .state import Message, State
from .tool_registry import ToolRegistry

_DONE = object()


class _EventWriter:
    """Stream handed to tools; only runtime events reach the consumer."""

    def __init__(self, events: "queue.Queue[Any]") -> None:
        self._events = events

    def write(self, event: Any) -> None:
        if isinstance(event, RuntimeEvent):
            self._events.put(event)


class Runner:
    """Executes agents against a set of registered tools."""

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config if config is not None else default_config()
        self._registry = ToolRegistry()

    def register_tool(self, tool: Any) -> None:
        self._registry.register(tool)

    def run(
        self, agent: Agent, input: Any, max_steps: Optional[int] = None
    ) -> Iterator[RuntimeEvent]:
        """Start a run in the background and yield its events.

        Closing the returned iterator cancels the run at the next step.
        """
        limit = self.config.max_steps if max_steps is None else max_steps
        if limit <= 0:
            limit = self.config.max_steps
        if limit <= 0:
            limit = 1
        events: "queue.Queue[Any]" = queue.Queue()
        cancelled = threading.Event()
        state = State(input)
        threading.Thread(
            target=self._execute,
            args=(agent, state, limit, events, cancelled),
            daemon=True,
        ).start()
        return self._drain(events, cancelled)

    @staticmethod
    def _drain(
        events: "queue.Queue[Any]", cancelled: threading.Event
    ) -> Iterator[RuntimeEvent]:
        try:
            while (item := events.get()) is not _DONE:
                yield item
        finally:
            cancelled.set()

    def _execute(
        self,
        agent: Agent,
        state: State,
        limit: int,
        events: "queue.Queue[Any]",
        cancelled: threading.Event,
    ) -> None:
        trace_id = uuid.uuid4().hex
        writer = _EventWriter(events)
        config = self.config
        policy = config.retry_policy or RetryPolicy(max_attempts=1)

        def emit(kind: RuntimeEventType, payload: Any, step: int) -> None:
            event = RuntimeEvent(
                type=kind, payload=payload, step=step, trace_id=trace_id
            )
            events.put(event)
            for observer in config.observers:
                observer.observe(event)
            if config.metrics is not None:
                config.metrics.observe(event)

        try:
            for step in range(limit):
                if cancelled.is_set():
                    emit(RuntimeEventType.ERROR, ContextCanceledError(), step)
                    return
                state.step = step
                try:
                    plan = agent.plan(state)
                except Exception as exc:
                    events.put(
                        RuntimeEvent(type=RuntimeEventType.ERROR, payload=exc, step=step)
                    )
                    return
                if config.memory is not None:
                    with contextlib.suppress(Exception):
                        config.memory.add_message(Message("agent", "plan created"))
                emit(RuntimeEventType.PLAN_CREATED, plan, step)
                if plan is None:
                    continue
                if plan.done:
                    state.output = plan.output
                    emit(RuntimeEventType.COMPLETED, plan.output, step)
                    return
                for call in plan.actions:
                    tool = self._registry.get(call.name)
                    if tool is None:
                        emit(RuntimeEventType.TOOL_FAILED, ToolNotFoundError(), step)
                        continue
                    emit(RuntimeEventType.TOOL_STARTED, call, step)
                    try:
                        result = policy.run(
                            lambda tool=tool, call=call: tool.call(call.args, writer)
                        )
                    except Exception as exc:
                        emit(RuntimeEventType.TOOL_FAILED, exc, step)
                        continue
                    state.set(call.name, result)
                    if config.memory is not None:
                        with contextlib.suppress(Exception):
                            config.memory.set(call.name, result)
                    emit(RuntimeEventType.TOOL_FINISHED, result, step)
                emit(RuntimeEventType.STATE_UPDATED, state, step)
            emit(RuntimeEventType.ERROR, MaxStepsExceededError(), limit)
        finally:
            events.put(_DONE)