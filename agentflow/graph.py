"""State graphs of named nodes joined by conditional edges."""

from __future__ import annotations

import contextlib
import queue
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from .errors import AgentFlowError, MaxStepsExceededError
from .events import RuntimeEvent, RuntimeEventType
from .state import State

NodeFunc = Callable[[State], Optional[str]]

_MAX_GRAPH_STEPS = 1024


@runtime_checkable
class EventSink(Protocol):
    """Receives events as a graph runs."""

    def emit(self, event: RuntimeEvent) -> None: ...


@dataclass
class Edge:
    """A transition to ``to``, taken when ``when`` is absent or true."""

    to: str
    when: Optional[Callable[[State], bool]] = None
    priority: int = 0


class Graph:
    """Runs node functions, moving between nodes until the end is reached.

    A node returns the name of the next node, or None or "" to follow the
    first matching outgoing edge. Reaching ``end`` or having nowhere to go
    completes the run.
    """

    def __init__(self, start: str = "", end: str = "__end__") -> None:
        self.start = start
        self.end = end
        self._nodes: dict[str, NodeFunc] = {}
        self._edges: dict[str, list[Edge]] = {}

    def add_node(self, name: str, fn: NodeFunc) -> None:
        self._nodes[name] = fn

    def add_edge(
        self,
        source: str,
        target: str,
        when: Optional[Callable[[State], bool]] = None,
    ) -> None:
        self._edges.setdefault(source, []).append(Edge(to=target, when=when))

    def run(self, state: State, sink: Optional[EventSink] = None) -> None:
        """Run from the start node; node exceptions are emitted and re-raised."""

        def emit(kind: RuntimeEventType, payload: Any) -> None:
            if sink is not None:
                sink.emit(RuntimeEvent(type=kind, payload=payload, step=state.step))

        current = self.start
        if not current:
            raise AgentFlowError("graph start node not set")
        for _ in range(_MAX_GRAPH_STEPS):
            fn = self._nodes.get(current)
            if fn is None:
                raise AgentFlowError(f"graph node {current!r} not found")
            emit(RuntimeEventType.PLAN_CREATED, current)
            try:
                following = fn(state)
            except Exception as exc:
                emit(RuntimeEventType.ERROR, exc)
                raise
            if not following:
                following = self._next_node(current, state)
            if not following or following == self.end:
                emit(RuntimeEventType.COMPLETED, state.output)
                return
            emit(RuntimeEventType.STATE_UPDATED, following)
            current = following
            state.step += 1
        raise MaxStepsExceededError()

    def _next_node(self, source: str, state: State) -> str:
        candidates = sorted(self._edges.get(source, []), key=lambda e: -e.priority)
        for edge in candidates:
            if edge.when is None or edge.when(state):
                return edge.to
        return ""


_DONE = object()


class _QueueSink:
    def __init__(self, events: "queue.Queue[Any]") -> None:
        self._events = events

    def emit(self, event: RuntimeEvent) -> None:
        self._events.put(event)


class GraphRunner:
    """Runs a graph in the background and yields its events as they happen."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def run(self, input: Any) -> Iterator[RuntimeEvent]:
        events: "queue.Queue[Any]" = queue.Queue()
        state = State(input)

        def work() -> None:
            # Failures inside nodes arrive as ERROR events; other failures end
            # the stream without an event.
            with contextlib.suppress(Exception):
                self.graph.run(state, _QueueSink(events))
            events.put(_DONE)

        threading.Thread(target=work, daemon=True).start()
        return self._drain(events)

    @staticmethod
    def _drain(events: "queue.Queue[Any]") -> Iterator[RuntimeEvent]:
        while (item := events.get()) is not _DONE:
            yield item