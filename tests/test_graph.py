import pytest

from agentflow.errors import AgentFlowError, MaxStepsExceededError
from agentflow.events import RuntimeEventType
from agentflow.graph import Graph, GraphRunner
from agentflow.state import State


class _Collector:
    def __init__(self):
        self.events = []

    def emit(self, event):
        self.events.append(event)


def _two_node_graph():
    graph = Graph(start="start")

    def start(state):
        state.output = "done"
        return "end"

    graph.add_node("start", start)
    graph.add_node("end", lambda state: "")
    return graph


def test_graph_execution():
    collector = _Collector()
    state = State("input")
    _two_node_graph().run(state, collector)
    assert collector.events
    assert [e.type for e in collector.events] == [
        RuntimeEventType.PLAN_CREATED,
        RuntimeEventType.STATE_UPDATED,
        RuntimeEventType.PLAN_CREATED,
        RuntimeEventType.COMPLETED,
    ]
    assert collector.events[-1].payload == "done"
    assert state.step == 1


def test_graph_runs_without_sink():
    state = State("input")
    _two_node_graph().run(state)
    assert state.output == "done"


def test_missing_start_raises():
    with pytest.raises(AgentFlowError, match="start node not set"):
        Graph().run(State())


def test_unknown_node_raises():
    graph = Graph(start="a")
    graph.add_node("a", lambda state: "b")
    with pytest.raises(AgentFlowError, match="not found"):
        graph.run(State())


def test_node_error_is_emitted_and_raised():
    collector = _Collector()
    graph = Graph(start="a")

    def fail(state):
        raise ValueError("node failed")

    graph.add_node("a", fail)
    with pytest.raises(ValueError, match="node failed"):
        graph.run(State(), collector)
    assert collector.events[-1].type is RuntimeEventType.ERROR
    assert isinstance(collector.events[-1].payload, ValueError)


def test_conditional_edges_choose_first_match():
    graph = Graph(start="a")
    visited = []
    graph.add_node("a", lambda state: visited.append("a"))
    graph.add_node("b", lambda state: visited.append("b"))
    graph.add_node("c", lambda state: visited.append("c"))
    graph.add_edge("a", "b", lambda state: state.input == "go-b")
    graph.add_edge("a", "c", None)
    graph.run(State("go-c"))
    assert visited == ["a", "c"]
    visited.clear()
    graph.run(State("go-b"))
    assert visited == ["a", "b"]


def test_edge_to_end_completes():
    collector = _Collector()
    graph = Graph(start="a", end="stop")
    graph.add_node("a", lambda state: None)
    graph.add_edge("a", "stop")
    graph.run(State(), collector)
    assert collector.events[-1].type is RuntimeEventType.COMPLETED


def test_endless_loop_exceeds_max_steps():
    graph = Graph(start="loop")
    graph.add_node("loop", lambda state: "loop")
    with pytest.raises(MaxStepsExceededError):
        graph.run(State())


def test_graph_runner_streams_events():
    events = list(GraphRunner(_two_node_graph()).run("input"))
    assert events[0].type is RuntimeEventType.PLAN_CREATED
    assert events[0].payload == "start"
    assert events[-1].type is RuntimeEventType.COMPLETED
    assert events[-1].payload == "done"


def test_graph_runner_ends_stream_on_failure():
    graph = Graph(start="a")

    def fail(state):
        raise RuntimeError("boom")

    graph.add_node("a", fail)
    events = list(GraphRunner(graph).run(None))
    assert [e.type for e in events] == [
        RuntimeEventType.PLAN_CREATED,
        RuntimeEventType.ERROR,
    ]