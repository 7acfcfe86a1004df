# agentflow

A small, dependency-free runtime for building LLM-driven agents. It gives you
the moving parts (an agent runner, state graphs, chains, an in-memory vector
store, retrieval-augmented generation, rerankers, a model registry, a
completion cache and observers) and leaves the model, embedder and tools to
you: any object with the right methods fits the interfaces in
`agentflow.protocols`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running an agent

An agent is any object with `plan(state)` returning a `Plan` (or `None`). A
tool is any object with `name`, `description`, `params_schema` and
`call(args, stream)`.

```python
from agentflow.events import Plan, ToolCall, RuntimeEventType
from agentflow.runner import Runner


class EchoTool:
    name = "echo"
    description = "echo tool"
    params_schema = {"type": "object"}

    def call(self, args, stream):
        return args["value"]


class TwoStepAgent:
    def __init__(self):
        self.calls = 0

    def plan(self, state):
        self.calls += 1
        if self.calls == 1:
            return Plan(actions=[ToolCall(name="echo", args={"value": "hello"})])
        return Plan(done=True, output="done")


runner = Runner()
runner.register_tool(EchoTool())
for event in runner.run(TwoStepAgent(), "input"):
    print(event.type.value, event.payload)
```

`Runner.run(agent, input, max_steps=None)` starts the run on a background
thread and returns an iterator of `RuntimeEvent`s. Each step:

- calls `agent.plan(state)`; if it raises, an `ERROR` event carrying the
  exception ends the run;
- emits `PLAN_CREATED`; a plan with `done=True` sets `state.output` and emits
  `COMPLETED`;
- for each `ToolCall`, emits `TOOL_STARTED`, calls the tool under the
  configured `RetryPolicy`, stores the result in `state.values` under the tool
  name and emits `TOOL_FINISHED` (or `TOOL_FAILED` with the exception, or with
  `ToolNotFoundError` when the tool is not registered);
- emits `STATE_UPDATED` with the `State`.

Going past the step limit emits an `ERROR` event carrying
`MaxStepsExceededError`. Closing the event iterator early cancels the run; the
next step then emits `ERROR` with `ContextCanceledError`. Every event of a run
carries the same `trace_id`. A tool that writes a `RuntimeEvent` to its
`stream` argument has it passed on to the consumer; anything else it writes is
dropped.

### Configuration

```python
from agentflow.options import Config
from agentflow.retry import RetryPolicy
from agentflow.logging_observer import LoggingObserver
from agentflow.metrics import MetricsObserver

metrics = MetricsObserver()
runner = Runner(Config(
    max_steps=4,
    retry_policy=RetryPolicy(max_attempts=2, backoff=lambda attempt: 0.1),
    observers=[LoggingObserver()],
    metrics=metrics,
))
```

`default_config()` gives eight steps, the `agentflow` logger and
`RetryPolicy.default()` (three attempts, waiting 50 ms, then doubling, capped
at 500 ms). When `memory` is set to a `Memory`, the runner adds a message for
each plan and stores each tool result under the tool's name.

`RetryPolicy.run(fn)` calls `fn` until it returns, sleeping
`backoff(attempt)` seconds between failures, and re-raises the last exception.

## Graphs

```python
from agentflow.graph import Graph, GraphRunner
from agentflow.state import State


def start(state):
    state.output = "done"
    return "end"


graph = Graph(start="start")
graph.add_node("start", start)
graph.add_node("end", lambda state: "")
graph.run(State("input"), sink=None)
```

A node returns the name of the next node, or `None`/`""` to follow the first
outgoing edge (added with `add_edge(source, target, when=None)`) whose `when`
condition is absent or true. Reaching the `end` node (default `"__end__"`) or
having nowhere to go completes the run. A sink, any object with
`emit(event)`, receives `PLAN_CREATED`, `STATE_UPDATED`, `COMPLETED` and, when
a node raises, `ERROR` before the exception propagates. More than 1024 steps
raises `MaxStepsExceededError`.

`GraphRunner(graph).run(input)` runs the graph on a background thread and
yields its events as they happen.

## Chains

`ChainFunc(fn)` wraps a function as a step; `ChainPipeline(*steps).run(input)`
feeds each step's output into the next.

## Retrieval and RAG

```python
from agentflow.documents import Document
from agentflow.memory_store import InMemoryVectorStore
from agentflow.retrieval import RetrieverChain, RetrievalStep
from agentflow.rag import RAGChain

store = InMemoryVectorStore()
store.add([Document("Paris is in France.")], [[1.0, 0.0]])

retriever = RetrieverChain(store, my_embedder)   # any Embedder
answer = RAGChain(retriever, my_llm, k=3).run("Where is Paris?")
```

- `InMemoryVectorStore` assigns ids `doc_0`, `doc_1`, ... and ranks by
  `cosine_similarity`; it supports `search`, `delete`, `clear` (which restarts
  numbering) and `size`.
- `RetrieverChain` embeds the query and searches the store; `RetrieverFunc`
  wraps a function `fn(query, k)`; `RetrievalStep(retriever, k)` is a chain
  step from a query string to documents.
- `RAGChain` fills `{context}` and `{query}` in `prompt_template` with the
  numbered documents (joined by `context_separator`) and the query, then calls
  `llm.complete`. `ContextualRAGChain` first keeps only documents accepted by
  `metadata_filter` and raises `AgentFlowError` if none remain.
  `StreamingRAGChain.stream(query)` yields the model's tokens.

### Rerankers

`SimpleReranker(min_score)` keeps results scoring at least `min_score`.
`MMRReranker(lambda_multiplier, embedder)` orders results by Maximum Marginal
Relevance, starting from the highest-scored result; a multiplier outside
[0, 1] falls back to 0.5.

## Model registry and caching

```python
from agentflow.models import get_model, list_capable, providers

info = get_model("gpt-4o")
vision_models = list_capable("vision")
```

`agentflow.models` holds token limits, per-1K-token costs, capabilities and
release dates of known models, with `list_by_provider`, `list_all`,
`providers`, `available_capabilities` and `register_model`.

`CachedLLM(llm, capacity)` caches `complete` responses keyed by prompt and
`temperature` (the only option it accepts; default 0.7), dropping the least
recently used beyond `capacity`. `stream` is passed through uncached.
`stats()` returns a `CacheStats`.

## Observability

- `LoggingObserver(logger=None)` logs `runtime_event` at INFO for every event,
  with the structured fields in the record's `attrs` attribute.
- `MetricsObserver` counts tool calls, successes, failures, errors, steps and
  completed runs, and measures per-tool latency in seconds; `snapshot()`
  returns count, min, max, p50, p95, p99 and average per tool, and `reset()`
  clears everything.
- `NoopTracer().start_span(name)` returns a span handle that records only that
  it was ended.

## What this package does not do

It does not talk to any model provider, embedding service or external vector
database: `LLM`, `Embedder` and `VectorStore` are interfaces you implement, and
`InMemoryVectorStore` is the only store included. It has no document loaders,
no conversation-memory backend (only the `Memory` interface), no tracing
exporter and no command-line program.