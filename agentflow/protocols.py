"""Interfaces between the runtime and pluggable components."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from .documents import Document
from .events import Plan, RuntimeEvent
from .state import Message, State


@runtime_checkable
class Agent(Protocol):
    """Decides the next step of a run from the current state."""

    def plan(self, state: State) -> Optional[Plan]: ...


@runtime_checkable
class Observer(Protocol):
    """Receives every event of a run."""

    def observe(self, event: RuntimeEvent) -> None: ...


@runtime_checkable
class Embedder(Protocol):
    """Turns text into vector embeddings."""

    def embed(self, text: str) -> list[float]: ...

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]: ...

    def dimension(self) -> int: ...


@dataclass
class EmbedderConfig:
    """Settings shared by embedders."""

    model: str = ""


@dataclass(frozen=True)
class ModelInfo:
    """Description of an LLM: token limits, costs and feature list."""

    name: str
    provider: str
    max_tokens: int = 0
    context_size: int = 0
    cost_per_1k_input: float = 0.0
    cost_per_1k_output: float = 0.0
    capabilities: tuple[str, ...] = ()
    release_date: str = ""


@dataclass
class LLMConfig:
    """Per-call settings for an LLM."""

    temperature: float = 0.7

    @classmethod
    def from_options(cls, **kwargs: Any) -> "LLMConfig":
        """Build a config from keyword options; unknown names raise TypeError."""
        return cls(**kwargs)


@runtime_checkable
class LLM(Protocol):
    """Completes or streams a prompt."""

    def complete(self, prompt: str, **kwargs: Any) -> str: ...

    def stream(self, prompt: str, **kwargs: Any) -> Iterator[str]: ...


@runtime_checkable
class TokenCounter(Protocol):
    """Counts the tokens of a text."""

    def count_tokens(self, text: str) -> int: ...


@runtime_checkable
class ModelInfoProvider(Protocol):
    """Describes the model behind an LLM."""

    def model_info(self) -> ModelInfo: ...


@runtime_checkable
class Memory(Protocol):
    """A conversation and key-value store; ``get`` raises KeyError when missing."""

    def add_message(self, msg: Message) -> None: ...

    def get_messages(self) -> list[Message]: ...

    def set(self, key: str, value: Any) -> None: ...

    def get(self, key: str) -> Any: ...


@runtime_checkable
class Summarizer(Protocol):
    """Condenses a conversation into a text summary."""

    def summarize(self, messages: Sequence[Message]) -> str: ...


@runtime_checkable
class Compressor(Protocol):
    """Shrinks a conversation into fewer messages."""

    def compress(self, messages: Sequence[Message]) -> list[Message]: ...


@runtime_checkable
class Retriever(Protocol):
    """Finds the documents most relevant to a query."""

    def retrieve(self, query: str, k: int) -> list[Document]: ...


@dataclass
class SearchResult:
    """A document found by vector search, with its similarity score."""

    document: Document
    score: float = 0.0
    id: str = ""


@runtime_checkable
class VectorStore(Protocol):
    """Stores documents by embedding and searches them by similarity."""

    def add(
        self, docs: Sequence[Document], embeddings: Sequence[Sequence[float]]
    ) -> list[str]: ...

    def search(self, embedding: Sequence[float], k: int) -> list[SearchResult]: ...

    def delete(self, ids: Sequence[str]) -> None: ...

    def clear(self) -> None: ...

    def size(self) -> int: ...


@runtime_checkable
class StreamWriter(Protocol):
    """Accepts intermediate output from a running tool."""

    def write(self, event: Any) -> None: ...


@runtime_checkable
class Tool(Protocol):
    """A named capability an agent can call."""

    name: str
    description: str
    params_schema: Mapping[str, Any]

    def call(self, args: Mapping[str, Any], stream: StreamWriter) -> Any: ...