"""Retrievers built from an embedder and a vector store, and a chain step for them."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .documents import Document
from .errors import AgentFlowError
from .protocols import Embedder, Retriever, VectorStore


class RetrieverChain:
    """Retrieves documents by embedding the query and searching a vector store."""

    def __init__(self, vector_store: VectorStore, embedder: Embedder) -> None:
        self.vector_store = vector_store
        self.embedder = embedder

    def retrieve(self, query: str, k: int) -> list[Document]:
        """Return the ``k`` documents most relevant to ``query``."""
        if not query:
            raise ValueError("query cannot be empty")
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")
        try:
            embedding = self.embedder.embed(query)
        except Exception as exc:
            raise AgentFlowError(f"failed to embed query: {exc}") from exc
        try:
            results = self.vector_store.search(embedding, k)
        except Exception as exc:
            raise AgentFlowError(f"failed to search vector store: {exc}") from exc
        return [result.document for result in results]


class RetrieverFunc:
    """Wraps a plain function ``fn(query, k)`` as a retriever."""

    def __init__(self, fn: Callable[[str, int], list[Document]]) -> None:
        self.fn = fn

    def retrieve(self, query: str, k: int) -> list[Document]:
        return self.fn(query, k)


class RetrievalStep:
    """A chain step that turns a query string into retrieved documents."""

    def __init__(self, retriever: Retriever, k: int) -> None:
        self.retriever = retriever
        self.k = k

    def run(self, input: Any) -> list[Document]:
        if not isinstance(input, str):
            raise TypeError(f"expected string query, got {type(input).__name__}")
        return self.retriever.retrieve(input, self.k)