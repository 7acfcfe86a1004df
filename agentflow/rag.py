"""Retrieval-augmented generation: retrieve documents, then prompt a model."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Sequence
from typing import Any

from .documents import Document
from .errors import AgentFlowError
from .protocols import LLM, Retriever

DEFAULT_PROMPT_TEMPLATE = """You are a helpful assistant. Use the following documents to answer the question.

Context:
{context}

Question: {query}

Answer:"""

DEFAULT_CONTEXT_SEPARATOR = "\n\n---\n\n"

_PLACEHOLDER = re.compile(r"\{context\}|\{query\}")


def _accept_all(doc: Document) -> bool:
    return True


def _expect_query(input: Any) -> str:
    if not isinstance(input, str):
        raise TypeError(f"expected string query, got {type(input).__name__}")
    return input


class RAGChain:
    """Answers a query with a model prompted by the retrieved documents.

    ``prompt_template`` may contain the placeholders ``{context}`` and
    ``{query}``; both are filled in a single pass.
    """

    def __init__(self, retriever: Retriever, llm: LLM, k: int) -> None:
        self.retriever = retriever
        self.llm = llm
        self.k = k
        self.prompt_template = DEFAULT_PROMPT_TEMPLATE
        self.context_separator = DEFAULT_CONTEXT_SEPARATOR

    def run(self, input: Any) -> str:
        query = _expect_query(input)
        return self._complete(self._retrieve(query), query)

    def _retrieve(self, query: str) -> list[Document]:
        try:
            return list(self.retriever.retrieve(query, self.k))
        except Exception as exc:
            raise AgentFlowError(f"retrieval failed: {exc}") from exc

    def _format_documents(self, docs: Sequence[Document]) -> str:
        return self.context_separator.join(
            f"Document {number}:\n{doc.page_content}"
            for number, doc in enumerate(docs, start=1)
        )

    def _build_prompt(self, docs: Sequence[Document], query: str) -> str:
        replacements = {
            "{context}": self._format_documents(docs),
            "{query}": query,
        }
        return _PLACEHOLDER.sub(
            lambda match: replacements[match.group(0)], self.prompt_template
        )

    def _complete(self, docs: Sequence[Document], query: str) -> str:
        prompt = self._build_prompt(docs, query)
        try:
            return self.llm.complete(prompt)
        except Exception as exc:
            raise AgentFlowError(f"llm completion failed: {exc}") from exc


class ContextualRAGChain(RAGChain):
    """A RAG chain that keeps only documents accepted by ``metadata_filter``."""

    def __init__(self, retriever: Retriever, llm: LLM, k: int) -> None:
        super().__init__(retriever, llm, k)
        self.metadata_filter: Callable[[Document], bool] = _accept_all

    def run(self, input: Any) -> str:
        query = _expect_query(input)
        filtered = [doc for doc in self._retrieve(query) if self.metadata_filter(doc)]
        if not filtered:
            raise AgentFlowError("no documents passed metadata filter")
        return self._complete(filtered, query)


class StreamingRAGChain(RAGChain):
    """A RAG chain that streams the model's answer token by token."""

    def stream(self, query: str) -> Iterator[str]:
        """Yield the answer's tokens; errors are raised while iterating."""
        docs = self._retrieve(query)
        prompt = self._build_prompt(docs, query)
        yield from self.llm.stream(prompt)