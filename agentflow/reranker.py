"""Strategies for re-ordering search results."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .errors import AgentFlowError
from .protocols import Embedder, SearchResult


@runtime_checkable
class Reranker(Protocol):
    """Re-orders or filters search results for a query."""

    def rerank(self, query: str, docs: Sequence[SearchResult]) -> list[SearchResult]: ...


class SimpleReranker:
    """Keeps results whose score is at least ``min_score``, in their order."""

    def __init__(self, min_score: float) -> None:
        self.min_score = min_score

    def rerank(self, query: str, docs: Sequence[SearchResult]) -> list[SearchResult]:
        return [doc for doc in docs if doc.score >= self.min_score]


def _normalize(vec: Sequence[float]) -> list[float]:
    norm = sum(x * x for x in vec)
    if norm == 0:
        return list(vec)
    inv = 1 / math.sqrt(norm)
    return [x * inv for x in vec]


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return sum(x * y for x, y in zip(a, b))


class MMRReranker:
    """Orders results by Maximum Marginal Relevance.

    Each next result maximises
    ``lambda * relevance - (1 - lambda) * max_similarity_to_selected``.
    A ``lambda_multiplier`` outside [0, 1] falls back to 0.5.
    """

    def __init__(self, lambda_multiplier: float, embedder: Embedder) -> None:
        if lambda_multiplier < 0 or lambda_multiplier > 1:
            lambda_multiplier = 0.5
        self.lambda_multiplier = lambda_multiplier
        self.embedder = embedder

    def rerank(self, query: str, docs: Sequence[SearchResult]) -> list[SearchResult]:
        if not docs:
            return list(docs)
        try:
            query_embedding = self.embedder.embed(query)
        except Exception as exc:
            raise AgentFlowError(f"failed to embed query: {exc}") from exc
        try:
            doc_embeddings = self.embedder.embed_batch(
                [doc.document.page_content for doc in docs]
            )
        except Exception as exc:
            raise AgentFlowError(f"failed to embed documents: {exc}") from exc
        if len(doc_embeddings) != len(docs):
            raise AgentFlowError(
                f"embedder returned {len(doc_embeddings)} embeddings for {len(docs)} docs"
            )

        query_vec = _normalize(query_embedding)
        doc_vecs = [_normalize(vec) for vec in doc_embeddings]
        relevances = [_dot(query_vec, vec) for vec in doc_vecs]

        # Seed with the result the store scored highest (first on ties).
        seed = max(range(len(docs)), key=lambda i: (docs[i].score, -i))
        order = [seed]
        remaining = [i for i in range(len(docs)) if i != seed]
        lam = self.lambda_multiplier

        while remaining:
            best_index = -1
            best_mmr = -math.inf
            for i in remaining:
                diversity = max(
                    0.0, max(_dot(doc_vecs[i], doc_vecs[j]) for j in order)
                )
                mmr = lam * relevances[i] - (1 - lam) * diversity
                if mmr > best_mmr:
                    best_mmr = mmr
                    best_index = i
            if best_index < 0:
                break
            order.append(best_index)
            remaining.remove(best_index)

        return [docs[i] for i in order]