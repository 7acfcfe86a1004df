"""An in-memory vector store ranked by cosine similarity."""

from __future__ import annotations

import math
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from .documents import Document
from .protocols import SearchResult


@dataclass
class _Entry:
    id: str
    doc: Document
    embedding: tuple[float, ...]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two vectors.

    Vectors of different or zero length, and zero vectors, give 0.
    """
    if len(a) != len(b) or not a:
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


class InMemoryVectorStore:
    """Thread-safe document store searched by cosine similarity."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict[str, _Entry] = {}
        self._next_id = 0

    def add(
        self, docs: Sequence[Document], embeddings: Sequence[Sequence[float]]
    ) -> list[str]:
        """Store documents with their embeddings; return their new ids."""
        if len(docs) != len(embeddings):
            raise ValueError(
                f"docs and embeddings length mismatch: {len(docs)} vs {len(embeddings)}"
            )
        with self._lock:
            ids = []
            for doc, embedding in zip(docs, embeddings):
                doc_id = f"doc_{self._next_id}"
                self._next_id += 1
                self._entries[doc_id] = _Entry(doc_id, doc, tuple(embedding))
                ids.append(doc_id)
            return ids

    def search(self, embedding: Sequence[float], k: int) -> list[SearchResult]:
        """Return up to ``k`` documents, most similar first."""
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")
        with self._lock:
            scored = [
                (cosine_similarity(embedding, entry.embedding), entry)
                for entry in self._entries.values()
            ]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            SearchResult(document=entry.doc, score=score, id=entry.id)
            for score, entry in scored[:k]
        ]

    def delete(self, ids: Sequence[str]) -> None:
        """Remove the documents with these ids; unknown ids are ignored."""
        with self._lock:
            for doc_id in ids:
                self._entries.pop(doc_id, None)

    def clear(self) -> None:
        """Remove every document and restart id numbering."""
        with self._lock:
            self._entries.clear()
            self._next_id = 0

    def size(self) -> int:
        with self._lock:
            return len(self._entries)