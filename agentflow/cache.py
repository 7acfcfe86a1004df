"""Least-recently-used caching of LLM completions."""

from __future__ import annotations

import hashlib
import threading
from collections import OrderedDict
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .protocols import LLM, LLMConfig


@dataclass(frozen=True)
class CacheStats:
    """Size, capacity and keys of a cache at one moment."""

    size: int
    capacity: int
    entries: frozenset[str]


def _cache_key(prompt: str, temperature: float) -> str:
    return hashlib.md5(f"{prompt}:{temperature:.2f}".encode()).hexdigest()


class CachedLLM:
    """Caches ``complete`` responses by prompt and temperature.

    Streams are passed straight through and never cached. When more than
    ``capacity`` responses are held, the least recently used is dropped.
    """

    def __init__(self, underlying: LLM, capacity: int) -> None:
        self.underlying = underlying
        self.capacity = capacity
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, str] = OrderedDict()

    def complete(self, prompt: str, **kwargs: Any) -> str:
        config = LLMConfig.from_options(**kwargs)
        key = _cache_key(prompt, config.temperature)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                return self._entries[key]
        response = self.underlying.complete(prompt, **kwargs)
        self._put(key, response)
        return response

    def stream(self, prompt: str, **kwargs: Any) -> Iterator[str]:
        return self.underlying.stream(prompt, **kwargs)

    def _put(self, key: str, value: str) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                capacity=self.capacity,
                entries=frozenset(self._entries),
            )