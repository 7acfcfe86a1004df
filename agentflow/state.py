"""Mutable state carried through a run, and conversation messages."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Message:
    """A single turn in a conversation."""

    role: str
    content: str


@dataclass
class State:
    """Input, output, step counter, named values and messages of a run.

    ``set``, ``get`` and ``add_message`` are safe to call from several threads.
    """

    input: Any = None
    output: Any = None
    step: int = 0
    values: dict[str, Any] = field(default_factory=dict)
    messages: list[Message] = field(default_factory=list)
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self.values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self.values.get(key, default)

    def add_message(self, msg: Message) -> None:
        with self._lock:
            self.messages.append(msg)