"""Thread-safe registry of tools by name."""

from __future__ import annotations

import threading
from typing import Optional

from .protocols import Tool


class ToolRegistry:
    """Maps tool names to tools; registering a name again replaces the tool."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        with self._lock:
            self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[Tool]:
        with self._lock:
            return self._tools.get(name)

    def tools(self) -> list[Tool]:
        with self._lock:
            return list(self._tools.values())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)