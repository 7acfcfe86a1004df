"""Composable processing steps."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Chain(Protocol):
    """A step that turns an input into an output."""

    def run(self, input: Any) -> Any: ...


class ChainFunc:
    """Wraps a plain function as a chain step."""

    def __init__(self, fn: Callable[[Any], Any]) -> None:
        self.fn = fn

    def run(self, input: Any) -> Any:
        return self.fn(input)


class ChainPipeline:
    """Runs steps in order, feeding each output to the next step."""

    def __init__(self, *args: Chain) -> None:
        self.steps: tuple[Chain, ...] = tuple(args)

    def run(self, input: Any) -> Any:
        current = input
        for step in self.steps:
            current = step.run(current)
        return current