"""Exceptions raised by the agent runtime."""

from __future__ import annotations


class AgentFlowError(Exception):
    """Base class for runtime errors."""


class ToolNotFoundError(AgentFlowError, LookupError):
    """A plan referred to a tool that is not registered."""

    def __init__(self, message: str = "tool not found") -> None:
        super().__init__(message)


class MaxStepsExceededError(AgentFlowError):
    """A run or graph went past its step limit."""

    def __init__(self, message: str = "max steps exceeded") -> None:
        super().__init__(message)


class ContextCanceledError(AgentFlowError):
    """A run was cancelled before it finished."""

    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)