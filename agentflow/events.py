"""Runtime events, tool calls and plans."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class RuntimeEventType(str, Enum):
    """Kinds of event emitted while an agent or graph runs."""

    PLAN_CREATED = "plan_created"
    TOOL_STARTED = "tool_started"
    TOOL_FINISHED = "tool_finished"
    TOOL_FAILED = "tool_failed"
    STATE_UPDATED = "state_updated"
    OBSERVATION_MADE = "observation_made"
    COMPLETED = "completed"
    ERROR = "error"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RuntimeEvent:
    """One event of a run."""

    type: RuntimeEventType
    payload: Any = None
    step: int = 0
    trace_id: str = ""
    timestamp: datetime = field(default_factory=_now)


@dataclass
class ToolCall:
    """A request to call a named tool with arguments."""

    name: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class Plan:
    """What an agent decided to do in one step."""

    actions: list[ToolCall] = field(default_factory=list)
    done: bool = False
    output: Any = None