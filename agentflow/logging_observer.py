"""An observer that writes one structured log record per runtime event."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .events import Plan, RuntimeEvent, RuntimeEventType, ToolCall
from .state import State

_DEFAULT_LOGGER_NAME = "agentflow"


class LoggingObserver:
    """Logs every event at INFO level as ``runtime_event``.

    The structured fields are attached to the log record as ``attrs``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger(
            _DEFAULT_LOGGER_NAME
        )

    def observe(self, event: RuntimeEvent) -> None:
        attrs: dict[str, Any] = {
            "event_type": RuntimeEventType(event.type).value,
            "timestamp": event.timestamp,
            "step": event.step,
            "trace_id": event.trace_id,
        }
        attrs.update(self._payload_attrs(event))
        self.logger.info("runtime_event", extra={"attrs": attrs})

    @staticmethod
    def _payload_attrs(event: RuntimeEvent) -> dict[str, Any]:
        payload = event.payload
        kind = event.type
        if kind == RuntimeEventType.PLAN_CREATED and isinstance(payload, Plan):
            return {"action_count": len(payload.actions), "done": payload.done}
        if kind in (
            RuntimeEventType.TOOL_STARTED,
            RuntimeEventType.TOOL_FINISHED,
        ) and isinstance(payload, ToolCall):
            return {"tool_name": payload.name}
        if kind in (
            RuntimeEventType.TOOL_FAILED,
            RuntimeEventType.ERROR,
        ) and isinstance(payload, BaseException):
            return {"error": str(payload)}
        if kind == RuntimeEventType.STATE_UPDATED and isinstance(payload, State):
            return {"state_values": dict(payload.values)}
        return {}