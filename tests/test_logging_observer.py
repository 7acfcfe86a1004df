import logging

import pytest

from agentflow.errors import MaxStepsExceededError
from agentflow.events import Plan, RuntimeEvent, RuntimeEventType, ToolCall
from agentflow.logging_observer import LoggingObserver
from agentflow.state import State

LOGGER_NAME = "tests.agentflow.logging"


@pytest.fixture
def observer():
    return LoggingObserver(logging.getLogger(LOGGER_NAME))


def _records(caplog):
    return [r for r in caplog.records if r.name == LOGGER_NAME]


def test_plan_created_logs_action_count_and_done(observer, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    plan = Plan(actions=[ToolCall("echo"), ToolCall("search")], done=False)
    observer.observe(
        RuntimeEvent(RuntimeEventType.PLAN_CREATED, payload=plan, step=3, trace_id="abc")
    )
    (record,) = _records(caplog)
    assert record.getMessage() == "runtime_event"
    assert record.levelno == logging.INFO
    assert record.attrs["event_type"] == "plan_created"
    assert record.attrs["step"] == 3
    assert record.attrs["trace_id"] == "abc"
    assert record.attrs["action_count"] == 2
    assert record.attrs["done"] is False


def test_tool_started_logs_tool_name(observer, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    observer.observe(
        RuntimeEvent(RuntimeEventType.TOOL_STARTED, payload=ToolCall("echo", {"v": 1}))
    )
    (record,) = _records(caplog)
    assert record.attrs["tool_name"] == "echo"


def test_tool_failed_logs_error_text(observer, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    observer.observe(
        RuntimeEvent(RuntimeEventType.TOOL_FAILED, payload=ValueError("boom"))
    )
    (record,) = _records(caplog)
    assert record.attrs["error"] == "boom"


def test_error_event_logs_error_text(observer, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    observer.observe(
        RuntimeEvent(RuntimeEventType.ERROR, payload=MaxStepsExceededError())
    )
    (record,) = _records(caplog)
    assert record.attrs["error"] == "max steps exceeded"


def test_state_updated_logs_state_values(observer, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    state = State("input")
    state.set("echo", "hello")
    observer.observe(RuntimeEvent(RuntimeEventType.STATE_UPDATED, payload=state))
    (record,) = _records(caplog)
    assert record.attrs["state_values"] == {"echo": "hello"}


def test_unexpected_payload_adds_no_extra_fields(observer, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    observer.observe(RuntimeEvent(RuntimeEventType.TOOL_FINISHED, payload="result"))
    (record,) = _records(caplog)
    assert set(record.attrs) == {"event_type", "timestamp", "step", "trace_id"}


def test_timestamp_is_passed_through(observer, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    event = RuntimeEvent(RuntimeEventType.COMPLETED, payload="done")
    observer.observe(event)
    (record,) = _records(caplog)
    assert record.attrs["timestamp"] == event.timestamp
    assert record.attrs["event_type"] == "completed"


def test_default_logger_is_package_logger():
    observer = LoggingObserver()
    assert observer.logger is logging.getLogger("agentflow")