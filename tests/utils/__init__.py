"""Shared test utilities for unit and integration tests."""

from tests.utils.builders import (
    collect,
    event_stream,
    nested_trace_result,
    reasoning_event,
    text_event,
    thinking_event,
    tool_result_event,
    tool_use_event,
    types_of,
)
from tests.utils.result_assertions import assert_error, assert_ok


__all__ = [
    "assert_error",
    "assert_ok",
    "collect",
    "event_stream",
    "nested_trace_result",
    "reasoning_event",
    "text_event",
    "thinking_event",
    "tool_result_event",
    "tool_use_event",
    "types_of",
]
