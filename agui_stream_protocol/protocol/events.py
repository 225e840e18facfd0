"""
AG-UI Protocol Event Types.

This module defines the output events of the bridge: the AG-UI wire
protocol consumed by UI clients for incremental rendering.

Reference:
- AG-UI Protocol: https://docs.ag-ui.com/concepts/events

Event lifecycle (as produced by EventTranslator + stream_agent_to_agui):
- RUN_STARTED
  - TEXT_MESSAGE_START → TEXT_MESSAGE_CONTENT* → TEXT_MESSAGE_END
  - TOOL_CALL_START → TOOL_CALL_ARGS? → TOOL_CALL_END
  - TOOL_CALL_RESULT
- RUN_FINISHED | RUN_ERROR

Events serialize with camelCase field names (toolCallId, messageId, ...).
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AguiEventType(str, Enum):
    """AG-UI event type discriminator values."""

    RUN_STARTED = "RUN_STARTED"
    RUN_FINISHED = "RUN_FINISHED"
    RUN_ERROR = "RUN_ERROR"
    TEXT_MESSAGE_START = "TEXT_MESSAGE_START"
    TEXT_MESSAGE_CONTENT = "TEXT_MESSAGE_CONTENT"
    TEXT_MESSAGE_END = "TEXT_MESSAGE_END"
    TOOL_CALL_START = "TOOL_CALL_START"
    TOOL_CALL_ARGS = "TOOL_CALL_ARGS"
    TOOL_CALL_END = "TOOL_CALL_END"
    TOOL_CALL_RESULT = "TOOL_CALL_RESULT"


class BaseAguiEvent(BaseModel):
    """Base class for all AG-UI events."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ============================================================
# Run Lifecycle
# ============================================================


class RunStartedEvent(BaseAguiEvent):
    type: Literal["RUN_STARTED"] = "RUN_STARTED"
    thread_id: str
    run_id: str


class RunFinishedEvent(BaseAguiEvent):
    type: Literal["RUN_FINISHED"] = "RUN_FINISHED"
    thread_id: str
    run_id: str


class RunErrorEvent(BaseAguiEvent):
    """Terminates a run whose upstream agent stream failed."""

    type: Literal["RUN_ERROR"] = "RUN_ERROR"
    message: str
    code: str | None = None


# ============================================================
# Text Messages
# ============================================================


class TextMessageStartEvent(BaseAguiEvent):
    type: Literal["TEXT_MESSAGE_START"] = "TEXT_MESSAGE_START"
    message_id: str
    role: Literal["assistant"] = "assistant"


class TextMessageContentEvent(BaseAguiEvent):
    """A chunk of narrative text. Also used to surface thinking text."""

    type: Literal["TEXT_MESSAGE_CONTENT"] = "TEXT_MESSAGE_CONTENT"
    message_id: str
    delta: str


class TextMessageEndEvent(BaseAguiEvent):
    type: Literal["TEXT_MESSAGE_END"] = "TEXT_MESSAGE_END"
    message_id: str


# ============================================================
# Tool Calls
# ============================================================


class ToolCallStartEvent(BaseAguiEvent):
    type: Literal["TOOL_CALL_START"] = "TOOL_CALL_START"
    tool_call_id: str
    tool_call_name: str
    parent_message_id: str | None = None


class ToolCallArgsEvent(BaseAguiEvent):
    """Tool input, serialized as JSON and sent as a single delta."""

    type: Literal["TOOL_CALL_ARGS"] = "TOOL_CALL_ARGS"
    tool_call_id: str
    delta: str


class ToolCallEndEvent(BaseAguiEvent):
    type: Literal["TOOL_CALL_END"] = "TOOL_CALL_END"
    tool_call_id: str


class ToolCallResultEvent(BaseAguiEvent):
    """Completion of a tool call. `content` is the rendered tool output."""

    type: Literal["TOOL_CALL_RESULT"] = "TOOL_CALL_RESULT"
    message_id: str
    tool_call_id: str
    content: str
    role: Literal["tool"] = "tool"


AguiEvent = Annotated[
    RunStartedEvent
    | RunFinishedEvent
    | RunErrorEvent
    | TextMessageStartEvent
    | TextMessageContentEvent
    | TextMessageEndEvent
    | ToolCallStartEvent
    | ToolCallArgsEvent
    | ToolCallEndEvent
    | ToolCallResultEvent,
    Field(discriminator="type"),
]


def format_sse_event(event: BaseAguiEvent) -> str:
    """
    Format an AG-UI event as an SSE frame.

    Transports (HTTP SSE, WebSocket) are external; this is the encoding they
    share.

    Returns:
        SSE-formatted string: 'data: {...}\\n\\n'
    """
    return f"data: {event.model_dump_json(by_alias=True, exclude_none=True)}\n\n"
