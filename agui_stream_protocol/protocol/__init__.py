"""
Protocol Layer - AG-UI event and run input types.

Components:
- AG-UI events (RUN_*, TEXT_MESSAGE_*, TOOL_CALL_*)
- RunAgentInput / AguiMessage: what a client sends to start a run
- format_sse_event: SSE encoding shared by transports
"""

from .events import (
    AguiEvent,
    AguiEventType,
    BaseAguiEvent,
    RunErrorEvent,
    RunFinishedEvent,
    RunStartedEvent,
    TextMessageContentEvent,
    TextMessageEndEvent,
    TextMessageStartEvent,
    ToolCallArgsEvent,
    ToolCallEndEvent,
    ToolCallResultEvent,
    ToolCallStartEvent,
    format_sse_event,
)
from .run_input import AguiMessage, RunAgentInput, to_agent_messages


__all__ = [
    # AG-UI Events
    "AguiEvent",
    "AguiEventType",
    "BaseAguiEvent",
    "RunErrorEvent",
    "RunFinishedEvent",
    "RunStartedEvent",
    "TextMessageContentEvent",
    "TextMessageEndEvent",
    "TextMessageStartEvent",
    "ToolCallArgsEvent",
    "ToolCallEndEvent",
    "ToolCallResultEvent",
    "ToolCallStartEvent",
    "format_sse_event",
    # Run Input
    "AguiMessage",
    "RunAgentInput",
    "to_agent_messages",
]
