"""
Agent trace → AG-UI stream protocol bridge.

Converts the internal event stream of an agent (reasoning, tool calls, tool
results) into AG-UI protocol events, including agent-as-tool results whose
embedded sub-agent traces are unpacked and replayed in place.

Layers:
    - Content model (content.py): AgentEvent, Message, content blocks
    - Protocol (protocol/): AG-UI events and run input
    - Translation (codec.py, unpacker.py, translator.py)
    - Orchestration (adapter.py): run lifecycle over an async agent stream
"""

from .adapter import AgentRuntime, AguiAgentAdapter, AguiRun, stream_agent_to_agui
from .chunk_logger import ChunkLogger, chunk_logger, load_agent_events, read_chunks
from .codec import decode_event, serialize_event, try_decode_event
from .config import AdapterConfig
from .content import (
    AgentEvent,
    ContentBlock,
    EventKind,
    Message,
    MessageRole,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from .logging_config import configure_logging
from .protocol import (
    AguiEvent,
    AguiEventType,
    AguiMessage,
    RunAgentInput,
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
    to_agent_messages,
)
from .result import Error, Ok, Result
from .translator import (
    EventTranslator,
    NestedTraceError,
    ProtocolViolation,
    TranslatorClosedError,
    TranslatorState,
)
from .unpacker import TraceUnpacker, UnpackResult, render_literal


__all__ = [
    "AdapterConfig",
    "AgentEvent",
    "AgentRuntime",
    "AguiAgentAdapter",
    "AguiEvent",
    "AguiEventType",
    "AguiMessage",
    "AguiRun",
    "ChunkLogger",
    "ContentBlock",
    "Error",
    "EventKind",
    "EventTranslator",
    "Message",
    "MessageRole",
    "NestedTraceError",
    "Ok",
    "ProtocolViolation",
    "Result",
    "RunAgentInput",
    "RunErrorEvent",
    "RunFinishedEvent",
    "RunStartedEvent",
    "TextBlock",
    "TextMessageContentEvent",
    "TextMessageEndEvent",
    "TextMessageStartEvent",
    "ThinkingBlock",
    "ToolCallArgsEvent",
    "ToolCallEndEvent",
    "ToolCallResultEvent",
    "ToolCallStartEvent",
    "ToolResultBlock",
    "ToolUseBlock",
    "TraceUnpacker",
    "TranslatorClosedError",
    "TranslatorState",
    "UnpackResult",
    "chunk_logger",
    "configure_logging",
    "decode_event",
    "format_sse_event",
    "load_agent_events",
    "read_chunks",
    "render_literal",
    "serialize_event",
    "stream_agent_to_agui",
    "to_agent_messages",
    "try_decode_event",
]
