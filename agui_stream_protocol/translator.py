"""
Agent Trace to AG-UI Event Translator

Converts internal agent events (content blocks of a Message) to AG-UI
protocol events, one event at a time and strictly in arrival order.

Supports:
- Text and thinking (TEXT_MESSAGE_START/CONTENT/END)
- Tool calls (TOOL_CALL_START/ARGS/END)
- Tool results (TOOL_CALL_RESULT)
- Agent-as-tool results: the embedded sub-agent trace is unpacked and its
  events are emitted before the outer TOOL_CALL_RESULT

The translator is per run. Nested sub-runs get their own child translator,
so no framing state leaks between a tool result and the trace inside it.
"""

import json
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import assert_never

from loguru import logger

from .config import AdapterConfig
from .content import (
    AgentEvent,
    ContentBlock,
    EventKind,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from .protocol.events import (
    BaseAguiEvent,
    TextMessageContentEvent,
    TextMessageEndEvent,
    TextMessageStartEvent,
    ToolCallArgsEvent,
    ToolCallEndEvent,
    ToolCallResultEvent,
    ToolCallStartEvent,
)
from .unpacker import TraceUnpacker


class TranslatorState(str, Enum):
    STREAMING = "streaming"
    FINAL_EVENT_SEEN = "final-event-seen"
    CLOSED = "closed"


class TranslatorClosedError(RuntimeError):
    """Raised when an event is translated after finish()."""


@dataclass(frozen=True)
class ProtocolViolation:
    """A run-level protocol violation. Reported, never corrected."""

    message: str
    event_index: int


@dataclass(frozen=True)
class NestedTraceError:
    """Recoverable unpacking failure confined to one tool result."""

    tool_call_id: str
    depth: int
    message: str


class EventTranslator:
    """
    Translates AgentEvents of one run into AG-UI events.

    State machine:
        STREAMING → FINAL_EVENT_SEEN (first is_final event) → CLOSED (finish())
    """

    def __init__(self, config: AdapterConfig | None = None, depth: int = 0):
        """
        Initialize translator.

        Args:
            config: Adapter settings. Defaults to AdapterConfig.default().
            depth: Nesting depth (0 for a top-level run, >0 for unpacked sub-runs)
        """
        self.config = config or AdapterConfig.default()
        self.depth = depth
        self.state = TranslatorState.STREAMING
        self.violations: list[ProtocolViolation] = []
        self.errors: list[NestedTraceError] = []
        self._event_count = 0
        # Currently open TEXT_MESSAGE_START id, if any
        self._open_message_id: str | None = None
        self._unpacker = TraceUnpacker(self.config, self._translate_sub_run)

    def translate(self, event: AgentEvent) -> list[BaseAguiEvent]:
        """
        Translate one AgentEvent.

        Args:
            event: Next event of the run, in arrival order

        Returns:
            AG-UI events in content block order

        Raises:
            TranslatorClosedError: If finish() was already called
        """
        if self.state is TranslatorState.CLOSED:
            msg = "Translator is closed; no further events are accepted"
            raise TranslatorClosedError(msg)

        index = self._event_count
        self._event_count += 1
        message = event.message
        message_id = message.id or str(uuid.uuid4())

        logger.debug(
            f"[TRANSLATOR] depth={self.depth} event#{index} kind={event.kind.value} "
            f"blocks={len(message.content)} final={event.is_final}"
        )

        out: list[BaseAguiEvent] = []

        # A tool result ends the current reasoning turn
        if event.kind is EventKind.TOOL_RESULT:
            out.extend(self._close_text_message())

        for block in message.content:
            out.extend(self._translate_block(block, message_id))

        if event.is_final:
            out.extend(self._close_text_message())
            self._mark_final(index)

        return out

    def finish(self) -> list[BaseAguiEvent]:
        """Close any open framing. The translator accepts no events afterwards."""
        if self.state is TranslatorState.CLOSED:
            return []
        out = self._close_text_message()
        self.state = TranslatorState.CLOSED
        return out

    def _mark_final(self, index: int) -> None:
        if self.state is TranslatorState.STREAMING:
            self.state = TranslatorState.FINAL_EVENT_SEEN
            return

        violation = ProtocolViolation(
            message=f"Multiple final events in one run (event #{index})",
            event_index=index,
        )
        self.violations.append(violation)
        logger.warning(f"[TRANSLATOR] Protocol violation at depth={self.depth}: {violation.message}")

    def _translate_block(self, block: ContentBlock, message_id: str) -> list[BaseAguiEvent]:
        match block:
            case TextBlock(text=text):
                return self._process_text(text, message_id)
            case ThinkingBlock(text=text):
                if not self.config.emit_thinking:
                    return []
                return self._process_text(text, message_id)
            case ToolUseBlock():
                return self._process_tool_use(block, message_id)
            case ToolResultBlock():
                return self._process_tool_result(block)
            case _:
                assert_never(block)

    # ========================================================================
    # Text framing
    # ========================================================================

    def _process_text(self, text: str, message_id: str) -> list[BaseAguiEvent]:
        if not text:
            return []

        events: list[BaseAguiEvent] = []
        if self._open_message_id != message_id:
            events.extend(self._close_text_message())
            events.append(TextMessageStartEvent(message_id=message_id))
            self._open_message_id = message_id

        events.append(TextMessageContentEvent(message_id=message_id, delta=text))
        return events

    def _close_text_message(self) -> list[BaseAguiEvent]:
        if self._open_message_id is None:
            return []
        message_id = self._open_message_id
        self._open_message_id = None
        return [TextMessageEndEvent(message_id=message_id)]

    # ========================================================================
    # Tool calls
    # ========================================================================

    def _process_tool_use(self, block: ToolUseBlock, message_id: str) -> list[BaseAguiEvent]:
        logger.debug(f"[TOOL CALL] {block.name}(id={block.id}, args={block.input})")

        events = self._close_text_message()
        events.append(
            ToolCallStartEvent(
                tool_call_id=block.id,
                tool_call_name=block.name,
                parent_message_id=message_id,
            )
        )
        if self.config.emit_tool_call_args:
            events.append(
                ToolCallArgsEvent(
                    tool_call_id=block.id,
                    delta=json.dumps(block.input, ensure_ascii=False, default=str),
                )
            )
        events.append(ToolCallEndEvent(tool_call_id=block.id))
        return events

    def _process_tool_result(self, block: ToolResultBlock) -> list[BaseAguiEvent]:
        """
        Emit the unpacked sub-run (if any), then exactly one TOOL_CALL_RESULT for block.id.

        The outer result is always last so clients see nested activity complete
        before the tool call that triggered it.
        """
        events = self._close_text_message()

        unpacked = self._unpacker.unpack(block.output, self.depth)
        if unpacked.depth_exceeded:
            error = NestedTraceError(
                tool_call_id=block.id,
                depth=self.depth + 1,
                message=(
                    f"Nested trace exceeds max unpack depth {self.config.max_unpack_depth}; "
                    "kept as literal content"
                ),
            )
            self.errors.append(error)

        if unpacked.decoded_count:
            logger.info(
                f"[TOOL RESULT] {block.id}: unpacked {unpacked.decoded_count} nested event(s) "
                f"into {len(unpacked.events)} AG-UI event(s)"
            )

        events.extend(unpacked.events)
        events.append(
            ToolCallResultEvent(
                message_id=str(uuid.uuid4()),
                tool_call_id=block.id,
                content=unpacked.literal_tail,
            )
        )
        return events

    def _translate_sub_run(self, events: list[AgentEvent], depth: int) -> list[BaseAguiEvent]:
        """Translate a nested sub-run with a fresh child translator."""
        child = EventTranslator(self.config, depth=depth)
        out: list[BaseAguiEvent] = []
        for event in events:
            out.extend(child.translate(event))
        out.extend(child.finish())
        # Sub-run violations belong to the sub-run; only its recoverable errors surface
        self.errors.extend(child.errors)
        return out
