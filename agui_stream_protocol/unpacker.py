"""
Nested Trace Unpacker - agent-as-tool results.

When a tool is itself an agent, its result carries the sub-agent's trace:
one serialized AgentEvent per TextBlock, followed by the sub-agent's final
answer as plain text. Producers may also interleave commentary, so there is
no fixed split point; every block is classified on its own.

    output = [Text(<event>), Text(<event>), Text("Final answer"), Text(<event>)]
                 decoded        decoded         literal            decoded

Decoded events are translated, in order, as one nested sub-run.
Literal blocks are rendered and joined, in order, into the tail that becomes
the outer tool call's result content.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias, assert_never

from loguru import logger

from .codec import try_decode_event
from .config import AdapterConfig
from .content import (
    AgentEvent,
    ContentBlock,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from .protocol.events import BaseAguiEvent


# Translates the events of a nested sub-run at the given depth
SubRunTranslator: TypeAlias = Callable[[list[AgentEvent], int], list[BaseAguiEvent]]


@dataclass(frozen=True)
class UnpackResult:
    events: list[BaseAguiEvent] = field(default_factory=list)
    literal_tail: str = ""
    decoded_count: int = 0
    depth_exceeded: bool = False


def render_literal(block: ContentBlock, join: str = "") -> str:
    """Render a content block as literal tool result text."""
    match block:
        case TextBlock(text=text) | ThinkingBlock(text=text):
            return text
        case ToolUseBlock():
            return block.model_dump_json(by_alias=True)
        case ToolResultBlock(output=output):
            return join.join(render_literal(inner, join) for inner in output)
        case _:
            assert_never(block)


class TraceUnpacker:
    """Splits a tool result's output into a nested sub-run and literal text."""

    def __init__(self, config: AdapterConfig, translate_sub_run: SubRunTranslator):
        self.config = config
        self._translate_sub_run = translate_sub_run

    def unpack(self, output: Sequence[ContentBlock], depth: int) -> UnpackResult:
        """
        Unpack a tool result's output.

        Args:
            output: The ToolResultBlock's output blocks
            depth: Depth of the translator that owns the tool result (top level = 0)

        Returns:
            UnpackResult with the nested sub-run's protocol events and the literal tail
        """
        join = self.config.literal_join

        if depth + 1 > self.config.max_unpack_depth:
            # Depth guard: nothing is decoded below this point
            has_trace = any(
                isinstance(block, TextBlock) and try_decode_event(block.text) is not None
                for block in output
            )
            if has_trace:
                logger.warning(
                    f"[UNPACK] Max unpack depth {self.config.max_unpack_depth} exceeded, "
                    f"demoting {len(output)} block(s) to literal content"
                )
            return UnpackResult(
                literal_tail=join.join(render_literal(block, join) for block in output),
                depth_exceeded=has_trace,
            )

        decoded: list[AgentEvent] = []
        literals: list[str] = []
        for block in output:
            if isinstance(block, TextBlock):
                event = try_decode_event(block.text)
                if event is not None:
                    decoded.append(event)
                    continue
            literals.append(render_literal(block, join))

        literal_tail = join.join(literals)
        if not decoded:
            return UnpackResult(literal_tail=literal_tail)

        logger.debug(
            f"[UNPACK] depth={depth + 1}: {len(decoded)} nested event(s), "
            f"{len(literals)} literal block(s)"
        )
        return UnpackResult(
            events=self._translate_sub_run(decoded, depth + 1),
            literal_tail=literal_tail,
            decoded_count=len(decoded),
        )
