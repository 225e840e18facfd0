"""
Agent Trace Content Model - internal execution events and their content blocks.

This module defines the value types produced by the agent runtime while it
reasons, calls tools and answers. They are the *input* side of the bridge;
the AG-UI output side lives in protocol/events.py.

Type Hierarchy:
- AgentEvent (one unit of the execution trace)
  - kind: EventKind (REASONING, TOOL_RESULT, ...)
  - message: Message
    - content: list[ContentBlock] (discriminated union on "type")
      - TextBlock (type: "text")
      - ThinkingBlock (type: "thinking")
      - ToolUseBlock (type: "tool_use")
      - ToolResultBlock (type: "tool_result", output: list[ContentBlock])

JSON form (used by codec.py to embed sub-agent traces in tool results):
    {"kind": "REASONING", "message": {"role": "assistant", "content": [...]}, "isFinal": false}

All models are frozen and compare by value.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


_MODEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class EventKind(str, Enum):
    """Kinds of internal execution events."""

    REASONING = "REASONING"  # Model output: text, thinking and tool calls
    TOOL_RESULT = "TOOL_RESULT"  # Tool execution results
    HINT = "HINT"  # Injected hints (e.g. retrieved context)
    AGENT_RESULT = "AGENT_RESULT"  # Agent's final reply
    SUMMARY = "SUMMARY"  # Summary produced when the iteration limit is hit


class MessageRole(str, Enum):
    """Message author roles."""

    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    SYSTEM = "system"


# ============================================================
# Content Blocks
# ============================================================


class TextBlock(BaseModel):
    """Plain narrative text."""

    model_config = _MODEL_CONFIG

    type: Literal["text"] = "text"
    text: str


class ThinkingBlock(BaseModel):
    """Reasoning ("thinking") text."""

    model_config = _MODEL_CONFIG

    type: Literal["thinking"] = "thinking"
    text: str


class ToolUseBlock(BaseModel):
    """Tool invocation requested by the model."""

    model_config = _MODEL_CONFIG

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: dict[str, Any] = Field(default_factory=dict)


class ToolResultBlock(BaseModel):
    """
    Result of a tool invocation.

    `id` correlates with the ToolUseBlock.id of the call it answers.
    `output` accepts a single block or a list and is always stored as a list.
    When the tool is itself an agent, the output holds that agent's serialized
    events (one TextBlock each) followed by its final answer.
    """

    model_config = _MODEL_CONFIG

    type: Literal["tool_result"] = "tool_result"
    id: str
    name: str | None = None
    output: list["ContentBlock"] = Field(default_factory=list)

    @field_validator("output", mode="before")
    @classmethod
    def wrap_single_output(cls, v: Any) -> Any:
        """Accept a single content block as a one-element output list."""
        if v is None:
            return []
        if isinstance(v, (BaseModel, dict)):
            return [v]
        return v


ContentBlock = Annotated[
    TextBlock | ThinkingBlock | ToolUseBlock | ToolResultBlock,
    Field(discriminator="type"),
]

ToolResultBlock.model_rebuild()


# ============================================================
# Messages and Events
# ============================================================


class Message(BaseModel):
    """A message with ordered content blocks."""

    model_config = _MODEL_CONFIG

    id: str | None = None
    name: str | None = None
    role: MessageRole
    content: list[ContentBlock]
    metadata: dict[str, Any] | None = None

    @field_validator("content", mode="before")
    @classmethod
    def wrap_single_content(cls, v: Any) -> Any:
        """Accept a single content block as a one-element content list."""
        if isinstance(v, (BaseModel, dict)):
            return [v]
        return v

    def text_content(self) -> str:
        """Concatenated text of all TextBlocks, in order."""
        return "".join(block.text for block in self.content if isinstance(block, TextBlock))


class AgentEvent(BaseModel):
    """
    One unit of the agent runtime's execution trace.

    Unknown top-level keys are rejected so that unrelated JSON objects never
    decode as an event.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    kind: EventKind
    message: Message
    is_final: bool = False
