"""
AG-UI run input.

RunAgentInput is what a UI client sends to start a run. The orchestrator
owns it; the translator never sees it. Messages are converted to the
internal Message model before they are handed to the agent runtime.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..content import Message, MessageRole, TextBlock


class AguiMessage(BaseModel):
    """Message in AG-UI format (text content only)."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    role: Literal["user", "assistant", "system", "tool", "developer"]
    content: str | None = None
    tool_call_id: str | None = None

    @classmethod
    def user(cls, message_id: str, content: str) -> "AguiMessage":
        return cls(id=message_id, role="user", content=content)


class RunAgentInput(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    thread_id: str
    run_id: str
    messages: list[AguiMessage] = Field(default_factory=list)
    state: Any = None


# AG-UI "developer" messages carry system instructions
_ROLE_MAP: dict[str, MessageRole] = {
    "user": MessageRole.USER,
    "assistant": MessageRole.ASSISTANT,
    "system": MessageRole.SYSTEM,
    "developer": MessageRole.SYSTEM,
    "tool": MessageRole.TOOL,
}


def to_agent_messages(messages: list[AguiMessage]) -> list[Message]:
    """
    Convert AG-UI messages to internal Messages.

    Text content becomes a single TextBlock; messages without content get an
    empty content list. Order is preserved.
    """
    converted: list[Message] = []
    for message in messages:
        content = [TextBlock(text=message.content)] if message.content else []
        converted.append(
            Message(id=message.id, role=_ROLE_MAP[message.role], content=content)
        )
    return converted
