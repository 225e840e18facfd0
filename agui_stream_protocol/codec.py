"""
Trace codec - JSON form of AgentEvent.

A sub-agent used as a tool embeds its execution trace in the tool result as
one serialized event per TextBlock. serialize_event() produces that text;
try_decode_event() is the probe the unpacker uses to recover it.

Probing is expected to fail for ordinary answers, so failure is a value
(Error / None), never an exception.
"""

from pydantic import ValidationError

from .content import AgentEvent
from .result import Error, Ok, Result, ok_or_none


def serialize_event(event: AgentEvent) -> str:
    """Serialize an AgentEvent to JSON text (camelCase keys)."""
    return event.model_dump_json(by_alias=True)


def decode_event(text: str) -> Result[AgentEvent, str]:
    """
    Decode text as a serialized AgentEvent.

    Args:
        text: Candidate payload, e.g. the text of a tool result block

    Returns:
        Ok(event) if the text is a serialized event, Error(reason) otherwise
    """
    # Serialized events are always JSON objects; skip parsing prose entirely
    if not text.lstrip().startswith("{"):
        return Error("Not a JSON object")

    try:  # nosemgrep: forbid-try-except
        return Ok(AgentEvent.model_validate_json(text))
    except ValidationError as e:
        return Error(f"Not an agent event: {e.error_count()} validation error(s)")


def try_decode_event(text: str) -> AgentEvent | None:
    """Probe text for a serialized AgentEvent. Returns None on any failure."""
    return ok_or_none(decode_event(text))
