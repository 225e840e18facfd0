"""
Chunk Logger for agent → AG-UI translation

Records both sides of a run to JSONL (one line per chunk) so a translation
issue can be inspected offline and re-translated from the recorded input:

    agent-event.jsonl   AgentEvents as pulled from the agent (direction "in")
    agui-event.jsonl    AG-UI events as yielded to the client (direction "out")

Usage:
    from agui_stream_protocol.chunk_logger import chunk_logger, load_agent_events

    chunk_logger.log_agent_event(event, run_id="r1")
    chunk_logger.log_agui_event(agui_event, run_id="r1")

    # Later: rebuild the agent input of a recorded run
    events = load_agent_events("./chunk_logs/session-2026-10-18-101500", run_id="r1")

Environment Variables:
    CHUNK_LOGGER_ENABLED: "true" to record (default: disabled)
    CHUNK_LOGGER_OUTPUT_DIR: Root directory for sessions (default: ./chunk_logs)
    CHUNK_LOGGER_SESSION_ID: Session directory name (default: session-<UTC timestamp>)
"""

import json
import os
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal, TextIO

from .content import AgentEvent
from .protocol.events import BaseAguiEvent


LogLocation = Literal["agent-event", "agui-event"]
Direction = Literal["in", "out"]

_DEFAULT_OUTPUT_DIR = "./chunk_logs"


@dataclass
class ChunkLogEntry:
    """One recorded chunk (one JSONL line)."""

    timestamp: int  # ms since epoch
    session_id: str
    run_id: str | None
    location: LogLocation
    direction: Direction
    sequence_number: int  # 1-based, per (location, run_id)
    chunk: Any
    metadata: dict[str, Any] | None = None


class ChunkLogger:
    """
    JSONL recorder for one session.

    Disabled loggers are no-ops and never touch the filesystem.
    """

    def __init__(
        self,
        enabled: bool | None = None,
        output_dir: str | None = None,
        session_id: str | None = None,
    ):
        """
        Args:
            enabled: Override CHUNK_LOGGER_ENABLED
            output_dir: Override CHUNK_LOGGER_OUTPUT_DIR
            session_id: Override CHUNK_LOGGER_SESSION_ID
        """
        if enabled is None:
            enabled = os.getenv("CHUNK_LOGGER_ENABLED", "false").lower() == "true"
        self._enabled = enabled
        self._output_dir = Path(
            output_dir or os.getenv("CHUNK_LOGGER_OUTPUT_DIR", _DEFAULT_OUTPUT_DIR)
        )
        self._session_id = session_id or os.getenv("CHUNK_LOGGER_SESSION_ID") or _new_session_id()

        self._sequences: dict[tuple[LogLocation, str | None], int] = {}
        self._handles: dict[LogLocation, TextIO] = {}

        if self._enabled:
            self.get_output_path().mkdir(parents=True, exist_ok=True)

    def is_enabled(self) -> bool:
        return self._enabled

    def get_output_path(self) -> Path:
        """Directory holding this session's JSONL files."""
        return self._output_dir / self._session_id

    def get_info(self) -> dict[str, Any]:
        return {
            "enabled": self._enabled,
            "output_dir": str(self._output_dir),
            "session_id": self._session_id,
            "output_path": str(self.get_output_path()),
        }

    def log_chunk(
        self,
        location: LogLocation,
        direction: Direction,
        chunk: Any,
        run_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """
        Append a JSON-compatible chunk to the location's file.

        Sequence numbers restart for every run so entries of concurrent runs
        can be told apart and reordered per run.
        """
        if not self._enabled:
            return

        key = (location, run_id)
        self._sequences[key] = self._sequences.get(key, 0) + 1

        entry = ChunkLogEntry(
            timestamp=int(time.time() * 1000),
            session_id=self._session_id,
            run_id=run_id,
            location=location,
            direction=direction,
            sequence_number=self._sequences[key],
            chunk=chunk,
            metadata=metadata,
        )
        self._handle(location).write(json.dumps(asdict(entry), ensure_ascii=False) + "\n")

    def log_agent_event(self, event: AgentEvent, run_id: str | None = None) -> None:
        """Record an inbound agent event in its codec (camelCase) form."""
        self.log_chunk("agent-event", "in", event.model_dump(mode="json", by_alias=True), run_id)

    def log_agui_event(self, event: BaseAguiEvent, run_id: str | None = None) -> None:
        """Record an outbound AG-UI event exactly as it goes on the wire."""
        self.log_chunk(
            "agui-event",
            "out",
            event.model_dump(mode="json", by_alias=True, exclude_none=True),
            run_id,
        )

    def _handle(self, location: LogLocation) -> TextIO:
        handle = self._handles.get(location)
        if handle is None:
            path = self.get_output_path() / f"{location}.jsonl"
            # Line buffered: an interrupted run still leaves whole lines
            handle = path.open("a", encoding="utf-8", buffering=1)
            self._handles[location] = handle
        return handle

    def close(self) -> None:
        for handle in self._handles.values():
            handle.close()
        self._handles.clear()

    def __enter__(self) -> "ChunkLogger":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def _new_session_id() -> str:
    return f"session-{datetime.now(UTC).strftime('%Y-%m-%d-%H%M%S')}"


def read_chunks(
    session_dir: str | Path, location: LogLocation, run_id: str | None = None
) -> list[ChunkLogEntry]:
    """
    Read recorded entries of one location, optionally filtered to one run.

    Raises:
        FileNotFoundError: If the session has no file for this location
    """
    path = Path(session_dir) / f"{location}.jsonl"
    if not path.exists():
        msg = f"JSONL file not found: {path}"
        raise FileNotFoundError(msg)

    entries: list[ChunkLogEntry] = []
    with path.open(encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            entry = ChunkLogEntry(**json.loads(line))
            if run_id is None or entry.run_id == run_id:
                entries.append(entry)
    return entries


def load_agent_events(session_dir: str | Path, run_id: str | None = None) -> list[AgentEvent]:
    """Rebuild the agent events of a recorded session (or one run) for re-translation."""
    entries = read_chunks(session_dir, "agent-event", run_id)
    entries.sort(key=lambda e: (e.run_id or "", e.sequence_number))
    return [AgentEvent.model_validate(entry.chunk) for entry in entries]


# Process-wide recorder used by the run orchestrator
chunk_logger = ChunkLogger()
