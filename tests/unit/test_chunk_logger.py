"""
Tests for ChunkLogger.

Covers environment configuration and the JSONL output written for
agent-event (in) and agui-event (out) locations.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from agui_stream_protocol import ChunkLogger, ToolCallEndEvent, load_agent_events, read_chunks
from tests.utils import text_event, tool_use_event


class TestChunkLoggerEnvironment:
    def test_disabled_by_default(self) -> None:
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("CHUNK_LOGGER_ENABLED", None)

            chunk_logger = ChunkLogger()

        assert chunk_logger.is_enabled() is False

    def test_reads_environment_variables(self, tmp_path: Path) -> None:
        # given
        env = {
            "CHUNK_LOGGER_ENABLED": "true",
            "CHUNK_LOGGER_OUTPUT_DIR": str(tmp_path),
            "CHUNK_LOGGER_SESSION_ID": "session-env",
        }

        # when
        with patch.dict(os.environ, env):
            chunk_logger = ChunkLogger()

        # then
        assert chunk_logger.is_enabled() is True
        assert chunk_logger.get_output_path() == tmp_path / "session-env"
        assert (tmp_path / "session-env").is_dir()

    def test_generated_session_id(self) -> None:
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("CHUNK_LOGGER_SESSION_ID", None)

            chunk_logger = ChunkLogger(enabled=False)

        assert chunk_logger.get_info()["session_id"].startswith("session-")


class TestChunkLoggerOutput:
    def test_writes_jsonl_per_location(self, tmp_path: Path) -> None:
        # given
        with ChunkLogger(enabled=True, output_dir=str(tmp_path), session_id="s1") as chunk_logger:
            # when
            chunk_logger.log_chunk("agent-event", "in", {"kind": "REASONING"}, run_id="r1")
            chunk_logger.log_chunk("agui-event", "out", {"type": "RUN_STARTED"}, run_id="r1")
            chunk_logger.log_chunk("agui-event", "out", {"type": "RUN_FINISHED"}, run_id="r1")

        # then
        agent_lines = (tmp_path / "s1" / "agent-event.jsonl").read_text().splitlines()
        agui_lines = (tmp_path / "s1" / "agui-event.jsonl").read_text().splitlines()
        assert len(agent_lines) == 1
        assert [json.loads(line)["sequence_number"] for line in agui_lines] == [1, 2]

        entry = json.loads(agui_lines[1])
        assert entry["run_id"] == "r1"
        assert entry["direction"] == "out"
        assert entry["chunk"] == {"type": "RUN_FINISHED"}

    def test_disabled_logger_writes_nothing(self, tmp_path: Path) -> None:
        chunk_logger = ChunkLogger(enabled=False, output_dir=str(tmp_path), session_id="s1")

        chunk_logger.log_chunk("agent-event", "in", {"kind": "REASONING"})

        assert not (tmp_path / "s1").exists()

    def test_sequence_numbers_are_per_run(self, tmp_path: Path) -> None:
        with ChunkLogger(enabled=True, output_dir=str(tmp_path), session_id="s1") as chunk_logger:
            chunk_logger.log_chunk("agui-event", "out", {"type": "RUN_STARTED"}, run_id="r1")
            chunk_logger.log_chunk("agui-event", "out", {"type": "RUN_STARTED"}, run_id="r2")
            chunk_logger.log_chunk("agui-event", "out", {"type": "RUN_FINISHED"}, run_id="r1")

        entries = read_chunks(tmp_path / "s1", "agui-event")

        assert [(e.run_id, e.sequence_number) for e in entries] == [
            ("r1", 1),
            ("r2", 1),
            ("r1", 2),
        ]


class TestReplay:
    def test_recorded_agent_events_are_reloaded(self, tmp_path: Path) -> None:
        # given
        first = text_event("hello", message_id="m1")
        second = tool_use_event("tc-1", "search", {"q": "x"})
        other_run = text_event("elsewhere")
        with ChunkLogger(enabled=True, output_dir=str(tmp_path), session_id="s1") as chunk_logger:
            chunk_logger.log_agent_event(first, run_id="r1")
            chunk_logger.log_agent_event(other_run, run_id="r2")
            chunk_logger.log_agent_event(second, run_id="r1")

        # when
        events = load_agent_events(tmp_path / "s1", run_id="r1")

        # then
        assert events == [first, second]

    def test_agui_events_are_recorded_in_wire_form(self, tmp_path: Path) -> None:
        with ChunkLogger(enabled=True, output_dir=str(tmp_path), session_id="s1") as chunk_logger:
            chunk_logger.log_agui_event(ToolCallEndEvent(tool_call_id="tc-1"), run_id="r1")

        (entry,) = read_chunks(tmp_path / "s1", "agui-event", run_id="r1")

        assert entry.direction == "out"
        assert entry.chunk == {"type": "TOOL_CALL_END", "toolCallId": "tc-1"}

    def test_missing_location_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_chunks(tmp_path, "agent-event")
