"""
Adapter Configuration Tests

Verifies defaults, environment variable parsing and dotenv loading.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from agui_stream_protocol import AdapterConfig
from agui_stream_protocol.config import DEFAULT_MAX_UNPACK_DEPTH


_ENV_KEYS = [
    "AGUI_MAX_UNPACK_DEPTH",
    "AGUI_LITERAL_JOIN",
    "AGUI_EMIT_THINKING",
    "AGUI_EMIT_TOOL_CALL_ARGS",
    "AGUI_RUN_TIMEOUT_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env():
    """Remove adapter env vars for the duration of a test."""
    with patch.dict(os.environ, {}, clear=False):
        for key in _ENV_KEYS:
            os.environ.pop(key, None)
        yield


class TestDefaults:
    def test_default_values(self) -> None:
        config = AdapterConfig.default()

        assert config.max_unpack_depth == DEFAULT_MAX_UNPACK_DEPTH
        assert config.literal_join == ""
        assert config.emit_thinking is True
        assert config.emit_tool_call_args is True
        assert config.run_timeout_seconds is None

    def test_from_env_without_variables_matches_default(self) -> None:
        assert AdapterConfig.from_env() == AdapterConfig.default()

    def test_config_is_immutable(self) -> None:
        config = AdapterConfig.default()

        with pytest.raises(ValidationError):
            config.max_unpack_depth = 3  # type: ignore[misc]

    @pytest.mark.parametrize("depth", [0, -1])
    def test_max_unpack_depth_must_be_positive(self, depth: int) -> None:
        with pytest.raises(ValidationError):
            AdapterConfig(max_unpack_depth=depth)


class TestFromEnv:
    def test_reads_all_variables(self) -> None:
        # given
        env = {
            "AGUI_MAX_UNPACK_DEPTH": "3",
            "AGUI_LITERAL_JOIN": "\n",
            "AGUI_EMIT_THINKING": "false",
            "AGUI_EMIT_TOOL_CALL_ARGS": "0",
            "AGUI_RUN_TIMEOUT_SECONDS": "2.5",
        }

        # when
        with patch.dict(os.environ, env):
            config = AdapterConfig.from_env()

        # then
        assert config.max_unpack_depth == 3
        assert config.literal_join == "\n"
        assert config.emit_thinking is False
        assert config.emit_tool_call_args is False
        assert config.run_timeout_seconds == 2.5

    @pytest.mark.parametrize(
        "env",
        [
            pytest.param({"AGUI_MAX_UNPACK_DEPTH": "deep"}, id="depth-not-int"),
            pytest.param({"AGUI_MAX_UNPACK_DEPTH": "0"}, id="depth-zero"),
            pytest.param({"AGUI_EMIT_THINKING": "maybe"}, id="bool-invalid"),
            pytest.param({"AGUI_RUN_TIMEOUT_SECONDS": "soon"}, id="timeout-not-float"),
            pytest.param({"AGUI_RUN_TIMEOUT_SECONDS": "-1"}, id="timeout-negative"),
        ],
    )
    def test_invalid_values_fall_back_to_defaults(
        self, env: dict[str, str], log_messages: list[str]
    ) -> None:
        with patch.dict(os.environ, env):
            config = AdapterConfig.from_env()

        assert config == AdapterConfig.default()
        assert any("[CONFIG]" in message for message in log_messages)

    def test_boolean_parsing_is_case_insensitive(self) -> None:
        with patch.dict(os.environ, {"AGUI_EMIT_THINKING": "FALSE"}):
            assert AdapterConfig.from_env().emit_thinking is False

    def test_loads_dotenv_file(self, tmp_path: Path) -> None:
        # given
        env_file = tmp_path / ".env.local"
        env_file.write_text("AGUI_MAX_UNPACK_DEPTH=4\n", encoding="utf-8")

        # when
        config = AdapterConfig.from_env(str(env_file))

        # then
        assert config.max_unpack_depth == 4

    def test_existing_env_wins_over_dotenv(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env.local"
        env_file.write_text("AGUI_MAX_UNPACK_DEPTH=4\n", encoding="utf-8")

        with patch.dict(os.environ, {"AGUI_MAX_UNPACK_DEPTH": "6"}):
            config = AdapterConfig.from_env(str(env_file))

        assert config.max_unpack_depth == 6
