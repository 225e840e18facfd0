"""
Adapter Configuration

Settings for translating agent traces into AG-UI events.

Usage:
    from agui_stream_protocol.config import AdapterConfig

    config = AdapterConfig.default()
    config = AdapterConfig.from_env(".env.local")  # env vars, optionally from a dotenv file

Environment Variables:
    AGUI_MAX_UNPACK_DEPTH: Maximum nesting of agent-as-tool traces (default: 8)
    AGUI_LITERAL_JOIN: Separator for literal tool output text (default: "")
    AGUI_EMIT_THINKING: Surface thinking text as message content (default: true)
    AGUI_EMIT_TOOL_CALL_ARGS: Emit TOOL_CALL_ARGS with the tool input (default: true)
    AGUI_RUN_TIMEOUT_SECONDS: Abort a run after this many seconds (default: unset)

Note:
    Invalid values fall back to the default with a warning.
"""

import os

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_MAX_UNPACK_DEPTH = 8


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    logger.warning(f"[CONFIG] Invalid boolean for {name}={raw!r}, using {default}")
    return default


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:  # nosemgrep: forbid-try-except
        value = int(raw)
    except ValueError:
        logger.warning(f"[CONFIG] Invalid integer for {name}={raw!r}, using {default}")
        return default
    if value < minimum:
        logger.warning(f"[CONFIG] {name}={value} is below {minimum}, using {default}")
        return default
    return value


def _env_timeout(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:  # nosemgrep: forbid-try-except
        value = float(raw)
    except ValueError:
        logger.warning(f"[CONFIG] Invalid timeout for {name}={raw!r}, ignoring")
        return None
    if value <= 0:
        logger.warning(f"[CONFIG] {name}={value} must be positive, ignoring")
        return None
    return value


class AdapterConfig(BaseModel):
    """Translation and run settings. Immutable; one instance may serve many runs."""

    model_config = ConfigDict(frozen=True)

    max_unpack_depth: int = Field(default=DEFAULT_MAX_UNPACK_DEPTH, ge=1)
    # Join policy for literal (non-event) text in a tool result
    literal_join: str = ""
    emit_thinking: bool = True
    emit_tool_call_args: bool = True
    run_timeout_seconds: float | None = Field(default=None, gt=0)

    @classmethod
    def default(cls) -> "AdapterConfig":
        return cls()

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "AdapterConfig":
        """
        Build configuration from environment variables.

        Args:
            env_file: Optional dotenv file loaded first (existing env vars win)
        """
        if env_file is not None:
            load_dotenv(env_file)

        config = cls(
            max_unpack_depth=_env_int("AGUI_MAX_UNPACK_DEPTH", DEFAULT_MAX_UNPACK_DEPTH, minimum=1),
            literal_join=os.getenv("AGUI_LITERAL_JOIN", ""),
            emit_thinking=_env_bool("AGUI_EMIT_THINKING", True),
            emit_tool_call_args=_env_bool("AGUI_EMIT_TOOL_CALL_ARGS", True),
            run_timeout_seconds=_env_timeout("AGUI_RUN_TIMEOUT_SECONDS"),
        )
        logger.debug(f"[CONFIG] Loaded adapter config: {config!r}")
        return config
