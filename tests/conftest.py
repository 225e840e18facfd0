"""Pytest configuration and shared fixtures for tests."""

from collections.abc import Iterator

import pytest
from loguru import logger

from agui_stream_protocol import AdapterConfig, AguiMessage, RunAgentInput


@pytest.fixture
def run_input() -> RunAgentInput:
    """Minimal run input: one user message."""
    return RunAgentInput(
        thread_id="t1",
        run_id="r1",
        messages=[AguiMessage.user("m1", "Go")],
    )


@pytest.fixture
def config() -> AdapterConfig:
    return AdapterConfig.default()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru output (WARNING and above) for assertions."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="WARNING")
    yield messages
    logger.remove(handler_id)
