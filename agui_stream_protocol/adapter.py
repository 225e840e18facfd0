"""
Agent to AG-UI Run Orchestrator

Drives an agent's event stream to completion and converts it to the AG-UI
protocol:

    RUN_STARTED → translated events (arrival order) → closing framing → RUN_FINISHED
    RUN_STARTED → translated events → RUN_ERROR          (upstream failure / timeout)

The output is a lazy, single-pass async generator. The next upstream event
is only pulled when the consumer asks for more output, so a slow consumer
throttles the agent instead of growing a buffer. Closing the generator (or
cancelling the consuming task) stops consumption and closes the upstream
source; events already yielded are not retracted.
"""

import asyncio
import traceback
from collections.abc import AsyncGenerator, AsyncIterable, AsyncIterator
from typing import Protocol

from loguru import logger

from .chunk_logger import chunk_logger
from .config import AdapterConfig
from .content import AgentEvent, Message
from .protocol.events import (
    BaseAguiEvent,
    RunErrorEvent,
    RunFinishedEvent,
    RunStartedEvent,
)
from .protocol.run_input import RunAgentInput, to_agent_messages
from .translator import EventTranslator, NestedTraceError, ProtocolViolation


AGENT_ERROR_CODE = "AGENT_ERROR"
RUN_TIMEOUT_CODE = "RUN_TIMEOUT"


class AgentRuntime(Protocol):
    """The agent runtime producing the internal event stream."""

    def stream(self, messages: list[Message]) -> AsyncIterator[AgentEvent]: ...


async def _close_source(event_stream: AsyncIterable[AgentEvent]) -> None:
    aclose = getattr(event_stream, "aclose", None)
    if aclose is not None:
        await aclose()


def _log_out(event: BaseAguiEvent, run_id: str) -> None:
    chunk_logger.log_agui_event(event, run_id)


async def stream_agent_to_agui(  # noqa: C901
    event_stream: AsyncIterable[AgentEvent],
    run_input: RunAgentInput,
    translator: EventTranslator | None = None,
    config: AdapterConfig | None = None,
) -> AsyncGenerator[BaseAguiEvent]:
    """
    Convert an agent event stream to AG-UI events.

    Args:
        event_stream: Agent events for this run, in production order
        run_input: The run's input (threadId/runId bracket the stream)
        translator: Translator to use; pass one to inspect violations/errors afterwards.
            The run then uses the translator's config.
        config: Used to create a translator when none is given

    Yields:
        AG-UI events

    Raises:
        ValueError: If both translator and config are given
    """
    if translator is not None and config is not None:
        msg = "Pass either a translator or a config, not both"
        raise ValueError(msg)
    translator = translator or EventTranslator(config)
    timeout = translator.config.run_timeout_seconds
    thread_id = run_input.thread_id
    run_id = run_input.run_id

    logger.info(f"[RUN] Starting run {run_id} (thread {thread_id})")
    started = RunStartedEvent(thread_id=thread_id, run_id=run_id)
    _log_out(started, run_id)
    yield started

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout if timeout is not None else None
    iterator = aiter(event_stream)
    event_count = 0
    error_event: RunErrorEvent | None = None

    try:
        try:
            while True:
                scope = asyncio.timeout_at(deadline)
                try:
                    async with scope:
                        event = await anext(iterator)
                except StopAsyncIteration:
                    break
                except TimeoutError:
                    # Only our own deadline is a run timeout; anything else is an agent failure
                    if not scope.expired():
                        raise
                    logger.error(
                        f"[RUN] Run {run_id} timed out after {timeout}s ({event_count} events)"
                    )
                    error_event = RunErrorEvent(
                        message=f"Run timed out after {timeout} seconds",
                        code=RUN_TIMEOUT_CODE,
                    )
                    break

                event_count += 1
                chunk_logger.log_agent_event(event, run_id)

                for agui_event in translator.translate(event):
                    _log_out(agui_event, run_id)
                    yield agui_event

        except Exception as e:
            logger.error(f"[RUN] Agent stream failed for run {run_id}: {e!s}")
            logger.error(f"[RUN] Traceback:\n{traceback.format_exc()}")
            error_event = RunErrorEvent(message=str(e) or type(e).__name__, code=AGENT_ERROR_CODE)

        # Close open text framing on both the success and the error path
        for agui_event in translator.finish():
            _log_out(agui_event, run_id)
            yield agui_event

        if translator.violations:
            # Each violation was already warned about when it was recorded
            logger.info(
                f"[RUN] Run {run_id} had {len(translator.violations)} protocol violation(s)"
            )

        if error_event is not None:
            _log_out(error_event, run_id)
            yield error_event
            return

        finished = RunFinishedEvent(thread_id=thread_id, run_id=run_id)
        _log_out(finished, run_id)
        logger.info(f"[RUN] Finished run {run_id} ({event_count} agent events)")
        yield finished
    finally:
        await _close_source(event_stream)


class AguiRun:
    """
    One AG-UI run: an async iterable of AG-UI events.

    Single pass; iterate it once. Violations and recoverable errors are
    available while and after iterating.
    """

    def __init__(
        self,
        event_stream: AsyncIterable[AgentEvent],
        run_input: RunAgentInput,
        config: AdapterConfig | None = None,
    ):
        self.run_input = run_input
        self.translator = EventTranslator(config)
        self._source = event_stream
        self._events = stream_agent_to_agui(event_stream, run_input, translator=self.translator)

    def __aiter__(self) -> AsyncGenerator[BaseAguiEvent]:
        return self._events

    @property
    def violations(self) -> list[ProtocolViolation]:
        return list(self.translator.violations)

    @property
    def errors(self) -> list[NestedTraceError]:
        return list(self.translator.errors)

    async def aclose(self) -> None:
        """Cancel the run: stop consuming the agent stream."""
        await self._events.aclose()
        # A run closed before its first event never entered the generator body
        await _close_source(self._source)

    async def collect(self) -> list[BaseAguiEvent]:
        """Drain the run into a list."""
        return [event async for event in self._events]


class AguiAgentAdapter:
    """
    Exposes an agent runtime over AG-UI.

    Each run gets its own translator; runs share nothing mutable and may
    execute concurrently.
    """

    def __init__(self, agent: AgentRuntime, config: AdapterConfig | None = None):
        self.agent = agent
        self.config = config or AdapterConfig.default()

    def run(self, run_input: RunAgentInput) -> AguiRun:
        """Start a run. Nothing is pulled from the agent until the run is iterated."""
        messages = to_agent_messages(run_input.messages)
        return AguiRun(self.agent.stream(messages), run_input, self.config)
