"""Correlation of inbox artifacts with the driver's outbox responses.

The driver gives no direct signal: it moves the command file into the
success outbox (BonOK) or the error outbox (BonErr). Both are polled until
the file shows up or the deadline passes.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from pathlib import Path

from loguru import logger

from ecr_bridge.domain.entities.outcome import CorrelationOutcome, Failed, Succeeded, TimedOut
from ecr_bridge.domain.errors import CorrelationAlreadyResolvedError
from ecr_bridge.domain.ports.mailbox_port import MailboxPort
from ecr_bridge.domain.services.error_decoder import decode_error
from ecr_bridge.domain.value_objects.correlation_state import CorrelationState

DEFAULT_POLL_INTERVAL_MS = 200


class Correlation:
    """One in-flight request. Resolves exactly once, never reused."""

    def __init__(self, artifact_name: str, expected_echo: str | None, timeout_ms: int) -> None:
        self.artifact_name = artifact_name
        self.expected_echo = expected_echo
        self.timeout_ms = timeout_ms
        self.state = CorrelationState.WAITING
        self.outcome: CorrelationOutcome | None = None

    def resolve(self, outcome: CorrelationOutcome) -> CorrelationOutcome:
        if self.state is not CorrelationState.WAITING:
            raise CorrelationAlreadyResolvedError(self.artifact_name, self.state.value)
        self.state = outcome.state
        self.outcome = outcome
        return outcome


class ResponseCorrelator:
    def __init__(
        self,
        mailbox: MailboxPort,
        ok_dir: Path,
        err_dir: Path,
        default_timeout_ms: int,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.mailbox = mailbox
        self.ok_dir = ok_dir
        self.err_dir = err_dir
        self.default_timeout_ms = default_timeout_ms
        self.poll_interval_ms = poll_interval_ms
        self._clock = clock
        self._sleep = sleep
        self._pending: set[asyncio.Task[CorrelationOutcome]] = set()

    def spawn(
        self,
        artifact_name: str,
        expected_echo: str | None = None,
        timeout_ms: int | None = None,
    ) -> "asyncio.Task[CorrelationOutcome]":
        """Start polling as a task the caller can await, shield or cancel."""
        task = asyncio.create_task(
            self.await_response(artifact_name, expected_echo, timeout_ms),
            name=f"correlate:{artifact_name}",
        )
        # Keep a reference so a shielded task is not collected mid-poll
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def await_response(
        self,
        artifact_name: str,
        expected_echo: str | None = None,
        timeout_ms: int | None = None,
    ) -> CorrelationOutcome:
        timeout_ms = timeout_ms if timeout_ms is not None else self.default_timeout_ms
        correlation = Correlation(artifact_name, expected_echo, timeout_ms)
        timeout_s = timeout_ms / 1000
        interval_s = self.poll_interval_ms / 1000

        await self.mailbox.ensure_directory(self.ok_dir)
        await self.mailbox.ensure_directory(self.err_dir)

        logger.info(
            "Waiting for ECR Bridge response for {} (ok={}, err={}, timeout={}ms)",
            artifact_name,
            self.ok_dir,
            self.err_dir,
            timeout_ms,
        )

        start = self._clock()
        while True:
            elapsed = self._clock() - start
            if elapsed >= timeout_s:
                break

            outcome = await self._probe(correlation, elapsed)
            if outcome is not None:
                return outcome

            remaining = timeout_s - (self._clock() - start)
            if remaining > 0:
                await self._sleep(min(interval_s, remaining))

        # A response may have landed right at the deadline
        elapsed = self._clock() - start
        outcome = await self._probe(correlation, elapsed)
        if outcome is not None:
            logger.warning("Response for {} found at deadline", artifact_name)
            return outcome

        logger.warning(
            "Timeout waiting for ECR Bridge response for {} after {}ms (ok dir: {}, err dir: {})",
            artifact_name,
            timeout_ms,
            await self.mailbox.list_directory(self.ok_dir),
            await self.mailbox.list_directory(self.err_dir),
        )
        return correlation.resolve(TimedOut(artifact_name=artifact_name, timeout_ms=timeout_ms))

    async def _probe(self, correlation: Correlation, elapsed_s: float) -> CorrelationOutcome | None:
        """Check both outboxes once. Errors take priority over success."""
        name = correlation.artifact_name

        err_file = await self.mailbox.find_by_name(self.err_dir, name)
        if err_file is not None:
            content = await self.mailbox.read(err_file)
            if content is not None:
                return correlation.resolve(self._failed(correlation, err_file, content, elapsed_s))
            logger.debug("Error artifact {} vanished before it could be read", err_file)

        ok_file = await self.mailbox.find_by_name(self.ok_dir, name)
        if ok_file is not None:
            logger.info(
                "ECR Bridge returned success for {} ({}, {:.0f}ms)", name, ok_file, elapsed_s * 1000
            )
            return correlation.resolve(Succeeded(artifact_name=name))

        return None

    def _failed(
        self, correlation: Correlation, err_file: Path, content: str, elapsed_s: float
    ) -> Failed:
        parsed = decode_error(content)

        expected = correlation.expected_echo
        if expected and parsed.original_command:
            if parsed.original_command.strip() != expected.strip():
                logger.warning(
                    "Error file command mismatch for {}: expected {!r}, error file has {!r}",
                    correlation.artifact_name,
                    expected,
                    parsed.original_command,
                )
            else:
                logger.debug("Error file command matches expected command")

        logger.error(
            "ECR Bridge returned error for {} ({}, {:.0f}ms): {}",
            correlation.artifact_name,
            err_file,
            elapsed_s * 1000,
            parsed.error_message,
        )
        return Failed(artifact_name=correlation.artifact_name, details=parsed.error_message)
