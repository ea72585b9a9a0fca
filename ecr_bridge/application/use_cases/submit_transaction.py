import asyncio
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from loguru import logger

from ecr_bridge.application.services.response_correlator import ResponseCorrelator
from ecr_bridge.domain.entities.outcome import CorrelationOutcome
from ecr_bridge.domain.entities.transaction import Transaction, ZReport
from ecr_bridge.domain.errors import ArtifactWriteError
from ecr_bridge.domain.ports.mailbox_port import MailboxPort
from ecr_bridge.domain.services.artifact_naming import generate_artifact_name
from ecr_bridge.domain.services.command_renderer import RenderOptions, render_command
from ecr_bridge.domain.value_objects.bridge_mode import BridgeMode


class SubmitTransaction:
    """Render a command, drop it in the inbox and wait for the driver's verdict."""

    def __init__(
        self,
        mailbox: MailboxPort,
        correlator: ResponseCorrelator,
        inbox_dir: Path,
        mode: BridgeMode,
        render_options: RenderOptions | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.mailbox = mailbox
        self.correlator = correlator
        self.inbox_dir = inbox_dir
        self.mode = mode
        self.render_options = render_options or RenderOptions()
        self._now = now

    async def execute(
        self,
        transaction: Transaction | ZReport,
        timeout_ms: int | None = None,
    ) -> CorrelationOutcome:
        """Submit one transaction.

        Raises:
            ArtifactWriteError: if the command file could not be written;
                no polling happens in that case.
        """
        rendered = render_command(transaction, self.mode, self.render_options)
        artifact_name = generate_artifact_name(self._now())

        if not await self.mailbox.write(self.inbox_dir, artifact_name, rendered.content):
            raise ArtifactWriteError(artifact_name, str(self.inbox_dir))

        logger.info(
            "Mode {}: {} written as {}",
            self.mode.value.upper(),
            "Z report" if isinstance(transaction, ZReport) else "receipt",
            artifact_name,
        )
        logger.debug("Command content for {}:\n{}", artifact_name, rendered.content)

        # Polling outlives a cancelled caller and ends at its own deadline
        task = self.correlator.spawn(artifact_name, rendered.echo, timeout_ms)
        return await asyncio.shield(task)


class SubmitReceipt:
    def __init__(self, submit: SubmitTransaction) -> None:
        self.submit = submit

    async def execute(
        self, transaction: Transaction, timeout_ms: int | None = None
    ) -> CorrelationOutcome:
        return await self.submit.execute(transaction, timeout_ms)


class SubmitZReport:
    def __init__(self, submit: SubmitTransaction, timeout_ms: int) -> None:
        self.submit = submit
        self.timeout_ms = timeout_ms

    async def execute(self, timeout_ms: int | None = None) -> CorrelationOutcome:
        return await self.submit.execute(ZReport(), timeout_ms or self.timeout_ms)
