from collections.abc import Callable
from datetime import datetime

from loguru import logger

from ecr_bridge.application.services.response_correlator import ResponseCorrelator
from ecr_bridge.application.use_cases.submit_transaction import (
    SubmitReceipt,
    SubmitTransaction,
    SubmitZReport,
)
from ecr_bridge.domain.ports.mailbox_port import MailboxPort
from ecr_bridge.domain.value_objects.bridge_mode import BridgeMode
from ecr_bridge.infrastructure.config.settings import BridgeSettings
from ecr_bridge.infrastructure.persistence.file_mailbox import FileMailbox


class Bridge:
    """Wires the mailbox, correlator and use cases for one configuration."""

    def __init__(
        self,
        settings: BridgeSettings,
        mailbox: MailboxPort | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings
        self.mailbox = mailbox or FileMailbox()
        self.correlator = ResponseCorrelator(
            mailbox=self.mailbox,
            ok_dir=settings.bon_ok_path,
            err_dir=settings.bon_err_path,
            default_timeout_ms=settings.response_timeout_ms,
            poll_interval_ms=settings.poll_interval_ms,
        )
        submit = SubmitTransaction(
            mailbox=self.mailbox,
            correlator=self.correlator,
            inbox_dir=settings.bon_path,
            mode=settings.mode,
            render_options=settings.render_options,
            now=now,
        )
        self.submit_receipt = SubmitReceipt(submit)
        self.submit_z_report = SubmitZReport(submit, timeout_ms=settings.z_report_timeout_ms)

    async def initialize(self) -> bool:
        """Ensure the inbox and both outboxes exist."""
        all_ok = True
        for directory in (
            self.settings.bon_path,
            self.settings.bon_ok_path,
            self.settings.bon_err_path,
        ):
            if await self.mailbox.ensure_directory(directory):
                logger.info("Directory ready: {}", directory)
            else:
                logger.error("Failed to initialize directory: {}", directory)
                all_ok = False

        if self.settings.mode is BridgeMode.LIVE:
            logger.info("Bridge mode: LIVE - Fiscal receipts")
        else:
            logger.info("Bridge mode: TEST - Non-fiscal test receipts")
        return all_ok
