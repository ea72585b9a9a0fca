"""Tests for the submit use cases."""

import asyncio
from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from ecr_bridge.application.services import ResponseCorrelator
from ecr_bridge.application.use_cases import SubmitReceipt, SubmitTransaction, SubmitZReport
from ecr_bridge.domain.entities import Succeeded, TimedOut, Transaction
from ecr_bridge.domain.errors import ArtifactWriteError
from ecr_bridge.domain.services import RenderOptions
from ecr_bridge.domain.value_objects import BridgeMode, PaymentType
from ecr_bridge.infrastructure.persistence import FileMailbox

FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0)
NAME = "bon_20250101120000.txt"


@pytest.fixture
def coffee() -> Transaction:
    return Transaction(payment_type=PaymentType.CASH, product_name="Coffee", duration="", price=5.0)


@pytest.fixture
def mock_mailbox() -> AsyncMock:
    mailbox = AsyncMock()
    mailbox.write.return_value = True
    return mailbox


@pytest.fixture
def mock_correlator() -> MagicMock:
    correlator = MagicMock(spec=ResponseCorrelator)

    async def respond(name: str, echo: str | None, timeout_ms: int | None) -> Succeeded:
        return Succeeded(artifact_name=name)

    correlator.spawn.side_effect = lambda *args: asyncio.ensure_future(respond(*args))
    return correlator


def make_submit(mailbox: AsyncMock, correlator: MagicMock, mode: BridgeMode) -> SubmitTransaction:
    return SubmitTransaction(
        mailbox=mailbox,
        correlator=correlator,
        inbox_dir=Path("/ecr/Bon"),
        mode=mode,
        render_options=RenderOptions(),
        now=lambda: FIXED_NOW,
    )


class TestSubmitReceipt:
    async def test_writes_then_correlates(
        self, mock_mailbox: AsyncMock, mock_correlator: MagicMock, coffee: Transaction
    ) -> None:
        use_case = SubmitReceipt(make_submit(mock_mailbox, mock_correlator, BridgeMode.LIVE))

        outcome = await use_case.execute(coffee)

        assert outcome == Succeeded(artifact_name=NAME)
        mock_mailbox.write.assert_awaited_once_with(
            Path("/ecr/Bon"), NAME, "FISCAL\nI;Coffee ();1;5.00;1\nP;1;0"
        )
        mock_correlator.spawn.assert_called_once_with(
            NAME, "FISCAL\nI;Coffee ();1;5.00;1\nP;1;0", None
        )

    async def test_test_mode_writes_text_slip(
        self, mock_mailbox: AsyncMock, mock_correlator: MagicMock, coffee: Transaction
    ) -> None:
        use_case = SubmitReceipt(make_submit(mock_mailbox, mock_correlator, BridgeMode.TEST))

        await use_case.execute(coffee, timeout_ms=500)

        content = mock_mailbox.write.await_args.args[2]
        assert content.startswith("TEXT\n")
        assert mock_correlator.spawn.call_args.args[2] == 500

    async def test_write_failure_skips_polling(
        self, mock_mailbox: AsyncMock, mock_correlator: MagicMock, coffee: Transaction
    ) -> None:
        mock_mailbox.write.return_value = False
        use_case = SubmitReceipt(make_submit(mock_mailbox, mock_correlator, BridgeMode.LIVE))

        with pytest.raises(ArtifactWriteError) as exc_info:
            await use_case.execute(coffee)

        assert exc_info.value.artifact_name == NAME
        mock_correlator.spawn.assert_not_called()


class TestSubmitZReport:
    async def test_uses_report_literal_and_timeout(
        self, mock_mailbox: AsyncMock, mock_correlator: MagicMock
    ) -> None:
        use_case = SubmitZReport(
            make_submit(mock_mailbox, mock_correlator, BridgeMode.LIVE), timeout_ms=30_000
        )

        await use_case.execute()

        mock_mailbox.write.assert_awaited_once_with(Path("/ecr/Bon"), NAME, "Z;1")
        mock_correlator.spawn.assert_called_once_with(NAME, "Z;1", 30_000)

    async def test_timeout_override(
        self, mock_mailbox: AsyncMock, mock_correlator: MagicMock
    ) -> None:
        use_case = SubmitZReport(
            make_submit(mock_mailbox, mock_correlator, BridgeMode.TEST), timeout_ms=30_000
        )

        await use_case.execute(timeout_ms=1000)

        assert mock_correlator.spawn.call_args.args[2] == 1000


async def test_cancelled_caller_does_not_stop_polling(
    bon_dir: Path, ok_dir: Path, err_dir: Path, coffee: Transaction
) -> None:
    mailbox = FileMailbox()
    correlator = ResponseCorrelator(mailbox, ok_dir, err_dir, 200, poll_interval_ms=10)
    submit = SubmitTransaction(
        mailbox, correlator, bon_dir, BridgeMode.LIVE, now=lambda: FIXED_NOW
    )

    caller = asyncio.create_task(submit.execute(coffee))
    for _ in range(200):
        if correlator._pending:
            break
        await asyncio.sleep(0.01)
    pending = set(correlator._pending)
    caller.cancel()

    with pytest.raises(asyncio.CancelledError):
        await caller

    assert len(pending) == 1
    (polling,) = pending
    assert not polling.cancelled()
    outcome = await polling
    assert isinstance(outcome, TimedOut)

