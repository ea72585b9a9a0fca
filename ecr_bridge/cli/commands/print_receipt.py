import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console

from ecr_bridge.application.bridge import Bridge
from ecr_bridge.application.dto.print_request import format_validation_error, parse_print_request
from ecr_bridge.cli.formatters.result_formatter import format_outcome
from ecr_bridge.cli.theme import theme
from ecr_bridge.cli.utils import get_settings, parse_item_option
from ecr_bridge.domain.entities.outcome import CorrelationOutcome, Succeeded, TimedOut
from ecr_bridge.domain.entities.transaction import Transaction
from ecr_bridge.domain.errors import ArtifactWriteError

console = Console()

EXIT_FAILED = 1
EXIT_TIMED_OUT = 2


def exit_code_for(outcome: CorrelationOutcome) -> int:
    match outcome:
        case Succeeded():
            return 0
        case TimedOut():
            return EXIT_TIMED_OUT
    return EXIT_FAILED


def print_receipt(
    ctx: typer.Context,
    product: str | None = typer.Option(None, "--product", help="Product name (legacy format)"),
    duration: str = typer.Option("", "--duration", help="Duration label, e.g. '1h 15m'"),
    price: float | None = typer.Option(None, "--price", help="Unit price (legacy format)"),
    item: list[str] = typer.Option(
        [], "--item", "-i", help="Line item as NAME:PRICE or NAME:QTY:PRICE (repeatable)"
    ),
    payment: str = typer.Option(..., "--payment", "-p", help="Payment type: CASH or CARD"),
    timeout_ms: int | None = typer.Option(None, "--timeout-ms", help="Response timeout"),
) -> None:
    """Print a receipt and wait for the ECR Bridge response."""
    payload: dict[str, object] = {"paymentType": payment.upper()}
    if item:
        payload["items"] = [parse_item_option(raw) for raw in item]
    if product is not None or price is not None:
        payload.update({"productName": product, "duration": duration, "price": price})

    try:
        transaction = parse_print_request(payload)
    except ValidationError as e:
        typer.echo(f"Error: {format_validation_error(e)}", err=True)
        raise typer.Exit(1) from None

    bridge = Bridge(get_settings(ctx))
    outcome = asyncio.run(_submit(bridge, transaction, timeout_ms))
    format_outcome(console, outcome)
    raise typer.Exit(exit_code_for(outcome))


async def _submit(
    bridge: Bridge, transaction: Transaction, timeout_ms: int | None
) -> CorrelationOutcome:
    await bridge.initialize()
    try:
        return await bridge.submit_receipt.execute(transaction, timeout_ms)
    except ArtifactWriteError as e:
        console.print(f"[{theme.ERROR_BOLD}]Failed to write receipt file:[/] {e}")
        raise typer.Exit(EXIT_FAILED) from None
