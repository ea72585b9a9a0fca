import asyncio

import typer
from rich.console import Console

from ecr_bridge.application.bridge import Bridge
from ecr_bridge.cli.commands.print_receipt import EXIT_FAILED, exit_code_for
from ecr_bridge.cli.formatters.result_formatter import format_outcome
from ecr_bridge.cli.theme import theme
from ecr_bridge.cli.utils import get_settings
from ecr_bridge.domain.entities.outcome import CorrelationOutcome
from ecr_bridge.domain.errors import ArtifactWriteError

console = Console()


def z_report(
    ctx: typer.Context,
    timeout_ms: int | None = typer.Option(None, "--timeout-ms", help="Response timeout"),
) -> None:
    """Issue the daily Z report."""
    bridge = Bridge(get_settings(ctx))
    outcome = asyncio.run(_submit(bridge, timeout_ms))
    format_outcome(console, outcome)
    raise typer.Exit(exit_code_for(outcome))


async def _submit(bridge: Bridge, timeout_ms: int | None) -> CorrelationOutcome:
    await bridge.initialize()
    try:
        return await bridge.submit_z_report.execute(timeout_ms)
    except ArtifactWriteError as e:
        console.print(f"[{theme.ERROR_BOLD}]Failed to write Z report file:[/] {e}")
        raise typer.Exit(EXIT_FAILED) from None
