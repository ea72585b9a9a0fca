from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ecr_bridge.cli.theme import theme
from ecr_bridge.domain.entities.outcome import CorrelationOutcome, Failed, Succeeded, TimedOut
from ecr_bridge.domain.entities.parsed_error import ParsedError


def format_outcome(console: Console, outcome: CorrelationOutcome) -> None:
    # Names and details come from driver files and may contain markup
    match outcome:
        case Succeeded(artifact_name=name):
            console.print(f"\n[{theme.SUCCESS_BOLD}]✅ Printed[/] [{theme.DIM}]{escape(name)}[/]")
        case Failed(artifact_name=name, details=details):
            console.print(
                f"\n[{theme.ERROR_BOLD}]❌ ECR Bridge error[/] [{theme.DIM}]{escape(name)}[/]"
            )
            console.print(f"[{theme.ERROR}]   {escape(details)}[/]")
        case TimedOut(artifact_name=name, timeout_ms=timeout_ms):
            console.print(
                f"\n[{theme.WARNING_BOLD}]⏱  No response after {timeout_ms}ms[/] "
                f"[{theme.DIM}]{escape(name)}[/]"
            )
            console.print(
                f"[{theme.WARNING}]   The driver may still process the command. "
                "Check the printer before submitting again.[/]"
            )


def format_parsed_error(console: Console, parsed: ParsedError) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style=theme.TABLE_LABEL)
    table.add_column("Value", style=theme.TABLE_VALUE)

    table.add_row("Command", escape(parsed.original_command) or "-")
    table.add_row("Timestamp", parsed.timestamp or "-")
    table.add_row("Error", escape(parsed.error_message))

    console.print(Panel(table, title="Error artifact", border_style=theme.BORDER_ERROR))
