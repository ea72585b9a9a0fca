from pathlib import Path

import typer
from rich.console import Console

from ecr_bridge.cli.formatters.result_formatter import format_parsed_error
from ecr_bridge.domain.services.error_decoder import decode_error

console = Console()


def decode(
    path: Path = typer.Argument(..., help="Error artifact from the BonErr directory"),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed error as JSON"),
) -> None:
    """Decode an ECR Bridge error file."""
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        typer.echo(f"Error: cannot read {path}: {e}", err=True)
        raise typer.Exit(1) from None

    parsed = decode_error(content)
    if as_json:
        typer.echo(parsed.model_dump_json(indent=2))
    else:
        format_parsed_error(console, parsed)
