import sys
from pathlib import Path

import typer
from loguru import logger

from ecr_bridge.cli.commands import decode, print_receipt, serve, z_report
from ecr_bridge.infrastructure.config.settings import BridgeSettings, SettingsError

LOG_ROTATION = "5 MB"
LOG_RETENTION = 5


def setup_logging(settings: BridgeSettings, verbose: bool = False) -> None:
    """Configure loguru logging.

    app.log gets everything at the configured level, error.log only errors.
    Console output is on outside production or with --verbose.
    """
    logger.remove()

    log_format = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
    logger.add(
        settings.log_dir / "app.log",
        format=log_format,
        level=settings.log_level,
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        encoding="utf-8",
    )
    logger.add(
        settings.log_dir / "error.log",
        format=log_format,
        level="ERROR",
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        encoding="utf-8",
    )

    if verbose or not settings.is_production:
        logger.add(
            sys.stderr,
            format="{time:HH:mm:ss} | {level: <8} | {message}",
            level="DEBUG" if verbose else settings.log_level,
        )


app = typer.Typer(
    name="ecr-bridge",
    help="ECR Bridge - HTTP bridge to the fiscal printer file mailbox",
    no_args_is_help=True,
)

app.command(name="serve")(serve.serve)
app.command(name="print")(print_receipt.print_receipt)
app.command(name="z-report")(z_report.z_report)
app.command(name="decode")(decode.decode)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output", is_eager=True),
    env_file: Path | None = typer.Option(None, "--env-file", help="Path to a .env file"),
) -> None:
    """ECR Bridge - HTTP bridge to the fiscal printer file mailbox."""
    try:
        settings = BridgeSettings.from_env(env_file=env_file)
    except SettingsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    setup_logging(settings, verbose=verbose)
    ctx.obj = settings


if __name__ == "__main__":
    app()
