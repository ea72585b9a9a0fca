import typer
import uvicorn
from loguru import logger

from ecr_bridge.api.server import create_app
from ecr_bridge.cli.utils import get_settings


def serve(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Bind address (default from HOST)"),
    port: int | None = typer.Option(None, "--port", help="Port (default from PORT)"),
) -> None:
    """Run the HTTP bridge."""
    settings = get_settings(ctx)
    bind_host = host or settings.host
    bind_port = port or settings.port

    logger.info(
        "Server starting on {}:{} (mode {}, env {})",
        bind_host,
        bind_port,
        settings.mode.value.upper(),
        settings.app_env,
    )
    uvicorn.run(
        create_app(settings),
        host=bind_host,
        port=bind_port,
        log_level=settings.log_level.lower(),
    )
