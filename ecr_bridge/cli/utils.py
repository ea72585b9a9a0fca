"""CLI utility functions."""

import typer

from ecr_bridge.infrastructure.config.settings import BridgeSettings


def get_settings(ctx: typer.Context) -> BridgeSettings:
    """Return settings loaded by the root callback."""
    settings = ctx.obj
    if not isinstance(settings, BridgeSettings):
        raise typer.BadParameter("Settings not loaded")
    return settings


def parse_item_option(raw: str) -> dict[str, str]:
    """Parse ``NAME:PRICE`` or ``NAME:QTY:PRICE`` into an item mapping.

    The name may itself contain colons; quantity and price are taken from
    the right.
    """
    parts = raw.rsplit(":", 2)
    if len(parts) == 2:
        name, price = parts
        return {"name": name, "price": price}
    if len(parts) == 3:
        name, quantity, price = parts
        return {"name": name, "quantity": quantity, "price": price}
    raise typer.BadParameter(f"Invalid item '{raw}'. Use NAME:PRICE or NAME:QTY:PRICE")
