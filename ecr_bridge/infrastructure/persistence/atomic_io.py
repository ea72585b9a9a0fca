"""Atomic artifact writes for the inbox.

The driver picks up every `*.txt` file in the inbox, so content is first
written to a hidden `.tmp_*.part` file in the same directory and then
renamed onto the final `bon_*.txt` name. The driver only ever sees complete
commands, and a failed write leaves nothing behind.
"""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import aiofiles
from loguru import logger

TEMP_PREFIX = ".tmp_"
TEMP_SUFFIX = ".part"


async def atomic_write(path: Path, content: str) -> None:
    """Write content to path via a hidden temp file and a rename.

    Raises:
        OSError: if the temp file cannot be written or renamed
        UnicodeError: if content cannot be encoded as UTF-8
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path_str = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=TEMP_PREFIX,
        suffix=TEMP_SUFFIX,
    )
    temp_path = Path(temp_path_str)

    try:
        async with aiofiles.open(fd, mode="w", encoding="utf-8", newline="", closefd=True) as f:
            await f.write(content)
        await asyncio.to_thread(temp_path.replace, path)
        logger.debug("Atomic write completed: {}", path)
    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise
