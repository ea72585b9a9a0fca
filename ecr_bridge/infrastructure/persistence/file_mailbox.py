from __future__ import annotations

import asyncio
from pathlib import Path

import aiofiles
from loguru import logger

from ecr_bridge.domain.ports.mailbox_port import MailboxPort
from ecr_bridge.infrastructure.persistence.atomic_io import atomic_write


def _list_names(directory: Path) -> list[str]:
    return [entry.name for entry in directory.iterdir()]


def _locate(directory: Path, name: str) -> Path | None:
    direct = directory / name
    if direct.is_file():
        return direct

    # The driver may change the case of the name when moving the file
    wanted = name.lower()
    try:
        names = _list_names(directory)
    except OSError as e:
        logger.debug("Cannot list {}: {}", directory, e)
        return None

    for candidate in names:
        if candidate.lower() == wanted:
            return directory / candidate
    return None


class FileMailbox(MailboxPort):
    """Filesystem implementation of the inbox/outbox mailbox."""

    async def ensure_directory(self, directory: Path) -> bool:
        try:
            if not directory.exists():
                await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
                logger.info("Created directory: {}", directory)
            return True
        except OSError as e:
            logger.error("Failed to create directory {}: {}", directory, e)
            return False

    async def write(self, directory: Path, name: str, content: str) -> bool:
        if not await self.ensure_directory(directory):
            return False

        path = directory / name
        try:
            await atomic_write(path, content)
        except (OSError, UnicodeError) as e:
            logger.error("Failed to write artifact {}: {}", path, e)
            return False

        logger.info("Artifact written: {}", path)
        return True

    async def find_by_name(self, directory: Path, name: str) -> Path | None:
        try:
            return await asyncio.to_thread(_locate, directory, name)
        except OSError as e:
            logger.debug("Probe of {} for {} failed: {}", directory, name, e)
            return None

    async def read(self, path: Path) -> str | None:
        try:
            async with aiofiles.open(path, encoding="utf-8", errors="replace") as f:
                return await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to read {}: {}", path, e)
            return None

    async def list_directory(self, directory: Path) -> list[str]:
        try:
            return sorted(await asyncio.to_thread(_list_names, directory))
        except OSError as e:
            logger.error("Failed to list directory contents {}: {}", directory, e)
            return []
