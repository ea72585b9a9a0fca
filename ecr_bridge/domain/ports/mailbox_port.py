from abc import ABC, abstractmethod
from pathlib import Path


class MailboxPort(ABC):
    """Port for the directories shared with the ECR Bridge driver.

    Implementations never cache: the driver moves files between calls.
    """

    @abstractmethod
    async def ensure_directory(self, directory: Path) -> bool:
        """Create directory (and parents) if missing; False on failure."""

    @abstractmethod
    async def write(self, directory: Path, name: str, content: str) -> bool:
        """Persist an artifact. Returns False instead of raising on I/O errors."""

    @abstractmethod
    async def find_by_name(self, directory: Path, name: str) -> Path | None:
        """Locate an artifact by name, ignoring case. None if absent or unlistable."""

    @abstractmethod
    async def read(self, path: Path) -> str | None:
        """Read artifact text; None if missing or unreadable."""

    @abstractmethod
    async def list_directory(self, directory: Path) -> list[str]:
        """List entry names; empty on error."""
