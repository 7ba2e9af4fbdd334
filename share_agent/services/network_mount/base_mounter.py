"""Abstract Base Mounter - platform-specific mount interface."""

from abc import ABC, abstractmethod


class BaseMounter(ABC):
    """Abstract base class for platform-specific mount operations."""

    @abstractmethod
    async def mount(self, remote_path: str, mount_path: str, username: str, password: str) -> None:
        """Mount a remote SMB share at `mount_path`. Raises on failure."""
        pass

    @abstractmethod
    def get_platform_name(self) -> str:
        """Get platform name for logging."""
        pass
