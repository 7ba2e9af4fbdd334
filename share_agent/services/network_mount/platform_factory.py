"""Platform Factory - platform detection and mounter creation."""

import platform

from .base_mounter import BaseMounter
from ...config import Settings
from ...core.exceptions import UnsupportedPlatformError
from ...core.process import CommandExecutor


class PlatformFactory:
    """Factory for creating platform-specific mount implementations."""

    def __init__(self, settings: Settings, executor: CommandExecutor):
        self._settings = settings
        self._executor = executor

    def detect_platform(self) -> str:
        """Detect current platform. Returns: macos, windows, or linux."""
        system = platform.system().lower()

        if system == "darwin":
            return "macos"
        elif system == "windows":
            return "windows"
        elif system == "linux":
            return "linux"
        else:
            raise UnsupportedPlatformError(f"Platform {system} not supported for network mounting")

    def create_mounter(self) -> BaseMounter:
        """Create platform-specific mounter instance."""
        platform_name = self.detect_platform()

        if platform_name == "linux":
            from .linux_mounter import LinuxCifsMounter
            return LinuxCifsMounter(self._settings, self._executor)

        raise UnsupportedPlatformError(f"No mounter implementation for platform: {platform_name}")
