"""External Mount Manager - mounts remote SMB shares onto local directories."""

import logging
from typing import Optional

import aiofiles.os

from .base_mounter import BaseMounter
from .platform_factory import PlatformFactory
from ...config import Settings
from ...core.exceptions import UnsupportedPlatformError
from ...core.process import CommandExecutor


class ExternalMountManager:
    """
    Stateless wrapper around the platform mounter.

    Has no registry interaction and does not trigger any samba sync.
    """

    def __init__(
        self,
        settings: Settings,
        executor: CommandExecutor,
        platform_factory: Optional[PlatformFactory] = None,
    ):
        self._platform_factory = platform_factory or PlatformFactory(settings, executor)
        self._mounter: Optional[BaseMounter] = None
        self._initialize_mounter()

    def _initialize_mounter(self) -> None:
        try:
            self._mounter = self._platform_factory.create_mounter()
            logging.info(f"Initialized {self._mounter.get_platform_name()} mounter")
        except UnsupportedPlatformError as e:
            logging.warning(f"External share mounting unavailable: {e}")
            self._mounter = None

    @property
    def platform_name(self) -> Optional[str]:
        return self._mounter.get_platform_name() if self._mounter else None

    async def mount_external_share(
        self, remote_path: str, mount_path: str, username: str, password: str
    ) -> str:
        if self._mounter is None:
            raise UnsupportedPlatformError("No mounter available on this platform")

        await aiofiles.os.makedirs(mount_path, exist_ok=True)
        await self._mounter.mount(remote_path, mount_path, username, password)
        return mount_path
