"""
Samba service controller.

Writes the rendered configuration and drives smbd plus the wsdd2 discovery
daemon according to the registry's contents.
"""

import asyncio
import logging
import os
import uuid
from typing import Optional

import aiofiles
import aiofiles.os

from ...config import Settings
from ...core.events.event_bus import DomainEventBus, Subscription
from ...core.events.file_events import FileChangeEvent
from ...core.exceptions import CommandExecutionError
from ...core.process import CommandExecutor
from ..files import FileSystemGateway, UserProvider
from .config_renderer import render_smb_config
from .credential_provisioner import CredentialProvisioner
from .share_registry import ShareRegistry


class SambaServiceController:
    def __init__(
        self,
        settings: Settings,
        registry: ShareRegistry,
        file_system: FileSystemGateway,
        user_provider: UserProvider,
        credentials: CredentialProvisioner,
        executor: CommandExecutor,
        event_bus: DomainEventBus,
        change_reactor=None,
    ):
        self._settings = settings
        self._registry = registry
        self._file_system = file_system
        self._user_provider = user_provider
        self._credentials = credentials
        self._executor = executor
        self._event_bus = event_bus
        self._change_reactor = change_reactor

        self._subscription: Optional[Subscription] = None
        # Keeps the listed snapshot and the written file in the same order
        self._sync_lock = asyncio.Lock()

    @property
    def is_listening(self) -> bool:
        return self._subscription is not None and self._subscription.active

    async def start(self) -> None:
        """Provision the password, apply shares and listen for deletions. Never raises on tool failures."""
        logging.info("Starting samba")

        try:
            await self._credentials.apply()
        except Exception as e:
            logging.error(f"Failed to apply share password: {e}")

        try:
            await self.apply_shares()
        except Exception as e:
            logging.error(f"Failed to apply shares: {e}")

        if self._change_reactor is not None and not self.is_listening:
            self._subscription = await self._event_bus.subscribe(
                FileChangeEvent, self._change_reactor.handle_file_change
            )

    async def stop(self) -> None:
        logging.info("Stopping samba")

        if self._subscription is not None:
            await self._subscription.dispose()
            self._subscription = None

        try:
            await self._systemctl("stop", self._settings.smb_service_name)
        except Exception as e:
            logging.error(f"Failed to stop samba: {e}")

        try:
            await self._systemctl("stop", self._settings.discovery_service_name)
        except Exception as e:
            logging.error(f"Failed to stop {self._settings.discovery_service_name}: {e}")

    async def apply_shares(self) -> None:
        """
        Regenerate smb.conf from the registry and bring smbd in line with it.

        Rendering errors abort before the file is touched, leaving the previous
        configuration in place.
        """
        async with self._sync_lock:
            shares = await self._registry.list()
            config = await render_smb_config(
                shares, self._settings, self._file_system, self._user_provider
            )
            await self._write_config(config)

            smbd = self._settings.smb_service_name

            # Nothing to offer, so don't run samba at all
            if not shares:
                logging.info("No shares configured, stopping samba")
                await self._systemctl("stop", smbd)
                return

            # Reload instead of restart so connected clients are not dropped
            if await self._is_active(smbd):
                await self._executor.run("smbcontrol", smbd, "reload-config")
                logging.info(f"Reloaded samba config with {len(shares)} share(s)")
            else:
                await self._systemctl("start", smbd)
                logging.info(f"Started samba with {len(shares)} share(s)")

            # wsdd2 shuts down if samba is absent when it starts and never comes
            # back on its own, so it has to be (re)started after smbd every time.
            await self._systemctl("start", self._settings.discovery_service_name)

    async def _is_active(self, service: str) -> bool:
        try:
            await self._executor.run("systemctl", "is-active", "--quiet", service)
        except CommandExecutionError:
            return False
        return True

    async def _systemctl(self, action: str, service: str) -> None:
        await self._executor.run("systemctl", action, service)

    async def _write_config(self, config: str) -> None:
        config_path = self._settings.smb_config_path
        directory = os.path.dirname(config_path)
        if directory:
            await aiofiles.os.makedirs(directory, exist_ok=True)

        temp_path = f"{config_path}.{uuid.uuid4().hex}.tmp"
        try:
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(config)
            await aiofiles.os.replace(temp_path, config_path)
        except Exception:
            if await aiofiles.os.path.exists(temp_path):
                await aiofiles.os.remove(temp_path)
            raise
        logging.debug(f"Wrote samba config to {config_path}")
