"""Share password provisioning for the Samba service account."""

import logging
import os
import secrets

import aiofiles
import aiofiles.os

from ...config import Settings
from ...core.process import CommandExecutor


def _private_opener(path: str, flags: int) -> int:
    return os.open(path, flags, 0o600)


class CredentialProvisioner:
    """
    Owns the single share password.

    Generated on first use, persisted to the secrets file and never rotated.
    """

    def __init__(self, settings: Settings, executor: CommandExecutor):
        self._settings = settings
        self._executor = executor

    @property
    def password_file(self) -> str:
        return self._settings.share_password_file

    async def get_or_create(self) -> str:
        """Return the persisted share password, creating it on first run."""
        try:
            async with aiofiles.open(self.password_file, "r", encoding="utf-8") as f:
                password = (await f.read()).strip()
            if password:
                return password
            logging.warning(f"Share password file {self.password_file} is empty, regenerating")
        except FileNotFoundError:
            logging.info("Creating share password on first run")

        password = secrets.token_hex(self._settings.share_password_bits // 8)
        await self._persist(password)
        return password

    async def apply(self) -> None:
        """Set the share password on the Samba account (password + confirmation on stdin)."""
        password = await self.get_or_create()
        await self._executor.run(
            "smbpasswd",
            "-s",
            "-a",
            self._settings.share_username,
            input=f"{password}\n{password}\n",
        )
        logging.info(f"Share password applied for account {self._settings.share_username}")

    async def _persist(self, password: str) -> None:
        directory = os.path.dirname(self.password_file)
        if directory:
            await aiofiles.os.makedirs(directory, exist_ok=True)

        # Created 0600 from the start, then moved into place
        temp_path = f"{self.password_file}.tmp"
        if await aiofiles.os.path.exists(temp_path):
            await aiofiles.os.remove(temp_path)
        async with aiofiles.open(temp_path, "w", encoding="utf-8", opener=_private_opener) as f:
            await f.write(password)
        await aiofiles.os.replace(temp_path, self.password_file)
