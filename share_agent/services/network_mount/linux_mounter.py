"""Linux CIFS mounter."""

import logging
import re
from typing import List

from .base_mounter import BaseMounter
from ...config import Settings
from ...core.exceptions import InvalidMountOptionError
from ...core.process import CommandExecutor

# Option separators and control characters would let a value add its own options
_UNSAFE_OPTION_CHARS = re.compile(r"[,=\x00-\x1f\x7f]")


class LinuxCifsMounter(BaseMounter):
    """Mounts SMB shares with mount.cifs, owned by the configured uid/gid."""

    def __init__(self, settings: Settings, executor: CommandExecutor):
        self._settings = settings
        self._executor = executor

    def build_command(self, remote_path: str, mount_path: str, username: str) -> List[str]:
        if not username or _UNSAFE_OPTION_CHARS.search(username):
            raise InvalidMountOptionError(f"Invalid username for mount: {username!r}")

        options = f"username={username},uid={self._settings.mount_uid},gid={self._settings.mount_gid}"
        command = ["mount", "-t", "cifs", remote_path, mount_path, "-o", options]
        if self._settings.mount_use_sudo:
            # sudo resets the environment, PASSWD has to be let through explicitly
            command = ["sudo", "--preserve-env=PASSWD", *command]
        return command

    async def mount(self, remote_path: str, mount_path: str, username: str, password: str) -> None:
        command = self.build_command(remote_path, mount_path, username)
        logging.info(f"Mounting {remote_path} at {mount_path} as {username}")

        # mount.cifs reads the password from PASSWD, keeping it off the command line
        await self._executor.run(command[0], *command[1:], env={"PASSWD": password})
        logging.info(f"Successfully mounted {remote_path} at {mount_path}")

    def get_platform_name(self) -> str:
        return "Linux"
