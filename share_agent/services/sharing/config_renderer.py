"""
Samba configuration rendering.

The whole smb.conf is regenerated from the registry on every sync, so the
output only depends on the share list and the collaborators' answers.
"""

import re
from typing import List, Optional, Sequence

from ...config import Settings
from ...core.exceptions import PathTranslationError
from ...models import ShareRecord
from ..files import FileSystemGateway, UserProvider

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]+")

GLOBAL_CONFIG_TEMPLATE = """# Generated by share-agent

[global]
# In standalone operation, a client must first "log-on" with a valid username
# and password stored on this machine.
server role = standalone

# The name of the Samba server that will show in clients.
server string = {server_string}

# Defer to mDNS for discovery instead of advertising uppercase NETBIOS name.
mdns name = mdns

# Use systemd for logging. Samba still tries to log to file as well.
logging = systemd
log file = /dev/null

# Don't leak information to guests or anonymous users.
access based share enum = yes
restrict anonymous = 2
map to guest = never

# Better compatibility for macOS clients
vfs objects = catia fruit streams_xattr
fruit:metadata = stream
fruit:model = MacSamba
fruit:veto_appledouble = no
fruit:nfs_aces = no
fruit:wipe_intentionally_left_blank_rfork = yes
fruit:delete_empty_adfiles = yes
fruit:posix_rename = yes

# Disable printing services.
load printers = no
disable spoolss = yes
"""

SHARE_CONFIG_TEMPLATE = """
# Share specific config
[{name}]
path = {path}
writeable = yes

# Only the share account may access the share.
valid users = {valid_user}

# Force root so files created by app processes running as any user stay
# readable; inherit owner so apps keep owning files in their own directories.
force user = {force_user}
force group = {force_group}
inherit owner = yes
"""

TIME_MACHINE_CONFIG = """
# Enable Time Machine backups.
fruit:time machine = yes
"""


def _clean_line(text: str) -> str:
    return _CONTROL_CHARS.sub(" ", text).strip()


def section_name(name: str) -> str:
    """Make a display name safe to use as an INI section header."""
    return _clean_line(name).replace("[", "(").replace("]", ")")


def managed_share_name(name: str, settings: Settings) -> str:
    return f"{name} ({settings.server_string})"


def home_share_name(username: str, settings: Settings) -> str:
    return f"{username}'s {settings.server_string}"


async def render_smb_config(
    shares: Sequence[ShareRecord],
    settings: Settings,
    file_system: FileSystemGateway,
    user_provider: UserProvider,
) -> str:
    """
    Render smb.conf for `shares`, in order.

    Path translation errors propagate; a share is never silently skipped.
    """
    parts: List[str] = [GLOBAL_CONFIG_TEMPLATE.format(server_string=_clean_line(settings.server_string))]

    home_path = file_system.normalize_virtual_path(settings.home_virtual_path)
    username: Optional[str] = None
    username_resolved = False

    for share in shares:
        # Mark managed shares so clients can tell them apart
        name = managed_share_name(share.name, settings)

        if file_system.normalize_virtual_path(share.path) == home_path:
            if not username_resolved:
                username = await user_provider.get_username()
                username_resolved = True
            if username:
                name = home_share_name(username, settings)

        system_path = await file_system.virtual_to_system_path(share.path)
        if _CONTROL_CHARS.search(system_path):
            raise PathTranslationError(f"System path for {share.path} contains control characters")

        parts.append(
            SHARE_CONFIG_TEMPLATE.format(
                name=section_name(name),
                path=system_path,
                valid_user=settings.share_username,
                force_user=settings.force_user,
                force_group=settings.effective_force_group,
            )
        )
        if settings.enable_time_machine:
            parts.append(TIME_MACHINE_CONFIG)

    return "".join(parts)
