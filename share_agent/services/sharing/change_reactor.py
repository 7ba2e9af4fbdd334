"""Drops shares whose backing directory was deleted."""

import logging
from typing import List

from ...core.events.file_events import FileChangeEvent
from ...core.exceptions import CommandExecutionError, PathTranslationError
from ...models import FileChangeType
from ..files import FileSystemGateway
from .share_registry import ShareRegistry


def is_same_or_nested(path: str, parent: str) -> bool:
    """True for `parent` itself and anything below it, but not siblings sharing a prefix."""
    if path == parent:
        return True
    return path.startswith(parent.rstrip("/") + "/")


class ChangeReactor:
    """
    Listens for FileChangeEvent deletions and removes the affected shares.

    A move or rename arrives as a deletion as well, so a moved shared
    directory loses its share.
    """

    def __init__(self, registry: ShareRegistry, file_system: FileSystemGateway, share_manager):
        self._registry = registry
        self._file_system = file_system
        self._share_manager = share_manager

    async def handle_file_change(self, event: FileChangeEvent) -> List[str]:
        if event.type != FileChangeType.DELETE:
            return []

        try:
            deleted_virtual_path = self._file_system.system_to_virtual_path(event.path)
        except PathTranslationError:
            logging.debug(f"Ignoring deletion outside virtual roots: {event.path}")
            return []

        shares = await self._registry.list()
        affected = [share.path for share in shares if is_same_or_nested(share.path, deleted_virtual_path)]

        if not affected:
            return []

        try:
            removed = await self._share_manager.remove_shares(affected)
        except CommandExecutionError as e:
            # The registry write is committed before the sync, so the shares
            # are gone; samba catches up on the next successful sync.
            logging.error(f"Shares removed after deletion of {deleted_virtual_path} but samba sync failed: {e}")
            return affected

        if removed:
            logging.info(f"Removed {len(removed)} share(s) after deletion of {deleted_virtual_path}")
        return removed
