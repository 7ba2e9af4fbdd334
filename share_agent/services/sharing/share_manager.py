"""Share CRUD - the operations exposed to callers of the share subsystem."""

import asyncio
import logging
from typing import Iterable, List

from ...core.exceptions import (
    OperationNotAllowedError,
    PathTranslationError,
    ShareAlreadyExistsError,
)
from ...models import FileEntryType, ShareRecord
from ..files import FileSystemGateway
from ..files.file_system import SHARE_OPERATION
from .name_allocator import allocate_share_name, base_name_for_path
from .service_controller import SambaServiceController
from .share_registry import ShareRegistry


class ShareManager:
    def __init__(
        self,
        registry: ShareRegistry,
        file_system: FileSystemGateway,
        controller: SambaServiceController,
    ):
        self._registry = registry
        self._file_system = file_system
        self._controller = controller

    async def list_shares(self) -> List[ShareRecord]:
        """Registered shares whose backing path is currently a directory."""
        shares = await self._registry.list()
        is_directory = await asyncio.gather(
            *(self._is_existing_directory(share) for share in shares)
        )
        return [share for share, keep in zip(shares, is_directory) if keep]

    async def add_share(self, virtual_path: str) -> str:
        """Share a directory and resync samba. Returns the canonical virtual path."""
        try:
            virtual_path = self._file_system.normalize_virtual_path(virtual_path)
        except PathTranslationError:
            raise OperationNotAllowedError(virtual_path)

        allowed_operations = await self._file_system.get_allowed_operations(virtual_path)
        if SHARE_OPERATION not in allowed_operations:
            raise OperationNotAllowedError(virtual_path)

        logging.info(f"Adding share for {virtual_path}")

        async def insert(shares, set_shares) -> ShareRecord:
            if any(self._canonical(share.path) == virtual_path for share in shares):
                raise ShareAlreadyExistsError(virtual_path)

            name = allocate_share_name(base_name_for_path(virtual_path), shares)
            record = ShareRecord(name=name, path=virtual_path)
            await set_shares([*shares, record])
            return record

        record = await self._registry.mutate(insert)
        logging.info(f"Share '{record.name}' added for {virtual_path}")

        await self._controller.apply_shares()
        return virtual_path

    async def remove_share(self, virtual_path: str) -> bool:
        """Remove the share for `virtual_path`. Returns False if there was none."""
        return bool(await self.remove_shares([virtual_path]))

    async def remove_shares(self, virtual_paths: Iterable[str]) -> List[str]:
        """
        Remove several shares in one registry write and resync samba once.

        Returns the paths that were actually registered. The registry change
        is committed before the sync, so a failing sync leaves them removed.
        """
        targets = set()
        for path in virtual_paths:
            try:
                targets.add(self._file_system.normalize_virtual_path(path))
            except PathTranslationError:
                logging.debug(f"Ignoring removal of invalid virtual path {path}")

        if not targets:
            return []

        logging.info(f"Removing share(s) for {', '.join(sorted(targets))}")

        async def delete(shares, set_shares) -> List[str]:
            removed = [share.path for share in shares if self._canonical(share.path) in targets]
            if removed:
                await set_shares([share for share in shares if self._canonical(share.path) not in targets])
            return removed

        removed = await self._registry.mutate(delete)

        # Clients already connected to a removed share stay connected until
        # they disconnect; samba does not force them off on reload.
        if removed:
            await self._controller.apply_shares()
        else:
            logging.info("No matching shares registered")

        return removed

    def _canonical(self, virtual_path: str) -> str:
        # Records written before paths were normalized may still hold raw input
        try:
            return self._file_system.normalize_virtual_path(virtual_path)
        except PathTranslationError:
            return virtual_path

    async def _is_existing_directory(self, share: ShareRecord) -> bool:
        try:
            system_path = await self._file_system.virtual_to_system_path(share.path)
            info = await self._file_system.status(system_path)
        except (OSError, PathTranslationError):
            return False
        return info.type == FileEntryType.DIRECTORY
