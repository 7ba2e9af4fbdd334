"""
File system gateway - virtual path translation and directory status.

Virtual paths ("/Home/Photos") are stable identifiers that map onto real
directories through a table of virtual roots.
"""

import logging
import os
import posixpath
import stat
from abc import ABC, abstractmethod
from typing import Dict, List

import aiofiles.os

from ...config import Settings
from ...core.exceptions import PathTranslationError
from ...models import FileEntryType, FileStatusInfo

SHARE_OPERATION = "share"
LIST_OPERATION = "list"


class FileSystemGateway(ABC):
    """Abstract collaborator the share subsystem uses to reach the file system."""

    @abstractmethod
    def normalize_virtual_path(self, virtual_path: str) -> str:
        """Canonical form of a virtual path; raises PathTranslationError if it is not absolute."""
        pass

    @abstractmethod
    async def virtual_to_system_path(self, virtual_path: str) -> str:
        pass

    @abstractmethod
    def system_to_virtual_path(self, system_path: str) -> str:
        pass

    @abstractmethod
    async def status(self, system_path: str) -> FileStatusInfo:
        """Return entry info; raises FileNotFoundError if the path does not exist."""
        pass

    @abstractmethod
    async def get_allowed_operations(self, virtual_path: str) -> List[str]:
        pass


class LocalFileSystem(FileSystemGateway):
    """Gateway backed by `settings.virtual_roots` on the local disk."""

    def __init__(self, settings: Settings):
        self._roots: Dict[str, str] = {
            self.normalize_virtual_path(virtual): os.path.abspath(system)
            for virtual, system in settings.virtual_roots.items()
        }
        self._protected = {
            self.normalize_virtual_path(path) for path in settings.protected_virtual_paths
        }
        logging.info(f"LocalFileSystem initialized with roots: {sorted(self._roots)}")

    @staticmethod
    def normalize_virtual_path(virtual_path: str) -> str:
        if not virtual_path.startswith("/"):
            raise PathTranslationError(f"Virtual path must be absolute: {virtual_path}")
        normalized = posixpath.normpath(virtual_path)
        # normpath keeps a leading "//"
        if normalized.startswith("//"):
            normalized = "/" + normalized.lstrip("/")
        return normalized

    async def virtual_to_system_path(self, virtual_path: str) -> str:
        virtual = self.normalize_virtual_path(virtual_path)

        # Longest matching root wins
        for root in sorted(self._roots, key=len, reverse=True):
            if virtual == root or virtual.startswith(root + "/"):
                relative = virtual[len(root):].lstrip("/")
                system_root = self._roots[root]
                return os.path.join(system_root, relative) if relative else system_root

        raise PathTranslationError(f"No virtual root for {virtual_path}")

    def system_to_virtual_path(self, system_path: str) -> str:
        system = os.path.abspath(system_path)

        for root, system_root in sorted(self._roots.items(), key=lambda item: len(item[1]), reverse=True):
            if system == system_root:
                return root
            if system.startswith(system_root + os.sep):
                relative = os.path.relpath(system, system_root).replace(os.sep, "/")
                return f"{root}/{relative}"

        raise PathTranslationError(f"System path is outside all virtual roots: {system_path}")

    async def status(self, system_path: str) -> FileStatusInfo:
        stat_result = await aiofiles.os.stat(system_path, follow_symlinks=False)
        mode = stat_result.st_mode
        if stat.S_ISDIR(mode):
            entry_type = FileEntryType.DIRECTORY
        elif stat.S_ISREG(mode):
            entry_type = FileEntryType.FILE
        elif stat.S_ISLNK(mode):
            entry_type = FileEntryType.SYMLINK
        else:
            entry_type = FileEntryType.OTHER
        return FileStatusInfo(path=system_path, type=entry_type, size=stat_result.st_size)

    async def get_allowed_operations(self, virtual_path: str) -> List[str]:
        try:
            virtual = self.normalize_virtual_path(virtual_path)
            system_path = await self.virtual_to_system_path(virtual)
            info = await self.status(system_path)
        except (PathTranslationError, OSError) as e:
            logging.debug(f"No operations allowed for {virtual_path}: {e}")
            return []

        if info.type != FileEntryType.DIRECTORY:
            return []

        operations = [LIST_OPERATION]
        if virtual not in self._protected:
            operations.append(SHARE_OPERATION)
        return operations
