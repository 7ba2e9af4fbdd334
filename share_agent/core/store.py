"""
JsonStore - a small persisted key-value store backed by one JSON document.

Keys are dotted paths into the document ("files.shares" lives at
document["files"]["shares"]). Nothing is cached: every read goes to disk.
"""

import asyncio
import json
import logging
import os
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, TypeVar

import aiofiles
import aiofiles.os

T = TypeVar("T")

Setter = Callable[[Any], Awaitable[None]]


class JsonStore:
    """
    Persisted key-value store with atomic read-modify-write per key.

    `mutate()` serialises all writers of one key. `set()` additionally holds a
    document lock while rewriting the file, so writers of different keys never
    lose each other's updates.
    """

    def __init__(self, file_path: str):
        self._file_path = file_path
        self._document_lock = asyncio.Lock()
        self._key_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        logging.info(f"JsonStore initialized at {file_path}")

    @property
    def file_path(self) -> str:
        return self._file_path

    async def get(self, key: str, default: Any = None) -> Any:
        """Read a value; a missing file or key returns `default`."""
        document = await self._read_document()
        node: Any = document
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    async def set(self, key: str, value: Any) -> None:
        """Overwrite the value stored at `key`."""
        async with self._document_lock:
            document = await self._read_document()
            parts = key.split(".")
            node = document
            for part in parts[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            node[parts[-1]] = value
            await self._write_document(document)

    async def mutate(self, key: str, fn: Callable[[Any, Setter], Awaitable[T]]) -> T:
        """
        Run `fn(current_value, setter)` while holding the write lock for `key`.

        The setter replaces the whole value. If `fn` raises, nothing it did not
        already set is persisted and the lock is released.
        """
        async with self._key_locks[key]:
            current = await self.get(key)

            async def setter(value: Any) -> None:
                await self.set(key, value)

            return await fn(current, setter)

    async def _read_document(self) -> Dict[str, Any]:
        try:
            async with aiofiles.open(self._file_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return {}

        if not content.strip():
            return {}

        document = json.loads(content)
        if not isinstance(document, dict):
            raise ValueError(f"Store file {self._file_path} does not contain a JSON object")
        return document

    async def _write_document(self, document: Dict[str, Any]) -> None:
        directory = os.path.dirname(self._file_path)
        if directory:
            await aiofiles.os.makedirs(directory, exist_ok=True)

        # Write to a temp file and rename so readers never see a partial document
        temp_path = f"{self._file_path}.tmp"
        async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(document, indent=2))
        await aiofiles.os.replace(temp_path, self._file_path)
