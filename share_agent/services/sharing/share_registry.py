"""Share registry - the persisted list of shared directories."""

from typing import Awaitable, Callable, List, TypeVar

from ...core.store import JsonStore
from ...models import ShareRecord

T = TypeVar("T")

SHARES_KEY = "files.shares"

ShareSetter = Callable[[List[ShareRecord]], Awaitable[None]]


class ShareRegistry:
    """
    Thin typed view over the `files.shares` key of the store.

    Reads are unlocked and may be stale relative to an in-flight mutate().
    """

    def __init__(self, store: JsonStore, key: str = SHARES_KEY):
        self._store = store
        self._key = key

    async def list(self) -> List[ShareRecord]:
        raw = await self._store.get(self._key)
        return self._parse(raw)

    async def mutate(
        self, fn: Callable[[List[ShareRecord], ShareSetter], Awaitable[T]]
    ) -> T:
        """
        Run `fn(shares, set_shares)` inside the registry's write lock.

        `set_shares` replaces the complete collection.
        """

        async def locked(raw, set_value) -> T:
            async def set_shares(shares: List[ShareRecord]) -> None:
                await set_value([share.model_dump() for share in shares])

            return await fn(self._parse(raw), set_shares)

        return await self._store.mutate(self._key, locked)

    @staticmethod
    def _parse(raw) -> List[ShareRecord]:
        if not raw:
            return []
        return [ShareRecord.model_validate(item) for item in raw]
