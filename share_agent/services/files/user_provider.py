"""User lookup used when naming the home share."""

from abc import ABC, abstractmethod
from typing import Optional

from ...config import Settings


class UserProvider(ABC):
    @abstractmethod
    async def get_username(self) -> Optional[str]:
        """Return the owner's username, or None if no user is set up."""
        pass


class SettingsUserProvider(UserProvider):
    def __init__(self, settings: Settings):
        self._settings = settings

    async def get_username(self) -> Optional[str]:
        return self._settings.owner_name or None
