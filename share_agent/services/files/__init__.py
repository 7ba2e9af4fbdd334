"""
File system collaborators used by the share subsystem.

- FileSystemGateway: path translation, entry status and allowed operations
- LocalFileSystem: gateway backed by configured virtual roots on local disk
- UserProvider: resolves the owner's display name
"""

from .file_system import FileSystemGateway, LocalFileSystem
from .user_provider import SettingsUserProvider, UserProvider

__all__ = [
    "FileSystemGateway",
    "LocalFileSystem",
    "SettingsUserProvider",
    "UserProvider",
]
