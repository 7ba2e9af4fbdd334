from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ShareRecord(BaseModel):
    """
    A single entry in the share registry.

    `name` is unique at creation time only; `path` is a virtual path and is
    unique among current records.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name shown to SMB clients")
    path: str = Field(..., description="Virtual path of the shared directory")


class FileEntryType(str, Enum):
    """Type of a filesystem entry as reported by the file system gateway."""

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"


class FileStatusInfo(BaseModel):
    """Result of a status lookup for a system path."""

    path: str
    type: FileEntryType
    size: int = 0


class FileChangeType(str, Enum):
    """Change kinds emitted by the filesystem watcher."""

    ADD = "add"
    CHANGE = "change"
    DELETE = "delete"


# HTTP request/response models


class AddShareRequest(BaseModel):
    path: str = Field(..., min_length=1, description="Virtual path to share")


class AddShareResponse(BaseModel):
    path: str


class RemoveShareResponse(BaseModel):
    deleted: bool


class ExternalMountRequest(BaseModel):
    remote_path: str = Field(..., min_length=1, description="e.g. //nas.local/media")
    mount_path: str = Field(..., min_length=1)
    username: str
    password: str = Field(..., repr=False)


class ExternalMountResponse(BaseModel):
    mount_path: str
    platform: Optional[str] = None
