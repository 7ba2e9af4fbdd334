"""
Network Mount Module

Mounts remote SMB shares locally (the inverse of publishing shares).

Components:
- ExternalMountManager: entry point used by the API
- BaseMounter: abstract base class for platform operations
- LinuxCifsMounter: mount.cifs implementation
- PlatformFactory: platform detection and mounter creation
"""

from .base_mounter import BaseMounter
from .linux_mounter import LinuxCifsMounter
from .mount_service import ExternalMountManager
from .platform_factory import PlatformFactory

__all__ = [
    "BaseMounter",
    "ExternalMountManager",
    "LinuxCifsMounter",
    "PlatformFactory",
]
