"""
Share registry and Samba synchronization.

Components:
- ShareRegistry: persisted share records with a locked read-modify-write
- allocate_share_name: collision-free display names
- render_smb_config: smb.conf generation
- CredentialProvisioner: share password creation and application
- SambaServiceController: config write-out and smbd/wsdd2 lifecycle
- ShareManager: list/add/remove operations
- ChangeReactor: removes shares when their directory is deleted
"""

from .change_reactor import ChangeReactor
from .config_renderer import render_smb_config
from .credential_provisioner import CredentialProvisioner
from .name_allocator import MAX_NAME_ATTEMPTS, allocate_share_name, base_name_for_path
from .service_controller import SambaServiceController
from .share_manager import ShareManager
from .share_registry import SHARES_KEY, ShareRegistry

__all__ = [
    "ChangeReactor",
    "CredentialProvisioner",
    "MAX_NAME_ATTEMPTS",
    "SHARES_KEY",
    "SambaServiceController",
    "ShareManager",
    "ShareRegistry",
    "allocate_share_name",
    "base_name_for_path",
    "render_smb_config",
]
