from pathlib import Path
from typing import Dict, List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Persisted state
    data_directory: str = "data"
    store_file_path: str = "data/store.json"
    share_password_file: str = "data/secrets/share-password"
    share_password_bits: int = 128

    # Samba
    smb_config_path: str = "/etc/samba/smb.conf"
    server_string: str = "Home Server"  # Also used as product name in share names
    share_username: str = "fileshare"  # The only account allowed to access shares
    force_user: str = "root"
    force_group: str = ""  # Empty = same as share_username
    enable_time_machine: bool = True
    smb_service_name: str = "smbd"
    discovery_service_name: str = "wsdd2"

    # Virtual filesystem
    virtual_roots: Dict[str, str] = {
        "/Home": "data/home",
        "/External": "data/external",
    }
    home_virtual_path: str = "/Home"
    protected_virtual_paths: List[str] = ["/External"]
    owner_name: str = ""  # Shown as "<owner>'s <server_string>" for the home share

    # External (remote) share mounting
    mount_uid: int = 1000
    mount_gid: int = 1000
    mount_use_sudo: bool = True

    # Logging konfiguration
    log_level: str = "INFO"
    log_file_path: str = "logs/share_agent.log"
    log_retention_days: int = 30

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = SettingsConfigDict(env_file="settings.env", extra="ignore")

    @property
    def log_directory(self) -> Path:
        """Returnerer log directory som Path objekt"""
        return Path(self.log_file_path).parent

    @property
    def effective_force_group(self) -> str:
        return self.force_group or self.share_username
