from functools import lru_cache
from typing import Any, Dict

from .config import Settings
from .core.events.event_bus import DomainEventBus
from .core.process import CommandExecutor
from .core.store import JsonStore
from .services.files import FileSystemGateway, LocalFileSystem, SettingsUserProvider, UserProvider
from .services.network_mount import ExternalMountManager
from .services.sharing import (
    ChangeReactor,
    CredentialProvisioner,
    SambaServiceController,
    ShareManager,
    ShareRegistry,
)

# Global singleton instances
_singletons: Dict[str, Any] = {}


@lru_cache
def get_settings() -> Settings:
    """Hent Settings singleton instance."""
    return Settings()


def get_event_bus() -> DomainEventBus:
    if "event_bus" not in _singletons:
        _singletons["event_bus"] = DomainEventBus()
    return _singletons["event_bus"]


def get_command_executor() -> CommandExecutor:
    if "command_executor" not in _singletons:
        _singletons["command_executor"] = CommandExecutor()
    return _singletons["command_executor"]


def get_store() -> JsonStore:
    if "store" not in _singletons:
        _singletons["store"] = JsonStore(get_settings().store_file_path)
    return _singletons["store"]


def get_file_system() -> FileSystemGateway:
    if "file_system" not in _singletons:
        _singletons["file_system"] = LocalFileSystem(get_settings())
    return _singletons["file_system"]


def get_user_provider() -> UserProvider:
    if "user_provider" not in _singletons:
        _singletons["user_provider"] = SettingsUserProvider(get_settings())
    return _singletons["user_provider"]


def get_share_registry() -> ShareRegistry:
    if "share_registry" not in _singletons:
        _singletons["share_registry"] = ShareRegistry(get_store())
    return _singletons["share_registry"]


def get_credential_provisioner() -> CredentialProvisioner:
    if "credential_provisioner" not in _singletons:
        _singletons["credential_provisioner"] = CredentialProvisioner(
            settings=get_settings(), executor=get_command_executor()
        )
    return _singletons["credential_provisioner"]


def get_samba_controller() -> SambaServiceController:
    if "samba_controller" not in _singletons:
        _singletons["samba_controller"] = SambaServiceController(
            settings=get_settings(),
            registry=get_share_registry(),
            file_system=get_file_system(),
            user_provider=get_user_provider(),
            credentials=get_credential_provisioner(),
            executor=get_command_executor(),
            event_bus=get_event_bus(),
        )

        # Set up the circular reference after both objects are created
        controller = _singletons["samba_controller"]
        if controller._change_reactor is None:
            controller._change_reactor = get_change_reactor()

    return _singletons["samba_controller"]


def get_share_manager() -> ShareManager:
    if "share_manager" not in _singletons:
        controller = get_samba_controller()
        # Creating the controller may already have created us via the reactor
        if "share_manager" not in _singletons:
            _singletons["share_manager"] = ShareManager(
                registry=get_share_registry(),
                file_system=get_file_system(),
                controller=controller,
            )
    return _singletons["share_manager"]


def get_change_reactor() -> ChangeReactor:
    if "change_reactor" not in _singletons:
        _singletons["change_reactor"] = ChangeReactor(
            registry=get_share_registry(),
            file_system=get_file_system(),
            share_manager=get_share_manager(),
        )
    return _singletons["change_reactor"]


def get_external_mount_manager() -> ExternalMountManager:
    if "external_mount_manager" not in _singletons:
        _singletons["external_mount_manager"] = ExternalMountManager(
            settings=get_settings(), executor=get_command_executor()
        )
    return _singletons["external_mount_manager"]


def reset_singletons() -> None:
    """Reset all singletons - used for testing"""
    _singletons.clear()
    get_settings.cache_clear()
