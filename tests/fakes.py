"""
Test doubles shared across the test suite.
"""

from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Dict, List, Optional, Set, Tuple

from share_agent.config import Settings
from share_agent.core.events.event_bus import DomainEventBus
from share_agent.core.exceptions import CommandExecutionError
from share_agent.core.process import CommandExecutor, CommandResult
from share_agent.core.store import JsonStore
from share_agent.services.files import LocalFileSystem, SettingsUserProvider
from share_agent.services.sharing import (
    ChangeReactor,
    CredentialProvisioner,
    SambaServiceController,
    ShareManager,
    ShareRegistry,
)


@dataclass
class RecordedCall:
    command: str
    args: Tuple[str, ...]
    input: Optional[str] = None
    env: Optional[Dict[str, str]] = None

    @property
    def line(self) -> str:
        return " ".join([self.command, *self.args])


@dataclass
class RecordingExecutor(CommandExecutor):
    """
    Records every command instead of running it.

    Emulates systemctl start/stop/is-active against `active_services`, and
    fails any command line starting with one of `fail_prefixes`.
    """

    calls: List[RecordedCall] = field(default_factory=list)
    active_services: Set[str] = field(default_factory=set)
    fail_prefixes: Set[str] = field(default_factory=set)

    async def run(self, command, *args, input=None, env=None) -> CommandResult:
        call = RecordedCall(command, tuple(args), input, dict(env) if env else None)
        self.calls.append(call)

        if any(call.line.startswith(prefix) for prefix in self.fail_prefixes):
            raise CommandExecutionError(call.line, 1, "simulated failure")

        if command == "systemctl":
            action, service = args[0], args[-1]
            if action == "is-active" and service not in self.active_services:
                raise CommandExecutionError(call.line, 3)
            if action == "start":
                self.active_services.add(service)
            elif action == "stop":
                self.active_services.discard(service)

        return CommandResult(returncode=0, stdout="", stderr="")

    @property
    def lines(self) -> List[str]:
        return [call.line for call in self.calls]

    def clear(self) -> None:
        self.calls.clear()


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        data_directory=str(tmp_path / "data"),
        store_file_path=str(tmp_path / "data" / "store.json"),
        share_password_file=str(tmp_path / "data" / "secrets" / "share-password"),
        smb_config_path=str(tmp_path / "etc" / "samba" / "smb.conf"),
        virtual_roots={
            "/Home": str(tmp_path / "home"),
            "/External": str(tmp_path / "external"),
        },
        owner_name="",
        log_file_path=str(tmp_path / "logs" / "share_agent.log"),
    )
    values.update(overrides)
    return Settings(**values)


def build_share_stack(settings: Settings, executor: RecordingExecutor) -> SimpleNamespace:
    """Wire the share subsystem the same way share_agent.dependencies does."""
    store = JsonStore(settings.store_file_path)
    registry = ShareRegistry(store)
    file_system = LocalFileSystem(settings)
    user_provider = SettingsUserProvider(settings)
    event_bus = DomainEventBus()
    credentials = CredentialProvisioner(settings, executor)
    controller = SambaServiceController(
        settings=settings,
        registry=registry,
        file_system=file_system,
        user_provider=user_provider,
        credentials=credentials,
        executor=executor,
        event_bus=event_bus,
    )
    manager = ShareManager(registry, file_system, controller)
    reactor = ChangeReactor(registry, file_system, manager)
    controller._change_reactor = reactor

    return SimpleNamespace(
        settings=settings,
        store=store,
        registry=registry,
        file_system=file_system,
        event_bus=event_bus,
        credentials=credentials,
        controller=controller,
        manager=manager,
        reactor=reactor,
        executor=executor,
    )
