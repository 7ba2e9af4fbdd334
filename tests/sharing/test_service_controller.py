import pytest

from share_agent.core.events.file_events import FileChangeEvent
from share_agent.core.exceptions import PathTranslationError
from share_agent.models import FileChangeType

pytestmark = pytest.mark.asyncio


async def seed(stack, *shares):
    await stack.store.set("files.shares", [{"name": name, "path": path} for name, path in shares])


class TestApplyShares:
    async def test_starts_samba_and_discovery_when_stopped(self, stack, executor, home):
        home("Photos")
        await seed(stack, ("Photos", "/Home/Photos"))

        await stack.controller.apply_shares()

        assert executor.lines == [
            "systemctl is-active --quiet smbd",
            "systemctl start smbd",
            "systemctl start wsdd2",
        ]

    async def test_reloads_instead_of_restarting_when_running(self, stack, executor, home):
        home("Photos")
        await seed(stack, ("Photos", "/Home/Photos"))
        executor.active_services.add("smbd")

        await stack.controller.apply_shares()

        assert "smbcontrol smbd reload-config" in executor.lines
        assert "systemctl start smbd" not in executor.lines
        assert "systemctl restart smbd" not in executor.lines
        assert executor.lines[-1] == "systemctl start wsdd2"

    async def test_empty_registry_stops_samba(self, stack, executor, settings, tmp_path):
        executor.active_services.add("smbd")

        await stack.controller.apply_shares()

        assert executor.lines == ["systemctl stop smbd"]
        assert "smbd" not in executor.active_services
        config = (tmp_path / "etc" / "samba" / "smb.conf").read_text()
        assert "[global]" in config

    async def test_transition_to_empty_stops_rather_than_reloads(self, stack, executor, home):
        home("Photos")
        await seed(stack, ("Photos", "/Home/Photos"))
        await stack.controller.apply_shares()

        await seed(stack)
        executor.clear()
        await stack.controller.apply_shares()

        assert executor.lines == ["systemctl stop smbd"]

    async def test_apply_is_idempotent(self, stack, home, tmp_path):
        home("Photos", "Music")
        await seed(stack, ("Photos", "/Home/Photos"), ("Music", "/Home/Music"))
        config_path = tmp_path / "etc" / "samba" / "smb.conf"

        await stack.controller.apply_shares()
        first = config_path.read_bytes()
        await stack.controller.apply_shares()

        assert config_path.read_bytes() == first

    async def test_translation_failure_keeps_previous_config(self, stack, executor, home, tmp_path):
        home("Photos")
        await seed(stack, ("Photos", "/Home/Photos"))
        await stack.controller.apply_shares()
        config_path = tmp_path / "etc" / "samba" / "smb.conf"
        previous = config_path.read_text()

        await seed(stack, ("Photos", "/Home/Photos"), ("Lost", "/Nowhere/Lost"))
        executor.clear()

        with pytest.raises(PathTranslationError):
            await stack.controller.apply_shares()

        assert config_path.read_text() == previous
        assert executor.calls == []
        assert [p.name for p in config_path.parent.iterdir()] == ["smb.conf"]


class TestLifecycle:
    async def test_start_provisions_password_applies_and_subscribes(self, stack, executor, home, tmp_path):
        home("Photos")
        await seed(stack, ("Photos", "/Home/Photos"))

        await stack.controller.start()

        assert executor.lines[0] == "smbpasswd -s -a fileshare"
        assert "systemctl start smbd" in executor.lines
        assert (tmp_path / "data" / "secrets" / "share-password").exists()
        assert stack.controller.is_listening

    async def test_start_survives_external_tool_failures(self, stack, executor, home):
        home("Photos")
        await seed(stack, ("Photos", "/Home/Photos"))
        executor.fail_prefixes.update({"smbpasswd", "systemctl start"})

        await stack.controller.start()

        assert stack.controller.is_listening

    async def test_start_twice_subscribes_once(self, stack, home):
        await stack.controller.start()
        await stack.controller.start()

        assert len(stack.event_bus._handlers[FileChangeEvent]) == 1

    async def test_stop_unsubscribes_and_stops_services(self, stack, executor, home, tmp_path):
        home("Photos")
        await seed(stack, ("Photos", "/Home/Photos"))
        await stack.controller.start()
        executor.clear()

        await stack.controller.stop()

        assert executor.lines == ["systemctl stop smbd", "systemctl stop wsdd2"]
        assert not stack.controller.is_listening

        # Deletions are no longer acted upon
        await stack.event_bus.publish(
            FileChangeEvent(type=FileChangeType.DELETE, path=str(tmp_path / "home" / "Photos"))
        )
        assert len(await stack.registry.list()) == 1

    async def test_stop_swallows_failures(self, stack, executor):
        executor.fail_prefixes.add("systemctl stop")

        await stack.controller.stop()

        assert executor.lines == ["systemctl stop smbd", "systemctl stop wsdd2"]
