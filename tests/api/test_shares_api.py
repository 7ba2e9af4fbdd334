"""
Tests for the shares HTTP router.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from share_agent.api.shares import router
from share_agent.core.exceptions import (
    CommandExecutionError,
    InvalidMountOptionError,
    OperationNotAllowedError,
    ShareAlreadyExistsError,
    ShareNameGenerationError,
    UnsupportedPlatformError,
)
from share_agent.dependencies import get_external_mount_manager, get_share_manager
from share_agent.models import ShareRecord
from share_agent.services.network_mount import ExternalMountManager
from share_agent.services.sharing import ShareManager


@pytest.fixture
def share_manager():
    manager = Mock(spec=ShareManager)
    manager.list_shares = AsyncMock(return_value=[ShareRecord(name="Photos", path="/Home/Photos")])
    manager.add_share = AsyncMock(side_effect=lambda path: path)
    manager.remove_share = AsyncMock(return_value=True)
    return manager


@pytest.fixture
def mount_manager():
    manager = Mock(spec=ExternalMountManager)
    manager.mount_external_share = AsyncMock(return_value="/mnt/media")
    manager.platform_name = "Linux"
    return manager


@pytest.fixture
def client(share_manager, mount_manager):
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_share_manager] = lambda: share_manager
    app.dependency_overrides[get_external_mount_manager] = lambda: mount_manager
    return TestClient(app)


def test_list_shares(client):
    response = client.get("/api/shares")

    assert response.status_code == 200
    assert response.json() == [{"name": "Photos", "path": "/Home/Photos"}]


def test_add_share(client, share_manager):
    response = client.post("/api/shares", json={"path": "/Home/Music"})

    assert response.status_code == 200
    assert response.json() == {"path": "/Home/Music"}
    share_manager.add_share.assert_awaited_once_with("/Home/Music")


@pytest.mark.parametrize(
    "error, status_code",
    [
        (OperationNotAllowedError("/External"), 403),
        (ShareAlreadyExistsError("/Home/Music"), 409),
        (ShareNameGenerationError("Music"), 409),
        (RuntimeError("disk on fire"), 500),
    ],
)
def test_add_share_errors(client, share_manager, error, status_code):
    share_manager.add_share.side_effect = error

    response = client.post("/api/shares", json={"path": "/Home/Music"})

    assert response.status_code == status_code
    assert response.json()["detail"] == str(error)


def test_add_share_requires_path(client):
    assert client.post("/api/shares", json={}).status_code == 422


def test_remove_share(client, share_manager):
    share_manager.remove_share.return_value = False

    response = client.delete("/api/shares", params={"path": "/Home/Music"})

    assert response.status_code == 200
    assert response.json() == {"deleted": False}
    share_manager.remove_share.assert_awaited_once_with("/Home/Music")


def test_mount_external_share(client, mount_manager):
    response = client.post(
        "/api/shares/external-mounts",
        json={"remote_path": "//nas/media", "mount_path": "/mnt/media", "username": "bob", "password": "s3cret"},
    )

    assert response.status_code == 200
    assert response.json() == {"mount_path": "/mnt/media", "platform": "Linux"}
    mount_manager.mount_external_share.assert_awaited_once_with("//nas/media", "/mnt/media", "bob", "s3cret")


@pytest.mark.parametrize(
    "error, status_code",
    [
        (InvalidMountOptionError("Invalid username for mount"), 400),
        (UnsupportedPlatformError("no mounter"), 501),
        (CommandExecutionError("sudo mount", 32), 502),
    ],
)
def test_mount_external_share_errors(client, mount_manager, error, status_code):
    mount_manager.mount_external_share.side_effect = error

    response = client.post(
        "/api/shares/external-mounts",
        json={"remote_path": "//nas/media", "mount_path": "/mnt/media", "username": "bob", "password": "s3cret"},
    )

    assert response.status_code == status_code
