"""
Pytest configuration og shared fixtures.
"""

import pytest

from share_agent.dependencies import reset_singletons
from tests.fakes import RecordingExecutor, build_share_stack, make_settings


@pytest.fixture(autouse=True)
def clean_singletons():
    """Automatically reset singletons before hver test."""
    reset_singletons()
    yield
    reset_singletons()


@pytest.fixture
def settings(tmp_path):
    (tmp_path / "home").mkdir()
    (tmp_path / "external").mkdir()
    return make_settings(tmp_path)


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def stack(settings, executor):
    return build_share_stack(settings, executor)


@pytest.fixture
def home(tmp_path):
    """Create directories below the /Home virtual root."""

    def make(*relative_paths: str):
        for relative in relative_paths:
            (tmp_path / "home" / relative).mkdir(parents=True, exist_ok=True)
        return tmp_path / "home"

    return make
