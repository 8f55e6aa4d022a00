"""Shared fixtures for memdrive tests."""

import pytest

from memdrive.api.drive import Drive
from memdrive.config.settings import DriveConfig
from memdrive.store.filesystem import FilesystemStore

_ENV_VARS = (
    "MEMDRIVE_ROOT_NAME",
    "MEMDRIVE_SORT_KEY",
    "MEMDRIVE_SORT_ORDER",
    "MEMDRIVE_SEED_DEMO",
    "MEMDRIVE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def store() -> FilesystemStore:
    """Empty store with a root named Home."""
    return FilesystemStore()


@pytest.fixture
def empty_drive() -> Drive:
    return Drive(config=DriveConfig(seed_demo=False))


@pytest.fixture
def demo_drive() -> Drive:
    """Drive seeded with the demo content."""
    return Drive(config=DriveConfig())
