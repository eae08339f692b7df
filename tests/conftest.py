import os

import pytest

from backlogkit.config import BacklogConfig, get_config


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keeps BACKLOG_* variables of the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("BACKLOG_"):
            monkeypatch.delenv(name)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def config() -> BacklogConfig:
    return BacklogConfig(host="example.backlog.com", api_key="test-key")


@pytest.fixture
def sleeps() -> list[float]:
    """Delays requested by the retry loop, in order."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)

    return _sleep

