"""
Pytest configuration and shared fixtures.
"""

import logging

import pytest

from factories import FakeChat, FakeSource, fixed_clock
from forumsync.core.config import loader


@pytest.fixture
def clock():
    """Fixed clock at 2025-06-15 12:00 JST."""
    return fixed_clock


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def fake_chat() -> FakeChat:
    return FakeChat()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Keep config loading away from the developer's machine.

    Points XDG_CONFIG_HOME at an empty directory, clears every variable the
    loader reads and resets the config cache around each test.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in loader.SETTINGS_ENV_NAMES:
        # Recorded by setenv, so teardown also drops values loaded from .env files.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    loader.clear_cache()
    yield
    loader.clear_cache()


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO, logger="forumsync")
    return caplog
