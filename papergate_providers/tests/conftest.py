"""Shared pytest fixtures.

Environment variables that would leak a developer's real credentials or
config file into the merge order are removed for every test, and module
caches are reset around it.
"""
from __future__ import annotations

import logging

import pytest

from papergate_providers.base.http import close_all_clients
from papergate_providers.base.logging import get_logger
from papergate_providers.config import reset_config_cache
from papergate_providers.config.env import ENV_ALIASES, ENV_PREFIX
from papergate_providers.tests.utils import FakeTransport, ListHandler


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    names = {"PROVIDERS_CONFIG_FILE", "PROVIDERS_LOG_LEVEL"}
    for prefix in ENV_PREFIX.values():
        names.update(f"{prefix}_{suffix}" for suffix in ("API_KEY", "BASE_URL", "MODEL", "TIMEOUT_MS"))
    for aliases in ENV_ALIASES.values():
        names.update(aliases)
    for name in names:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def log_records(monkeypatch):
    """Collect messages emitted anywhere under the ``providers`` logger."""
    # get_logger re-applies PROVIDERS_LOG_LEVEL on every call
    monkeypatch.setenv("PROVIDERS_LOG_LEVEL", "DEBUG")
    # initialize first; initialization replaces the handler list
    base = get_logger()
    handler = ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    yield handler
    base.removeHandler(handler)
    base.setLevel(previous)
