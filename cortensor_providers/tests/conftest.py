"""Pytest fixtures for the adapter test suite.

Settings, registries and loggers are created per test so no state leaks
between tests; ``clean_env`` isolates settings loading from the developer's
shell and ``.env`` file.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from cortensor_providers.config import BackendSettings, reset_settings_cache
from cortensor_providers.search.registry import SearchProviderRegistry
from cortensor_providers.tests.utils import ListHandler


@pytest.fixture()
def settings() -> BackendSettings:
    return BackendSettings(api_key="ck-live-123", base_url="https://cortensor.test")


@pytest.fixture()
def registry() -> SearchProviderRegistry:
    return SearchProviderRegistry()


@pytest.fixture()
def log_capture() -> Any:
    """Yield ``(logger, handler)`` with an isolated, non-propagating logger."""
    logger = logging.getLogger("cortensor-tests.capture")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ListHandler()
    logger.handlers[:] = [handler]
    yield logger, handler
    logger.handlers[:] = []


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Any:
    """Remove adapter variables and point the .env loader at a missing file."""
    for name in ("CORTENSOR_API_KEY", "CORTENSOR_BASE_URL", "CORTENSOR_CONFIG_FILE", "TAVILY_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_settings_cache()
    yield monkeypatch
    reset_settings_cache()
