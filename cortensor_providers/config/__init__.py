"""Unified configuration layer for the Cortensor adapter.

Goals
-----
* Centralize the backend credentials (API key and base URL).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``CORTENSOR_CONFIG_FILE``
    3. ``.env`` file values (only fill unset or placeholder variables)
    4. Environment variables ``CORTENSOR_API_KEY`` / ``CORTENSOR_BASE_URL``
    5. In-code overrides passed to the loader
* Read the process environment once: ``get_backend_settings()`` caches a
  snapshot that callers pass into the adapter explicitly.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example:

```
cortensor:
  api_key: ...
  base_url: https://router.example.net
```

Public API
----------
* BackendSettings
* load_backend_settings(overrides: dict | None = None) -> BackendSettings
* get_backend_settings() -> BackendSettings
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

import yaml

from .env import CORTENSOR_CONFIG_FILE_ENV, ENV_FIELD_MAP, is_placeholder, read_env


@dataclass(frozen=True)
class BackendSettings:
    """Credentials for the Cortensor completion backend.

    Attributes:
        api_key: Bearer token sent on every backend call.
        base_url: Backend root URL (no trailing slash).
    """

    api_key: Optional[str] = None
    base_url: Optional[str] = None

    def __repr__(self) -> str:
        masked = "***" if self.api_key else None
        return f"BackendSettings(api_key={masked!r}, base_url={self.base_url!r})"


DEFAULTS: Dict[str, Any] = {"api_key": None, "base_url": None}

_FILE_SECTION = "cortensor"
_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False
_SNAPSHOT: Optional[BackendSettings] = None


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    """Return the ``cortensor`` section of the external config file, if any."""
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CORTENSOR_CONFIG_FILE_ENV)
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    section = data.get(_FILE_SECTION, data) if isinstance(data, dict) else {}
    _FILE_CACHE = section if isinstance(section, dict) else {}
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, env_name in ENV_FIELD_MAP.items():
        if (val := read_env(env_name)) is not None:
            out[field] = val
    return out


def load_backend_settings(overrides: Optional[Dict[str, Any]] = None) -> BackendSettings:
    """Return merged backend settings.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored so callers can pass optional
    parameters straight through.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= {k: v for k, v in _load_external_config().items() if k in DEFAULTS}
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None and k in DEFAULTS}
    base_url = cfg.get("base_url")
    return BackendSettings(
        api_key=cfg.get("api_key") or None,
        base_url=str(base_url).rstrip("/") if base_url else None,
    )


def get_backend_settings() -> BackendSettings:
    """Return the process-wide settings snapshot, reading the environment once."""
    global _SNAPSHOT  # noqa: PLW0603 - documented module cache
    if _SNAPSHOT is None:
        _SNAPSHOT = load_backend_settings()
    return _SNAPSHOT


def reset_settings_cache() -> None:
    """Drop cached file contents and the settings snapshot (tests only)."""
    global _SNAPSHOT, _FILE_CACHE, _DOTENV_LOADED  # noqa: PLW0603
    _SNAPSHOT = None
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "BackendSettings",
    "DEFAULTS",
    "load_backend_settings",
    "get_backend_settings",
    "reset_settings_cache",
]
