"""cortensor_providers.config.env
==============================

Centralized environment variable names and helpers for credentials.

Purpose
-------
- Single source of truth for the environment variables the adapter reads.
- Small helpers to look up credentials consistently across the package.

Failure Modes
-------------
Helpers return ``None`` when no usable value is present and never raise;
callers decide how to proceed (usually a ``ConfigurationError`` at the edge).
"""

from __future__ import annotations

import os
from typing import Dict, Optional

CORTENSOR_API_KEY_ENV = "CORTENSOR_API_KEY"  # pragma: allowlist secret - env name
CORTENSOR_BASE_URL_ENV = "CORTENSOR_BASE_URL"
CORTENSOR_CONFIG_FILE_ENV = "CORTENSOR_CONFIG_FILE"
TAVILY_API_KEY_ENV = "TAVILY_API_KEY"  # pragma: allowlist secret - env name
SERVICE_HOST_ENV = "CORTENSOR_SERVICE_HOST"
SERVICE_PORT_ENV = "CORTENSOR_SERVICE_PORT"
SERVICE_CORS_ENV = "CORTENSOR_SERVICE_CORS_ORIGINS"

# Settings field -> environment variable.
ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": CORTENSOR_API_KEY_ENV,
    "base_url": CORTENSOR_BASE_URL_ENV,
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and ignores surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def read_env(name: str) -> Optional[str]:
    """Return a stripped, non-empty environment value or ``None``."""
    val = os.environ.get(name)
    if val is None:
        return None
    val = val.strip()
    return val or None


def resolve_tavily_key() -> Optional[str]:
    """Return the Tavily API key from the environment, if any."""
    return read_env(TAVILY_API_KEY_ENV)


__all__ = [
    "CORTENSOR_API_KEY_ENV",
    "CORTENSOR_BASE_URL_ENV",
    "CORTENSOR_CONFIG_FILE_ENV",
    "TAVILY_API_KEY_ENV",
    "SERVICE_HOST_ENV",
    "SERVICE_PORT_ENV",
    "SERVICE_CORS_ENV",
    "ENV_FIELD_MAP",
    "is_placeholder",
    "read_env",
    "resolve_tavily_key",
]
