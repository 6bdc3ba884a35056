"""Timeout budgets for the adapter's outbound calls.

The adapter issues at most three network requests per call: the query
synthesis completion, the external web search, and the main backend
completion. The main completion is bounded by the per-call
``ModelConfig.timeout_seconds``; the two augmentation sub-calls are bounded by
the values here, which the per-call configuration does not govern.

Supported environment variables (all optional, positive floats):
    CORTENSOR_TIMEOUT_SYNTHESIS_SECONDS
    CORTENSOR_TIMEOUT_SEARCH_SECONDS
    CORTENSOR_TIMEOUT_BACKEND_SECONDS
    CORTENSOR_TIMEOUT_CONNECT_SECONDS

The configuration is parsed on first use and cached; the cache refreshes when
any of the variables above changes so tests can adjust them at runtime.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        synthesis_timeout_seconds: Budget for the search-query synthesis call.
        search_timeout_seconds: Budget for the external search request.
        backend_timeout_seconds: Fallback budget for the main completion when
            no per-call value is available.
        connect_timeout_seconds: Connection establishment cap applied to all
            outbound calls.
    """

    synthesis_timeout_seconds: float = 15.0
    search_timeout_seconds: float = 15.0
    backend_timeout_seconds: float = 60.0
    connect_timeout_seconds: float = 10.0


_ENV_NAMES = (
    "CORTENSOR_TIMEOUT_SYNTHESIS_SECONDS",
    "CORTENSOR_TIMEOUT_SEARCH_SECONDS",
    "CORTENSOR_TIMEOUT_BACKEND_SECONDS",
    "CORTENSOR_TIMEOUT_CONNECT_SECONDS",
)

_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:
        return default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        synthesis_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.synthesis_timeout_seconds),
        search_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.search_timeout_seconds),
        backend_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.backend_timeout_seconds),
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[3], defaults.connect_timeout_seconds),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def request_timeout(seconds: float | None) -> httpx.Timeout:
    """Build the ``httpx.Timeout`` for one outbound call.

    ``seconds`` bounds each read, write and pool-acquire phase separately;
    connection establishment is additionally capped by
    ``connect_timeout_seconds``. httpx has no whole-request deadline, so a
    peer that keeps trickling bytes can hold a call open past ``seconds``.
    """
    cfg = get_timeout_config()
    total = seconds if seconds and seconds > 0 else cfg.backend_timeout_seconds
    return httpx.Timeout(total, connect=min(total, cfg.connect_timeout_seconds))


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "request_timeout",
]
