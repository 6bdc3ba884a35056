"""Pooled ``httpx.Client`` instances for the adapter's three outbound calls.

One adapter call talks to at most two services: the Cortensor backend (the
main completion and, in prompt mode, the search-query synthesis completion)
and the web search provider. Each is reached through a client taken from this
pool, keyed by ``(base_url, purpose)``:

    PURPOSE_COMPLETIONS  main completion, base URL from ``BackendSettings``
    PURPOSE_SYNTHESIS    query synthesis, same base URL, separate pool so a
                         slow synthesis cannot starve completion connections
    PURPOSE_SEARCH       Tavily search, absolute URL so ``base_url`` is None

Each purpose gets its default timeout from ``TimeoutConfig``; call sites still
pass an explicit per-request ``timeout=`` and that value wins. Unknown purposes
fall back to the backend timeout. Clients live until :func:`close_all_clients`
runs, which also happens at interpreter exit.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..logging import get_logger, log_event
from ..timeouts import TimeoutConfig, get_timeout_config

PURPOSE_COMPLETIONS = "cortensor.completions"
PURPOSE_SYNTHESIS = "cortensor.synthesis"
PURPOSE_SEARCH = "tavily.search"

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def default_timeout(purpose: str, cfg: Optional[TimeoutConfig] = None) -> httpx.Timeout:
    """Return the client-level timeout for ``purpose``."""
    cfg = cfg or get_timeout_config()
    seconds = {
        PURPOSE_SYNTHESIS: cfg.synthesis_timeout_seconds,
        PURPOSE_SEARCH: cfg.search_timeout_seconds,
    }.get(purpose, cfg.backend_timeout_seconds)
    return httpx.Timeout(seconds, connect=min(seconds, cfg.connect_timeout_seconds))


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return the pooled client for ``(base_url, purpose)``, creating it once."""
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = default_timeout(purpose)
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and drop every pooled client."""
    with _LOCK:
        for (base_url, purpose), c in _CLIENTS.items():
            try:
                c.close()
            except (httpx.HTTPError, RuntimeError) as e:
                log_event(
                    get_logger("cortensor.http"),
                    "http.close_failed",
                    level=logging.WARNING,
                    base_url=base_url,
                    purpose=purpose,
                    error=str(e),
                )
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = [
    "PURPOSE_COMPLETIONS",
    "PURPOSE_SYNTHESIS",
    "PURPOSE_SEARCH",
    "default_timeout",
    "get_httpx_client",
    "close_all_clients",
]
