"""Search provider registry.

Purpose
-------
The encoded model identifier is a string, so it cannot carry a live search
capability. The registry gives each capability a name: encoding stores the
name, decoding resolves it back to the capability.

Built-in providers are imported lazily using ``importlib`` (the ``tavily``
entry is only imported when first resolved). Runtime registrations take
precedence over built-ins of the same name.

Failure modes
-------------
``UnknownSearchProviderError`` for unknown names, import failures, missing
classes, or constructor errors. No retries or fallbacks.
"""

from __future__ import annotations

import threading
from importlib import import_module
from typing import Any, Dict, Optional


class UnknownSearchProviderError(Exception):
    """Raised when a search provider name cannot be resolved or initialized."""


class SearchProviderRegistry:
    """Name <-> capability mapping for web search providers.

    Design notes
    ------------
    - Built-ins are described by module path and class name and created on
      first resolution; the instance is then cached.
    - ``ensure_registered`` is idempotent: registering the same object twice
      yields the same name.
    """

    _BUILTINS: Dict[str, Dict[str, str]] = {
        "tavily": {"module": "cortensor_providers.search.tavily", "class": "TavilySearchProvider"},
    }

    def __init__(self) -> None:
        self._providers: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register(self, name: str, provider: Any) -> str:
        """Register ``provider`` under ``name`` and return the canonical name."""
        key = (name or "").strip().lower()
        if not key:
            raise ValueError("search provider name must be non-empty")
        with self._lock:
            self._providers[key] = provider
        return key

    def unregister(self, name: str) -> None:
        with self._lock:
            self._providers.pop((name or "").strip().lower(), None)

    def name_of(self, provider: Any) -> Optional[str]:
        """Return the registered name of ``provider`` (identity match) or ``None``."""
        with self._lock:
            for key, value in self._providers.items():
                if value is provider:
                    return key
        return None

    def ensure_registered(self, provider: Any) -> str:
        """Return a name that resolves to ``provider``, registering it if needed.

        Strings are treated as names and returned (after checking they
        resolve). Capability objects get a generated name derived from their
        type and identity; encoding the same object again reuses that name.
        The registry holds a strong reference until ``unregister`` is called,
        so pass long-lived capabilities rather than a fresh one per request.
        """
        if isinstance(provider, str):
            self.resolve(provider)
            return provider.strip().lower()
        existing = self.name_of(provider)
        if existing is not None:
            return existing
        label = getattr(provider, "__name__", None) or type(provider).__name__
        return self.register(f"{label}-{id(provider):x}", provider)

    def resolve(self, name: str) -> Any:
        """Return the capability registered under ``name``.

        Raises
        ------
        UnknownSearchProviderError
            If the name is unknown or its built-in cannot be created.
        """
        key = (name or "").strip().lower()
        with self._lock:
            if key in self._providers:
                return self._providers[key]
        spec = self._BUILTINS.get(key)
        if spec is None:
            raise UnknownSearchProviderError(f"Unknown search provider '{name}'. Known: {', '.join(self.names())}")
        try:
            module = import_module(spec["module"])
        except ImportError as e:
            raise UnknownSearchProviderError(f"Failed to import search provider '{key}': {e}") from e
        try:
            cls = getattr(module, spec["class"])
        except AttributeError as e:
            raise UnknownSearchProviderError(
                f"Search provider class '{spec['class']}' not found in '{spec['module']}'"
            ) from e
        try:
            instance = cls()
        except Exception as e:
            raise UnknownSearchProviderError(f"Failed to initialize search provider '{key}': {e}") from e
        self.register(key, instance)
        return instance

    def names(self) -> list[str]:
        with self._lock:
            return sorted(set(self._providers) | set(self._BUILTINS))


_DEFAULT_REGISTRY = SearchProviderRegistry()


def get_search_registry() -> SearchProviderRegistry:
    """Return the process-wide default registry."""
    return _DEFAULT_REGISTRY


__all__ = ["SearchProviderRegistry", "UnknownSearchProviderError", "get_search_registry"]
