"""SearchProvider Protocol (single-class module).

Defines the external web search capability the adapter consults when a
request asks for search augmentation.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable


@runtime_checkable
class SearchProvider(Protocol):
    """Interface for web search backends.

    Implementations return an iterable of results, each either a
    ``SearchResult`` or a mapping with ``title``/``url``/``snippet`` keys
    (``content`` is accepted as an alias for ``snippet``). Failures should be
    raised; the orchestrator wraps them.
    """

    def search(self, query: str, max_results: int) -> Iterable[Any]:
        """Run ``query`` and return at most ``max_results`` hits."""
        ...
