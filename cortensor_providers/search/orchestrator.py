"""Web search invocation and result normalization.

The search capability is injected by configuration and may be a plain
callable ``(query, max_results)`` or an object exposing
``search(query, max_results)``. Whatever it returns is normalized into
``SearchResult`` values in original order and truncated to ``max_results``.
Every failure surfaces as ``WebSearchError`` with the original message
preserved; there are no retries.
"""

from __future__ import annotations

import concurrent.futures as cf
import threading
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import WebSearchError
from ..base.models import SearchResult
from ..base.timeouts import get_timeout_config

# Search calls run on these workers so the caller can stop waiting at the
# budget even when the capability itself never returns. A timed-out call keeps
# its worker until it finishes; its result is discarded.
_SEARCH_WORKERS = 8
_EXECUTOR: Optional[cf.ThreadPoolExecutor] = None
_EXECUTOR_LOCK = threading.Lock()


def _executor() -> cf.ThreadPoolExecutor:
    global _EXECUTOR  # noqa: PLW0603 - lazily created process pool
    if _EXECUTOR is None:
        with _EXECUTOR_LOCK:
            if _EXECUTOR is None:
                _EXECUTOR = cf.ThreadPoolExecutor(max_workers=_SEARCH_WORKERS, thread_name_prefix="cortensor-search")
    return _EXECUTOR


def _resolve_callable(provider: Any) -> Callable[[str, int], Any]:
    method = getattr(provider, "search", None)
    if callable(method):
        return method
    if callable(provider):
        return provider
    raise TypeError(f"search provider of type {type(provider).__name__} is not callable")


def _field(item: Any, *names: str) -> Any:
    for name in names:
        value = item.get(name) if isinstance(item, Mapping) else getattr(item, name, None)
        if value is not None:
            return value
    return None


def normalize_result(item: Any) -> SearchResult:
    """Coerce one provider item (``SearchResult``, mapping or object) into a `SearchResult`.

    ``content`` and ``description`` are accepted as snippet aliases.

    Raises:
        ValueError: When the item has no url.
    """
    if isinstance(item, SearchResult):
        return item
    url = _field(item, "url", "link")
    if not url:
        raise ValueError(f"search result is missing a url: {item!r}")
    title = _field(item, "title") or str(url)
    snippet = _field(item, "snippet", "content", "description") or ""
    return SearchResult(title=str(title), url=str(url), snippet=str(snippet))


def run_web_search(
    query: str,
    provider: Any,
    max_results: int,
    *,
    timeout: Optional[float] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> List[SearchResult]:
    """Invoke the search capability once and return normalized results.

    The capability runs on a worker thread and the caller waits at most
    ``timeout`` seconds (default: the search budget), on any thread.

    Raises:
        WebSearchError: On any provider failure, a non-list return value, a
            malformed item, or when the budget elapses first.
        CancelledError: If ``cancel_token`` was cancelled before the call.
    """
    if cancel_token is not None:
        cancel_token.checkpoint("web search")
    budget = timeout if timeout is not None else get_timeout_config().search_timeout_seconds
    try:
        search = _resolve_callable(provider)
        future = _executor().submit(search, query, max_results)
        try:
            raw = future.result(timeout=budget if budget > 0 else None)
        except cf.TimeoutError as e:
            future.cancel()
            raise WebSearchError(f"Web search failed: no results within {budget}s", raw=e) from e
        if isinstance(raw, tuple):
            raw = list(raw)
        if not isinstance(raw, list):
            raise TypeError(f"search provider returned {type(raw).__name__}, expected a list")
        return [normalize_result(item) for item in raw[: max(0, max_results)]]
    except WebSearchError:
        raise
    except Exception as e:
        raise WebSearchError(f"Web search failed: {e}", raw=e) from e


__all__ = ["normalize_result", "run_web_search"]
