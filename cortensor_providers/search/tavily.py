"""Tavily hosted search provider.

Implements the ``SearchProvider`` capability against the Tavily search API
using the pooled ``httpx`` client. The API key comes from the constructor or
``TAVILY_API_KEY``; a missing key is a configuration error raised at
construction time.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..base.errors import ConfigurationError, WebSearchError
from ..base.http import PURPOSE_SEARCH, get_httpx_client
from ..base.logging import get_logger, normalized_log_event
from ..base.models import SearchResult
from ..base.timeouts import get_timeout_config, request_timeout
from ..config.defaults import TAVILY_DEFAULT_MAX_RESULTS, TAVILY_DEFAULT_SEARCH_DEPTH, TAVILY_SEARCH_URL
from ..config.env import is_placeholder, resolve_tavily_key


class TavilySearchProvider:
    """Search capability backed by ``POST https://api.tavily.com/search``.

    Parameters:
        api_key: Tavily key; falls back to ``TAVILY_API_KEY``.
        search_depth: ``"basic"`` or ``"advanced"``.
        include_images: Forwarded to the API; images are not used in prompts.
        max_results: Default result count when a call passes a non-positive
            value.
        timeout: Seconds per request; defaults to the search budget.

    Raises:
        ConfigurationError: If no usable API key is available.
    """

    provider_name = "tavily"

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        search_depth: str = TAVILY_DEFAULT_SEARCH_DEPTH,
        include_images: bool = False,
        max_results: int = TAVILY_DEFAULT_MAX_RESULTS,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        key = api_key or resolve_tavily_key()
        if not key or is_placeholder(key):
            raise ConfigurationError("Tavily API key is required. Set TAVILY_API_KEY or pass api_key.")
        self._api_key = key
        self.search_depth = search_depth
        self.include_images = include_images
        self.max_results = max_results
        self._timeout = timeout
        self._client = client
        self._logger = logger or get_logger("cortensor.search.tavily")

    def _payload(self, query: str, max_results: int) -> Dict[str, Any]:
        return {
            "api_key": self._api_key,
            "query": query,
            "max_results": max_results if max_results > 0 else self.max_results,
            "search_depth": self.search_depth,
            "include_images": self.include_images,
        }

    def search(self, query: str, max_results: int) -> List[SearchResult]:
        """Return up to ``max_results`` hits for ``query``.

        Raises:
            WebSearchError: On transport errors, non-2xx statuses or an
                unexpected body.
        """
        budget = self._timeout if self._timeout is not None else get_timeout_config().search_timeout_seconds
        client = self._client or get_httpx_client(None, purpose=PURPOSE_SEARCH)
        try:
            resp = client.post(
                TAVILY_SEARCH_URL,
                json=self._payload(query, max_results),
                headers={"Content-Type": "application/json"},
                timeout=request_timeout(budget),
            )
        except httpx.HTTPError as e:
            raise WebSearchError(f"Tavily search failed: {e}", raw=e) from e
        if not 200 <= resp.status_code < 300:
            raise WebSearchError(f"Tavily search failed: {resp.status_code} {resp.reason_phrase}")
        try:
            data = resp.json()
            items = data.get("results") or []
            results = [
                SearchResult(
                    title=str(item.get("title") or ""),
                    url=str(item.get("url") or ""),
                    snippet=str(item.get("content") or ""),
                )
                for item in items
            ]
        except (ValueError, AttributeError, TypeError) as e:
            raise WebSearchError(f"Tavily search failed: {e}", raw=e) from e
        normalized_log_event(self._logger, "search.results", phase="search", provider="tavily", count=len(results))
        return results


__all__ = ["TavilySearchProvider"]
