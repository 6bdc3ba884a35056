"""Search invocation: capability shapes, normalization, error wrapping."""
from __future__ import annotations

import threading
import time
from types import SimpleNamespace

import pytest

from cortensor_providers.base.cancellation import CancellationToken, CancelledError
from cortensor_providers.base.errors import ErrorCode, WebSearchError
from cortensor_providers.base.models import SearchResult
from cortensor_providers.search.orchestrator import normalize_result, run_web_search


def test_callable_provider_receives_query_and_limit():
    seen = []

    def provider(query, max_results):
        seen.append((query, max_results))
        return [{"title": "X", "url": "http://x", "snippet": "..."}]

    results = run_web_search("ai news", provider, 3)

    assert seen == [("ai news", 3)]
    assert results == [SearchResult(title="X", url="http://x", snippet="...")]


def test_object_provider_with_search_method():
    class Provider:
        def search(self, query, max_results):
            return [SearchResult(title="A", url="http://a")]

    assert run_web_search("q", Provider(), 5)[0].url == "http://a"


def test_results_are_truncated_in_order():
    items = [{"title": f"T{i}", "url": f"http://t/{i}"} for i in range(6)]
    results = run_web_search("q", lambda q, n: items, 2)
    assert [r.title for r in results] == ["T0", "T1"]


def test_attribute_objects_and_content_alias_are_normalized():
    item = SimpleNamespace(title="Obj", url="http://obj", content="body text")
    assert normalize_result(item) == SearchResult(title="Obj", url="http://obj", snippet="body text")


def test_provider_exception_is_wrapped_with_message_preserved():
    def provider(query, max_results):
        raise RuntimeError("quota exhausted")

    with pytest.raises(WebSearchError) as ei:
        run_web_search("q", provider, 3)
    assert ei.value.message == "Web search failed: quota exhausted"
    assert ei.value.code is ErrorCode.WEB_SEARCH
    assert ei.value.status_code == 502


@pytest.mark.parametrize(
    "provider",
    [
        lambda q, n: {"title": "not a list"},
        lambda q, n: None,
        lambda q, n: [{"title": "no url"}],
        object(),
    ],
)
def test_bad_provider_outputs_raise_web_search_error(provider):
    with pytest.raises(WebSearchError, match="^Web search failed: "):
        run_web_search("q", provider, 3)


def test_provider_error_passes_through_unchanged():
    original = WebSearchError("Tavily search failed: 401 Unauthorized")

    def provider(query, max_results):
        raise original

    with pytest.raises(WebSearchError) as ei:
        run_web_search("q", provider, 3)
    assert ei.value is original


def test_cancelled_token_skips_provider():
    calls = []
    token = CancellationToken()
    token.cancel()
    with pytest.raises(CancelledError):
        run_web_search("q", lambda q, n: calls.append(q) or [], 3, cancel_token=token)
    assert calls == []


def _stalled_provider(release: threading.Event):
    def provider(query, max_results):
        release.wait(5)
        return [{"title": "late", "url": "http://late"}]

    return provider


def test_slow_provider_is_abandoned_at_the_budget():
    release = threading.Event()
    started = time.monotonic()
    try:
        with pytest.raises(WebSearchError, match="no results within 0.1s"):
            run_web_search("q", _stalled_provider(release), 3, timeout=0.1)
        assert time.monotonic() - started < 1.0
    finally:
        release.set()


def test_budget_holds_off_the_main_thread():
    release = threading.Event()
    outcome = {}

    def worker():
        started = time.monotonic()
        try:
            run_web_search("q", _stalled_provider(release), 3, timeout=0.1)
        except WebSearchError as e:
            outcome["error"] = e
        outcome["elapsed"] = time.monotonic() - started

    t = threading.Thread(target=worker)
    try:
        t.start()
        t.join(3)
    finally:
        release.set()
    assert isinstance(outcome.get("error"), WebSearchError)
    assert outcome["elapsed"] < 1.0


def test_search_budget_defaults_to_timeout_config(monkeypatch):
    monkeypatch.setenv("CORTENSOR_TIMEOUT_SEARCH_SECONDS", "0.1")
    release = threading.Event()
    try:
        with pytest.raises(WebSearchError):
            run_web_search("q", _stalled_provider(release), 3)
    finally:
        release.set()
