"""Search provider registry and the bundled Tavily provider."""
from __future__ import annotations

import httpx
import pytest

from cortensor_providers.base.errors import ConfigurationError, WebSearchError
from cortensor_providers.base.interfaces import SearchProvider
from cortensor_providers.base.dto import ModelConfig, SearchMode, WebSearchConfig
from cortensor_providers.base.models import SearchResult
from cortensor_providers.codec.config_codec import ConfigCodec
from cortensor_providers.search.registry import SearchProviderRegistry, UnknownSearchProviderError
from cortensor_providers.search.tavily import TavilySearchProvider
from cortensor_providers.tests.utils import DummyClient, DummyResponse


def _hits(query, max_results):
    return []


def test_register_and_resolve_case_insensitive(registry):
    name = registry.register("  My-Search ", _hits)
    assert name == "my-search"
    assert registry.resolve("MY-SEARCH") is _hits
    assert registry.name_of(_hits) == "my-search"
    assert "my-search" in registry.names()
    assert "tavily" in registry.names()


def test_register_rejects_empty_name(registry):
    with pytest.raises(ValueError):
        registry.register("   ", _hits)


def test_ensure_registered_is_idempotent(registry):
    first = registry.ensure_registered(_hits)
    second = registry.ensure_registered(_hits)
    assert first == second
    assert first.startswith("_hits-")
    assert registry.resolve(first) is _hits


def test_ensure_registered_checks_string_names(registry):
    registry.register("mine", _hits)
    assert registry.ensure_registered("Mine") == "mine"
    with pytest.raises(UnknownSearchProviderError):
        registry.ensure_registered("nope")


def test_unknown_name_lists_known_providers(registry):
    with pytest.raises(UnknownSearchProviderError) as ei:
        registry.resolve("bing")
    assert "tavily" in str(ei.value)


def test_unregister(registry):
    registry.register("tmp", _hits)
    registry.unregister("TMP")
    with pytest.raises(UnknownSearchProviderError):
        registry.resolve("tmp")


def test_reencoding_a_capability_does_not_grow_the_registry(registry):
    codec = ConfigCodec(registry)
    config = ModelConfig(session_id=1, web_search=WebSearchConfig(mode=SearchMode.FORCE, provider=_hits))
    before = len(registry.names())
    models = {codec.encode(config) for _ in range(50)}
    assert len(models) == 1
    assert len(registry.names()) == before + 1

    registry.unregister(registry.name_of(_hits))
    assert registry.name_of(_hits) is None
    assert len(registry.names()) == before


def test_runtime_registration_shadows_builtin(registry):
    registry.register("tavily", _hits)
    assert registry.resolve("tavily") is _hits


def test_builtin_tavily_without_key_fails_to_initialize(registry, clean_env):
    with pytest.raises(UnknownSearchProviderError) as ei:
        registry.resolve("tavily")
    assert "Failed to initialize" in str(ei.value)


def test_builtin_tavily_is_created_lazily_and_cached(registry, clean_env):
    clean_env.setenv("TAVILY_API_KEY", "tvly-live-abc")
    first = registry.resolve("tavily")
    assert isinstance(first, TavilySearchProvider)
    assert registry.resolve("tavily") is first


@pytest.mark.parametrize("key", [None, "", "your-placeholder-key", "test_key"])
def test_tavily_requires_usable_key(clean_env, key):
    with pytest.raises(ConfigurationError):
        TavilySearchProvider(api_key=key)


def test_tavily_satisfies_search_provider_protocol():
    assert isinstance(TavilySearchProvider(api_key="tvly-live-abc"), SearchProvider)


def test_tavily_search_maps_results():
    payload = {
        "results": [
            {"title": "A", "url": "https://a.test", "content": "alpha"},
            {"title": None, "url": "https://b.test"},
        ]
    }
    client = DummyClient(lambda url, body: DummyResponse(200, payload))
    provider = TavilySearchProvider(api_key="tvly-live-abc", client=client, timeout=4)

    results = provider.search("query text", 2)

    assert results == [
        SearchResult(title="A", url="https://a.test", snippet="alpha"),
        SearchResult(title="", url="https://b.test", snippet=""),
    ]
    (call,) = client.calls
    assert call["url"] == "https://api.tavily.com/search"
    assert call["json"] == {
        "api_key": "tvly-live-abc",
        "query": "query text",
        "max_results": 2,
        "search_depth": "basic",
        "include_images": False,
    }


def test_tavily_non_positive_max_results_uses_default():
    client = DummyClient(lambda url, body: DummyResponse(200, {"results": []}))
    TavilySearchProvider(api_key="tvly-live-abc", client=client, max_results=3).search("q", 0)
    assert client.calls[0]["json"]["max_results"] == 3


@pytest.mark.parametrize(
    "answer",
    [
        DummyResponse(401, {"detail": "bad key"}, reason_phrase="Unauthorized"),
        DummyResponse(200, text="not json"),
        DummyResponse(200, ["unexpected"]),
        httpx.ConnectError("offline"),
    ],
)
def test_tavily_failures_raise_web_search_error(answer):
    client = DummyClient(lambda url, body: answer)
    provider = TavilySearchProvider(api_key="tvly-live-abc", client=client)
    with pytest.raises(WebSearchError) as ei:
        provider.search("q", 3)
    assert ei.value.message.startswith("Tavily search failed:")


def test_registry_instances_are_independent():
    a, b = SearchProviderRegistry(), SearchProviderRegistry()
    a.register("only-a", _hits)
    assert "only-a" not in b.names()
