"""Query synthesis: request shape, graceful fallback, fatal credential errors."""
from __future__ import annotations

import httpx
import pytest

from cortensor_providers.base.cancellation import CancellationToken, CancelledError
from cortensor_providers.base.errors import ConfigurationError
from cortensor_providers.base.models import Message
from cortensor_providers.search import query_synthesizer as qs
from cortensor_providers.search.query_synthesizer import BackendCredentials, synthesize_search_query
from cortensor_providers.tests.utils import DummyClient, DummyResponse

CREDS = BackendCredentials(api_key="ck-live-123", base_url="https://cortensor.test", session_id=17)
MESSAGES = [Message(role="user", content="what happened in AI this week")]


def _client(response):
    return DummyClient(lambda url, payload: response)


def test_empty_messages_use_fixed_fallback():
    assert synthesize_search_query([], CREDS) == "general information"


def test_success_returns_trimmed_text_and_sends_expected_request():
    client = _client(DummyResponse(200, {"choices": [{"text": "  AI news this week \n"}]}))

    query = synthesize_search_query(MESSAGES, CREDS, client=client)

    assert query == "AI news this week"
    (call,) = client.calls
    assert call["url"] == "https://cortensor.test/api/v1/completions"
    assert call["headers"]["Authorization"] == "Bearer ck-live-123"
    assert call["json"]["session_id"] == 17
    assert call["json"]["max_tokens"] == 50
    assert call["json"]["temperature"] == 0.1
    assert call["json"]["prompt"] == (
        "Convert the following user prompt into a concise web search query (maximum 10 words). "
        "Only return the search query, nothing else:\n\nUser prompt: what happened in AI this week"
    )
    assert isinstance(call["timeout"], httpx.Timeout)


@pytest.mark.parametrize("api_key,base_url", [(None, "https://x"), ("k", None), ("", "")])
def test_missing_credentials_raise_configuration_error(api_key, base_url):
    client = _client(DummyResponse(200, {"choices": [{"text": "q"}]}))
    with pytest.raises(ConfigurationError):
        synthesize_search_query(MESSAGES, BackendCredentials(api_key, base_url, 1), client=client)
    assert client.calls == []


@pytest.mark.parametrize(
    "response",
    [
        DummyResponse(500, {"error": "boom"}, reason_phrase="Internal Server Error"),
        DummyResponse(200, {"choices": []}),
        DummyResponse(200, {"choices": [{"text": "   "}]}),
        DummyResponse(200, {"unexpected": True}),
        DummyResponse(200, text="<html>not json</html>"),
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
    ],
)
def test_failures_fall_back_to_user_text(response):
    client = _client(response)
    assert synthesize_search_query(MESSAGES, CREDS, client=client) == "what happened in AI this week"


def test_cancelled_token_prevents_the_call():
    client = _client(DummyResponse(200, {"choices": [{"text": "q"}]}))
    token = CancellationToken()
    token.cancel("caller left")
    with pytest.raises(CancelledError):
        synthesize_search_query(MESSAGES, CREDS, client=client, cancel_token=token)
    assert client.calls == []


def test_uses_pooled_client_when_none_given(monkeypatch):
    client = _client(DummyResponse(200, {"choices": [{"text": "pooled"}]}))
    seen = {}

    def fake_get(base_url, purpose):
        seen["args"] = (base_url, purpose)
        return client

    monkeypatch.setattr(qs, "get_httpx_client", fake_get)
    assert synthesize_search_query(MESSAGES, CREDS) == "pooled"
    assert seen["args"] == ("https://cortensor.test", "cortensor.synthesis")
