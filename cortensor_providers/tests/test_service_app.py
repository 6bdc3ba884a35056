"""HTTP surface: routes relay the adapter's status and JSON body unchanged."""
from __future__ import annotations

import asyncio
import json
import threading
import time

import pytest
from fastapi.testclient import TestClient

from cortensor_providers.adapter import CortensorAdapter
from cortensor_providers.base.dto import ModelConfig, SearchMode, WebSearchConfig
from cortensor_providers.codec import ConfigCodec
from cortensor_providers.service import app as app_module
from cortensor_providers.service.dev_server import _parse_port
from cortensor_providers.tests.utils import DummyClient, DummyResponse, backend_body, scripted_route


@pytest.fixture()
def client_for(settings, registry):
    def _make(route):
        http = DummyClient(route)
        app_module.set_adapter(CortensorAdapter(settings, http_client=http, search_registry=registry))
        return TestClient(app_module.app), http

    yield _make
    app_module.set_adapter(None)


def _payload(registry, content="hello"):
    model = ConfigCodec(registry).encode(ModelConfig(session_id=3))
    return {"model": model, "messages": [{"role": "user", "content": content}]}


def test_health():
    with TestClient(app_module.app) as tc:
        resp = tc.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


@pytest.mark.parametrize("path", ["/v1/chat/completions", "/chat/completions"])
def test_chat_completion_routes(client_for, registry, path):
    tc, http = client_for(scripted_route(backend=DummyResponse(200, backend_body("Hi!"))))
    resp = tc.post(path, json=_payload(registry))

    assert resp.status_code == 200
    body = resp.json()
    assert body["object"] == "chat.completion"
    assert body["choices"][0]["message"] == {"role": "assistant", "content": "Hi!"}
    assert body["usage"]["total_tokens"] == 15
    assert len(http.backend_calls()) == 1


def test_error_status_is_relayed(client_for):
    tc, http = client_for(scripted_route())
    resp = tc.post("/v1/chat/completions", json={"model": "cortensor-chat", "messages": [{"role": "user", "content": "x"}]})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "CONFIGURATION_ERROR"
    assert http.calls == []


def test_invalid_json_body_is_a_client_error(client_for):
    tc, _ = client_for(scripted_route())
    resp = tc.post("/v1/chat/completions", content=b"{oops", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400


def test_backend_failure_is_relayed_as_500(client_for, registry):
    tc, _ = client_for(scripted_route(backend=DummyResponse(502, {}, reason_phrase="Bad Gateway")))
    resp = tc.post("/chat/completions", json=_payload(registry))
    assert resp.status_code == 500
    assert resp.json()["error"]["message"] == "Cortensor API error: 502 Bad Gateway"


def test_set_adapter_none_recreates_lazily(monkeypatch):
    monkeypatch.setattr(app_module, "CortensorAdapter", lambda: "fresh")
    app_module.set_adapter(None)
    try:
        assert app_module.get_adapter() == "fresh"
    finally:
        app_module.set_adapter(None)


@pytest.mark.parametrize("raw,expected", [(None, 8091), ("", 8091), ("9000", 9000), ("http", 8091)])
def test_parse_port(raw, expected):
    assert _parse_port(raw, 8091) == expected


def _search_payload(registry, provider):
    model = ConfigCodec(registry).encode(
        ModelConfig(session_id=3, web_search=WebSearchConfig(mode=SearchMode.FORCE, provider=provider))
    )
    return {"model": model, "messages": [{"role": "user", "content": "news today"}]}


def test_search_budget_is_enforced_on_the_service_path(client_for, registry, monkeypatch):
    monkeypatch.setenv("CORTENSOR_TIMEOUT_SEARCH_SECONDS", "0.2")
    release = threading.Event()

    def slow_provider(query, max_results):
        release.wait(1.5)
        return [{"title": "late", "url": "http://late"}]

    tc, http = client_for(scripted_route())
    try:
        started = time.monotonic()
        resp = tc.post("/v1/chat/completions", json=_search_payload(registry, slow_provider))
        elapsed = time.monotonic() - started
    finally:
        release.set()

    assert resp.status_code == 200
    assert elapsed < 1.0
    assert "**Sources:**" not in resp.json()["choices"][0]["message"]["content"]
    assert len(http.backend_calls()) == 1


class _DisconnectingRequest:
    """Request whose client drops once ``gone`` is set."""

    def __init__(self, payload, gone: threading.Event) -> None:
        self._raw = json.dumps(payload).encode()
        self._gone = gone

    async def body(self) -> bytes:
        return self._raw

    async def is_disconnected(self) -> bool:
        return self._gone.is_set()


def test_disconnected_client_gets_no_backend_call(settings, registry, monkeypatch):
    monkeypatch.setattr(app_module, "DISCONNECT_POLL_SECONDS", 0.01)
    gone = threading.Event()

    def provider(query, max_results):
        gone.set()
        time.sleep(0.3)
        return [{"title": "X", "url": "http://x"}]

    http = DummyClient(scripted_route())
    app_module.set_adapter(CortensorAdapter(settings, http_client=http, search_registry=registry))
    try:
        resp = asyncio.run(app_module._relay(_DisconnectingRequest(_search_payload(registry, provider), gone)))
    finally:
        app_module.set_adapter(None)

    assert resp.status_code == 499
    body = json.loads(resp.body)
    assert body["error"]["code"] == "CANCELLED"
    assert body["error"]["message"] == "client disconnected (before backend request)"
    assert len(http.synthesis_calls()) == 1
    assert http.backend_calls() == []


def test_connected_client_is_not_cancelled(settings, registry):
    http = DummyClient(scripted_route())
    app_module.set_adapter(CortensorAdapter(settings, http_client=http, search_registry=registry))
    try:
        resp = asyncio.run(app_module._relay(_DisconnectingRequest(_payload(registry), threading.Event())))
    finally:
        app_module.set_adapter(None)
    assert resp.status_code == 200
    assert len(http.backend_calls()) == 1
