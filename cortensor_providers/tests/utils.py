"""Shared testing utilities for the adapter test suite.

Network access is never performed: every outbound call goes through a
``DummyClient`` standing in for the pooled ``httpx.Client``. Clients record
each ``post`` and answer from a routing function so a test can script the
query-synthesis call and the backend completion independently.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional


class DummyResponse:
    """Minimal stand-in for ``httpx.Response``."""

    def __init__(self, status_code: int = 200, payload: Any = None, *, text: Optional[str] = None, reason_phrase: str = "OK") -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        return json.loads(self.text)


class DummyClient:
    """Records ``post`` calls and answers via ``route(url, payload)``."""

    def __init__(self, route: Callable[[str, Dict[str, Any]], Any]) -> None:
        self._route = route
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, *, json: Any = None, headers: Optional[Dict[str, str]] = None, timeout: Any = None) -> Any:
        self.calls.append({"url": url, "json": json, "headers": headers or {}, "timeout": timeout})
        result = self._route(url, json)
        if isinstance(result, BaseException):
            raise result
        return result

    def backend_calls(self) -> List[Dict[str, Any]]:
        return [c for c in self.calls if "prompt_type" in (c["json"] or {})]

    def synthesis_calls(self) -> List[Dict[str, Any]]:
        return [c for c in self.calls if "prompt_type" not in (c["json"] or {})]


def backend_body(text: str = "Hello there", **overrides: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "id": "cmpl-1",
        "created": 1700000000,
        "model": "cortensor-llm",
        "choices": [{"index": 0, "text": text, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }
    body.update(overrides)
    return body


def scripted_route(
    *,
    backend: Any = None,
    synthesis: Any = None,
) -> Callable[[str, Dict[str, Any]], Any]:
    """Route backend completions and query-synthesis calls to fixed answers."""

    def _route(url: str, payload: Dict[str, Any]) -> Any:
        if "prompt_type" in (payload or {}):
            return backend if backend is not None else DummyResponse(200, backend_body())
        return synthesis if synthesis is not None else DummyResponse(200, {"choices": [{"text": " latest AI news "}]})

    return _route


class ListHandler(logging.Handler):
    """Capture formatted log messages (JSON payloads) into a list."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self) -> List[Dict[str, Any]]:
        return [json.loads(m) for m in self.messages]

    def event_names(self) -> List[str]:
        return [e.get("event") for e in self.events()]


__all__ = ["DummyResponse", "DummyClient", "backend_body", "scripted_route", "ListHandler"]
