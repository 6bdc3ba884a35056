"""Response translation: citations, fallbacks, never-malformed output."""
from __future__ import annotations

import json

import pytest

from cortensor_providers.base.models import SearchResult
from cortensor_providers.translation import (
    APOLOGY_MESSAGE,
    format_citations,
    translate_response,
    translate_transport_response,
)
from cortensor_providers.tests.utils import backend_body

RESULTS = [SearchResult(title="X", url="http://x"), SearchResult(title="Y", url="http://y", snippet="s")]


def test_format_citations_empty_and_ordered():
    assert format_citations([]) == ""
    assert format_citations(None) == ""
    assert format_citations(RESULTS) == "\n\n**Sources:**\n[1] [X](http://x)\n[2] [Y](http://y)"


def test_translate_maps_fields_and_appends_citations():
    response = translate_response(json.dumps(backend_body("Answer.")), RESULTS, "q").to_dict()

    assert response["id"] == "cmpl-1"
    assert response["object"] == "chat.completion"
    assert response["created"] == 1700000000
    assert response["model"] == "cortensor-llm"
    assert response["choices"] == [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Answer." + format_citations(RESULTS)},
            "finish_reason": "stop",
        }
    ]
    assert response["usage"] == {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}


def test_citations_land_on_every_choice_so_first_choice_carries_them():
    body = backend_body(choices=[{"text": "a"}, {"index": 7, "text": "b", "finish_reason": "length"}])
    choices = translate_response(body, RESULTS).to_dict()["choices"]

    assert choices[0]["index"] == 0
    assert choices[0]["message"]["content"].endswith("[2] [Y](http://y)")
    assert choices[1]["index"] == 7
    assert choices[1]["finish_reason"] == "length"


def test_missing_optional_fields_get_fallbacks():
    response = translate_response({"choices": [{"text": "hi"}]}).to_dict()

    assert response["id"].startswith("cortensor-")
    assert isinstance(response["created"], int) and response["created"] > 0
    assert response["model"] == "cortensor-model"
    assert response["choices"][0]["finish_reason"] == "stop"
    assert response["choices"][0]["message"]["content"] == "hi"
    assert response["usage"] == {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}


@pytest.mark.parametrize(
    "body",
    [
        "not json at all",
        "[]",
        json.dumps({"id": "x"}),
        json.dumps({"choices": "nope"}),
        json.dumps({"choices": ["text-only"]}),
        json.dumps({"choices": [{"text": "ok"}], "usage": {"prompt_tokens": "many"}}),
        json.dumps(backend_body(choices=[])),
    ],
)
def test_malformed_bodies_become_apology(body, log_capture):
    logger, handler = log_capture
    response = translate_response(body, RESULTS, logger=logger).to_dict()

    assert response["object"] == "chat.completion"
    assert len(response["choices"]) == 1
    assert response["choices"][0]["message"] == {"role": "assistant", "content": APOLOGY_MESSAGE}
    assert response["choices"][0]["finish_reason"] == "stop"
    assert response["usage"] == {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}
    assert "translate.error" in handler.event_names()


def test_transport_translation_keeps_backend_status():
    envelope = translate_transport_response(201, "Created", json.dumps(backend_body("ok")))
    assert envelope.status_code == 201
    assert envelope.reason == "Created"
    assert envelope.body["choices"][0]["message"]["content"] == "ok"
    assert envelope.headers["Content-Type"] == "application/json"
    assert json.loads(envelope.text) == envelope.body
