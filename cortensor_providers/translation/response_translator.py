"""Backend-to-standard response translation.

Purpose
-------
Map the Cortensor completion payload onto the OpenAI-compatible
``chat.completion`` shape and append citations when search results were used.

Fallback semantics
------------------
By the time translation runs the backend call has succeeded, so a payload
that cannot be parsed never becomes an error status: the caller receives a
well-formed apology completion instead; a payload without any choice counts
as unparseable. Missing optional fields are filled
(``cortensor-<ms>`` id, current time, ``cortensor-model`` label, zero usage,
``"stop"`` finish reason).
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Optional, Sequence, Union

from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    BackendResponse,
    SearchResult,
    StandardChoice,
    StandardResponse,
    StandardUsage,
    TransportResponse,
)
from ..config.defaults import CORTENSOR_FALLBACK_MODEL_LABEL
from .citations import format_citations

APOLOGY_MESSAGE = "Sorry, I encountered an error processing your request."


def _now_ms() -> int:
    return int(time.time() * 1000)


def apology_response(message: str = APOLOGY_MESSAGE) -> StandardResponse:
    """Return the generic single-choice apology completion."""
    return StandardResponse(
        id=f"cortensor-error-{_now_ms()}",
        created=int(time.time()),
        model=CORTENSOR_FALLBACK_MODEL_LABEL,
        choices=[StandardChoice(index=0, content=message, finish_reason="stop")],
        usage=StandardUsage(),
    )


def _build_response(
    backend: BackendResponse,
    search_results: Optional[Sequence[SearchResult]],
) -> StandardResponse:
    if not backend.choices:
        raise ValueError("backend returned no choices")
    citations = format_citations(search_results)
    choices = [
        StandardChoice(
            index=choice.index if choice.index is not None else position,
            content=choice.text + citations,
            finish_reason=choice.finish_reason or "stop",
        )
        for position, choice in enumerate(backend.choices)
    ]
    usage = StandardUsage()
    if backend.usage is not None:
        usage = StandardUsage(
            prompt_tokens=backend.usage.prompt_tokens,
            completion_tokens=backend.usage.completion_tokens,
            total_tokens=backend.usage.total_tokens,
        )
    return StandardResponse(
        id=backend.id or f"cortensor-{_now_ms()}",
        created=backend.created or int(time.time()),
        model=backend.model or CORTENSOR_FALLBACK_MODEL_LABEL,
        choices=choices,
        usage=usage,
    )


def translate_response(
    backend_body: Union[str, bytes, Any],
    search_results: Optional[Sequence[SearchResult]] = None,
    search_query: Optional[str] = None,
    *,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> StandardResponse:
    """Translate a backend completion body into a `StandardResponse`.

    ``backend_body`` may be raw JSON text/bytes or an already-decoded value.
    Never raises: any parse failure yields `apology_response()`.
    """
    logger = logger or get_logger("cortensor.translation")
    try:
        data = json.loads(backend_body) if isinstance(backend_body, (str, bytes, bytearray)) else backend_body
        response = _build_response(BackendResponse.from_dict(data), search_results)
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        normalized_log_event(
            logger,
            "translate.error",
            ctx,
            phase="translate",
            error_code="UNKNOWN_ERROR",
            level=logging.ERROR,
            error=str(e),
        )
        return apology_response()
    normalized_log_event(
        logger,
        "backend.response",
        ctx,
        phase="translate",
        choices=len(response.choices),
        citations=len(search_results or ()),
        search_query=search_query,
    )
    return response


def translate_transport_response(
    status_code: int,
    reason: str,
    body_text: Union[str, bytes],
    search_results: Optional[Sequence[SearchResult]] = None,
    search_query: Optional[str] = None,
    *,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> TransportResponse:
    """Wrap `translate_response` in a transport envelope keeping the backend status."""
    translated = translate_response(body_text, search_results, search_query, logger=logger, ctx=ctx)
    return TransportResponse(status_code=status_code, reason=reason, body=translated.to_dict())


__all__ = [
    "APOLOGY_MESSAGE",
    "apology_response",
    "translate_response",
    "translate_transport_response",
]
