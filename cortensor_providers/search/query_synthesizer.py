"""Search query synthesis.

Compresses the latest user turn into a short web search query by asking the
backend model itself. Only credential problems are fatal: every other
failure (transport error, timeout, non-2xx status, unusable body) degrades to
using the user's own text as the query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import httpx

from ..base.cancellation import CancellationToken
from ..base.errors import ConfigurationError
from ..base.http import PURPOSE_SYNTHESIS, get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Message
from ..base.timeouts import get_timeout_config, request_timeout
from ..base.utils.messages import extract_message_text
from ..config.defaults import (
    CORTENSOR_COMPLETIONS_PATH,
    QUERY_SYNTHESIS_EMPTY_FALLBACK,
    QUERY_SYNTHESIS_MAX_TOKENS,
    QUERY_SYNTHESIS_TEMPERATURE,
)

QUERY_PROMPT_TEMPLATE = (
    "Convert the following user prompt into a concise web search query (maximum 10 words). "
    "Only return the search query, nothing else:\n\nUser prompt: {text}"
)


@dataclass(frozen=True)
class BackendCredentials:
    """Credentials and session scope for a backend completion call."""

    api_key: Optional[str]
    base_url: Optional[str]
    session_id: int

    def __repr__(self) -> str:
        masked = "***" if self.api_key else None
        return f"BackendCredentials(api_key={masked!r}, base_url={self.base_url!r}, session_id={self.session_id})"


def build_query_prompt(text: str) -> str:
    """Return the instruction prompt asking the model for a search query."""
    return QUERY_PROMPT_TEMPLATE.format(text=text)


def _extract_choice_text(data: Any) -> str:
    """Return trimmed ``choices[0].text`` or an empty string."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    text = choices[0].get("text")
    return text.strip() if isinstance(text, str) else ""


def synthesize_search_query(
    cleaned_messages: Sequence[Message],
    credentials: BackendCredentials,
    *,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
    cancel_token: Optional[CancellationToken] = None,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> str:
    """Return a concise web search query for the latest message.

    Parameters:
        cleaned_messages: Conversation with directive markers removed.
        credentials: Backend key, base URL and session id.
        client: Optional ``httpx.Client``; defaults to the pooled client.
        timeout: Seconds for the call; defaults to the synthesis budget.
        cancel_token: Checked before the outbound call.

    Returns:
        The synthesized query, ``"general information"`` for an empty
        conversation, or the user's text verbatim when synthesis fails.

    Raises:
        ConfigurationError: If the API key or base URL is missing.
        CancelledError: If ``cancel_token`` was cancelled.
    """
    if not cleaned_messages:
        return QUERY_SYNTHESIS_EMPTY_FALLBACK

    logger = logger or get_logger("cortensor.search")
    user_text = extract_message_text(cleaned_messages[-1])

    if not credentials.api_key or not credentials.base_url:
        raise ConfigurationError("API key and base URL are required for search query generation")
    if cancel_token is not None:
        cancel_token.checkpoint("query synthesis")

    payload: Dict[str, Any] = {
        "session_id": credentials.session_id,
        "prompt": build_query_prompt(user_text),
        "max_tokens": QUERY_SYNTHESIS_MAX_TOKENS,
        "temperature": QUERY_SYNTHESIS_TEMPERATURE,
    }
    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {credentials.api_key}"}
    budget = timeout if timeout is not None else get_timeout_config().synthesis_timeout_seconds
    http = client or get_httpx_client(credentials.base_url, purpose=PURPOSE_SYNTHESIS)

    try:
        resp = http.post(
            f"{credentials.base_url}{CORTENSOR_COMPLETIONS_PATH}",
            json=payload,
            headers=headers,
            timeout=request_timeout(budget),
        )
        if not 200 <= resp.status_code < 300:
            normalized_log_event(
                logger,
                "search.query",
                ctx,
                phase="synthesis",
                error_code="BACKEND_ERROR",
                level=logging.WARNING,
                status=resp.status_code,
                fallback=True,
            )
            return user_text
        query = _extract_choice_text(resp.json())
    except (httpx.HTTPError, ValueError) as e:
        normalized_log_event(
            logger,
            "search.query",
            ctx,
            phase="synthesis",
            error_code="BACKEND_ERROR",
            level=logging.WARNING,
            error=str(e),
            fallback=True,
        )
        return user_text

    if not query:
        normalized_log_event(logger, "search.query", ctx, phase="synthesis", fallback=True, reason="empty")
        return user_text
    normalized_log_event(logger, "search.query", ctx, phase="synthesis", query=query, fallback=False)
    return query


__all__ = ["BackendCredentials", "build_query_prompt", "synthesize_search_query", "QUERY_PROMPT_TEMPLATE"]
