"""Cortensor adapter controller.

Purpose
-------
Single entry point turning an OpenAI-compatible chat-completion request body
into a standard chat-completion response from the Cortensor backend.

Flow (strictly sequential per call)
-----------------------------------
1. Validate backend credentials.
2. Decode the ``ModelConfig`` carried in the request's ``model`` string.
3. Extract inline search directives from the latest message.
4. Optionally synthesize a query and run web search. Failures here are
   logged and the call proceeds without search, except configuration errors
   and cancellation, which abort.
5. Assemble the flat prompt and build the backend request.
6. POST to ``<base>/api/v1/completions``. ``timeout_seconds`` bounds each
   connect, read and write phase of the call rather than its total duration
   (see :func:`request_timeout`).
7. Translate the backend body (with citations) into the standard shape.

Every terminal failure goes through :func:`error_response`, so callers always
receive a JSON body: a standard response or ``{"error": {...}}``.

Concurrency
-----------
The controller holds no per-call mutable state; one instance may serve
concurrent calls. The optional ``CancellationToken`` is checked before every
outbound request.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from http import HTTPStatus
from typing import List, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from ..base.cancellation import CancellationToken, CancelledError
from ..base.dto.chat import ChatCompletionRequestDTO
from ..base.dto.model_config import ModelConfig
from ..base.errors import (
    AdapterError,
    BackendError,
    ConfigExtractionError,
    ConfigurationError,
    classify_exception,
    error_payload,
    status_for,
)
from ..base.http import PURPOSE_COMPLETIONS, get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import BackendRequest, Message, SearchResult, TransportResponse, new_client_reference
from ..base.timeouts import request_timeout
from ..base.utils.validation import summarize_validation_error
from ..codec.config_codec import ConfigCodec
from ..config import BackendSettings, get_backend_settings, load_backend_settings
from ..config.defaults import CORTENSOR_COMPLETIONS_PATH
from ..prompt.assembler import assemble_prompt
from ..search.directives import extract_search_directives
from ..search.orchestrator import run_web_search
from ..search.query_synthesizer import BackendCredentials, synthesize_search_query
from ..search.registry import SearchProviderRegistry
from ..translation.response_translator import translate_transport_response

RawBody = Union[str, bytes, Mapping]

_REASONS = {499: "Client Closed Request"}


def _reason_for(status: int) -> str:
    if status in _REASONS:
        return _REASONS[status]
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def error_response(exc: BaseException) -> TransportResponse:
    """Map any exception to the structured error transport response.

    ``ConfigurationError`` -> 400, ``WebSearchError`` -> 502,
    ``BackendError``/unknown -> 500, ``CancelledError`` -> 499.
    """
    status = status_for(classify_exception(exc))
    return TransportResponse(status_code=status, reason=_reason_for(status), body=error_payload(exc))


class CortensorAdapter:
    """OpenAI-compatible front for the Cortensor completion backend.

    Parameters
    ----------
    settings:
        Backend credentials; defaults to the process settings snapshot.
    http_client:
        Optional ``httpx.Client`` used for backend calls; defaults to the
        pooled client for the configured base URL.
    logger:
        Logger receiving structured events; acts as the tracing hook.
    search_registry:
        Registry used to resolve search providers named in model identifiers.
    """

    provider_name = "cortensor"

    def __init__(
        self,
        settings: Optional[BackendSettings] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
        search_registry: Optional[SearchProviderRegistry] = None,
    ) -> None:
        self._settings = settings if settings is not None else get_backend_settings()
        self._http_client = http_client
        self._logger = logger or get_logger("cortensor.adapter")
        self._codec = ConfigCodec(search_registry)

    @property
    def settings(self) -> BackendSettings:
        return self._settings

    @property
    def codec(self) -> ConfigCodec:
        return self._codec

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------
    def handle(self, raw_body: RawBody, *, cancel_token: Optional[CancellationToken] = None) -> TransportResponse:
        """Process one request body and return a transport response.

        Never raises; failures become structured error responses.
        """
        try:
            return self.process(raw_body, cancel_token=cancel_token)
        except Exception as e:  # single error mapper for every terminal failure
            code = classify_exception(e)
            normalized_log_event(
                self._logger,
                "adapter.error",
                phase="handle",
                error_code=code.value,
                level=logging.ERROR,
                error=str(e),
                error_type=type(e).__name__,
                stage=e.stage if isinstance(e, CancelledError) else None,
            )
            return error_response(e)

    def process(self, raw_body: RawBody, *, cancel_token: Optional[CancellationToken] = None) -> TransportResponse:
        """Run the adapter pipeline, raising on terminal failures."""
        self._validate_settings()
        body = self._parse_body(raw_body)
        config = self._codec.extract_model_configuration(body)
        request = self._parse_request(body)
        ctx = LogContext(
            provider=self.provider_name,
            model=config.model_name,
            session_id=config.session_id,
            request_id=new_client_reference(),
        )
        normalized_log_event(self._logger, "adapter.start", ctx, phase="start", messages=len(request.messages))
        normalized_log_event(
            self._logger,
            "adapter.config_decoded",
            ctx,
            phase="decode",
            explicit_fields=sorted(config.model_fields_set),
            web_search=config.web_search is not None,
        )

        messages = request.to_messages()
        directives = extract_search_directives(messages, config.web_search)
        normalized_log_event(
            self._logger,
            "search.directives",
            ctx,
            phase="directives",
            should_search=directives.should_search,
        )

        results, query = self._augment(config, directives.should_search, list(directives.cleaned_messages), ctx, cancel_token)
        prompt = assemble_prompt(directives.cleaned_messages, results, query)
        backend_request = self.build_backend_request(config, prompt, request.temperature, ctx.request_id)
        return self._call_backend(config, backend_request, results, query, ctx, cancel_token)

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------
    def _validate_settings(self) -> None:
        if not self._settings.api_key:
            raise ConfigurationError("Cortensor API key is required. Set CORTENSOR_API_KEY or pass api_key.")
        if not self._settings.base_url:
            raise ConfigurationError("Cortensor base URL is required. Set CORTENSOR_BASE_URL or pass base_url.")

    @staticmethod
    def _parse_body(raw_body: RawBody) -> Mapping:
        if isinstance(raw_body, Mapping):
            return raw_body
        try:
            body = json.loads(raw_body)
        except ValueError as e:
            raise ConfigExtractionError(f"Failed to extract model configuration: invalid JSON body: {e}", raw=e) from e
        if not isinstance(body, Mapping):
            raise ConfigExtractionError("Failed to extract model configuration: request body must be a JSON object")
        return body

    @staticmethod
    def _parse_request(body: Mapping) -> ChatCompletionRequestDTO:
        try:
            return ChatCompletionRequestDTO.model_validate(dict(body))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid chat completion request: {summarize_validation_error(e)}", raw=e) from e

    def _augment(
        self,
        config: ModelConfig,
        should_search: bool,
        cleaned: List[Message],
        ctx: LogContext,
        cancel_token: Optional[CancellationToken],
    ) -> Tuple[Optional[List[SearchResult]], Optional[str]]:
        """Return ``(results, query)`` or ``(None, None)`` when search is skipped or fails."""
        ws = config.web_search
        if not should_search or ws is None or ws.provider is None:
            return None, None
        return self._run_search(config, cleaned, ctx, cancel_token)

    def _run_search(
        self,
        config: ModelConfig,
        cleaned: List[Message],
        ctx: LogContext,
        cancel_token: Optional[CancellationToken],
    ) -> Tuple[Optional[List[SearchResult]], Optional[str]]:
        ws = config.web_search
        credentials = BackendCredentials(self._settings.api_key, self._settings.base_url, config.session_id)
        try:
            query = synthesize_search_query(
                cleaned,
                credentials,
                client=self._http_client,
                cancel_token=cancel_token,
                logger=self._logger,
                ctx=ctx,
            )
            results = run_web_search(query, ws.provider, ws.max_results, cancel_token=cancel_token)
        except (ConfigurationError, CancelledError):
            raise
        except AdapterError as e:
            normalized_log_event(
                self._logger,
                "search.skipped",
                ctx,
                phase="search",
                error_code=e.code.value,
                level=logging.WARNING,
                error=e.message,
            )
            return None, None
        normalized_log_event(self._logger, "search.results", ctx, phase="search", query=query, count=len(results))
        return results, query

    @staticmethod
    def build_backend_request(
        config: ModelConfig,
        prompt: str,
        request_temperature: Optional[float] = None,
        client_reference: Optional[str] = None,
    ) -> BackendRequest:
        """Build the backend request body.

        Temperature precedence: explicit config value, then the request's own
        ``temperature``, then the default.
        """
        temperature = config.temperature
        if not config.is_explicit("temperature") and request_temperature is not None:
            temperature = request_temperature
        return BackendRequest(
            session_id=config.session_id,
            prompt=prompt,
            prompt_type=config.prompt_type,
            prompt_template=config.prompt_template,
            timeout=config.timeout_seconds,
            client_reference=client_reference or new_client_reference(),
            max_tokens=config.max_tokens,
            temperature=temperature,
            top_p=config.top_p,
            top_k=config.top_k,
            presence_penalty=config.presence_penalty,
            frequency_penalty=config.frequency_penalty,
            stream=False,
        )

    def _call_backend(
        self,
        config: ModelConfig,
        backend_request: BackendRequest,
        results: Optional[List[SearchResult]],
        query: Optional[str],
        ctx: LogContext,
        cancel_token: Optional[CancellationToken],
    ) -> TransportResponse:
        if cancel_token is not None:
            cancel_token.checkpoint("backend request")
        base_url = self._settings.base_url
        client = self._http_client or get_httpx_client(base_url, purpose=PURPOSE_COMPLETIONS)
        headers = {"Content-Type": "application/json", "Authorization": f"Bearer {self._settings.api_key}"}
        normalized_log_event(
            self._logger,
            "backend.request",
            ctx,
            phase="backend",
            prompt_chars=len(backend_request.prompt),
            max_tokens=backend_request.max_tokens,
            temperature=backend_request.temperature,
        )
        t0 = time.perf_counter()
        try:
            resp = client.post(
                f"{base_url}{CORTENSOR_COMPLETIONS_PATH}",
                json=backend_request.to_dict(),
                headers=headers,
                timeout=request_timeout(config.timeout_seconds),
            )
        except httpx.TimeoutException as e:
            raise BackendError(f"Cortensor API request timed out after {config.timeout_seconds}s", raw=e) from e
        except httpx.HTTPError as e:
            raise BackendError(f"Cortensor API request failed: {e}", raw=e) from e
        latency_ms = (time.perf_counter() - t0) * 1000.0
        if not 200 <= resp.status_code < 300:
            raise BackendError(f"Cortensor API error: {resp.status_code} {resp.reason_phrase}")
        if cancel_token is not None:
            cancel_token.checkpoint("response translation")
        normalized_log_event(
            self._logger,
            "backend.response",
            ctx,
            phase="backend",
            status=resp.status_code,
            latency_ms=round(latency_ms, 2),
        )
        return translate_transport_response(
            resp.status_code,
            resp.reason_phrase,
            resp.text,
            results,
            query,
            logger=self._logger,
            ctx=ctx,
        )


def create_cortensor_adapter(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    *,
    http_client: Optional[httpx.Client] = None,
    logger: Optional[logging.Logger] = None,
    search_registry: Optional[SearchProviderRegistry] = None,
) -> CortensorAdapter:
    """Create an adapter with explicit credentials overriding the environment.

    Raises
    ------
    ConfigurationError
        If no API key is available from the arguments or the environment.
    """
    settings = load_backend_settings({"api_key": api_key, "base_url": base_url})
    if not settings.api_key:
        raise ConfigurationError("Cortensor API key is required. Set CORTENSOR_API_KEY or pass api_key.")
    return CortensorAdapter(settings, http_client=http_client, logger=logger, search_registry=search_registry)


__all__ = ["CortensorAdapter", "create_cortensor_adapter", "error_response"]
