"""
Pydantic model for the per-call Cortensor model configuration.

Purpose
-------
``ModelConfig`` is the structured form of the configuration a caller smuggles
inside the standard request's ``model`` string. It is decoded once per call,
never mutated (frozen), and remembers which fields the caller set explicitly
(``model_fields_set``) so downstream code can tell "caller chose the default"
from "caller said nothing".

Design
------
- Attributes are snake_case; the wire form uses the camelCase aliases the
  encoded token carries (``sessionId``, ``maxTokens``, ``webSearch``...).
- Every optional field defaults to the value in
  ``cortensor_providers.config.defaults.DEFAULT_MODEL_CONFIG``.
- ``WebSearchConfig.provider`` holds either a registry name or a live search
  capability; translating between the two is the codec's job.

Failure modes: validation raises ``pydantic.ValidationError``; the codec
converts it to ``ConfigExtractionError`` at the boundary.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...config.defaults import DEFAULT_MODEL_CONFIG, DEFAULT_WEB_SEARCH_MAX_RESULTS


class SearchMode(str, Enum):
    """How the search decision is made for a call.

    ``PROMPT`` defers to inline directive markers; ``FORCE`` and ``DISABLE``
    override them unconditionally.
    """

    FORCE = "force"
    DISABLE = "disable"
    PROMPT = "prompt"


class WebSearchConfig(BaseModel):
    """Web search augmentation settings.

    Attributes:
        mode: Search decision policy.
        provider: Registered provider name, or an object exposing
            ``search(query, max_results)``, or a plain callable with that
            signature.
        max_results: Upper bound on results fed into the prompt.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, arbitrary_types_allowed=True)

    mode: SearchMode = SearchMode.PROMPT
    provider: Optional[Any] = None
    max_results: int = Field(default=DEFAULT_WEB_SEARCH_MAX_RESULTS, gt=0, alias="maxResults")

    @field_validator("mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: Any) -> Any:
        """Accept mode names in any case (``"FORCE"``, ``"force"``)."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("provider")
    @classmethod
    def _check_provider(cls, value: Any) -> Any:
        """Require a non-empty name or something that can perform a search."""
        if value is None:
            return value
        if isinstance(value, str):
            if not value.strip():
                raise ValueError("search provider name must be non-empty")
            return value.strip()
        if callable(getattr(value, "search", None)) or callable(value):
            return value
        raise ValueError("search provider must be a name, a callable, or expose search(query, max_results)")


class ModelConfig(BaseModel):
    """Per-call configuration decoded from the model identifier.

    Attributes:
        session_id: Backend session id (required, positive).
        model_name: Base model name used when re-encoding.
        temperature: Sampling temperature in [0, 2].
        max_tokens: Completion token budget (> 0).
        top_p: Nucleus sampling mass in [0, 1].
        top_k: Top-k sampling cutoff (>= 0).
        presence_penalty: Presence penalty.
        frequency_penalty: Frequency penalty.
        stream: Must be ``False``; streaming delivery is unsupported.
        timeout_seconds: Budget for the main backend call (> 0).
        prompt_type: Backend prompt type selector.
        prompt_template: Backend-side prompt template.
        web_search: Optional search augmentation settings.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", protected_namespaces=())

    session_id: int = Field(..., gt=0, alias="sessionId")
    model_name: str = Field(default=DEFAULT_MODEL_CONFIG["modelName"], min_length=1, alias="modelName")
    temperature: float = Field(default=DEFAULT_MODEL_CONFIG["temperature"], ge=0.0, le=2.0)
    max_tokens: int = Field(default=DEFAULT_MODEL_CONFIG["maxTokens"], gt=0, alias="maxTokens")
    top_p: float = Field(default=DEFAULT_MODEL_CONFIG["topP"], ge=0.0, le=1.0, alias="topP")
    top_k: int = Field(default=DEFAULT_MODEL_CONFIG["topK"], ge=0, alias="topK")
    presence_penalty: float = Field(default=DEFAULT_MODEL_CONFIG["presencePenalty"], alias="presencePenalty")
    frequency_penalty: float = Field(default=DEFAULT_MODEL_CONFIG["frequencyPenalty"], alias="frequencyPenalty")
    stream: bool = DEFAULT_MODEL_CONFIG["stream"]
    timeout_seconds: int = Field(default=DEFAULT_MODEL_CONFIG["timeout"], gt=0, alias="timeout")
    prompt_type: int = Field(default=DEFAULT_MODEL_CONFIG["promptType"], alias="promptType")
    prompt_template: str = Field(default=DEFAULT_MODEL_CONFIG["promptTemplate"], alias="promptTemplate")
    web_search: Optional[WebSearchConfig] = Field(default=None, alias="webSearch")

    @field_validator("stream")
    @classmethod
    def _reject_streaming(cls, value: bool) -> bool:
        if value:
            raise ValueError("streaming is not supported; stream must be false")
        return value

    def is_explicit(self, field_name: str) -> bool:
        """Return True when the caller set ``field_name`` (snake_case) explicitly."""
        return field_name in self.model_fields_set


__all__ = ["SearchMode", "WebSearchConfig", "ModelConfig"]
