"""
BackendResponse DTO parsed from the Cortensor completions endpoint.

``from_dict`` is strict about structure (``choices`` must be a list of
objects) and lenient about optional scalars, which stay ``None`` when the
backend omits them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional


@dataclass(frozen=True)
class BackendChoice:
    index: Optional[int]
    text: str
    finish_reason: Optional[str]


@dataclass(frozen=True)
class BackendUsage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class BackendResponse:
    """Completion payload returned by the backend.

    Attributes:
        id: Completion id, when provided.
        created: Unix creation time, when provided.
        model: Backend model label, when provided.
        choices: Ordered completion choices.
        usage: Token counters, or ``None`` when the backend omitted them.
    """

    id: Optional[str]
    created: Optional[int]
    model: Optional[str]
    choices: List[BackendChoice]
    usage: Optional[BackendUsage]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BackendResponse":
        """Parse a decoded JSON body.

        Raises:
            TypeError / ValueError / KeyError: When the body does not have the
                backend response shape.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"backend body must be an object, got {type(data).__name__}")
        raw_choices = data["choices"]
        if not isinstance(raw_choices, list):
            raise TypeError("backend 'choices' must be a list")
        choices = [
            BackendChoice(
                index=int(c["index"]) if c.get("index") is not None else None,
                text=str(c.get("text") or ""),
                finish_reason=c.get("finish_reason"),
            )
            for c in raw_choices
        ]
        usage = None
        raw_usage = data.get("usage")
        if isinstance(raw_usage, Mapping):
            usage = BackendUsage(
                prompt_tokens=int(raw_usage.get("prompt_tokens") or 0),
                completion_tokens=int(raw_usage.get("completion_tokens") or 0),
                total_tokens=int(raw_usage.get("total_tokens") or 0),
            )
        created = data.get("created")
        return cls(
            id=str(data["id"]) if data.get("id") else None,
            created=int(created) if created else None,
            model=str(data["model"]) if data.get("model") else None,
            choices=choices,
            usage=usage,
        )


__all__ = ["BackendChoice", "BackendUsage", "BackendResponse"]
