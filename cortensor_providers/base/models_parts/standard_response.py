"""
StandardResponse DTO in the OpenAI-compatible chat-completion shape.

This is the only success body the adapter returns; ``to_dict`` produces the
exact wire layout the calling chat SDK parses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class StandardChoice:
    index: int
    content: str
    finish_reason: str = "stop"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "message": {"role": "assistant", "content": self.content},
            "finish_reason": self.finish_reason,
        }


@dataclass(frozen=True)
class StandardUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class StandardResponse:
    """OpenAI-compatible ``chat.completion`` response."""

    id: str
    created: int
    model: str
    choices: List[StandardChoice]
    usage: StandardUsage = field(default_factory=StandardUsage)
    object: str = "chat.completion"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "object": self.object,
            "created": self.created,
            "model": self.model,
            "choices": [c.to_dict() for c in self.choices],
            "usage": self.usage.to_dict(),
        }


__all__ = ["StandardChoice", "StandardUsage", "StandardResponse"]
