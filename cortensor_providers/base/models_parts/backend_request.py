"""
BackendRequest DTO for the Cortensor completions endpoint.

Holds the fully rendered prompt plus sampling parameters and serializes to
the backend's snake_case wire format.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, asdict
from typing import Any, Dict


def new_client_reference() -> str:
    """Return a per-call tracing token (millisecond timestamp plus random suffix)."""
    return f"user-request-{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class BackendRequest:
    """Request body for ``POST /api/v1/completions``.

    Attributes:
        session_id: Backend session scoping the conversation.
        prompt: Fully rendered flat prompt.
        prompt_type: Backend prompt type selector.
        prompt_template: Optional backend-side template.
        timeout: Backend-side processing timeout in seconds.
        client_reference: Unique per-call tracing token.
        max_tokens, temperature, top_p, top_k, presence_penalty,
        frequency_penalty: Sampling parameters.
        stream: Always ``False``; streaming is not supported.
    """

    session_id: int
    prompt: str
    prompt_type: int
    prompt_template: str
    timeout: int
    client_reference: str
    max_tokens: int
    temperature: float
    top_p: float
    top_k: int
    presence_penalty: float
    frequency_penalty: float
    stream: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON body sent to the backend."""
        return asdict(self)


__all__ = ["BackendRequest", "new_client_reference"]
