"""
Outer transport envelope returned by the adapter's entry point.

Mirrors what an HTTP layer needs to reply: status, reason phrase, JSON body
and headers. The body is always a JSON object, either a standard response or
an ``{"error": {...}}`` envelope.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: Dict[str, Any]
    reason: str = ""
    headers: Dict[str, str] = field(default_factory=lambda: {"Content-Type": "application/json"})

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return json.dumps(self.body, ensure_ascii=False)

    def json(self) -> Dict[str, Any]:
        return self.body


__all__ = ["TransportResponse"]
