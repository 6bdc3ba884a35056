"""Pydantic validation error summarizing."""
from __future__ import annotations

from pydantic import ValidationError


def summarize_validation_error(exc: ValidationError) -> str:
    """Return ``"loc: msg; loc: msg"`` for every error in ``exc``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


__all__ = ["summarize_validation_error"]
