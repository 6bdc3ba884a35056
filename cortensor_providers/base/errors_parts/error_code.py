"""
Normalized adapter error codes (taxonomy).

Defines the `ErrorCode` enumeration surfaced to callers in the ``code`` field
of structured error bodies. Values are UPPER_SNAKE_CASE and are considered a
stable public contract for clients and log analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CONFIGURATION = "CONFIGURATION_ERROR"
    WEB_SEARCH = "WEB_SEARCH_ERROR"
    BACKEND = "BACKEND_ERROR"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN_ERROR"


__all__ = ["ErrorCode"]
