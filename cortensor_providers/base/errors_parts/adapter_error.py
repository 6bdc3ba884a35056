"""
Structured adapter error exception types.

Every failure the adapter reports to a caller is an :class:`AdapterError`
carrying a normalized :class:`ErrorCode` and the HTTP status the error maps
to. Subclasses fix the code so raise sites stay short.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .error_code import ErrorCode


@dataclass
class AdapterError(Exception):
    """Represents a structured adapter error with a normalized error code.

    Attributes:
        message: Human-readable error message returned to the caller.
        code: Normalized :class:`ErrorCode` classification for the failure.
        status_code: HTTP status used when the error terminates a call.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    status_code: int = 500
    retryable: bool = False
    raw: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass
class ConfigurationError(AdapterError):
    """Missing credentials, missing session id, or malformed configuration.

    Caller-fixable and never retried; always surfaced immediately.
    """

    code: ErrorCode = ErrorCode.CONFIGURATION
    status_code: int = 400


@dataclass
class ConfigExtractionError(ConfigurationError):
    """The model identifier did not carry a decodable configuration token."""


@dataclass
class WebSearchError(AdapterError):
    """The external search collaborator failed."""

    code: ErrorCode = ErrorCode.WEB_SEARCH
    status_code: int = 502


@dataclass
class BackendError(AdapterError):
    """The backend completion call failed at the transport or HTTP level."""

    code: ErrorCode = ErrorCode.BACKEND
    status_code: int = 500


__all__ = [
    "AdapterError",
    "ConfigurationError",
    "ConfigExtractionError",
    "WebSearchError",
    "BackendError",
]
