"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Used by the adapter's single error-to-response mapper so every terminal
failure produces the same status-code policy regardless of where it was
raised.
"""
from __future__ import annotations

from typing import Dict

from ..cancellation_parts.cancelled_error import CancelledError
from .adapter_error import AdapterError
from .error_code import ErrorCode


_STATUS_MAP: Dict[ErrorCode, int] = {
    ErrorCode.CONFIGURATION: 400,
    ErrorCode.WEB_SEARCH: 502,
    ErrorCode.BACKEND: 500,
    # nginx convention for "client closed request"
    ErrorCode.CANCELLED: 499,
    ErrorCode.UNKNOWN: 500,
}


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. AdapterError passthrough.
        2. Cooperative cancellation.
        3. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, AdapterError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    return ErrorCode.UNKNOWN


def status_for(code: ErrorCode) -> int:
    """Return the HTTP status a terminal error with ``code`` maps to."""
    return _STATUS_MAP.get(code, 500)


def error_payload(exc: BaseException) -> Dict[str, Dict[str, str]]:
    """Build the ``{"error": {...}}`` body returned for a terminal failure."""
    code = classify_exception(exc)
    message = exc.message if isinstance(exc, AdapterError) else (str(exc) or "Unknown error")
    return {
        "error": {
            "message": message,
            "type": "provider_error",
            "code": code.value,
        }
    }


__all__ = ["classify_exception", "status_for", "error_payload"]
