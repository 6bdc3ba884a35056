"""Unified adapter error taxonomy public surface.

This module re-exports the implementations under
``cortensor_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.adapter_error import (
    AdapterError,
    BackendError,
    ConfigExtractionError,
    ConfigurationError,
    WebSearchError,
)
from .errors_parts.classification import classify_exception, error_payload, status_for

__all__ = [
    "ErrorCode",
    "AdapterError",
    "ConfigurationError",
    "ConfigExtractionError",
    "WebSearchError",
    "BackendError",
    "classify_exception",
    "error_payload",
    "status_for",
]
