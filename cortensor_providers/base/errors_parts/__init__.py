"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `cortensor_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .adapter_error import (
    AdapterError,
    BackendError,
    ConfigExtractionError,
    ConfigurationError,
    WebSearchError,
)
from .classification import classify_exception, error_payload, status_for

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
