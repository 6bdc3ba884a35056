"""
Adapter Base Package

Exports the call-scoped DTOs, validation models, interfaces, error taxonomy,
cancellation primitives and timeout configuration shared by the codec,
search, prompt, translation and adapter layers.
"""

from .cancellation import CancellationToken, CancelledError
from .dto import ChatCompletionRequestDTO, ModelConfig, SearchMode, WebSearchConfig
from .errors import (
    AdapterError,
    BackendError,
    ConfigExtractionError,
    ConfigurationError,
    ErrorCode,
    WebSearchError,
    classify_exception,
    error_payload,
    status_for,
)
from .interfaces import SearchProvider
from .models import (
    BackendRequest,
    BackendResponse,
    ContentPart,
    Message,
    Role,
    SearchDirectiveResult,
    SearchResult,
    StandardResponse,
    TransportResponse,
)
from .timeouts import TimeoutConfig, get_timeout_config, request_timeout

__all__ = [
    # Models
    "Role",
    "ContentPart",
    "Message",
    "SearchResult",
    "SearchDirectiveResult",
    "BackendRequest",
    "BackendResponse",
    "StandardResponse",
    "TransportResponse",
    # DTOs
    "ChatCompletionRequestDTO",
    "ModelConfig",
    "SearchMode",
    "WebSearchConfig",
    # Interfaces
    "SearchProvider",
    # Errors
    "AdapterError",
    "BackendError",
    "ConfigExtractionError",
    "ConfigurationError",
    "ErrorCode",
    "WebSearchError",
    "classify_exception",
    "error_payload",
    "status_for",
    # Cancellation / timeouts
    "CancellationToken",
    "CancelledError",
    "TimeoutConfig",
    "get_timeout_config",
    "request_timeout",
]
