"""cortensor_providers package

OpenAI-compatible protocol adapter for the Cortensor completion backend.

Purpose:
    Let a caller speaking the standard chat-completion wire format talk to
    Cortensor: per-call configuration rides inside the ``model`` string,
    inline ``[**search**]`` directives can augment the prompt with web search
    results, and backend responses come back in the standard shape with
    citations.

Public API (re-exported):
    - Version: ``__version__``
    - Entry point: :class:`CortensorAdapter`, :func:`create_cortensor_adapter`
    - Configuration: :class:`ModelConfig`, :class:`WebSearchConfig`,
      :class:`SearchMode`, :func:`cortensor_model`, :func:`encode`,
      :func:`decode`, :func:`extract_model_configuration`
    - Search: :class:`SearchProviderRegistry`, :class:`SearchResult`,
      :class:`SearchProvider`
    - Errors: :class:`AdapterError` and its subclasses, :class:`ErrorCode`

The FastAPI service lives in ``cortensor_providers.service`` and is not
imported here.
"""

from .adapter import CortensorAdapter, create_cortensor_adapter, error_response
from .base.dto import ModelConfig, SearchMode, WebSearchConfig
from .base.errors import (
    AdapterError,
    BackendError,
    ConfigExtractionError,
    ConfigurationError,
    ErrorCode,
    WebSearchError,
)
from .base.interfaces import SearchProvider
from .base.models import SearchResult, TransportResponse
from .codec import cortensor_model, decode, encode, extract_model_configuration
from .search import SearchProviderRegistry, get_search_registry

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Entry point
    "CortensorAdapter",
    "create_cortensor_adapter",
    "error_response",
    "TransportResponse",
    # Configuration
    "ModelConfig",
    "WebSearchConfig",
    "SearchMode",
    "cortensor_model",
    "encode",
    "decode",
    "extract_model_configuration",
    # Search
    "SearchProvider",
    "SearchProviderRegistry",
    "SearchResult",
    "get_search_registry",
    # Errors
    "AdapterError",
    "BackendError",
    "ConfigExtractionError",
    "ConfigurationError",
    "ErrorCode",
    "WebSearchError",
]
