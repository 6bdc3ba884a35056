"""cortensor_providers.config.defaults
===================================

Central place for small, stable default values used across the
cortensor_providers package and the lightweight service layer.

Module Purpose
--------------
- Provide a single import location for default constants (no I/O).
- Hold the model-configuration defaults table applied to every field a
  caller leaves out of the encoded model identifier.

This module avoids importing from other packages in the project to prevent
circular dependencies.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

# ---- Model configuration defaults ----
# Values mirror the backend SDK's completion-request defaults. Keys use the
# camelCase wire names carried inside the encoded model identifier.
DEFAULT_MODEL_CONFIG: Mapping[str, Any] = MappingProxyType(
    {
        "modelName": "cortensor-chat",
        "temperature": 0.7,
        "maxTokens": 1024,
        "topP": 0.95,
        "topK": 40,
        "presencePenalty": 0.0,
        "frequencyPenalty": 0.0,
        "stream": False,
        "timeout": 60,
        "promptType": 0,
        "promptTemplate": "",
    }
)

# Default number of search hits requested when webSearch omits maxResults.
DEFAULT_WEB_SEARCH_MAX_RESULTS = 5

# Marker separating the base model name from the encoded configuration token.
CONFIG_MARKER = "-config-"


# ---- Backend ----
CORTENSOR_COMPLETIONS_PATH = "/api/v1/completions"
# Model label used in standard responses when the backend omits one.
CORTENSOR_FALLBACK_MODEL_LABEL = "cortensor-model"

# Query synthesis sampling parameters (short, near-deterministic).
QUERY_SYNTHESIS_MAX_TOKENS = 50
QUERY_SYNTHESIS_TEMPERATURE = 0.1
QUERY_SYNTHESIS_EMPTY_FALLBACK = "general information"


# ---- Search providers ----
TAVILY_SEARCH_URL = "https://api.tavily.com/search"
TAVILY_DEFAULT_MAX_RESULTS = 3
TAVILY_DEFAULT_SEARCH_DEPTH = "basic"


# ---- Service / HTTP layer ----
CORTENSOR_SERVICE_DEFAULT_HOST = "127.0.0.1"
CORTENSOR_SERVICE_DEFAULT_PORT = 8091
# Comma-separated list of allowed origins for the dev server.
CORTENSOR_SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


__all__ = [
    # Model config
    "DEFAULT_MODEL_CONFIG",
    "DEFAULT_WEB_SEARCH_MAX_RESULTS",
    "CONFIG_MARKER",
    # Backend
    "CORTENSOR_COMPLETIONS_PATH",
    "CORTENSOR_FALLBACK_MODEL_LABEL",
    "QUERY_SYNTHESIS_MAX_TOKENS",
    "QUERY_SYNTHESIS_TEMPERATURE",
    "QUERY_SYNTHESIS_EMPTY_FALLBACK",
    # Search
    "TAVILY_SEARCH_URL",
    "TAVILY_DEFAULT_MAX_RESULTS",
    "TAVILY_DEFAULT_SEARCH_DEPTH",
    # Service
    "CORTENSOR_SERVICE_DEFAULT_HOST",
    "CORTENSOR_SERVICE_DEFAULT_PORT",
    "CORTENSOR_SERVICE_CORS_DEFAULT_ORIGINS",
]
