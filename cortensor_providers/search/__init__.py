"""Web search augmentation: directives, query synthesis, provider invocation."""

from .directives import NO_SEARCH_MARKER, SEARCH_MARKER, extract_search_directives, strip_markers
from .orchestrator import normalize_result, run_web_search
from .query_synthesizer import BackendCredentials, synthesize_search_query
from .registry import SearchProviderRegistry, UnknownSearchProviderError, get_search_registry

__all__ = [
    "SEARCH_MARKER",
    "NO_SEARCH_MARKER",
    "extract_search_directives",
    "strip_markers",
    "BackendCredentials",
    "synthesize_search_query",
    "normalize_result",
    "run_web_search",
    "SearchProviderRegistry",
    "UnknownSearchProviderError",
    "get_search_registry",
]
