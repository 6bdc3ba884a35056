"""HTTP utilities package.

Exposes the pooled httpx clients and the purpose keys they are pooled under.
"""

from .client import (
    PURPOSE_COMPLETIONS,
    PURPOSE_SEARCH,
    PURPOSE_SYNTHESIS,
    close_all_clients,
    default_timeout,
    get_httpx_client,
)

__all__ = [
    "PURPOSE_COMPLETIONS",
    "PURPOSE_SEARCH",
    "PURPOSE_SYNTHESIS",
    "close_all_clients",
    "default_timeout",
    "get_httpx_client",
]
