"""Single-class Protocol modules for the adapter layer."""

from .search_provider import SearchProvider

__all__ = ["SearchProvider"]
