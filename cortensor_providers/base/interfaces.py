"""
Adapter-layer interfaces (Protocols).

Re-exports Protocols split into single-class modules under
``cortensor_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import SearchProvider

__all__ = ["SearchProvider"]
