"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` lets an outer caller abandon an adapter call; the
adapter checks it before every outbound request. ``CancelledError`` is raised
when a cancelled token is observed.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
