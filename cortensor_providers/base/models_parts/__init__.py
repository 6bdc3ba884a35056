"""Models parts package public surface.

Re-exports individual DTOs; `cortensor_providers.base.models` remains the
primary stable import path.
"""

from .content_part import ContentPart
from .message import Message, Role
from .search_result import SearchResult
from .search_directive_result import SearchDirectiveResult
from .backend_request import BackendRequest, new_client_reference
from .backend_response import BackendChoice, BackendResponse, BackendUsage
from .standard_response import StandardChoice, StandardResponse, StandardUsage
from .transport_response import TransportResponse

__all__ = [
    "ContentPart",
    "Message",
    "Role",
    "SearchResult",
    "SearchDirectiveResult",
    "BackendRequest",
    "new_client_reference",
    "BackendChoice",
    "BackendResponse",
    "BackendUsage",
    "StandardChoice",
    "StandardResponse",
    "StandardUsage",
    "TransportResponse",
]
