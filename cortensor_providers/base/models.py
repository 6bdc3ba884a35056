"""
Call-scoped domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``cortensor_providers.base.models_parts`` so upstream code keeps a single
stable import path.
"""

from .models_parts.content_part import ContentPart
from .models_parts.message import Message, Role
from .models_parts.search_result import SearchResult
from .models_parts.search_directive_result import SearchDirectiveResult
from .models_parts.backend_request import BackendRequest, new_client_reference
from .models_parts.backend_response import BackendChoice, BackendResponse, BackendUsage
from .models_parts.standard_response import StandardChoice, StandardResponse, StandardUsage
from .models_parts.transport_response import TransportResponse

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
