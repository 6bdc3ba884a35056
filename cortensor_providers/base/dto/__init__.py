"""DTO validation package for the adapter."""

from .chat import Role, ContentPartDTO, MessageDTO, ChatCompletionRequestDTO
from .model_config import SearchMode, WebSearchConfig, ModelConfig

__all__ = [
    "Role",
    "ContentPartDTO",
    "MessageDTO",
    "ChatCompletionRequestDTO",
    "SearchMode",
    "WebSearchConfig",
    "ModelConfig",
]
