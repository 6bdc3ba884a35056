"""
Pydantic DTOs and validators for inbound standard chat-completion requests.

Purpose
-------
Validate the OpenAI-compatible request body before it enters the adapter:
``model`` must be a non-empty string (it carries the encoded configuration),
``messages`` must be a non-empty ordered list, and ``temperature`` when given
must be within [0.0, 2.0]. Unknown top-level fields (``stream``, ``n``,
``tools``...) are accepted and ignored.

External dependencies: Pydantic only. Validation either succeeds or raises
``pydantic.ValidationError``; the controller maps that to a 400 response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models_parts.content_part import ContentPart
from ..models_parts.message import Message


Role = Literal["system", "user", "assistant"]


class ContentPartDTO(BaseModel):
    """A structured content part within a message.

    Any part type is accepted; only ``text`` parts ever reach the prompt.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., min_length=1)
    text: Optional[str] = None

    def to_part(self) -> ContentPart:
        data: Dict[str, Any] = dict(self.model_extra or {})
        return ContentPart(type=self.type, text=self.text, data=data or None)


class MessageDTO(BaseModel):
    """A chat message with either a text string or structured parts.

    ``None`` content (allowed by the standard schema for some assistant
    turns) is normalized to an empty string.
    """

    model_config = ConfigDict(extra="ignore")

    role: Role
    content: Union[str, List[ContentPartDTO]] = ""

    @model_validator(mode="before")
    @classmethod
    def _normalize_content(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("content") is None:
            return {**data, "content": ""}
        return data

    def to_message(self) -> Message:
        if isinstance(self.content, str):
            return Message(role=self.role, content=self.content)
        return Message(role=self.role, content=[p.to_part() for p in self.content])


class ChatCompletionRequestDTO(BaseModel):
    """Inbound chat-completion request.

    Parameters:
        model: Model identifier carrying the encoded configuration.
        messages: Ordered, non-empty list of messages.
        temperature: Optional request-level temperature, used only when the
            encoded configuration does not set one.

    Raises:
        ValidationError: On missing model, empty messages, unknown roles or
            out-of-range temperature.
    """

    model_config = ConfigDict(extra="ignore")

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)

    def to_messages(self) -> List[Message]:
        return [m.to_message() for m in self.messages]


__all__ = [
    "Role",
    "ContentPartDTO",
    "MessageDTO",
    "ChatCompletionRequestDTO",
]
