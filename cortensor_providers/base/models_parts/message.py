"""
Conversation message DTO.

Defines the `Message` dataclass and the `Role` literal. Ordering of messages
is significant: the last element is the turn being answered.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Literal, Union

from .content_part import ContentPart


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A chat message in the standard schema.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Either a plain text string or an ordered list of
            `ContentPart` items.
    """

    role: Role
    content: Union[str, List[ContentPart]]

    def text(self) -> str:
        """Return the message text with non-text parts dropped.

        String content is returned as-is. For part lists, the text of every
        ``text`` part is joined with single spaces and the result trimmed.
        """
        if isinstance(self.content, str):
            return self.content
        return " ".join(p.text or "" for p in self.content if p.is_text).strip()

    def with_text(self, text: str) -> "Message":
        """Return a copy of this message whose content is ``text``."""
        return replace(self, content=text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content if isinstance(self.content, str) else [p.to_dict() for p in self.content],
        }


__all__ = ["Message", "Role"]
