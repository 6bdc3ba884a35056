"""
Typed content part of a conversation message.

Standard chat requests may carry a message's content as an ordered list of
typed parts. Only ``text`` parts contribute to the backend prompt; every
other type (images, audio, files) is kept for fidelity but ignored when
flattening.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ContentPart:
    """A single typed piece of message content.

    Attributes:
        type: The part type as sent by the client (``"text"``,
            ``"image_url"``, ...).
        text: Text payload for ``text`` parts.
        data: Remaining payload for non-text parts.
    """

    type: str
    text: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @property
    def is_text(self) -> bool:
        return self.type == "text"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the part."""
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = ["ContentPart"]
