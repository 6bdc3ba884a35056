"""Message flattening helpers shared by the prompt and search steps.

Helpers here are side-effect free and operate on ``Message`` DTOs only.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from ..models import Message


def extract_message_text(message: Message) -> str:
    """Return the text of ``message`` with non-text parts dropped.

    String content is returned unchanged. Part lists keep only ``text``
    parts, joined with single spaces and trimmed.
    """
    return message.text()


def split_system(messages: Sequence[Message]) -> Tuple[List[Message], List[Message]]:
    """Partition ``messages`` into (system, conversation), preserving order."""
    system = [m for m in messages if m.role == "system"]
    conversation = [m for m in messages if m.role != "system"]
    return system, conversation


__all__ = ["extract_message_text", "split_system"]
