"""Outcome of scanning the latest user turn for search directives."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .message import Message


@dataclass(frozen=True)
class SearchDirectiveResult:
    """Search decision plus the messages with directive markers removed.

    ``cleaned_messages`` always has the same length as the input sequence;
    only the last message can differ from its original.
    """

    should_search: bool
    cleaned_messages: Sequence[Message]


__all__ = ["SearchDirectiveResult"]
