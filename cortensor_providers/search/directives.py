"""Inline search directive extraction.

Users steer search from the chat text itself: ``[**search**]`` asks for a
search, ``[**no-search**]`` vetoes one. Only the last message is inspected.
Markers are matched case-insensitively, every occurrence of both is removed,
and the remaining text is stripped. The input sequence is never mutated.
"""
from __future__ import annotations

import re
from typing import Optional, Sequence

from ..base.dto.model_config import SearchMode, WebSearchConfig
from ..base.models import Message, SearchDirectiveResult
from ..base.utils.messages import extract_message_text

SEARCH_MARKER = "[**search**]"
NO_SEARCH_MARKER = "[**no-search**]"

_SEARCH_RE = re.compile(re.escape(SEARCH_MARKER), re.IGNORECASE)
_NO_SEARCH_RE = re.compile(re.escape(NO_SEARCH_MARKER), re.IGNORECASE)


def strip_markers(text: str) -> str:
    """Remove every search / no-search marker from ``text`` and strip it."""
    return _SEARCH_RE.sub("", _NO_SEARCH_RE.sub("", text)).strip()


def decide_search(mode: SearchMode, has_search: bool, has_no_search: bool) -> bool:
    """Apply mode precedence: FORCE and DISABLE override markers; PROMPT is opt-in."""
    if mode is SearchMode.FORCE:
        return True
    if mode is SearchMode.DISABLE:
        return False
    return has_search and not has_no_search


def extract_search_directives(
    messages: Sequence[Message],
    web_search: Optional[WebSearchConfig] = None,
) -> SearchDirectiveResult:
    """Decide whether to search and return messages with markers removed.

    Parameters:
        messages: Ordered conversation; only the last element is inspected.
        web_search: Search settings, or ``None`` when search is not configured.

    Returns:
        SearchDirectiveResult: ``cleaned_messages`` has the same length as
        ``messages``; when configured, its last element's content is the
        flattened, marker-free text.
    """
    if web_search is None or not messages:
        return SearchDirectiveResult(should_search=False, cleaned_messages=list(messages))

    last = messages[-1]
    text = extract_message_text(last)
    has_search = _SEARCH_RE.search(text) is not None
    has_no_search = _NO_SEARCH_RE.search(text) is not None

    cleaned = list(messages[:-1])
    cleaned.append(last.with_text(strip_markers(text)))
    return SearchDirectiveResult(
        should_search=decide_search(web_search.mode, has_search, has_no_search),
        cleaned_messages=cleaned,
    )


__all__ = [
    "SEARCH_MARKER",
    "NO_SEARCH_MARKER",
    "strip_markers",
    "decide_search",
    "extract_search_directives",
]
