"""Numbered citation rendering shared by prompt assembly and translation."""
from __future__ import annotations

from typing import Optional, Sequence

from ..base.models import SearchResult


def format_citations(results: Optional[Sequence[SearchResult]]) -> str:
    """Render results as a markdown sources block.

    Returns ``""`` for no results, otherwise
    ``"\\n\\n**Sources:**\\n[1] [title](url)\\n[2] ..."`` in original order.
    """
    if not results:
        return ""
    lines = [f"[{i}] [{r.title}]({r.url})" for i, r in enumerate(results, start=1)]
    return "\n\n**Sources:**\n" + "\n".join(lines)


__all__ = ["format_citations"]
