"""
Web search result DTO.

Produced by the external search capability and consumed only for prompt
augmentation and citation rendering; the adapter never fetches the URL.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class SearchResult:
    """A single search hit.

    Attributes:
        title: Page title shown in the citation link.
        url: Page URL used as the citation target.
        snippet: Short extract of the page content.
    """

    title: str
    url: str
    snippet: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["SearchResult"]
