"""Flat prompt assembly for the raw-completion backend.

The backend is not turn-aware, so the conversation is rendered into one
string: an optional system-instructions block, ``Human:``/``Assistant:``
turns separated by blank lines, a trailing ``Assistant:`` cue when the user
spoke last, and an optional web search results section.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from ..base.models import Message, SearchResult
from ..base.utils.messages import extract_message_text, split_system
from ..translation.citations import format_citations

SYSTEM_HEADER = "### SYSTEM INSTRUCTIONS ###"
CONVERSATION_HEADER = "### CONVERSATION ###"
SEARCH_HEADER = "--- WEB SEARCH RESULTS ---"
SEARCH_INSTRUCTION = (
    "Please use the above search results to provide an accurate, up-to-date response. "
    "If the search results are relevant, incorporate the information into your answer. "
    "If they're not relevant, you can ignore them and provide a general response."
)

_ROLE_PREFIX = {"user": "Human: ", "assistant": "Assistant: "}


def _render_turn(message: Message) -> str:
    return _ROLE_PREFIX.get(message.role, "") + extract_message_text(message)


def render_conversation(messages: Sequence[Message]) -> str:
    """Render messages without any search section."""
    system, conversation = split_system(messages)
    prompt = ""
    if system:
        instructions = "\n\n".join(extract_message_text(m) for m in system)
        prompt += f"{SYSTEM_HEADER}\n{instructions}\n\n{CONVERSATION_HEADER}\n"
    prompt += "\n\n".join(_render_turn(m) for m in conversation)
    if conversation and conversation[-1].role == "user":
        prompt += "\n\nAssistant:"
    return prompt


def assemble_prompt(
    messages: Sequence[Message],
    search_results: Optional[Sequence[SearchResult]] = None,
    search_query: Optional[str] = None,
) -> str:
    """Return the backend prompt for ``messages``.

    When ``search_results`` is non-empty a delimited results section is
    appended with the query, the numbered citations and an instruction to
    use them only if relevant.
    """
    prompt = render_conversation(messages)
    if not search_results:
        return prompt
    parts: List[str] = [
        prompt,
        f"\n\n{SEARCH_HEADER}\nSearch Query: \"{search_query or ''}\"\n\n",
        format_citations(search_results),
        f"\n\n{SEARCH_INSTRUCTION}",
    ]
    return "".join(parts)


__all__ = [
    "SYSTEM_HEADER",
    "CONVERSATION_HEADER",
    "SEARCH_HEADER",
    "SEARCH_INSTRUCTION",
    "render_conversation",
    "assemble_prompt",
]
