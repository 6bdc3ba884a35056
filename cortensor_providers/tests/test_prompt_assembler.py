"""Prompt assembly: layout, assistant cue, search section, part filtering."""
from __future__ import annotations

from cortensor_providers.base.models import ContentPart, Message, SearchResult
from cortensor_providers.prompt import assemble_prompt


def test_system_and_conversation_layout():
    messages = [
        Message(role="system", content="You are terse."),
        Message(role="system", content="Answer in English."),
        Message(role="user", content="Hi"),
        Message(role="assistant", content="Hello!"),
        Message(role="user", content="Weather?"),
    ]
    assert assemble_prompt(messages) == (
        "### SYSTEM INSTRUCTIONS ###\nYou are terse.\n\nAnswer in English.\n\n### CONVERSATION ###\n"
        "Human: Hi\n\nAssistant: Hello!\n\nHuman: Weather?\n\nAssistant:"
    )


def test_no_system_block_when_absent():
    assert assemble_prompt([Message(role="user", content="Hi")]) == "Human: Hi\n\nAssistant:"


def test_no_cue_when_assistant_spoke_last():
    messages = [Message(role="user", content="Hi"), Message(role="assistant", content="Hello")]
    assert assemble_prompt(messages) == "Human: Hi\n\nAssistant: Hello"


def test_search_section_is_appended_when_results_present():
    prompt = assemble_prompt(
        [Message(role="user", content="latest AI news")],
        [SearchResult(title="X", url="http://x", snippet="..."), SearchResult(title="Y", url="http://y")],
        "AI news",
    )
    assert prompt == (
        "Human: latest AI news\n\nAssistant:"
        "\n\n--- WEB SEARCH RESULTS ---\nSearch Query: \"AI news\"\n\n"
        "\n\n**Sources:**\n[1] [X](http://x)\n[2] [Y](http://y)"
        "\n\nPlease use the above search results to provide an accurate, up-to-date response. "
        "If the search results are relevant, incorporate the information into your answer. "
        "If they're not relevant, you can ignore them and provide a general response."
    )


def test_empty_results_leave_prompt_untouched():
    messages = [Message(role="user", content="Hi")]
    assert assemble_prompt(messages, [], "q") == assemble_prompt(messages)
    assert "WEB SEARCH RESULTS" not in assemble_prompt(messages, None, None)


def test_only_text_parts_are_used():
    message = Message(
        role="user",
        content=[
            ContentPart(type="text", text=" describe "),
            ContentPart(type="image_url", data={"image_url": {"url": "http://img"}}),
            ContentPart(type="text", text="this "),
        ],
    )
    assert assemble_prompt([message]) == "Human: describe  this\n\nAssistant:"
