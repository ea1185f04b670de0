"""Test utilities for the chat2md test suite.

Helpers for building saved chat pages and node trees used across tests.
"""

from chat2md.nodes import Element, Tag, TextNode


def build_chat_page(*turns: str) -> str:
    """Wrap turn containers in a minimal saved-page skeleton."""
    return (
        "<!DOCTYPE html><html><head><title>Chat</title></head><body><main>"
        + "".join(turns)
        + "</main></body></html>"
    )


def user_turn(index: int, text: str) -> str:
    """Markup of a user turn as saved from the chat page."""
    return (
        f'<article data-testid="conversation-turn-{index}">'
        f'<div data-message-author-role="user"><div class="whitespace-pre-wrap">{text}</div></div>'
        "</article>"
    )


def agent_turn(index: int, inner_html: str) -> str:
    """Markup of an assistant turn with a rendered markdown container."""
    return (
        f'<article data-testid="conversation-turn-{index}">'
        f'<div data-message-author-role="assistant"><div class="markdown prose">{inner_html}</div></div>'
        "</article>"
    )


def nested_wrappers(depth: int, leaf: Element | TextNode, tag: Tag = Tag.UNKNOWN) -> Element:
    """Wrap ``leaf`` in ``depth`` elements without recursion."""
    node: Element | TextNode = leaf
    for _ in range(depth):
        node = Element(tag=tag, children=[node])
    assert isinstance(node, Element)
    return node


def is_subsequence(needle: str, haystack: str) -> bool:
    """Return True when the characters of ``needle`` appear in order in ``haystack``."""
    remaining = iter(haystack)
    return all(char in remaining for char in needle)
