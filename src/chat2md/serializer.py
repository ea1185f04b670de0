#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Node tree to Markdown serialization.

This module turns a rendered, semantically tagged node tree (see
``chat2md.nodes``) back into Markdown text. It is the fallback used when a
chat message is only available as formatted markup and not as its source.

Serialization is a pure function of the tree: nothing is mutated, nothing is
cached between calls, and no input ever makes it raise. Unknown elements are
never dropped; their children are serialized in place.

Output conventions
------------------
- Block constructs (paragraphs, headings, lists, blockquotes, tables, rules,
  code blocks) pad themselves with newlines so that concatenated fragments
  stay visually separated.
- Inline constructs (bold, italic, links, inline code) never add newlines.
- Headings are moved down one level (``h1`` becomes ``##``) and clamped at
  six, leaving level one for the ``# user`` / ``# agent`` role headers.
- Heading text and, by default, list item text are flattened to plain text.
  A list item holding a nested list is always serialized, so the nested
  list follows it in place as its own block of items.
- Text is copied verbatim unless ``escape_special`` is enabled.

Examples
--------
    >>> from chat2md.nodes import Tag, make_element
    >>> from chat2md.serializer import serialize
    >>> serialize(make_element(Tag.LINK, "click", href="http://x"))
    '[click](http://x)'
    >>> serialize(make_element(Tag.H2, make_element(Tag.BOLD, "X")))
    '\\n### X\\n'

"""

from __future__ import annotations

import logging
from typing import Any

from chat2md.constants import (
    BLOCKQUOTE_PREFIX,
    BULLET_MARKER,
    CODE_FENCE,
    HEADING_LEVEL_OFFSET,
    HORIZONTAL_RULE,
    MAX_HEADING_LEVEL,
)
from chat2md.escape import escape_markdown
from chat2md.nodes import Element, Node, Tag, TextNode, find_first, flatten_text, iter_descendants, rendered_text
from chat2md.options import SerializerOptions
from chat2md.tables import extract_table_rows, serialize_table

logger = logging.getLogger(__name__)


# Roles of a node in the walk: an ordinary node, or an item under a list
_NODE = "node"
_ITEM = "item"

_LIST_TAGS = (Tag.UNORDERED_LIST, Tag.ORDERED_LIST)


class MarkdownSerializer:
    """Serialize node trees to Markdown fragments.

    The tree is walked with an explicit stack: each element is visited,
    its children are serialized, and their fragments are then combined
    according to the element's tag. Nesting is bounded by ``max_depth``
    only, never by the interpreter's recursion limit.

    Parameters
    ----------
    options : SerializerOptions, optional
        Serialization options. Defaults to ``SerializerOptions()``.

    """

    def __init__(self, options: SerializerOptions | None = None):
        self.options = options or SerializerOptions()

    def serialize(self, node: Node) -> str:
        """Return the Markdown fragment for ``node``."""
        return self._process_node(node, 0)

    def serialize_children(self, node: Node) -> str:
        """Return the concatenated fragments of a container's children, unwrapped."""
        if isinstance(node, TextNode):
            return self._text(node.text)
        return "".join([self._process_node(child, 1) for child in node.children])

    def _process_node(self, root: Node, depth: int) -> str:
        """Serialize ``root``, combining child fragments once all are done."""
        results: list[str] = []
        # Visit entries carry a depth; combine entries carry their child count
        stack: list[tuple[bool, Any, int, str]] = [(False, root, depth, _NODE)]
        while stack:
            combine, node, value, role = stack.pop()
            if combine:
                split = len(results) - value
                parts = results[split:]
                del results[split:]
                results.append(self._combine(node, role, parts))
                continue

            leaf = self._process_leaf(node, value, role)
            if leaf is not None:
                results.append(leaf)
                continue

            children = self._walk_children(node, role)
            stack.append((True, node, len(children), role))
            stack.extend((False, child, value + 1, child_role) for child, child_role in reversed(children))
        return results[0]

    def _process_leaf(self, node: Node, depth: int, role: str) -> str | None:
        """Return the fragment of a node that needs no child fragments, else None."""
        if isinstance(node, TextNode):
            return self._text(node.text)

        if depth >= self.options.max_depth:
            logger.warning(
                "Element nesting exceeds max_depth=%d; emitting %s subtree as plain text",
                self.options.max_depth,
                node.tag.value,
            )
            return self._text(flatten_text(node))

        if role == _ITEM:
            return self._text(flatten_text(node)) if self._flattens(node) else None

        tag = node.tag
        if tag is Tag.CODE_BLOCK:
            return self._process_code_block(node)
        elif tag is Tag.INLINE_CODE:
            return f"`{flatten_text(node)}`"
        elif tag.heading_level is not None:
            return self._process_heading(node, tag.heading_level)
        elif tag is Tag.TABLE:
            return f"\n{self._process_table(node)}\n"
        elif tag is Tag.LINE_BREAK:
            return "\n"
        elif tag is Tag.HORIZONTAL_RULE:
            return f"\n{HORIZONTAL_RULE}\n"
        return None

    def _walk_children(self, node: Element, role: str) -> list[tuple[Node, str]]:
        """Children to serialize; a list only walks its direct list item children."""
        if role == _NODE and node.tag in _LIST_TAGS:
            return [
                (child, _ITEM)
                for child in node.children
                if isinstance(child, Element) and child.tag is Tag.LIST_ITEM
            ]
        return [(child, _NODE) for child in node.children]

    def _combine(self, node: Element, role: str, parts: list[str]) -> str:
        """Wrap the joined child fragments according to the element's tag."""
        content = "".join(parts)
        if role == _ITEM:
            return content

        tag = node.tag
        if tag is Tag.PARAGRAPH:
            return f"\n{content.strip()}\n"
        elif tag is Tag.BOLD:
            return f"**{content}**"
        elif tag is Tag.ITALIC:
            return f"*{content}*"
        elif tag is Tag.LINK:
            return f"[{content}]({node.get('href')})"
        elif tag in _LIST_TAGS:
            return self._process_list(node, parts)
        elif tag is Tag.BLOCKQUOTE:
            return self._process_blockquote(content)

        # Default: containers and unrecognized tags keep their contents
        return content

    def _text(self, text: str) -> str:
        if self.options.escape_special:
            return escape_markdown(text)
        return text

    def _flattens(self, item: Element) -> bool:
        """Whether a list item is emitted as plain text.

        Items that hold a nested list are always serialized so that the inner
        bullets stay on their own lines.
        """
        if not self.options.flatten_list_items:
            return False
        return next(iter_descendants(item, _LIST_TAGS), None) is None

    def _process_code_block(self, node: Element) -> str:
        """Fence the rendered text of the nested code element, or of the block itself."""
        code = find_first(node, Tag.INLINE_CODE)
        source = code if code is not None else node
        language = code.get("language") if code is not None else ""
        if not language:
            language = node.get("language")
        body = rendered_text(source).rstrip()
        return f"\n{CODE_FENCE}{language}\n{body}\n{CODE_FENCE}\n"

    def _process_heading(self, node: Element, level: int) -> str:
        prefix = "#" * min(level + HEADING_LEVEL_OFFSET, MAX_HEADING_LEVEL)
        return f"\n{prefix} {self._text(flatten_text(node).strip())}\n"

    def _process_list(self, node: Element, items: list[str]) -> str:
        """Emit one numbered or bulleted line per item, in document order."""
        ordered = node.tag is Tag.ORDERED_LIST
        lines = []
        for index, item in enumerate(items, start=1):
            marker = f"{index}." if ordered else BULLET_MARKER
            lines.append(f"{marker} {item.strip()}\n")
        return "\n" + "".join(lines)

    def _process_blockquote(self, content: str) -> str:
        quoted = "\n".join(f"{BLOCKQUOTE_PREFIX}{line}" for line in content.strip().split("\n"))
        return f"\n{quoted}\n"

    def _process_table(self, node: Element) -> str:
        rows = extract_table_rows(node)
        if self.options.escape_special:
            rows = [[escape_markdown(cell, "table") for cell in row] for row in rows]
        return serialize_table(rows)


def serialize(node: Node, options: SerializerOptions | None = None) -> str:
    """Serialize ``node`` to a Markdown fragment.

    Parameters
    ----------
    node : Node
        Text node or element to serialize
    options : SerializerOptions, optional
        Serialization options

    Returns
    -------
    str
        Markdown fragment. Never raises for a well-formed node.

    """
    return MarkdownSerializer(options).serialize(node)


def serialize_children(node: Node, options: SerializerOptions | None = None) -> str:
    """Serialize the children of a container without wrapping them."""
    return MarkdownSerializer(options).serialize_children(node)


__all__ = ["MarkdownSerializer", "serialize", "serialize_children"]
