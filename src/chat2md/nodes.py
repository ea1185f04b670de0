#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chat2md/nodes.py
"""Node classes for rendered chat content.

A rendered message is modelled as a tree of two node kinds:

- ``TextNode`` holds raw character content with no formatting.
- ``Element`` holds a ``Tag`` from a closed vocabulary, an ordered list of
  children (document order) and a small mapping of named attributes such as
  ``href`` for links and ``language`` for code.

Tags outside the vocabulary are represented by ``Tag.UNKNOWN`` so that plain
containers keep their contents when serialized.

The text helpers in this module walk the tree with an explicit stack and are
therefore safe on arbitrarily deep trees.

Examples
--------
    >>> from chat2md.nodes import Tag, flatten_text, make_element
    >>> node = make_element(Tag.PARAGRAPH, "Hello ", make_element(Tag.BOLD, "world"))
    >>> flatten_text(node)
    'Hello world'

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Union


class Tag(Enum):
    """Closed vocabulary of element tags understood by the serializer."""

    CODE_BLOCK = "code_block"
    INLINE_CODE = "inline_code"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    PARAGRAPH = "paragraph"
    BOLD = "bold"
    ITALIC = "italic"
    LINK = "link"
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    LINE_BREAK = "line_break"
    HORIZONTAL_RULE = "horizontal_rule"
    UNKNOWN = "unknown"

    @property
    def heading_level(self) -> int | None:
        """Heading level 1-6 for heading tags, None for everything else."""
        return _HEADING_LEVELS.get(self)

    @classmethod
    def heading(cls, level: int) -> Tag:
        """Return the heading tag for ``level``.

        Parameters
        ----------
        level : int
            Heading level between 1 and 6

        Raises
        ------
        ValueError
            If the level is outside 1-6

        """
        for tag, tag_level in _HEADING_LEVELS.items():
            if tag_level == level:
                return tag
        raise ValueError(f"Heading level must be 1-6, got {level}")


_HEADING_LEVELS = {Tag.H1: 1, Tag.H2: 2, Tag.H3: 3, Tag.H4: 4, Tag.H5: 5, Tag.H6: 6}

# Elements after which the rendered (innerText-like) text starts a new line
_BLOCK_TAGS = frozenset(
    {
        Tag.PARAGRAPH,
        Tag.LIST_ITEM,
        Tag.BLOCKQUOTE,
        Tag.CODE_BLOCK,
        Tag.TABLE_ROW,
        *_HEADING_LEVELS,
    }
)


@dataclass
class TextNode:
    """Leaf node carrying raw text.

    Parameters
    ----------
    text : str
        Character content, taken verbatim

    """

    text: str


@dataclass
class Element:
    """Tagged element with ordered children.

    Parameters
    ----------
    tag : Tag
        Element classification
    children : list of Node, default = empty list
        Child nodes in document order
    attrs : dict, default = empty dict
        Named string attributes (``href``, ``language``)

    """

    tag: Tag
    children: list[Node] = field(default_factory=list)
    attrs: dict[str, str] = field(default_factory=dict)

    def get(self, name: str, default: str = "") -> str:
        """Return attribute ``name``, or ``default`` when it is missing."""
        value = self.attrs.get(name)
        return default if value is None else value


Node = Union[TextNode, Element]


def make_element(tag: Tag, *children: Node | str, **attrs: str) -> Element:
    """Build an element, wrapping plain strings in ``TextNode``.

    Parameters
    ----------
    tag : Tag
        Element tag
    *children : Node or str
        Children in document order
    **attrs : str
        Element attributes

    Returns
    -------
    Element
        The new element

    """
    return Element(
        tag=tag,
        children=[TextNode(child) if isinstance(child, str) else child for child in children],
        attrs=dict(attrs),
    )


def iter_text(node: Node) -> Iterator[str]:
    """Yield every text payload under ``node`` in document order."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, TextNode):
            yield current.text
        else:
            stack.extend(reversed(current.children))


def flatten_text(node: Node) -> str:
    """Concatenate all descendant text, discarding markup (like DOM ``textContent``)."""
    return "".join(iter_text(node))


_LINE_END = object()


def rendered_text(node: Node) -> str:
    """Approximate the visible text of ``node`` (like DOM ``innerText``).

    Line breaks become newlines, block elements end their line, and the cells
    of a table row are separated by tabs.

    Parameters
    ----------
    node : Node
        Node to render

    Returns
    -------
    str
        Plain text with layout newlines

    """
    parts: list[str] = []
    stack: list[object] = [node]
    while stack:
        current = stack.pop()
        if current is _LINE_END:
            if parts and not parts[-1].endswith("\n"):
                parts.append("\n")
        elif isinstance(current, str):
            parts.append(current)
        elif isinstance(current, TextNode):
            if current.text:
                parts.append(current.text)
        elif isinstance(current, Element):
            if current.tag is Tag.LINE_BREAK:
                parts.append("\n")
                continue
            if current.tag in _BLOCK_TAGS:
                stack.append(_LINE_END)
            if current.tag is Tag.TABLE_ROW:
                stack.extend(reversed(_tab_separated(current.children)))
            else:
                stack.extend(reversed(current.children))
    return "".join(parts)


def _tab_separated(children: list[Node]) -> list[object]:
    sequence: list[object] = []
    cells = 0
    for child in children:
        if isinstance(child, Element) and child.tag is Tag.TABLE_CELL:
            if cells:
                sequence.append("\t")
            cells += 1
        sequence.append(child)
    return sequence


def iter_descendants(node: Element, tags: Iterable[Tag], prune: Iterable[Tag] = ()) -> Iterator[Element]:
    """Yield descendant elements whose tag is in ``tags``, in document order.

    Matched elements are not searched further. Elements whose tag is in
    ``prune`` are skipped along with their subtree.

    Parameters
    ----------
    node : Element
        Root of the search (never yielded itself)
    tags : iterable of Tag
        Tags to match
    prune : iterable of Tag, optional
        Tags whose subtrees are not entered

    """
    wanted = frozenset(tags)
    pruned = frozenset(prune)
    stack: list[Node] = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if not isinstance(current, Element):
            continue
        if current.tag in wanted:
            yield current
        elif current.tag not in pruned:
            stack.extend(reversed(current.children))


def find_first(node: Element, tag: Tag) -> Element | None:
    """Return the first descendant with ``tag`` in document order, if any."""
    return next(iter_descendants(node, (tag,)), None)


__all__ = [
    "Tag",
    "TextNode",
    "Element",
    "Node",
    "make_element",
    "iter_text",
    "flatten_text",
    "rendered_text",
    "iter_descendants",
    "find_first",
]
