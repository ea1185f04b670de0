#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Build node trees from HTML with BeautifulSoup.

The serializer works on ``chat2md.nodes`` trees. This module produces such
trees from saved HTML pages or fragments:

- HTML tag names are classified into the closed ``Tag`` vocabulary; anything
  unrecognized becomes ``Tag.UNKNOWN`` and keeps its children.
- Links carry their ``href``; ``pre`` and ``code`` elements carry the language
  named by a ``language-xxx`` class.
- Comments, doctypes, CDATA sections and processing instructions are dropped,
  as are the contents of ``script``, ``style``, ``template`` and ``noscript``.

Conversion walks the soup with an explicit stack, so deeply nested markup
does not hit the recursion limit here.

Examples
--------
    >>> from chat2md.dom import node_from_html
    >>> from chat2md.serializer import serialize
    >>> serialize(node_from_html('<p>Hello <strong>world</strong></p>'))
    '\\nHello **world**\\n'

"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound, NavigableString
from bs4 import Tag as SoupTag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

from chat2md.constants import DEFAULT_HTML_PARSER, LANGUAGE_CLASS_PREFIX, STRIPPED_HTML_TAGS
from chat2md.exceptions import ValidationError
from chat2md.nodes import Element, Node, Tag, TextNode

logger = logging.getLogger(__name__)

HTML_TAG_MAP: dict[str, Tag] = {
    "pre": Tag.CODE_BLOCK,
    "code": Tag.INLINE_CODE,
    "h1": Tag.H1,
    "h2": Tag.H2,
    "h3": Tag.H3,
    "h4": Tag.H4,
    "h5": Tag.H5,
    "h6": Tag.H6,
    "p": Tag.PARAGRAPH,
    "strong": Tag.BOLD,
    "b": Tag.BOLD,
    "em": Tag.ITALIC,
    "i": Tag.ITALIC,
    "a": Tag.LINK,
    "ul": Tag.UNORDERED_LIST,
    "ol": Tag.ORDERED_LIST,
    "li": Tag.LIST_ITEM,
    "blockquote": Tag.BLOCKQUOTE,
    "table": Tag.TABLE,
    "tr": Tag.TABLE_ROW,
    "th": Tag.TABLE_CELL,
    "td": Tag.TABLE_CELL,
    "br": Tag.LINE_BREAK,
    "hr": Tag.HORIZONTAL_RULE,
}

_SKIPPED_STRINGS = (Comment, Doctype, CData, Declaration, ProcessingInstruction)


def classify_tag(name: str | None) -> Tag:
    """Map an HTML tag name to a ``Tag``; unknown names map to ``Tag.UNKNOWN``."""
    if not name:
        return Tag.UNKNOWN
    return HTML_TAG_MAP.get(name.lower(), Tag.UNKNOWN)


def extract_language(element: SoupTag) -> str:
    """Return the language named by a ``language-xxx`` class, or an empty string."""
    classes: Any = element.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    for cls in classes:
        if cls.startswith(LANGUAGE_CLASS_PREFIX):
            return cls[len(LANGUAGE_CLASS_PREFIX) :]
    return ""


def _convert_tag(element: SoupTag) -> Element:
    tag = classify_tag(element.name)
    attrs: dict[str, str] = {}
    if tag is Tag.LINK:
        href = element.get("href")
        if href:
            attrs["href"] = href if isinstance(href, str) else " ".join(href)
    elif tag in (Tag.CODE_BLOCK, Tag.INLINE_CODE):
        language = extract_language(element)
        if language:
            attrs["language"] = language
    return Element(tag=tag, attrs=attrs)


def node_from_soup(element: Any) -> Node:
    """Convert a BeautifulSoup tag or string into a node tree.

    Parameters
    ----------
    element : bs4.Tag or bs4.NavigableString
        Root of the subtree to convert. A ``BeautifulSoup`` document is a tag
        and converts to an ``UNKNOWN`` container.

    Returns
    -------
    Node
        Converted tree

    """
    if isinstance(element, _SKIPPED_STRINGS):
        return TextNode("")
    if isinstance(element, NavigableString):
        return TextNode(str(element))
    return _convert_subtree(element)


def _convert_subtree(element: SoupTag) -> Element:
    root = _convert_tag(element)
    stack: list[tuple[SoupTag, Element]] = [(element, root)]
    while stack:
        soup_tag, node = stack.pop()
        for child in soup_tag.children:
            if isinstance(child, _SKIPPED_STRINGS):
                continue
            if isinstance(child, NavigableString):
                node.children.append(TextNode(str(child)))
            elif isinstance(child, SoupTag):
                if child.name and child.name.lower() in STRIPPED_HTML_TAGS:
                    continue
                converted = _convert_tag(child)
                node.children.append(converted)
                stack.append((child, converted))
    return root


def parse_html(html: str | bytes, parser: str = DEFAULT_HTML_PARSER) -> BeautifulSoup:
    """Parse HTML with BeautifulSoup.

    Raises
    ------
    ValidationError
        If the requested tree builder is not installed

    """
    try:
        return BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise ValidationError(
            f"HTML parser '{parser}' is not available. Install it or use 'html.parser'.",
            parameter_name="html_parser",
            parameter_value=parser,
            original_error=e,
        ) from e


def node_from_html(html: str | bytes, parser: str = DEFAULT_HTML_PARSER) -> Element:
    """Parse an HTML document or fragment into an ``UNKNOWN`` root element."""
    root = _convert_subtree(parse_html(html, parser))
    logger.debug("Parsed HTML into %d top-level nodes", len(root.children))
    return root


__all__ = ["HTML_TAG_MAP", "classify_tag", "extract_language", "node_from_soup", "parse_html", "node_from_html"]
