"""chat2md - Export rendered chat conversations as Markdown.

chat2md recovers Markdown from chat messages that are only available as
rendered markup. Its core is a tree-to-Markdown serializer that walks a
semantically tagged node tree (headings, paragraphs, code blocks, lists,
tables, emphasis, links, rules) and produces a faithful plain-text rendering.
Around that core, the package reads saved conversation pages with
BeautifulSoup, extracts each user and agent turn, and writes a timestamped
transcript.

Key Features
------------
- Pure, total serializer: unknown elements keep their contents, missing
  attributes degrade to empty strings, and nothing raises
- Heading levels shifted down one level to leave ``#`` for role headers
- Pipe tables with ragged-row padding
- Optional Markdown escaping and nesting-depth hardening
- ``chat2md`` command line with config file and environment defaults

Examples
--------
Serialize a node tree:

    >>> from chat2md import Tag, make_element, serialize
    >>> serialize(make_element(Tag.UNKNOWN, "foo", "bar"))
    'foobar'

Convert rendered HTML:

    >>> from chat2md import html_to_markdown
    >>> html_to_markdown("<p>Use <code>pip</code></p>")
    '\\nUse `pip`\\n'

Export a saved conversation page:

    >>> from chat2md import export_conversation
    >>> path = export_conversation("conversation.html", output_dir="exports")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "chat2md requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from chat2md.api import html_to_markdown
from chat2md.conversation import convert_page, export_conversation, export_filename
from chat2md.exceptions import Chat2MdError, NoTurnsFoundError
from chat2md.nodes import Element, Node, Tag, TextNode, flatten_text, make_element
from chat2md.options import ExportOptions, SerializerOptions
from chat2md.serializer import MarkdownSerializer, serialize, serialize_children
from chat2md.tables import serialize_table

__all__ = [
    "__version__",
    "html_to_markdown",
    "convert_page",
    "export_conversation",
    "export_filename",
    "Chat2MdError",
    "NoTurnsFoundError",
    "Element",
    "Node",
    "Tag",
    "TextNode",
    "flatten_text",
    "make_element",
    "ExportOptions",
    "SerializerOptions",
    "MarkdownSerializer",
    "serialize",
    "serialize_children",
    "serialize_table",
]
