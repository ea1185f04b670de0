#  Copyright (c) 2025 Tom Villani, Ph.D.
"""High-level conversion entry points."""

from __future__ import annotations

from chat2md.constants import DEFAULT_HTML_PARSER
from chat2md.dom import node_from_html
from chat2md.options import SerializerOptions
from chat2md.serializer import serialize_children


def html_to_markdown(
    html: str | bytes,
    options: SerializerOptions | None = None,
    parser: str = DEFAULT_HTML_PARSER,
) -> str:
    """Convert rendered HTML content to a Markdown fragment.

    The top-level nodes of the fragment are serialized in order and joined
    without separators, exactly as the contents of a rendered message are.
    The result is not trimmed.

    Parameters
    ----------
    html : str or bytes
        Rendered HTML document or fragment
    options : SerializerOptions, optional
        Serialization options
    parser : str, default "html.parser"
        BeautifulSoup tree builder

    Returns
    -------
    str
        Markdown fragment

    Examples
    --------
        >>> html_to_markdown("<h1>Title</h1><p>Some <em>text</em></p>")
        '\\n## Title\\n\\nSome *text*\\n'

    """
    return serialize_children(node_from_html(html, parser), options)


__all__ = ["html_to_markdown"]
