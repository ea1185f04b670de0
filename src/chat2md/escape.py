#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chat2md/escape.py
"""Markdown escaping for optional strict output.

Transcripts are written without escaping by default. These helpers are used
only when ``SerializerOptions.escape_special`` is enabled.
"""

from __future__ import annotations

from typing import Literal

from chat2md.constants import MARKDOWN_SPECIAL_CHARS

EscapeContext = Literal["text", "table"]


def escape_markdown(text: str, context: EscapeContext = "text") -> str:
    r"""Escape Markdown metacharacters in ``text``.

    Parameters
    ----------
    text : str
        Text to escape
    context : {'text', 'table'}, default = 'text'
        ``table`` only escapes pipes, which would otherwise split a cell.

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown("a *b* [c]")
        'a \\*b\\* \\[c\\]'
        >>> escape_markdown("x | y", "table")
        'x \\| y'

    """
    if not text:
        return text

    if context == "table":
        return text.replace("|", r"\|")

    return "".join("\\" + char if char in MARKDOWN_SPECIAL_CHARS else char for char in text)
