#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for serialization and conversation export.

Options are frozen dataclasses. Use ``create_updated`` to derive a modified
copy. Field metadata carries the help text shown by the command line.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from chat2md.constants import (
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_FILENAME_PREFIX,
    DEFAULT_FLATTEN_LIST_ITEMS,
    DEFAULT_HTML_PARSER,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PREAMBLE,
    HtmlParser,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class SerializerOptions(CloneFrozenMixin):
    """Options for the tree-to-Markdown serializer.

    The defaults reproduce the plain transcription behaviour: no escaping,
    flattened list items and nested lists rendered in place.

    Parameters
    ----------
    escape_special : bool, default False
        Backslash-escape Markdown metacharacters found in text nodes. Code
        content is never escaped.
    flatten_list_items : bool, default True
        Emit list items as their flattened plain text. When False, item
        children are serialized recursively so inline formatting survives.
        Items containing a nested list are serialized recursively either way.
    max_depth : int, default 200
        Deepest element nesting that is walked recursively. Deeper subtrees
        are emitted as flattened text.

    """

    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Escape Markdown special characters in plain text"},
    )
    flatten_list_items: bool = field(
        default=DEFAULT_FLATTEN_LIST_ITEMS,
        metadata={"help": "Render list items as plain text (disable to keep inline formatting)"},
    )
    max_depth: int = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum element nesting walked before falling back to plain text", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``max_depth`` is not positive.

        """
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")


@dataclass(frozen=True)
class ExportOptions(CloneFrozenMixin):
    """Options for exporting a saved chat page as a Markdown transcript.

    Parameters
    ----------
    preamble : str or None, default "agent: ChatGPT"
        First line of the transcript, followed by a blank line. None omits it.
        The default does not name a model version; pass e.g.
        ``"agent: ChatGPT 5.2 Thinking"`` to record the model that answered.
    filename_prefix : str, default "ChatGPT"
        Prefix of generated filenames (``<prefix>-YYYYMMDD-HHMMSS.md``).
    html_parser : {"html.parser", "lxml", "html5lib"}, default "html.parser"
        BeautifulSoup tree builder used to parse the page.
    serializer_options : SerializerOptions
        Options passed to the tree serializer for agent turns.

    """

    preamble: str | None = field(
        default=DEFAULT_PREAMBLE,
        metadata={"help": "First line of the transcript (use --no-preamble to omit)"},
    )
    filename_prefix: str = field(
        default=DEFAULT_FILENAME_PREFIX,
        metadata={"help": "Prefix for generated transcript filenames"},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup parser used to read the page", "choices": ["html.parser", "lxml", "html5lib"]},
    )
    serializer_options: SerializerOptions = field(default_factory=SerializerOptions)

    def __post_init__(self) -> None:
        """Validate the filename prefix.

        Raises
        ------
        ValueError
            If the prefix is empty or contains a path separator.

        """
        if not self.filename_prefix or any(sep in self.filename_prefix for sep in ("/", "\\")):
            raise ValueError(
                f"filename_prefix must be a non-empty name without separators, got {self.filename_prefix!r}"
            )


__all__ = ["CloneFrozenMixin", "SerializerOptions", "ExportOptions"]
