#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Export saved chat pages as Markdown transcripts.

A saved conversation page holds one container per turn, marked with a
``data-testid`` of ``conversation-turn-N``. Inside each container, the message
element carries ``data-message-author-role`` (``user`` or ``assistant``).

Text is taken per turn as follows:

- user turns use the visible text of the ``.whitespace-pre-wrap`` element, or
  of the whole message when it is missing;
- agent turns serialize the children of the ``.markdown`` element back to
  Markdown, or fall back to the visible text of the message.

The transcript is an optional preamble line, then for each turn a
``# <role>`` header, a blank line, the trimmed text and a blank line.

Examples
--------
    >>> from chat2md.conversation import convert_page
    >>> markdown = convert_page(open("chat.html", encoding="utf-8").read())

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from chat2md.constants import (
    ASSISTANT_AUTHOR_ROLE,
    ASSISTANT_MARKDOWN_CLASS,
    AUTHOR_ROLE_ATTRIBUTE,
    DEFAULT_FILENAME_PREFIX,
    FILENAME_TIMESTAMP_FORMAT,
    MARKDOWN_EXTENSION,
    TURN_TESTID_PREFIX,
    USER_AUTHOR_ROLE,
    USER_TEXT_CLASS,
    Role,
)
from chat2md.dom import node_from_soup, parse_html
from chat2md.exceptions import FileAccessError, InputFileNotFoundError, NoTurnsFoundError, OutputWriteError
from chat2md.nodes import rendered_text
from chat2md.options import ExportOptions
from chat2md.serializer import MarkdownSerializer

logger = logging.getLogger(__name__)

_TURN_TESTID = re.compile("^" + re.escape(TURN_TESTID_PREFIX))


@dataclass(frozen=True)
class Turn:
    """A conversation turn located in a page.

    Parameters
    ----------
    role : {"user", "agent"}
        Author role of the turn
    message : bs4.Tag
        Element carrying the ``data-message-author-role`` attribute

    """

    role: Role
    message: Any


@dataclass(frozen=True)
class TranscriptTurn:
    """Role and extracted text of one turn."""

    role: Role
    text: str


def find_turns(soup: Any) -> list[Turn]:
    """Locate conversation turns in document order.

    Containers without a user or assistant message are skipped.

    Parameters
    ----------
    soup : bs4.BeautifulSoup or bs4.Tag
        Parsed page

    Returns
    -------
    list of Turn
        Turns in page order

    """
    turns = []
    for container in soup.find_all(attrs={"data-testid": _TURN_TESTID}):
        user_message = container.find(attrs={AUTHOR_ROLE_ATTRIBUTE: USER_AUTHOR_ROLE})
        if user_message is not None:
            turns.append(Turn(role="user", message=user_message))
            continue
        assistant_message = container.find(attrs={AUTHOR_ROLE_ATTRIBUTE: ASSISTANT_AUTHOR_ROLE})
        if assistant_message is not None:
            turns.append(Turn(role="agent", message=assistant_message))
            continue
        logger.debug("Skipping turn container %s with no author role", container.get("data-testid"))
    return turns


def extract_turn_text(turn: Turn, serializer: MarkdownSerializer | None = None) -> str:
    """Return the Markdown text of a single turn.

    Parameters
    ----------
    turn : Turn
        Turn to extract
    serializer : MarkdownSerializer, optional
        Serializer used for agent turns

    Returns
    -------
    str
        Untrimmed text of the turn

    """
    if turn.role == "user":
        source = turn.message.find(class_=USER_TEXT_CLASS) or turn.message
        return rendered_text(node_from_soup(source))

    markdown_root = turn.message.find(class_=ASSISTANT_MARKDOWN_CLASS)
    if markdown_root is None:
        logger.debug("Agent turn has no rendered markdown container; using visible text")
        return rendered_text(node_from_soup(turn.message))
    return (serializer or MarkdownSerializer()).serialize_children(node_from_soup(markdown_root))


def build_transcript(turns: Iterable[TranscriptTurn], preamble: str | None = None) -> str:
    """Join turns under ``# <role>`` headers.

    Parameters
    ----------
    turns : iterable of TranscriptTurn
        Turns in conversation order
    preamble : str, optional
        Line placed before the first turn, followed by a blank line

    Returns
    -------
    str
        Complete transcript

    """
    lines: list[str] = []
    if preamble is not None:
        lines.extend([preamble, ""])
    for turn in turns:
        lines.extend([f"# {turn.role}", "", turn.text.strip(), ""])
    return "\n".join(lines)


def export_filename(now: datetime | None = None, prefix: str = DEFAULT_FILENAME_PREFIX) -> str:
    """Return ``<prefix>-YYYYMMDD-HHMMSS.md`` for ``now`` (default: current local time)."""
    timestamp = (now or datetime.now()).strftime(FILENAME_TIMESTAMP_FORMAT)
    return f"{prefix}-{timestamp}{MARKDOWN_EXTENSION}"


def extract_turns(
    html: str | bytes, options: ExportOptions | None = None, source: str | None = None
) -> list[TranscriptTurn]:
    """Parse a page and extract the text of every turn.

    Raises
    ------
    NoTurnsFoundError
        If the page contains no conversation turns

    """
    options = options or ExportOptions()
    turns = find_turns(parse_html(html, options.html_parser))
    if not turns:
        raise NoTurnsFoundError(source=source)

    serializer = MarkdownSerializer(options.serializer_options)
    return [TranscriptTurn(role=turn.role, text=extract_turn_text(turn, serializer)) for turn in turns]


def convert_page(html: str | bytes, options: ExportOptions | None = None, source: str | None = None) -> str:
    """Convert a saved chat page to a Markdown transcript.

    Parameters
    ----------
    html : str or bytes
        Page markup
    options : ExportOptions, optional
        Export options
    source : str, optional
        Page name used in error messages

    Returns
    -------
    str
        Transcript text

    Raises
    ------
    NoTurnsFoundError
        If the page contains no conversation turns

    """
    options = options or ExportOptions()
    return build_transcript(extract_turns(html, options, source=source), preamble=options.preamble)


def read_page(path: str | Path) -> str:
    """Read a saved page as UTF-8 text.

    Raises
    ------
    InputFileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read

    """
    path = Path(path)
    if not path.is_file():
        raise InputFileNotFoundError(str(path))
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(str(path), original_error=e) from e


def write_transcript(markdown: str, path: str | Path) -> Path:
    """Write a transcript as UTF-8, creating parent directories.

    Raises
    ------
    OutputWriteError
        If the file cannot be written

    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(str(path), original_error=e) from e
    return path


def export_page(
    html: str | bytes,
    output_path: str | Path | None = None,
    output_dir: str | Path | None = None,
    options: ExportOptions | None = None,
    now: datetime | None = None,
    source: str | None = None,
) -> Path:
    """Convert page markup and write the transcript to disk.

    Parameters
    ----------
    html : str or bytes
        Page markup
    output_path : str or Path, optional
        Exact output file. Takes precedence over ``output_dir``.
    output_dir : str or Path, optional
        Directory for a timestamped file name. Defaults to the current
        directory.
    options : ExportOptions, optional
        Export options
    now : datetime, optional
        Export time used in the generated file name
    source : str, optional
        Page name used in messages

    Returns
    -------
    Path
        Path of the written transcript

    Raises
    ------
    NoTurnsFoundError
        If the page contains no conversation turns
    OutputWriteError
        If the transcript cannot be written

    """
    options = options or ExportOptions()
    turns = extract_turns(html, options, source=source)
    markdown = build_transcript(turns, preamble=options.preamble)

    if output_path is None:
        output_path = Path(output_dir or ".") / export_filename(now, prefix=options.filename_prefix)
    written = write_transcript(markdown, output_path)
    logger.info("Exported %d turns to %s", len(turns), written)
    return written


def export_conversation(
    input_path: str | Path,
    output_path: str | Path | None = None,
    output_dir: str | Path | None = None,
    options: ExportOptions | None = None,
    now: datetime | None = None,
) -> Path:
    """Read a saved chat page and write its transcript; see ``export_page``."""
    return export_page(
        read_page(input_path),
        output_path=output_path,
        output_dir=output_dir,
        options=options,
        now=now,
        source=str(input_path),
    )


__all__ = [
    "Turn",
    "TranscriptTurn",
    "find_turns",
    "extract_turn_text",
    "build_transcript",
    "export_filename",
    "extract_turns",
    "convert_page",
    "read_page",
    "write_transcript",
    "export_page",
    "export_conversation",
]
