#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Pipe-table serialization.

Tables are written as GitHub-style pipe tables. The first row is always used
as the header and is followed by a ``---`` separator row, whether or not the
source marked it as a header. Ragged rows are padded with empty cells to the
widest row. Pipes inside cells are not escaped.
"""

from __future__ import annotations

from typing import Any, Sequence

from chat2md.constants import TABLE_SEPARATOR_CELL
from chat2md.nodes import Element, Tag, flatten_text, iter_descendants


def _format_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def serialize_table(rows: Sequence[Sequence[Any]]) -> str:
    """Render rows of cell values as a Markdown pipe table.

    Parameters
    ----------
    rows : sequence of sequences
        Table rows in order; each row is a sequence of cell values. Row 0 is
        the header.

    Returns
    -------
    str
        Newline-joined table lines without a trailing newline, or an empty
        string when ``rows`` is empty.

    Examples
    --------
        >>> print(serialize_table([["a", "b", "c"], ["d"]]))
        | a | b | c |
        | --- | --- | --- |
        | d |  |  |

    """
    if not rows:
        return ""

    col_count = max(len(row) for row in rows)
    lines = []
    for index, row in enumerate(rows):
        cells = [str(cell).strip() for cell in row]
        cells.extend([""] * (col_count - len(cells)))
        lines.append(_format_row(cells))
        if index == 0:
            lines.append(_format_row([TABLE_SEPARATOR_CELL] * col_count))
    return "\n".join(lines)


def extract_table_rows(table: Element) -> list[list[str]]:
    """Collect the flattened cell text of every row in ``table``.

    Rows are found through wrapper elements (head, body, footer groups) but
    not inside nested tables. A cell's value is its flattened text, trimmed.
    """
    rows = []
    for row in iter_descendants(table, (Tag.TABLE_ROW,), prune=(Tag.TABLE,)):
        cells = iter_descendants(row, (Tag.TABLE_CELL,), prune=(Tag.TABLE,))
        rows.append([flatten_text(cell).strip() for cell in cells])
    return rows


def table_to_markdown(table: Element) -> str:
    """Serialize a table element through ``serialize_table``."""
    return serialize_table(extract_table_rows(table))


__all__ = ["serialize_table", "extract_table_rows", "table_to_markdown"]
