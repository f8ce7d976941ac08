#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/transforms/tables.py
"""Span merging for ADF tables.

Table cells whose text is exactly ``"^"`` or ``"<"`` are merge instructions:
``"^"`` extends the cell above it by one row and ``"<"`` extends the cell to
its left by one column. :func:`merge_cells` consumes these sentinel cells and
converts them into ``rowspan`` / ``colspan`` attributes on their targets.

Examples
--------
    >>> from md2adf.adf import builders as b
    >>> table = b.table([
    ...     b.table_row([b.table_header([b.p("A")])]),
    ...     b.table_row([b.table_cell([b.p("^")])]),
    ... ])
    >>> merge_cells(table)
    >>> table.content[0].content[0].attrs["rowspan"]
    2

"""

from __future__ import annotations

import logging
from typing import Literal

from md2adf.adf.nodes import Node
from md2adf.constants import MERGE_LEFT_SENTINEL, MERGE_UP_SENTINEL

logger = logging.getLogger(__name__)

SpanAttr = Literal["rowspan", "colspan"]


def has_content_string(node: Node, expected: str) -> bool:
    """Check whether a cell's leading text run is exactly ``expected``.

    A wrapping paragraph is descended into once, so both
    ``cell > paragraph > text`` and ``cell > text`` are recognized.

    Parameters
    ----------
    node : Node
        Table cell to inspect
    expected : str
        Exact text to compare against

    Returns
    -------
    bool
        True if the first inline run's text equals ``expected``

    """
    content = node.content
    if content and content[0].type == "paragraph":
        content = content[0].content or []
    if content:
        return (content[0].text or "") == expected
    return False


def increment_attr(table: Node, row_id: int, col_id: int, source: Node, key: SpanAttr) -> None:
    """Grow the span attribute of the cell at ``(row_id, col_id)``.

    The target column is located by walking the row left to right and
    subtracting each cell's ``colspan`` (default 1) from ``col_id`` until it
    reaches -1. The amount is the source cell's own ``key`` value (default
    1). A target without the attribute gets ``1 + amount``; otherwise
    ``amount`` is added. Every cell walked over receives an empty attribute
    map if it had none.

    Out-of-range rows and negative columns are ignored.

    Parameters
    ----------
    table : Node
        Table being merged
    row_id : int
        Index of the row holding the target cell
    col_id : int
        Column index of the sentinel cell
    source : Node
        The sentinel cell
    key : {"rowspan", "colspan"}
        Span attribute to grow

    """
    rows = table.content or []
    if row_id < 0 or col_id < 0 or row_id >= len(rows):
        return

    logger.debug(f"Incrementing {key} at {row_id}, {col_id}")
    for cell in rows[row_id].content or []:
        attrs = cell.ensure_attrs()
        col_id -= attrs.get("colspan") or 1
        if col_id == -1:
            amount = (source.attrs or {}).get(key) or 1
            if not attrs.get(key):
                attrs[key] = 1 + amount
            else:
                attrs[key] = attrs[key] + amount
        if col_id < 0:
            return


def merge_cells(table: Node) -> None:
    """Resolve every merge sentinel in ``table`` in place.

    Rows are processed last to first and cells within a row last to first,
    so removing a sentinel never shifts a cell that is still to be visited.
    Sentinels whose target falls outside the table are dropped without
    merging.

    Parameters
    ----------
    table : Node
        Table node whose rows are modified in place

    """
    rows = table.content or []
    for row_id in range(len(rows) - 1, -1, -1):
        cells = rows[row_id].content
        if not cells:
            continue
        for col_id in range(len(cells) - 1, -1, -1):
            cell = cells[col_id]
            if has_content_string(cell, MERGE_UP_SENTINEL):
                logger.debug(f"Found {MERGE_UP_SENTINEL} at {row_id}, {col_id}")
                increment_attr(table, row_id - 1, col_id, cell, "rowspan")
                del cells[col_id]
            elif has_content_string(cell, MERGE_LEFT_SENTINEL):
                logger.debug(f"Found {MERGE_LEFT_SENTINEL} at {row_id}, {col_id}")
                increment_attr(table, row_id, col_id - 1, cell, "colspan")
                del cells[col_id]


__all__ = ["has_content_string", "increment_attr", "merge_cells"]
