#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/transforms/frontmatter_table.py
"""Render frontmatter values as ADF tables.

A frontmatter value may be a scalar, a mapping, or a list of mappings. Each
entry becomes a data row; mapping keys become columns in first-seen order.
Keys that first appear in a later entry back-fill ``"<"`` cells into the
rows already emitted, and keys missing from an entry produce ``"^"`` cells.
Both sentinels are resolved by :func:`~md2adf.transforms.tables.merge_cells`
before the table is returned.

Cell values and header labels are rendered through the markdown pipeline
(the ``render`` callable), so they may carry links, emphasis or status
badges.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, MutableSequence, Optional

from md2adf.adf import builders as b
from md2adf.adf.nodes import Node
from md2adf.constants import MERGE_LEFT_SENTINEL, MERGE_UP_SENTINEL, SCALAR_ENTRY_COLUMN
from md2adf.transforms.tables import merge_cells

logger = logging.getLogger(__name__)

RenderMarkdown = Callable[[str], list[Node]]


def stringify_value(value: Any) -> str:
    """Convert a frontmatter value to the markdown source rendered in a cell.

    Parameters
    ----------
    value : Any
        Frontmatter value

    Returns
    -------
    str
        Booleans become ``true`` / ``false``, lists are joined with ``", "``
        and mappings are written as ``key: value`` pairs

    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(stringify_value(item) for item in value)
    if isinstance(value, Mapping):
        return ", ".join(f"{k}: {stringify_value(v)}" for k, v in value.items())
    return str(value)


def _rendered_cell(render: RenderMarkdown, source: str, header: bool = False) -> Node:
    content = render(source) or [b.paragraph()]
    if header:
        return b.table_header(content)
    return b.table_cell(content)


def _sentinel_cell(symbol: str) -> Node:
    return b.table_cell([b.p(symbol)])


def _as_entry(data: Any) -> Mapping[Any, Any]:
    if isinstance(data, Mapping):
        return data
    return {SCALAR_ENTRY_COLUMN: data}


def entry_as_row(
    data: Any,
    header_labels: list[Any],
    headers: MutableSequence[Node],
    content_rows: list[Node],
    render: RenderMarkdown,
) -> Node:
    """Build the table row for one frontmatter entry.

    New keys extend ``header_labels`` / ``headers`` and back-fill a ``"<"``
    cell into every row in ``content_rows``.

    Parameters
    ----------
    data : Any
        The entry; non-mapping values are placed in a single ``value`` column
    header_labels : list
        Column keys seen so far, in order; extended in place
    headers : MutableSequence[Node]
        Header-row cells; extended in place
    content_rows : list of Node
        Data rows emitted so far; back-filled in place
    render : RenderMarkdown
        Markdown rendering callable for labels and values

    Returns
    -------
    Node
        The new ``tableRow``

    """
    entry = _as_entry(data)
    for key in entry:
        if key in header_labels:
            continue
        logger.debug(f"Column {len(header_labels)} = {key}")
        header_labels.append(key)
        headers.append(_rendered_cell(render, stringify_value(key), header=True))
        for row in content_rows:
            row.content = row.content or []
            row.content.append(_sentinel_cell(MERGE_LEFT_SENTINEL))

    values: list[Node] = []
    for label in header_labels:
        value = entry.get(label)
        if value is None:
            values.append(_sentinel_cell(MERGE_UP_SENTINEL))
        else:
            values.append(_rendered_cell(render, stringify_value(value)))
    return b.table_row(values)


def yaml_to_table(data: Any, render: RenderMarkdown) -> Node:
    """Materialize a frontmatter value as a merged ADF table.

    Parameters
    ----------
    data : Any
        Scalar, mapping, or list of entries
    render : RenderMarkdown
        Markdown rendering callable for labels and values

    Returns
    -------
    Node
        ``table`` node whose first row holds the header cells

    Examples
    --------
    >>> table = yaml_to_table([{"a": 1}, {"a": 1, "b": 2}], render)
    >>> table.content[1].content[0].attrs["colspan"]
    2

    """
    entries = data if isinstance(data, list) else [data]

    header_labels: list[Any] = []
    headers: list[Node] = []
    # Shares the list so new columns land in the header row
    header_row = Node(type="tableRow", content=headers)
    content_rows: list[Node] = []

    for entry in entries:
        row = entry_as_row(entry, header_labels, headers, content_rows, render)
        content_rows.append(row)

    table = b.table([header_row, *content_rows])
    merge_cells(table)
    return table


def include_frontmatter_table(
    frontmatter: Mapping[str, Any],
    key: str,
    content: MutableSequence[Node],
    render: RenderMarkdown,
    active_sections: Optional[set[str]] = None,
) -> str:
    """Append the table for ``frontmatter[key]`` to ``content`` when present.

    When ``key`` is absent (or maps to None) the slug
    ``key.lower().replace(" ", "-")`` is tried instead.

    Parameters
    ----------
    frontmatter : Mapping[str, Any]
        Document frontmatter
    key : str
        Section name to look up
    content : MutableSequence[Node]
        Section body; the table is appended in place
    render : RenderMarkdown
        Markdown rendering callable for labels and values
    active_sections : set of str, optional
        Keys whose tables are being rendered further up the call stack. A
        key found here is skipped with a warning, since its cells would
        render the same section again. The set is updated in place while
        the table is built.

    Returns
    -------
    str
        The key actually used for the lookup

    """
    data = frontmatter.get(key)
    if data is None:
        key = key.lower().replace(" ", "-")
        data = frontmatter.get(key)
    if data is None:
        return key

    if active_sections is None:
        content.append(yaml_to_table(data, render))
        return key

    if key in active_sections:
        logger.warning(f"Skipping frontmatter table '{key}': it is already being rendered")
        return key

    active_sections.add(key)
    try:
        content.append(yaml_to_table(data, render))
    finally:
        active_sections.discard(key)
    return key


__all__ = [
    "RenderMarkdown",
    "stringify_value",
    "entry_as_row",
    "yaml_to_table",
    "include_frontmatter_table",
]
