"""Test utilities for md2adf test suite.

This module provides helpers for building ADF fixtures, a fake publisher
implementing the upload capabilities, and shortcuts for inspecting
converted trees.
"""

from typing import Any, Optional

from md2adf.adf import builders as b
from md2adf.adf.nodes import Node, get_text
from md2adf.plugins.base import UploadedImageData


def render_plain(source: str) -> list[Node]:
    """Render markdown source as a single plain paragraph (no parsing)."""
    return [b.p(source)]


def cell(value: str, header: bool = False, **attrs: Any) -> Node:
    """Create a table cell whose only content is ``value`` in a paragraph."""
    if header:
        return b.table_header([b.p(value)], attrs)
    return b.table_cell([b.p(value)], attrs)


def table_from_grid(grid: list[list[str]], header: bool = False) -> Node:
    """Build a table from rows of cell strings.

    When ``header`` is true the first row is made of ``tableHeader`` cells.
    """
    rows = []
    for index, row in enumerate(grid):
        rows.append(b.table_row([cell(value, header=header and index == 0) for value in row]))
    return b.table(rows)


def grid_text(table: Node) -> list[list[str]]:
    """Return the text of every cell, row by row."""
    return [[get_text(c) for c in row.content or []] for row in table.content or []]


def span(node: Node, key: str) -> Optional[int]:
    """Return the ``colspan``/``rowspan`` attribute of a cell, if set."""
    return (node.attrs or {}).get(key)


def find_all(root: Node, node_type: str) -> list[Node]:
    """Return every node of ``node_type`` below ``root`` in document order."""
    return [node for node in root.walk() if node.type == node_type]


class FakePublisher:
    """In-memory stand-in for the publisher's upload capabilities.

    Parameters
    ----------
    results : dict, optional
        Upload result per file name; unknown names get a generated result
    fail_on : str, optional
        File name whose upload raises ``RuntimeError``

    """

    def __init__(self, results: Optional[dict[str, Optional[UploadedImageData]]] = None, fail_on: Optional[str] = None):
        self.results = results or {}
        self.fail_on = fail_on
        self.uploaded: list[str] = []
        self.buffers: list[tuple[str, bytes]] = []

    async def upload_file(self, file_name: str) -> Optional[UploadedImageData]:
        self.uploaded.append(file_name)
        if file_name == self.fail_on:
            raise RuntimeError(f"upload of {file_name} failed")
        if file_name in self.results:
            return self.results[file_name]
        return UploadedImageData(
            filename=file_name.rsplit("/", 1)[-1],
            id=f"id-{len(self.uploaded)}",
            collection="contentId-42",
            width=640,
            height=480,
        )

    async def upload_buffer(self, upload_filename: str, data: bytes) -> Optional[UploadedImageData]:
        self.buffers.append((upload_filename, data))
        return None
