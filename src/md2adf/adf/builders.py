#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/adf/builders.py
"""Factory helpers for constructing ADF nodes.

These helpers mirror the ADF builder vocabulary so that encoders and
transforms can create well-formed nodes without repeating attribute
bookkeeping.

"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from md2adf.adf.nodes import Mark, Node
from md2adf.constants import CONFLUENCE_MACRO_EXTENSION_TYPE


def doc(content: Optional[Sequence[Node]] = None) -> Node:
    """Create a document root."""
    return Node(type="doc", attrs=None, content=list(content or []))


def text(value: str, marks: Optional[Sequence[Mark]] = None) -> Node:
    """Create a text run, optionally decorated with marks."""
    return Node(type="text", text=value, marks=list(marks) if marks else None)


def paragraph(*content: Node) -> Node:
    """Create a paragraph holding inline nodes."""
    return Node(type="paragraph", content=list(content))


def p(value: str) -> Node:
    """Create a paragraph containing a single plain text run."""
    if not value:
        return paragraph()
    return paragraph(text(value))


def heading(level: int, *content: Node) -> Node:
    """Create a heading of the given level (1-6)."""
    return Node(type="heading", attrs={"level": level}, content=list(content))


def hard_break() -> Node:
    """Create a hard line break."""
    return Node(type="hardBreak")


def rule() -> Node:
    """Create a horizontal rule."""
    return Node(type="rule")


def link_mark(href: str, title: Optional[str] = None) -> Mark:
    """Create a link mark."""
    attrs: dict[str, Any] = {"href": href}
    if title:
        attrs["title"] = title
    return Mark(type="link", attrs=attrs)


def code_block(code: str, language: Optional[str] = None) -> Node:
    """Create a code block; ``attrs`` is empty when no language is given."""
    attrs = {"language": language} if language else {}
    return Node(type="codeBlock", attrs=attrs, content=[text(code)] if code else [])


def table(rows: Optional[Sequence[Node]] = None) -> Node:
    """Create a table with default layout attributes."""
    return Node(
        type="table",
        attrs={"isNumberColumnEnabled": False, "layout": "default"},
        content=list(rows or []),
    )


def table_row(cells: Optional[Sequence[Node]] = None) -> Node:
    """Create a table row."""
    return Node(type="tableRow", content=list(cells or []))


def table_header(content: Optional[Sequence[Node]] = None, attrs: Optional[dict[str, Any]] = None) -> Node:
    """Create a header cell; span attributes are left unset unless given."""
    return Node(type="tableHeader", attrs=dict(attrs) if attrs is not None else {}, content=list(content or []))


def table_cell(content: Optional[Sequence[Node]] = None, attrs: Optional[dict[str, Any]] = None) -> Node:
    """Create a body cell; span attributes are left unset unless given."""
    return Node(type="tableCell", attrs=dict(attrs) if attrs is not None else {}, content=list(content or []))


def inline_card(url: str) -> Node:
    """Create a smart-link card pointing at ``url``."""
    return Node(type="inlineCard", attrs={"url": url})


def status(label: str, color: str) -> Node:
    """Create a status lozenge."""
    return Node(type="status", attrs={"text": label, "color": color})


def extension(extension_key: str, parameters: dict[str, Any]) -> Node:
    """Create a leaf Confluence macro (no body)."""
    return Node(
        type="extension",
        attrs={
            "layout": "default",
            "extensionType": CONFLUENCE_MACRO_EXTENSION_TYPE,
            "extensionKey": extension_key,
            "parameters": parameters,
        },
    )


def bodied_extension(extension_key: str, parameters: dict[str, Any], content: Sequence[Node]) -> Node:
    """Create a Confluence macro that wraps block content."""
    return Node(
        type="bodiedExtension",
        attrs={
            "layout": "default",
            "extensionType": CONFLUENCE_MACRO_EXTENSION_TYPE,
            "extensionKey": extension_key,
            "parameters": parameters,
        },
        content=list(content),
    )


def media_single(url: str, alt: Optional[str] = None) -> Node:
    """Create a block image referencing an external (or local) location."""
    media_attrs: dict[str, Any] = {"type": "external", "url": url}
    if alt:
        media_attrs["alt"] = alt
    return Node(
        type="mediaSingle",
        attrs={"layout": "center"},
        content=[Node(type="media", attrs=media_attrs)],
    )


__all__ = [
    "doc",
    "text",
    "paragraph",
    "p",
    "heading",
    "hard_break",
    "rule",
    "link_mark",
    "code_block",
    "table",
    "table_row",
    "table_header",
    "table_cell",
    "inline_card",
    "status",
    "extension",
    "bodied_extension",
    "media_single",
]
