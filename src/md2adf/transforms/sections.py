#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/transforms/sections.py
"""Excerpt, page-properties and table-of-contents macros.

Two sources produce these Confluence macros:

1. Marker paragraphs. A top-level paragraph whose only child is the text
   ``^excerpt[-<level>][-<name>]`` or ``^properties[-<level>][-<name>]``
   wraps the preceding sibling content, back to the last heading (of the
   given level, or of any level), into an ``excerpt`` / ``details`` macro.
   See :func:`convert_special_blocks`.
2. Callout panels whose ``panelType`` is ``excerpt``, ``properties`` or
   ``toc``. See :func:`callout_as_excerpt`, :func:`callout_as_properties`
   and :func:`callout_as_toc`.

Both paths append a table built from the frontmatter entry named after the
section, when one exists.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from md2adf.adf import builders as b
from md2adf.adf.nodes import Node
from md2adf.constants import (
    DEFAULT_EXCERPT_NAME,
    DEFAULT_PROPERTIES_NAME,
    EXCERPT_MACRO_ID,
    MAX_HEADING_LEVEL,
    PROPERTIES_MACRO_ID,
    SPECIAL_SECTION_PATTERN,
)
from md2adf.transforms.frontmatter_table import RenderMarkdown, include_frontmatter_table

logger = logging.getLogger(__name__)


def excerpt_parameters(name: str) -> dict[str, Any]:
    """Return the macro parameters of an excerpt named ``name``."""
    return {
        "macroParams": {
            "name": {"value": name},
            "atlassian-macro-output-type": {"value": "INLINE"},
        },
        "macroMetadata": {
            "macroId": {"value": EXCERPT_MACRO_ID},
            "schemaVersion": {"value": "1"},
            "title": "Excerpt",
        },
    }


def properties_parameters(key: str) -> dict[str, Any]:
    """Return the macro parameters of a page-properties block with id ``key``."""
    return {
        "macroParams": {
            "id": {"value": key},
        },
        "macroMetadata": {
            "macroId": {"value": PROPERTIES_MACRO_ID},
            "schemaVersion": {"value": "1"},
            "title": "Page Properties",
        },
    }


def as_excerpt_node(body: list[Node], name: str) -> Node:
    """Wrap ``body`` in an excerpt macro."""
    return b.bodied_extension("excerpt", excerpt_parameters(name), body)


def as_properties_node(body: list[Node], key: str) -> Node:
    """Wrap ``body`` in a page-properties (``details``) macro."""
    return b.bodied_extension("details", properties_parameters(key), body)


def callout_as_toc() -> Node:
    """Return a table-of-contents macro."""
    return b.extension(
        "toc",
        {
            "macroParams": {"style": {"value": "default"}},
            "macroMetadata": {"title": "Table of Contents"},
        },
    )


def _take_section_name(content: list[Node]) -> Optional[str]:
    """Pop a ``name<hardBreak>`` prefix off the first paragraph of ``content``.

    Returns the name, or None when the panel does not open with one. A
    paragraph left empty by the removal is dropped.

    """
    first = content[0] if content else None
    if first is None or first.type != "paragraph" or not first.content:
        return None

    inline = first.content
    if len(inline) < 2 or inline[0].type != "text" or inline[1].type != "hardBreak":
        return None

    name = (inline[0].text or "").strip()
    del inline[:2]
    if not inline:
        del content[0]
    return name or None


def callout_as_excerpt(
    node: Node,
    frontmatter: Mapping[str, Any],
    render: RenderMarkdown,
    active_sections: Optional[set[str]] = None,
) -> Node:
    """Convert an ``excerpt`` callout panel into an excerpt macro.

    Parameters
    ----------
    node : Node
        The panel node
    frontmatter : Mapping[str, Any]
        Document frontmatter
    render : RenderMarkdown
        Markdown rendering callable used by the frontmatter table
    active_sections : set of str, optional
        Frontmatter keys already being rendered; see
        :func:`~md2adf.transforms.frontmatter_table.include_frontmatter_table`

    Returns
    -------
    Node
        Replacement ``bodiedExtension`` node

    """
    body = list(node.content or [])
    name = _take_section_name(body) or DEFAULT_EXCERPT_NAME
    include_frontmatter_table(frontmatter, name, body, render, active_sections)
    return as_excerpt_node(body, name)


def callout_as_properties(
    node: Node,
    frontmatter: Mapping[str, Any],
    render: RenderMarkdown,
    active_sections: Optional[set[str]] = None,
) -> Node:
    """Convert a ``properties`` callout panel into a page-properties macro.

    The macro id is the frontmatter key the table was looked up with, which
    is the slugged name when the exact name is not a frontmatter key.

    """
    body = list(node.content or [])
    name = _take_section_name(body) or DEFAULT_PROPERTIES_NAME
    key = include_frontmatter_table(frontmatter, name, body, render, active_sections)
    return as_properties_node(body, key)


def _heading_level(node: Node) -> Optional[int]:
    level = (node.attrs or {}).get("level")
    if isinstance(level, int) and 1 <= level <= MAX_HEADING_LEVEL:
        return level
    return None


def _marker_match(node: Node) -> Optional[re.Match[str]]:
    if node.type != "paragraph" or not node.content or len(node.content) != 1:
        return None
    child = node.content[0]
    if child.type != "text" or not child.text:
        return None
    return SPECIAL_SECTION_PATTERN.fullmatch(child.text.strip())


def convert_special_blocks(
    doc: Node,
    frontmatter: Mapping[str, Any],
    render: RenderMarkdown,
    active_sections: Optional[set[str]] = None,
) -> Node:
    """Replace marker paragraphs with excerpt / properties macros in place.

    Scans the top-level children of ``doc`` tracking the index of the last
    heading at each level and of the last heading overall. A marker at
    index ``i`` takes the range from one past the relevant heading up to
    ``i`` as the macro body; the marker itself is replaced by the macro.

    Parameters
    ----------
    doc : Node
        Document root
    frontmatter : Mapping[str, Any]
        Document frontmatter
    render : RenderMarkdown
        Markdown rendering callable used by the frontmatter table
    active_sections : set of str, optional
        Frontmatter keys already being rendered; see
        :func:`~md2adf.transforms.frontmatter_table.include_frontmatter_table`

    Returns
    -------
    Node
        The same document

    """
    content = doc.content
    if not content:
        return doc

    heading_indices = [-1] * (MAX_HEADING_LEVEL + 1)
    last_heading = -1

    i = 0
    while i < len(content):
        child = content[i]
        if child.type == "heading":
            level = _heading_level(child)
            if level is not None:
                heading_indices[level] = i
                last_heading = i

        match = _marker_match(child)
        if match is not None:
            kind, level_digit, explicit_name = match.groups()
            if level_digit is None:
                start = last_heading + 1
            else:
                marker_level = int(level_digit)
                in_range = 1 <= marker_level <= MAX_HEADING_LEVEL
                start = heading_indices[marker_level] + 1 if in_range else 0

            body = content[start:i]
            del content[start:i]
            logger.debug(f"Extracted {len(body)} node(s) into ^{kind} section at index {start}")

            # Headings that moved into the body now live at ``start``
            heading_indices = [min(idx, start) for idx in heading_indices]
            last_heading = min(last_heading, start)

            if kind == "excerpt":
                name = explicit_name or DEFAULT_EXCERPT_NAME
                include_frontmatter_table(frontmatter, name, body, render, active_sections)
                content[start] = as_excerpt_node(body, name)
            else:
                name = explicit_name or DEFAULT_PROPERTIES_NAME
                include_frontmatter_table(frontmatter, name, body, render, active_sections)
                content[start] = as_properties_node(body, name)
            i = start
        i += 1

    return doc


__all__ = [
    "excerpt_parameters",
    "properties_parameters",
    "as_excerpt_node",
    "as_properties_node",
    "callout_as_toc",
    "callout_as_excerpt",
    "callout_as_properties",
    "convert_special_blocks",
]
