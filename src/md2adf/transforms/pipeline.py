#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/transforms/pipeline.py
"""Synchronous processing pass over an encoded ADF document.

The pass runs in two steps, in order:

1. :func:`~md2adf.transforms.sections.convert_special_blocks` slices marker
   sections out of the top-level content
2. a pre-order traversal applies the :class:`AdfNodeHandlers` rules

The document is mutated in place. Any structural failure aborts the pass
with :class:`~md2adf.exceptions.TraversalError`.

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from md2adf.adf.nodes import Node
from md2adf.adf.traverse import traverse
from md2adf.exceptions import TraversalError
from md2adf.transforms.frontmatter_table import RenderMarkdown
from md2adf.transforms.handlers import AdfNodeHandlers, HandlerContext
from md2adf.transforms.sections import convert_special_blocks

logger = logging.getLogger(__name__)


def process_adf(
    adf: Node,
    frontmatter: Mapping[str, Any],
    confluence_base_url: Optional[str],
    render_markdown: RenderMarkdown,
    active_sections: Optional[set[str]] = None,
) -> Node:
    """Apply section extraction and the node rewrite rules to ``adf``.

    Parameters
    ----------
    adf : Node
        Encoded ``doc`` node
    frontmatter : Mapping[str, Any]
        Document frontmatter (read-only)
    confluence_base_url : str or None
        Site root used to recognize self-referencing page links
    render_markdown : RenderMarkdown
        Renders markdown snippets for frontmatter and ``yaml-table`` cells
    active_sections : set of str, optional
        Frontmatter keys whose tables are being rendered by an enclosing
        conversion; nested lookups of these keys are skipped

    Returns
    -------
    Node
        The processed document

    Raises
    ------
    TraversalError
        If the document root is malformed

    """
    if not isinstance(adf, Node) or not isinstance(adf.content, list):
        raise TraversalError("Cannot process document: root must be a node with a content list")

    if active_sections is None:
        active_sections = set()

    logger.debug(f"Processing ADF document with {len(adf.content)} top-level node(s)")
    convert_special_blocks(adf, frontmatter, render_markdown, active_sections)

    handlers = AdfNodeHandlers(HandlerContext(frontmatter, confluence_base_url, render_markdown, active_sections))
    return traverse(adf, handlers.as_mapping())


__all__ = ["process_adf"]
