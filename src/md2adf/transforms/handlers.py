#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/transforms/handlers.py
"""Per-node-type rewrite rules applied during ADF processing.

:class:`AdfNodeHandlers` bundles one handler per ADF node type. Each handler
follows the :data:`~md2adf.adf.traverse.NodeHandler` contract and is bound to
a :class:`HandlerContext` carrying the document frontmatter, the Confluence
site URL and the markdown renderer used for embedded tables.

Rules
-----
- ``text``: checkbox glyphs in list items, ``[!!kind:Label]`` status badges
  in inline code, link sanitizing and self-links turned into smart cards
- ``table`` / ``tableHeader`` / ``tableCell``: span merging and span defaults
- ``orderedList``: numbering always starts at 1
- ``bulletList``: checkbox lists become task lists
- ``codeBlock``: language mapping and embedded ``adf`` / ``yaml-table``
  payloads
- ``panel``: ``toc`` / ``excerpt`` / ``properties`` callouts become macros

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import yaml

from md2adf.adf import builders as b
from md2adf.adf.nodes import Node, NodeParent
from md2adf.adf.serialization import json_to_adf
from md2adf.adf.traverse import NodeHandler
from md2adf.constants import (
    ADF_CODE_BLOCK_LANGUAGE,
    BADGE_COLORS,
    CHECKBOX_GLYPHS,
    DEFAULT_BADGE_COLOR,
    MARKDOWN_TO_CONFLUENCE_LANGUAGE_MAP,
    PANEL_TYPE_EXCERPT,
    PANEL_TYPE_PROPERTIES,
    PANEL_TYPE_TOC,
    PLACEHOLDER_HREF,
    RESERVED_LINK_PREFIXES,
    STATUS_BADGE_PATTERN,
    TASK_ITEM_PATTERN,
    TASK_LIST_CANDIDATE_PATTERN,
    TASK_STATE_DONE,
    TASK_STATE_TODO,
    YAML_TABLE_LANGUAGE_PREFIXES,
)
from md2adf.exceptions import EmbeddedContentError, MalformedAdfError
from md2adf.transforms.frontmatter_table import RenderMarkdown, yaml_to_table
from md2adf.transforms.sections import callout_as_excerpt, callout_as_properties, callout_as_toc
from md2adf.transforms.tables import merge_cells
from md2adf.utils.security import is_safe_url
from md2adf.utils.urls import clean_up_url_if_confluence

logger = logging.getLogger(__name__)


def get_badge_color(kind: str) -> str:
    """Map a status badge kind (``info``, ``bug``, ...) to a lozenge colour."""
    return BADGE_COLORS.get(kind, DEFAULT_BADGE_COLOR)


def is_task_list(items: Optional[list[Node]]) -> bool:
    """Check whether every item of a bullet list opens with a checkbox.

    Parameters
    ----------
    items : list of Node or None
        Children of a ``bulletList``

    Returns
    -------
    bool
        True when the list is non-empty and each item is a ``listItem`` whose
        first paragraph starts with ``[?]``

    """
    if not items:
        return False
    for item in items:
        if item.type != "listItem" or not item.content:
            return False
        paragraph = item.content[0]
        if paragraph.type != "paragraph" or not paragraph.content:
            return False
        first_text = paragraph.content[0].text
        if not first_text or not TASK_LIST_CANDIDATE_PATTERN.match(first_text):
            return False
    return True


def list_item_to_task_item(item: Node) -> Node:
    """Rewrite a checkbox ``listItem`` into a ``taskItem`` in place.

    ``[ ]`` and ``[]`` give state ``TODO``; any other checkbox gives
    ``DONE``. The checkbox and the whitespace after it are stripped and the
    item content becomes the inline runs of its first paragraph.

    """
    if not item.content or not item.content[0].content:
        return item
    paragraph = item.content[0]
    inline = list(paragraph.content or [])
    text_node = inline[0]
    text = text_node.text or ""

    match = TASK_ITEM_PATTERN.match(text)
    check = match.group(0)[1:2] if match else " "
    if match:
        text_node.text = text[match.end() :]
    if not text_node.text:
        inline.pop(0)

    if len(item.content) > 1:
        logger.warning(f"Dropping {len(item.content) - 1} nested block(s) from task list item")

    item.type = "taskItem"
    item.attrs = {"state": TASK_STATE_TODO if check in (" ", "]") else TASK_STATE_DONE}
    item.content = inline
    return item


def decode_adf_payload(payload: str) -> Node:
    """Parse the body of an ``adf`` code block into a node.

    Raises
    ------
    EmbeddedContentError
        If the payload is not valid ADF JSON

    """
    try:
        return json_to_adf(payload)
    except MalformedAdfError as e:
        raise EmbeddedContentError(f"Invalid ADF in code block: {e.message}", ADF_CODE_BLOCK_LANGUAGE, e) from e


def decode_yaml_table_payload(payload: str, language: str, render: RenderMarkdown) -> Node:
    """Parse the body of a ``yaml-table`` code block into a table node.

    Raises
    ------
    EmbeddedContentError
        If the payload is not valid YAML or is empty

    """
    try:
        data = yaml.safe_load(payload)
    except yaml.YAMLError as e:
        raise EmbeddedContentError(f"Invalid YAML in code block: {e}", language, e) from e
    if data is None:
        raise EmbeddedContentError("YAML table code block is empty", language)
    return yaml_to_table(data, render)


@dataclass
class HandlerContext:
    """Per-document inputs shared by the node handlers.

    Parameters
    ----------
    frontmatter : Mapping[str, Any]
        Document frontmatter (read-only)
    confluence_base_url : str or None
        Site root used to recognize self-referencing page links
    render_markdown : RenderMarkdown
        Renders a markdown snippet to block nodes (used for table cells)
    active_sections : set of str, optional
        Frontmatter keys whose tables are being rendered by an enclosing
        conversion

    """

    frontmatter: Mapping[str, Any]
    confluence_base_url: Optional[str]
    render_markdown: RenderMarkdown = field(repr=False)
    active_sections: Optional[set[str]] = field(default=None, repr=False)


class AdfNodeHandlers:
    """Node-type rewrite rules bound to one document's context.

    Parameters
    ----------
    context : HandlerContext
        Frontmatter, site URL and renderer for the document being processed

    Examples
    --------
    >>> handlers = AdfNodeHandlers(HandlerContext({}, None, render))
    >>> traverse(doc, handlers.as_mapping())

    """

    def __init__(self, context: HandlerContext):
        """Initialize the handlers with a document context."""
        self.context = context

    def as_mapping(self) -> dict[str, NodeHandler]:
        """Return the handlers keyed by the node type they apply to."""
        return {
            "text": self.text,
            "table": self.table,
            "tableHeader": self.table_cell,
            "tableCell": self.table_cell,
            "orderedList": self.ordered_list,
            "bulletList": self.bullet_list,
            "codeBlock": self.code_block,
            "panel": self.panel,
        }

    def text(self, node: Node, parent: NodeParent) -> Node:
        grandparent = parent.grandparent
        if grandparent is not None and grandparent.type == "listItem" and node.text:
            for pattern, glyph in CHECKBOX_GLYPHS:
                node.text = pattern.sub(glyph, node.text, count=1)

        mark = node.first_mark
        if mark is None:
            return node

        if mark.type == "code":
            match = STATUS_BADGE_PATTERN.search(node.text or "")
            if match is None:
                return node
            return b.status(match.group(2), get_badge_color(match.group(1)))

        if not mark.attrs or "href" not in mark.attrs:
            return node

        href = mark.attrs["href"]
        reserved = isinstance(href, str) and href.startswith(RESERVED_LINK_PREFIXES)
        if not isinstance(href, str) or href == "" or not (is_safe_url(href) or reserved):
            logger.debug(f"Replacing unsafe link target {href!r} with placeholder")
            mark.attrs["href"] = PLACEHOLDER_HREF

        if mark.attrs["href"] == node.text:
            node.type = "inlineCard"
            node.attrs = {"url": clean_up_url_if_confluence(mark.attrs["href"], self.context.confluence_base_url)}
            node.marks = None
            node.text = None

        return node

    def table(self, node: Node, parent: NodeParent) -> Node:
        if node.attrs and node.attrs.get("isNumberColumnEnabled") is False:
            del node.attrs["isNumberColumnEnabled"]
        merge_cells(node)
        return node

    def table_cell(self, node: Node, parent: NodeParent) -> Node:
        """Give header and body cells explicit spans (default 1)."""
        attrs = node.ensure_attrs()
        if not attrs.get("colspan"):
            attrs["colspan"] = 1
        if not attrs.get("rowspan"):
            attrs["rowspan"] = 1
        return node

    def ordered_list(self, node: Node, parent: NodeParent) -> Node:
        node.attrs = {"order": 1}
        return node

    def bullet_list(self, node: Node, parent: NodeParent) -> Node:
        if is_task_list(node.content):
            node.type = "taskList"
            node.attrs = {}
            for item in node.content or []:
                list_item_to_task_item(item)
        return node

    def code_block(self, node: Node, parent: NodeParent) -> Optional[Node]:
        """Map the language and expand embedded ``adf`` / ``yaml-table`` payloads.

        Malformed payloads are logged and the code block is kept as-is.

        """
        if node.attrs is None:
            return None

        if not node.attrs:
            node.attrs = None
            return node

        language = node.attrs.get("language")
        if not isinstance(language, str):
            return node

        if language in MARKDOWN_TO_CONFLUENCE_LANGUAGE_MAP:
            node.attrs["language"] = MARKDOWN_TO_CONFLUENCE_LANGUAGE_MAP[language]

        is_adf = language == ADF_CODE_BLOCK_LANGUAGE
        is_yaml_table = language.startswith(YAML_TABLE_LANGUAGE_PREFIXES)
        if not (is_adf or is_yaml_table):
            return node

        first = node.first_child()
        payload = first.text if first is not None else None
        if not payload:
            return node

        try:
            if is_adf:
                return decode_adf_payload(payload)
            table = decode_yaml_table_payload(payload, language, self.context.render_markdown)
            # Replacements are not revisited by the traversal
            return self.table(table, parent)
        except EmbeddedContentError as e:
            logger.warning(f"Keeping '{e.language}' code block unchanged: {e.message}")
            return node

    def panel(self, node: Node, parent: NodeParent) -> Node:
        if not node.attrs:
            return node
        panel_type = node.attrs.get("panelType")
        if panel_type == PANEL_TYPE_TOC:
            return callout_as_toc()

        ctx = self.context
        if panel_type == PANEL_TYPE_EXCERPT:
            return callout_as_excerpt(node, ctx.frontmatter, ctx.render_markdown, ctx.active_sections)
        if panel_type == PANEL_TYPE_PROPERTIES:
            return callout_as_properties(node, ctx.frontmatter, ctx.render_markdown, ctx.active_sections)
        return node


__all__ = [
    "HandlerContext",
    "AdfNodeHandlers",
    "get_badge_color",
    "is_task_list",
    "list_item_to_task_item",
    "decode_adf_payload",
    "decode_yaml_table_payload",
]
