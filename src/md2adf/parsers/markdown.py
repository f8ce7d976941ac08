#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/parsers/markdown.py
"""Markdown to ADF encoder.

This module encodes markdown into a raw ADF ``doc`` tree using the mistune
parser. The raw tree is what the processing pass in
:mod:`md2adf.transforms.pipeline` expects: tables use ``"^"`` / ``"<"``
cells verbatim, checkbox list items keep their ``[ ]`` prefix, and block
quotes opening with ``[!kind]`` become ``panel`` nodes.

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import mistune

from md2adf.adf import builders as b
from md2adf.adf.nodes import Mark, Node
from md2adf.constants import (
    CALLOUT_PANEL_TYPES,
    CALLOUT_PATTERN,
    DEFAULT_MISTUNE_PLUGINS,
    DEFAULT_PANEL_TYPE,
    MARK_ORDER,
)

logger = logging.getLogger(__name__)


def _mark_rank(mark: Mark) -> int:
    try:
        return MARK_ORDER.index(mark.type)
    except ValueError:
        return len(MARK_ORDER)


class MarkdownToAdfEncoder:
    r"""Encode markdown into a raw ADF document.

    Parameters
    ----------
    plugins : sequence of str or None, default = None
        mistune plugin names; defaults to strikethrough, tables and bare URL
        autolinks

    Examples
    --------
        >>> encoder = MarkdownToAdfEncoder()
        >>> doc = encoder.encode("# Hello\\n\\nThis is **bold**.")
        >>> doc.content[0].type
        'heading'

    """

    def __init__(self, plugins: Optional[Sequence[str]] = None):
        """Initialize the encoder and its mistune parser."""
        self.plugins = list(plugins if plugins is not None else DEFAULT_MISTUNE_PLUGINS)
        # renderer=None yields the token list instead of HTML
        self._markdown = mistune.create_markdown(plugins=self.plugins, renderer=None)

    def encode(self, markdown: str) -> Node:
        """Encode markdown text into a ``doc`` node.

        Parameters
        ----------
        markdown : str
            Markdown source without frontmatter

        Returns
        -------
        Node
            Raw ADF document

        """
        tokens, _state = self._markdown.parse(markdown)
        children = self._process_tokens(tokens) if isinstance(tokens, list) else []
        logger.debug(f"Encoded markdown into {len(children)} top-level node(s)")
        return b.doc(children)

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            result = self._process_token(token)
            if result is None:
                continue
            if isinstance(result, list):
                nodes.extend(result)
            else:
                nodes.append(result)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single block-level mistune token."""
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return self._process_block_quote(token)
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return b.rule()
        elif token_type == "block_html":
            raw = token.get("raw", "").strip()
            return b.p(raw) if raw else None

        return None

    def _process_heading(self, token: dict[str, Any]) -> Node:
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1
        return b.heading(level, *self._process_inline_tokens(token.get("children", [])))

    def _process_paragraph(self, token: dict[str, Any]) -> Node | list[Node]:
        """Process a paragraph; paragraphs holding only images become media blocks."""
        children = token.get("children", [])
        images = [child for child in children if child.get("type") == "image"]
        others = [
            child
            for child in children
            if child.get("type") != "image"
            and child.get("type") not in ("softbreak", "linebreak")
            and not (child.get("type") == "text" and not child.get("raw", "").strip())
        ]
        if images and not others:
            return [self._image_block(image) for image in images]

        return b.paragraph(*self._process_inline_tokens(children))

    def _image_block(self, token: dict[str, Any]) -> Node:
        attrs = token.get("attrs", {})
        url = attrs.get("url", "") if isinstance(attrs, dict) else ""
        return b.media_single(url, alt=self._alt_text(token) or None)

    @staticmethod
    def _alt_text(token: dict[str, Any]) -> str:
        parts = []
        for child in token.get("children", []):
            if isinstance(child, dict) and child.get("type") == "text":
                parts.append(child.get("raw", ""))
        return "".join(parts)

    def _process_code_block(self, token: dict[str, Any]) -> Node:
        """Process a code block token.

        The whole info string is kept as the language so that tokens such as
        ``yaml table`` survive.

        """
        code = token.get("raw", "")
        if code.endswith("\n"):
            code = code[:-1]
        attrs = token.get("attrs", {})
        info = attrs.get("info") if isinstance(attrs, dict) else None
        language = info.strip() if isinstance(info, str) else None
        return b.code_block(code, language or None)

    def _process_block_quote(self, token: dict[str, Any]) -> Node:
        content = self._process_tokens(token.get("children", []))
        panel = self._as_callout(content)
        if panel is not None:
            return panel
        return Node(type="blockquote", content=content)

    def _as_callout(self, content: list[Node]) -> Optional[Node]:
        """Turn ``[!kind] Title`` block quote content into a panel, if it opens that way."""
        first = content[0] if content else None
        if first is None or first.type != "paragraph" or not first.content:
            return None
        lead = first.content[0]
        if lead.type != "text" or not lead.text:
            return None
        match = CALLOUT_PATTERN.match(lead.text)
        if match is None:
            return None

        kind = match.group("kind").lower()
        panel_type = CALLOUT_PANEL_TYPES.get(kind, DEFAULT_PANEL_TYPE)
        title, _sep, rest = lead.text[match.end() :].partition("\n")
        title = title.strip()

        inline: list[Node] = []
        if title:
            inline.append(b.text(title, lead.marks))
            inline.append(b.hard_break())
        if rest:
            inline.append(b.text(rest, lead.marks))
        inline.extend(first.content[1:])

        body = list(content[1:])
        if inline:
            body.insert(0, b.paragraph(*inline))
        logger.debug(f"Encoded '{kind}' callout as '{panel_type}' panel")
        return Node(type="panel", attrs={"panelType": panel_type}, content=body)

    def _process_list(self, token: dict[str, Any]) -> Node:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        children = token.get("children", [])
        if not isinstance(children, list):
            children = []
        items = [self._process_list_item(child) for child in children if isinstance(child, dict)]

        if attrs.get("ordered", False):
            start = attrs.get("start", 1)
            return Node(type="orderedList", attrs={"order": start if isinstance(start, int) else 1}, content=items)
        return Node(type="bulletList", content=items)

    def _process_list_item(self, token: dict[str, Any]) -> Node:
        content = self._process_tokens(token.get("children", []))
        if not content:
            content = [b.paragraph()]
        return Node(type="listItem", content=content)

    def _process_table(self, token: dict[str, Any]) -> Node:
        """Process a table token; the head row becomes ``tableHeader`` cells."""
        rows: list[Node] = []
        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                # Head cells are direct children of table_head
                cells = [self._table_cell(cell, header=True) for cell in section.get("children", [])]
                rows.append(b.table_row(cells))
            elif section_type == "table_body":
                for row_token in section.get("children", []):
                    cells = [self._table_cell(cell) for cell in row_token.get("children", [])]
                    rows.append(b.table_row(cells))
        return b.table(rows)

    def _table_cell(self, token: dict[str, Any], header: bool = False) -> Node:
        content = [b.paragraph(*self._process_inline_tokens(token.get("children", [])))]
        node = b.table_header(content) if header else b.table_cell(content)
        node.attrs = None
        return node

    def _process_inline_tokens(self, tokens: list[dict[str, Any]], marks: Sequence[Mark] = ()) -> list[Node]:
        """Process inline tokens into text runs carrying ``marks``."""
        nodes: list[Node] = []
        for token in tokens:
            nodes.extend(self._process_inline_token(token, marks))
        return self._merge_text_runs(nodes)

    def _process_inline_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "strikethrough": self._handle_strikethrough_token,
            "inline_html": self._handle_text_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token, marks)
        return []

    @staticmethod
    def _with_mark(marks: Sequence[Mark], mark: Mark) -> list[Mark]:
        if any(existing.type == mark.type for existing in marks):
            return list(marks)
        return sorted([*marks, mark], key=_mark_rank)

    @staticmethod
    def _text(value: str, marks: Sequence[Mark]) -> list[Node]:
        if not value:
            return []
        return [b.text(value, [Mark(type=m.type, attrs=dict(m.attrs) if m.attrs else None) for m in marks])]

    def _handle_text_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        return self._text(token.get("raw", ""), marks)

    def _handle_strong_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        return self._process_inline_tokens(token.get("children", []), self._with_mark(marks, Mark("strong")))

    def _handle_emphasis_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        return self._process_inline_tokens(token.get("children", []), self._with_mark(marks, Mark("em")))

    def _handle_strikethrough_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        return self._process_inline_tokens(token.get("children", []), self._with_mark(marks, Mark("strike")))

    def _handle_codespan_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        return self._text(token.get("raw", ""), self._with_mark(marks, Mark("code")))

    def _handle_link_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        link = b.link_mark(attrs.get("url", ""), attrs.get("title"))
        return self._process_inline_tokens(token.get("children", []), self._with_mark(marks, link))

    def _handle_image_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        """Inline images cannot sit in a paragraph; emit them as links."""
        attrs = token.get("attrs", {})
        url = attrs.get("url", "") if isinstance(attrs, dict) else ""
        label = self._alt_text(token) or url
        return self._text(label, self._with_mark(marks, b.link_mark(url)))

    def _handle_linebreak_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        return [b.hard_break()]

    def _handle_softbreak_token(self, token: dict[str, Any], marks: Sequence[Mark]) -> list[Node]:
        return self._text("\n", marks)

    @staticmethod
    def _merge_text_runs(nodes: list[Node]) -> list[Node]:
        merged: list[Node] = []
        for node in nodes:
            previous = merged[-1] if merged else None
            if (
                previous is not None
                and node.type == "text"
                and previous.type == "text"
                and previous.marks == node.marks
            ):
                previous.text = (previous.text or "") + (node.text or "")
                continue
            merged.append(node)
        return merged


def markdown_to_adf(markdown: str) -> Node:
    r"""Encode markdown into a raw ADF document.

    This is a convenience function that creates an encoder and encodes the
    markdown in one step. The result has not been through the processing
    pass.

    Examples
    --------
    >>> doc = markdown_to_adf("# Hello\\n\\nWorld")
    >>> len(doc.content)
    2

    """
    return MarkdownToAdfEncoder().encode(markdown)


__all__ = ["MarkdownToAdfEncoder", "markdown_to_adf"]
