#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/adf/serialization.py
"""JSON serialization and deserialization for ADF trees.

This module converts :class:`~md2adf.adf.nodes.Node` trees to and from the
plain ADF JSON shape accepted by the Confluence REST API. Keys whose value
is ``None`` are omitted from the output, and the document root carries the
ADF ``version`` field.

Examples
--------
Serialize a tree to JSON:

    >>> from md2adf.adf import builders as b
    >>> from md2adf.adf.serialization import adf_to_json
    >>> json_str = adf_to_json(b.doc([b.p("Hello")]))

Deserialize JSON back to nodes:

    >>> from md2adf.adf.serialization import json_to_adf
    >>> node = json_to_adf('{"type": "paragraph", "content": []}')
    >>> node.type
    'paragraph'

"""

from __future__ import annotations

import json
import logging
from typing import Any

from md2adf.adf.nodes import Mark, Node
from md2adf.constants import ADF_DOC_VERSION
from md2adf.exceptions import MalformedAdfError

logger = logging.getLogger(__name__)

_NODE_KEYS = frozenset({"type", "attrs", "content", "marks", "text", "version"})


def mark_to_dict(mark: Mark) -> dict[str, Any]:
    """Convert a mark to its JSON dictionary."""
    result: dict[str, Any] = {"type": mark.type}
    if mark.attrs is not None:
        result["attrs"] = mark.attrs
    return result


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node (and its subtree) to a plain ADF dictionary.

    Parameters
    ----------
    node : Node
        Root of the subtree to serialize

    Returns
    -------
    dict
        ADF JSON-compatible dictionary

    """
    result: dict[str, Any] = {"type": node.type}
    if node.attrs is not None:
        result["attrs"] = node.attrs
    if node.text is not None:
        result["text"] = node.text
    if node.marks is not None:
        result["marks"] = [mark_to_dict(m) for m in node.marks]
    if node.content is not None:
        result["content"] = [node_to_dict(child) for child in node.content]
    return result


def _dict_to_mark(data: Any, path: str) -> Mark:
    if not isinstance(data, dict):
        raise MalformedAdfError(f"Mark must be an object, got {type(data).__name__}", path=path)
    mark_type = data.get("type")
    if not isinstance(mark_type, str) or not mark_type:
        raise MalformedAdfError("Mark is missing a string 'type'", path=path)
    attrs = data.get("attrs")
    if attrs is not None and not isinstance(attrs, dict):
        raise MalformedAdfError("Mark 'attrs' must be an object", path=f"{path}.attrs")
    return Mark(type=mark_type, attrs=attrs)


def _dict_to_node(data: Any, path: str) -> Node:
    if not isinstance(data, dict):
        raise MalformedAdfError(f"Node must be an object, got {type(data).__name__}", path=path)

    node_type = data.get("type")
    if not isinstance(node_type, str) or not node_type:
        raise MalformedAdfError("Node is missing a string 'type'", path=path)

    unknown = set(data) - _NODE_KEYS
    if unknown:
        logger.debug(f"Ignoring unknown keys {sorted(unknown)} on '{node_type}' node at {path}")

    attrs = data.get("attrs")
    if attrs is not None and not isinstance(attrs, dict):
        raise MalformedAdfError("Node 'attrs' must be an object", path=f"{path}.attrs")

    text = data.get("text")
    if text is not None and not isinstance(text, str):
        raise MalformedAdfError("Node 'text' must be a string", path=f"{path}.text")

    marks = None
    raw_marks = data.get("marks")
    if raw_marks is not None:
        if not isinstance(raw_marks, list):
            raise MalformedAdfError("Node 'marks' must be an array", path=f"{path}.marks")
        marks = [_dict_to_mark(m, f"{path}.marks[{i}]") for i, m in enumerate(raw_marks)]

    content = None
    raw_content = data.get("content")
    if raw_content is not None:
        if not isinstance(raw_content, list):
            raise MalformedAdfError("Node 'content' must be an array", path=f"{path}.content")
        content = [_dict_to_node(child, f"{path}.content[{i}]") for i, child in enumerate(raw_content)]

    return Node(type=node_type, attrs=attrs, content=content, marks=marks, text=text)


def dict_to_node(data: Any) -> Node:
    """Convert a plain ADF dictionary back to a node tree.

    Parameters
    ----------
    data : dict
        ADF JSON-compatible dictionary

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    MalformedAdfError
        If the data does not describe a valid node tree

    """
    return _dict_to_node(data, "$")


def adf_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a tree to an ADF JSON string.

    A ``doc`` root is stamped with the ADF ``version`` field. Unicode is kept
    unescaped.

    Parameters
    ----------
    node : Node
        The tree to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string

    """
    node_dict = node_to_dict(node)
    if node.type == "doc":
        node_dict = {"version": ADF_DOC_VERSION, **node_dict}
    return json.dumps(node_dict, indent=indent, ensure_ascii=False)


def json_to_adf(json_str: str) -> Node:
    """Deserialize an ADF JSON string into a node tree.

    Raises
    ------
    MalformedAdfError
        If the string is not valid JSON or not a valid node tree

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise MalformedAdfError(f"Invalid ADF JSON: {e.msg}", path=f"line {e.lineno}", original_error=e) from e
    return dict_to_node(data)


__all__ = [
    "mark_to_dict",
    "node_to_dict",
    "dict_to_node",
    "adf_to_json",
    "json_to_adf",
]
