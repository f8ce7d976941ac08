#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/adf/__init__.py
"""Atlassian Document Format (ADF) tree model.

The module consists of several components:

- nodes: the ``Node`` / ``Mark`` records and the ancestor chain
- builders: factory helpers for common ADF nodes
- serialization: conversion to and from ADF JSON
- traverse: pre-order rewrite traversal with per-type handlers

Examples
--------
    >>> from md2adf.adf import builders as b, traverse
    >>> doc = b.doc([b.p("Hello")])
    >>> traverse(doc, {"text": lambda node, parent: None})

"""

from md2adf.adf.nodes import Mark, Node, NodeParent, get_text
from md2adf.adf.serialization import adf_to_json, dict_to_node, json_to_adf, node_to_dict
from md2adf.adf.traverse import REMOVE, NodeHandler, TreeTraverser, traverse

__all__ = [
    "Mark",
    "Node",
    "NodeParent",
    "get_text",
    "adf_to_json",
    "dict_to_node",
    "json_to_adf",
    "node_to_dict",
    "REMOVE",
    "NodeHandler",
    "TreeTraverser",
    "traverse",
]
