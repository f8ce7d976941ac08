#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/adf/traverse.py
"""Depth-first rewrite traversal over ADF trees.

Handlers are registered per node ``type`` tag. Each handler receives the
visited node and its :class:`~md2adf.adf.nodes.NodeParent` ancestor chain
and returns one of:

- ``None``: no-op, the original node is kept
- a :class:`~md2adf.adf.nodes.Node`: substituted at the same position (the
  same object may be returned after in-place mutation); its children are
  visited next
- :data:`REMOVE`: the node is deleted from its parent

Nodes whose type has no registered handler are left alone.

Examples
--------
Upper-case every text run:

    >>> def shout(node, parent):
    ...     node.text = node.text.upper()
    ...     return node
    >>> traverse(doc, {"text": shout})

"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional, Union

from md2adf.adf.nodes import Node, NodeParent
from md2adf.exceptions import TraversalError

logger = logging.getLogger(__name__)


class _RemoveNode:
    """Sentinel type returned by handlers to delete the visited node."""

    _instance: Optional[_RemoveNode] = None

    def __new__(cls) -> _RemoveNode:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REMOVE"


REMOVE = _RemoveNode()

HandlerResult = Union[Node, _RemoveNode, None]
NodeHandler = Callable[[Node, NodeParent], HandlerResult]


class TreeTraverser:
    """Pre-order visitor applying per-type handlers to a tree.

    Parameters
    ----------
    handlers : Mapping[str, NodeHandler]
        Handler functions keyed by node type tag

    """

    def __init__(self, handlers: Mapping[str, NodeHandler]):
        """Initialize the traverser with a handler mapping."""
        self.handlers = handlers

    def traverse(self, root: Node) -> Node:
        """Visit every node below (and including) ``root``.

        Parameters
        ----------
        root : Node
            Document root; must carry a content list

        Returns
        -------
        Node
            The (possibly replaced) root

        Raises
        ------
        TraversalError
            If the root is malformed or a handler removes it

        """
        self._validate_root(root)
        result = self._visit(root, NodeParent())
        if isinstance(result, _RemoveNode):
            raise TraversalError(f"Handler for '{root.type}' removed the document root")
        self._validate_root(result)
        return result

    @staticmethod
    def _validate_root(root: object) -> None:
        if not isinstance(root, Node):
            raise TraversalError(f"Cannot traverse {type(root).__name__}: root must be a Node")
        if not isinstance(root.content, list):
            raise TraversalError(f"Cannot traverse '{root.type}' root: missing content list")

    def _apply_handler(self, node: Node, parent: NodeParent) -> HandlerResult:
        handler = self.handlers.get(node.type)
        if handler is None:
            return node

        try:
            result = handler(node, parent)
        except Exception as e:
            logger.error(f"Handler for '{node.type}' failed: {e}", exc_info=True)
            raise

        if result is None:
            return node
        if isinstance(result, (Node, _RemoveNode)):
            return result

        logger.error(
            f"Handler for node type '{node.type}' returned invalid type {type(result).__name__}; "
            f"keeping the original node"
        )
        return node

    def _visit(self, node: Node, parent: NodeParent) -> HandlerResult:
        result = self._apply_handler(node, parent)
        if not isinstance(result, Node):
            return result

        node = result
        if not node.content:
            return node

        chain = NodeParent(node=node, parent=parent)
        index = 0
        # The list is re-read each step; handlers may have restructured it
        while index < len(node.content):
            child = node.content[index]
            if not isinstance(child, Node):
                index += 1
                continue
            visited = self._visit(child, chain)
            if isinstance(visited, _RemoveNode):
                del node.content[index]
                continue
            if visited is not child:
                node.content[index] = visited
            index += 1

        return node


def traverse(root: Node, handlers: Mapping[str, NodeHandler]) -> Node:
    """Apply ``handlers`` to ``root`` in document order and return the root.

    See :class:`TreeTraverser` for the handler contract.

    """
    return TreeTraverser(handlers).traverse(root)


__all__ = ["REMOVE", "HandlerResult", "NodeHandler", "TreeTraverser", "traverse"]
