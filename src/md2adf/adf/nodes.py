#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/adf/nodes.py
"""Node and mark classes for Atlassian Document Format trees.

ADF is an open vocabulary: the node ``type`` is a plain string tag rather
than a class, so a single :class:`Node` dataclass models every node kind
("doc", "paragraph", "text", "table", "bodiedExtension", ...). Inline
decorations are modelled by :class:`Mark`.

A node carries either ``text`` (leaf text runs) or ``content`` (ordered
children). Trees are strictly trees: a node is owned by exactly one parent,
which keeps the splice and slice operations of the transforms well defined.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


@dataclass
class Mark:
    """Inline decoration applied to a text node.

    Parameters
    ----------
    type : str
        Mark tag, e.g. ``"strong"``, ``"em"``, ``"code"``, ``"link"``
    attrs : dict or None, default = None
        Mark attributes (``{"href": ...}`` for links)

    """

    type: str
    attrs: Optional[dict[str, Any]] = None


@dataclass
class Node:
    """A node of an ADF document tree.

    Parameters
    ----------
    type : str
        Node tag from the open ADF vocabulary
    attrs : dict or None, default = None
        Node attributes; values are primitives, strings or numeric arrays
    content : list of Node or None, default = None
        Ordered children; ``None`` for leaf nodes
    marks : list of Mark or None, default = None
        Inline decorations; only the first mark drives the rewrite rules
    text : str or None, default = None
        Leaf text payload for ``"text"`` nodes

    """

    type: str
    attrs: Optional[dict[str, Any]] = None
    content: Optional[list[Node]] = None
    marks: Optional[list[Mark]] = None
    text: Optional[str] = None

    @property
    def first_mark(self) -> Optional[Mark]:
        """Return the first mark, or None when the node is unmarked."""
        if self.marks:
            return self.marks[0]
        return None

    def first_child(self) -> Optional[Node]:
        """Return the first child node, if any."""
        if self.content:
            return self.content[0]
        return None

    def ensure_attrs(self) -> dict[str, Any]:
        """Return the attribute map, creating an empty one if missing."""
        if self.attrs is None:
            self.attrs = {}
        return self.attrs

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants in document order."""
        yield self
        for child in self.content or []:
            yield from child.walk()


@dataclass
class NodeParent:
    """Link in the ancestor chain handed to traversal handlers.

    ``parent.node`` is the immediate parent of the visited node and
    ``parent.parent.node`` its grandparent. The root's chain is an empty
    link (``node`` is None).

    """

    node: Optional[Node] = None
    parent: Optional[NodeParent] = field(default=None, repr=False)

    @property
    def grandparent(self) -> Optional[Node]:
        """Return the node two levels up, or None at the top of the tree."""
        if self.parent is None:
            return None
        return self.parent.node


def get_text(node: Optional[Node]) -> str:
    """Concatenate the text of every text run below ``node``."""
    if node is None:
        return ""
    return "".join(n.text for n in node.walk() if n.text is not None)


__all__ = ["Mark", "Node", "NodeParent", "get_text"]
