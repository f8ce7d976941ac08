#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/plugins/jira_link.py
"""Turn ``JIRA:<ISSUE>`` inline code into Jira smart links."""

from __future__ import annotations

import logging

from md2adf.adf.nodes import Node, NodeParent
from md2adf.adf.traverse import traverse
from md2adf.constants import JIRA_LINK_PREFIX, JIRA_LINK_PREFIX_DASHED
from md2adf.plugins.base import AdfProcessingPlugin, PublisherFunctions

logger = logging.getLogger(__name__)


class JiraLinkPlugin(AdfProcessingPlugin[None, None]):
    """Rewrite `` `JIRA:ABC-123` `` code spans into ``inlineCard`` nodes.

    Parameters
    ----------
    jira_url : str
        Jira site root; cards point at ``{jira_url}/browse/<ISSUE>``

    """

    def __init__(self, jira_url: str):
        """Initialize the plugin with the Jira site root."""
        self.jira_url = jira_url.rstrip("/")

    def extract(self, adf: Node) -> None:
        return None

    async def transform(self, items: None, support_functions: PublisherFunctions) -> None:
        return None

    def load(self, adf: Node, transformed: None) -> Node:
        return traverse(adf, {"text": self._link_issue})

    def _link_issue(self, node: Node, parent: NodeParent) -> Node | None:
        text = node.text
        if not text or not text.startswith(JIRA_LINK_PREFIX):
            return None
        mark = node.first_mark
        if mark is None or mark.type != "code":
            return None

        prefix = JIRA_LINK_PREFIX_DASHED if text.startswith(JIRA_LINK_PREFIX_DASHED) else JIRA_LINK_PREFIX
        issue_id = text[len(prefix) :]
        logger.debug(f"Linking Jira issue {issue_id}")

        node.type = "inlineCard"
        node.attrs = {"url": f"{self.jira_url}/browse/{issue_id}"}
        node.marks = None
        node.text = None
        return node


__all__ = ["JiraLinkPlugin"]
