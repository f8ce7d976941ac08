#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/parsers/frontmatter.py
"""YAML frontmatter extraction for markdown files."""

from __future__ import annotations

import logging
from typing import Any

import yaml

from md2adf.constants import FRONTMATTER_PATTERN

logger = logging.getLogger(__name__)


def strip_frontmatter(content: str) -> str:
    """Remove a leading ``---`` delimited block from ``content``."""
    return FRONTMATTER_PATTERN.sub("", content, count=1)


def split_frontmatter(content: str) -> tuple[str, dict[str, Any]]:
    """Split markdown text into its body and parsed YAML frontmatter.

    Parameters
    ----------
    content : str
        Markdown text that may start with a ``---`` delimited YAML block

    Returns
    -------
    tuple[str, dict]
        Body with the frontmatter removed, and the parsed mapping (empty when
        there is no block, the YAML is invalid, or it is not a mapping)

    Examples
    --------
    >>> body, meta = split_frontmatter("---\\ntitle: Hi\\n---\\n# Body")
    >>> meta
    {'title': 'Hi'}
    >>> body
    '# Body'

    """
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        return content, {}

    body = content[match.end() :]
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring invalid YAML frontmatter: {e}")
        return body, {}

    if data is None:
        return body, {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring frontmatter of type {type(data).__name__}; expected a mapping")
        return body, {}
    return body, data


__all__ = ["split_frontmatter", "strip_frontmatter"]
