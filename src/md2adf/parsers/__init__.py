#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/parsers/__init__.py
"""Markdown and frontmatter parsers producing raw ADF input."""

from md2adf.parsers.frontmatter import split_frontmatter, strip_frontmatter
from md2adf.parsers.markdown import MarkdownToAdfEncoder, markdown_to_adf

__all__ = ["MarkdownToAdfEncoder", "markdown_to_adf", "split_frontmatter", "strip_frontmatter"]
