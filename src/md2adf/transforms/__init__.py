#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/transforms/__init__.py
"""Tree rewrites applied to encoded ADF documents.

- tables: ``"^"`` / ``"<"`` span merging
- sections: excerpt, page-properties and table-of-contents macros
- frontmatter_table: frontmatter values rendered as tables
- handlers: per-node-type rewrite rules
- pipeline: the synchronous processing pass tying them together

"""

from md2adf.transforms.frontmatter_table import RenderMarkdown, include_frontmatter_table, yaml_to_table
from md2adf.transforms.handlers import AdfNodeHandlers, HandlerContext
from md2adf.transforms.pipeline import process_adf
from md2adf.transforms.sections import convert_special_blocks
from md2adf.transforms.tables import merge_cells

__all__ = [
    "RenderMarkdown",
    "include_frontmatter_table",
    "yaml_to_table",
    "AdfNodeHandlers",
    "HandlerContext",
    "process_adf",
    "convert_special_blocks",
    "merge_cells",
]
