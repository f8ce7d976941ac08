#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/__init__.py
"""md2adf - Convert markdown pages into Atlassian Document Format for Confluence.

Markdown (plus its YAML frontmatter) is encoded into an ADF tree and then
rewritten for Confluence:

- ``"^"`` / ``"<"`` table cells are merged into row and column spans
- ``[!excerpt]``, ``[!properties]`` and ``[!toc]`` callouts, and
  ``^excerpt`` / ``^properties`` marker paragraphs, become Confluence macros
- frontmatter values and ``yaml-table`` code blocks become tables
- checkbox lists become task lists, ``[!!kind:Label]`` code spans become
  status badges and self-titled links become smart cards
- extract/transform/load plugins upload local images and link Jira issues

Requirements
------------
- Python 3.10+
- mistune 3 and PyYAML

Examples
--------
    >>> from md2adf import parse_markdown_to_adf, adf_to_json
    >>> adf = parse_markdown_to_adf({}, "| a | b |\\n|---|---|\\n| 1 | < |")
    >>> print(adf_to_json(adf, indent=2))

"""

__version__ = "0.1.0"

from md2adf.adf import Mark, Node, NodeParent, adf_to_json, dict_to_node, json_to_adf, node_to_dict, traverse
from md2adf.converter import (
    LocalAdfFile,
    MarkdownFile,
    MarkdownToAdfConverter,
    convert_md_to_adf,
    load_markdown_file,
    parse_markdown_to_adf,
)
from md2adf.exceptions import (
    ConfigurationError,
    EmbeddedContentError,
    MalformedAdfError,
    Md2AdfError,
    PluginError,
    TraversalError,
    ValidationError,
)
from md2adf.options import ConfluenceOptions, load_options
from md2adf.plugins import (
    AdfProcessingPlugin,
    ImageUploaderPlugin,
    JiraLinkPlugin,
    PluginPipeline,
    PublisherFunctions,
    UploadedImageData,
    execute_adf_processing_pipeline,
)
from md2adf.transforms import process_adf

__all__ = [
    "__version__",
    # Tree model
    "Mark",
    "Node",
    "NodeParent",
    "adf_to_json",
    "dict_to_node",
    "json_to_adf",
    "node_to_dict",
    "traverse",
    # Conversion
    "LocalAdfFile",
    "MarkdownFile",
    "MarkdownToAdfConverter",
    "convert_md_to_adf",
    "load_markdown_file",
    "parse_markdown_to_adf",
    "process_adf",
    # Options
    "ConfluenceOptions",
    "load_options",
    # Plugins
    "AdfProcessingPlugin",
    "ImageUploaderPlugin",
    "JiraLinkPlugin",
    "PluginPipeline",
    "PublisherFunctions",
    "UploadedImageData",
    "execute_adf_processing_pipeline",
    # Exceptions
    "ConfigurationError",
    "EmbeddedContentError",
    "MalformedAdfError",
    "Md2AdfError",
    "PluginError",
    "TraversalError",
    "ValidationError",
]
