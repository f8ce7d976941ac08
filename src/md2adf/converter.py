#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/converter.py
"""Markdown to ADF conversion service.

:class:`MarkdownToAdfConverter` ties the pieces together: markdown is
encoded to a raw ADF tree, the processing pass rewrites it for Confluence
and, on request, the plugin pipeline resolves asynchronous side effects such
as image uploads. The converter holds no global state; every collaborator
is passed in or created per instance.

Examples
--------
Synchronous conversion of a string:

    >>> converter = MarkdownToAdfConverter(ConfluenceOptions(confluence_base_url="https://example.atlassian.net"))
    >>> adf = converter.parse("# Title\\n\\nSome *text*")

Converting a file and running the plugins:

    >>> adf_file = converter.convert_file(load_markdown_file("docs/page.md"))
    >>> adf = await converter.apply_plugins(adf_file.contents, publisher)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from md2adf.adf.nodes import Node, get_text
from md2adf.exceptions import Md2AdfError
from md2adf.options import ConfluenceOptions
from md2adf.parsers.frontmatter import split_frontmatter, strip_frontmatter
from md2adf.parsers.markdown import MarkdownToAdfEncoder
from md2adf.plugins.base import AdfProcessingPlugin, PublisherFunctions
from md2adf.plugins.jira_link import JiraLinkPlugin
from md2adf.plugins.pipeline import PluginPipeline
from md2adf.transforms.pipeline import process_adf

logger = logging.getLogger(__name__)


@dataclass
class MarkdownFile:
    """A markdown page read from the content tree.

    Parameters
    ----------
    folder_name : str
        Name of the folder containing the page
    absolute_file_path : str
        Absolute path of the markdown file
    file_name : str
        File name including extension
    contents : str
        Markdown text, possibly still carrying its frontmatter block
    page_title : str
        Title of the published page
    frontmatter : dict
        Parsed frontmatter mapping

    """

    folder_name: str
    absolute_file_path: str
    file_name: str
    contents: str
    page_title: str
    frontmatter: dict[str, Any] = field(default_factory=dict)


@dataclass
class LocalAdfFile:
    """A converted page: the :class:`MarkdownFile` fields with ADF contents."""

    folder_name: str
    absolute_file_path: str
    file_name: str
    contents: Node
    page_title: str
    frontmatter: dict[str, Any] = field(default_factory=dict)


def load_markdown_file(path: str | Path) -> MarkdownFile:
    """Read a markdown file and split off its frontmatter.

    The page title defaults to the file name without extension.

    Raises
    ------
    Md2AdfError
        If the file cannot be read

    """
    file_path = Path(path).resolve()
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise Md2AdfError(f"Could not read markdown file {file_path}: {e}", original_error=e) from e

    _, frontmatter = split_frontmatter(text)
    return MarkdownFile(
        folder_name=file_path.parent.name,
        absolute_file_path=str(file_path),
        file_name=file_path.name,
        contents=text,
        page_title=file_path.stem,
        frontmatter=frontmatter,
    )


def first_heading_text(adf: Node) -> Optional[str]:
    """Return the plain text of the first heading in ``adf``, if any."""
    for node in adf.walk():
        if node.type == "heading":
            title = get_text(node).strip()
            if title:
                return title
    return None


class MarkdownToAdfConverter:
    """Convert markdown documents into Confluence-ready ADF.

    Parameters
    ----------
    options : ConfluenceOptions, optional
        Publishing options; defaults to ``ConfluenceOptions()``
    encoder : MarkdownToAdfEncoder, optional
        Markdown encoder; a default mistune-backed encoder is created when
        omitted

    """

    def __init__(self, options: Optional[ConfluenceOptions] = None, encoder: Optional[MarkdownToAdfEncoder] = None):
        """Initialize the converter with options and an encoder."""
        self.options = options or ConfluenceOptions()
        self.encoder = encoder or MarkdownToAdfEncoder()

    @property
    def confluence_base_url(self) -> Optional[str]:
        return self.options.confluence_base_url or None

    def parse(
        self,
        markdown: str,
        frontmatter: Optional[Mapping[str, Any]] = None,
        active_sections: Optional[set[str]] = None,
    ) -> Node:
        """Encode ``markdown`` and run the processing pass over it.

        Parameters
        ----------
        markdown : str
            Markdown text without a frontmatter block
        frontmatter : Mapping[str, Any], optional
            Frontmatter consulted by ``excerpt``/``properties`` sections and
            ``yaml-table`` blocks
        active_sections : set of str, optional
            Frontmatter keys already being rendered by an enclosing
            conversion

        Returns
        -------
        Node
            Processed ``doc`` node

        """
        return self.process(self.encoder.encode(markdown), frontmatter, active_sections)

    def parse_fragment(
        self,
        markdown: str,
        frontmatter: Optional[Mapping[str, Any]] = None,
        active_sections: Optional[set[str]] = None,
    ) -> list[Node]:
        """Convert a markdown snippet and return the document's content list.

        Used for table cells rendered from frontmatter and YAML data.
        """
        return list(self.parse(markdown, frontmatter, active_sections).content or [])

    def process(
        self,
        adf: Node,
        frontmatter: Optional[Mapping[str, Any]] = None,
        active_sections: Optional[set[str]] = None,
    ) -> Node:
        """Run the processing pass over an already encoded document.

        Raises
        ------
        TraversalError
            If the document is malformed

        """
        meta: Mapping[str, Any] = frontmatter if frontmatter is not None else {}
        # Shared by every nested render so a section cannot render itself
        sections: set[str] = active_sections if active_sections is not None else set()

        def render(source: str) -> list[Node]:
            return self.parse_fragment(source, meta, sections)

        return process_adf(adf, meta, self.confluence_base_url, render, sections)

    def convert_file(self, file: MarkdownFile) -> LocalAdfFile:
        """Convert a :class:`MarkdownFile` into a :class:`LocalAdfFile`.

        The frontmatter block is stripped from ``file.contents`` before
        encoding. With ``first_heading_page_title`` enabled the page title is
        taken from the first heading of the converted page.
        """
        logger.debug(f"Converting {file.absolute_file_path}")
        markdown = strip_frontmatter(file.contents)
        adf = self.parse(markdown, file.frontmatter)

        page_title = file.page_title
        if self.options.first_heading_page_title:
            page_title = first_heading_text(adf) or page_title

        return LocalAdfFile(
            folder_name=file.folder_name,
            absolute_file_path=file.absolute_file_path,
            file_name=file.file_name,
            contents=adf,
            page_title=page_title,
            frontmatter=file.frontmatter,
        )

    def configured_plugins(self) -> list[AdfProcessingPlugin[Any, Any]]:
        """Plugins enabled by the options, run after the always-on set."""
        plugins: list[AdfProcessingPlugin[Any, Any]] = []
        if self.options.jira_url:
            plugins.append(JiraLinkPlugin(self.options.jira_url))
        return plugins

    async def apply_plugins(
        self,
        adf: Node,
        support_functions: PublisherFunctions,
        plugins: Optional[Sequence[AdfProcessingPlugin[Any, Any]]] = None,
    ) -> Node:
        """Run the always-on plugins followed by ``plugins``.

        Parameters
        ----------
        adf : Node
            Processed document
        support_functions : PublisherFunctions
            Upload capabilities supplied by the publisher
        plugins : sequence of AdfProcessingPlugin, optional
            Configured plugins; defaults to :meth:`configured_plugins`

        Raises
        ------
        PluginError
            If any plugin phase fails

        """
        configured = self.configured_plugins() if plugins is None else list(plugins)
        return await PluginPipeline(configured).run(adf, support_functions)


def parse_markdown_to_adf(
    frontmatter: Mapping[str, Any],
    markdown: str,
    confluence_base_url: Optional[str] = None,
) -> Node:
    """Convert markdown text to a processed ADF document."""
    options = ConfluenceOptions(confluence_base_url=confluence_base_url or "")
    return MarkdownToAdfConverter(options).parse(markdown, frontmatter)


def convert_md_to_adf(file: MarkdownFile, options: Optional[ConfluenceOptions] = None) -> LocalAdfFile:
    """Convert a markdown page with the given options."""
    return MarkdownToAdfConverter(options).convert_file(file)


__all__ = [
    "MarkdownFile",
    "LocalAdfFile",
    "load_markdown_file",
    "first_heading_text",
    "MarkdownToAdfConverter",
    "parse_markdown_to_adf",
    "convert_md_to_adf",
]
