#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/constants.py
"""Constants and lookup tables shared across the md2adf conversion pipeline.

This module centralizes the marker syntax, sentinel symbols, Confluence macro
identifiers and mapping tables used by the tree handlers, so that each
transform reads from one place.
"""

from __future__ import annotations

import re
from typing import Final

# =============================================================================
# Table span-merge sentinels
# =============================================================================

MERGE_UP_SENTINEL: Final = "^"
MERGE_LEFT_SENTINEL: Final = "<"

# =============================================================================
# Special sections (excerpt / page properties)
# =============================================================================

SPECIAL_SECTION_PATTERN: Final = re.compile(r"\^(excerpt|properties)(?:-(\d))?(?:-(.*))?")

DEFAULT_EXCERPT_NAME: Final = "Excerpt"
DEFAULT_PROPERTIES_NAME: Final = "Properties"

MAX_HEADING_LEVEL: Final = 6

CONFLUENCE_MACRO_EXTENSION_TYPE: Final = "com.atlassian.confluence.macro.core"
EXCERPT_MACRO_ID: Final = "f638cbb0-4cf8-403a-af66-7a5be22b744e"
PROPERTIES_MACRO_ID: Final = "fa274a790b8e7d05612ca1a9de859c8b1063d72d6a8f8dcd59b651715fe220b6"

# Panel types produced by callouts that are rewritten into macros
PANEL_TYPE_TOC: Final = "toc"
PANEL_TYPE_EXCERPT: Final = "excerpt"
PANEL_TYPE_PROPERTIES: Final = "properties"

# Column label used when a frontmatter entry is a scalar instead of a mapping
SCALAR_ENTRY_COLUMN: Final = "value"

# =============================================================================
# Inline rewrites
# =============================================================================

STATUS_BADGE_PATTERN: Final = re.compile(r"\[!!(\w+):(.+)]")

TASK_ITEM_PATTERN: Final = re.compile(r"^\[.?]\s*")
TASK_LIST_CANDIDATE_PATTERN: Final = re.compile(r"^\[.?].*")

# Ordered (pattern, glyph) pairs applied to list item text
CHECKBOX_GLYPHS: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"^\[[xX]\]"), "✅"),
    (re.compile(r"^\[[ ]\]"), "🔲"),
    (re.compile(r"^\[[*]\]"), "⭐️"),
)

TASK_STATE_TODO: Final = "TODO"
TASK_STATE_DONE: Final = "DONE"

JIRA_LINK_PREFIX: Final = "JIRA:"
JIRA_LINK_PREFIX_DASHED: Final = "JIRA:-"

DEFAULT_BADGE_COLOR: Final = "grey"

BADGE_COLORS: Final[dict[str, str]] = {
    "example": "purple",
    "hint": "purple",
    "important": "purple",
    "tip": "purple",
    "info": "blue",
    "note": "blue",
    "todo": "blue",
    "check": "green",
    "success": "green",
    "done": "green",
    "faq": "yellow",
    "help": "yellow",
    "question": "yellow",
    "attention": "yellow",
    "caution": "yellow",
    "warning": "yellow",
    "bug": "red",
    "danger": "red",
    "error": "red",
    "fail": "red",
    "failure": "red",
    "missing": "red",
}

# =============================================================================
# Links
# =============================================================================

PLACEHOLDER_HREF: Final = "#"

# Link targets resolved later by the publisher rather than treated as URLs
RESERVED_LINK_PREFIXES: Final = ("wikilinks:", "mention:")

SAFE_URL_SCHEMES: Final = frozenset(
    {
        "http",
        "https",
        "ftp",
        "ftps",
        "mailto",
        "tel",
        "sms",
        "skype",
        "callto",
        "facetime",
        "git",
        "irc",
        "irc6",
        "news",
        "nntp",
        "feed",
        "cvs",
        "svn",
        "mvn",
        "ssh",
        "itms",
        "notes",
        "smb",
        "sourcetree",
        "urn",
        "xmpp",
        "telnet",
        "vnc",
        "rdp",
        "whatsapp",
        "slack",
        "sip",
        "sips",
        "magnet",
        "scp",
        "sftp",
    }
)

RELATIVE_URL_PREFIXES: Final = ("#", "/", "./", "../", "?")

# Characters stripped before a URL scheme is inspected
DANGEROUS_NULL_LIKE_CHARS: Final = (
    "\x00",  # NULL
    "\ufeff",  # BOM/Zero Width No-Break Space
    "\u200b",  # Zero Width Space
    "\u200c",  # Zero Width Non-Joiner
    "\u200d",  # Zero Width Joiner
    "\u2060",  # Word Joiner
)

URL_SCHEME_PATTERN: Final = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")

CONFLUENCE_PAGE_URL_PATTERN: Final = re.compile(
    r"^(?P<page>/wiki/spaces/[^/]+/pages/\d+)"  # stable page path
    r"(?:/[^?#]*)?"  # title slug
    r"(?P<rest>[?#].*)?$"
)

# =============================================================================
# Code blocks
# =============================================================================

ADF_CODE_BLOCK_LANGUAGE: Final = "adf"
YAML_TABLE_LANGUAGE_PREFIXES: Final = ("yaml-table", "yaml table")

MARKDOWN_TO_CONFLUENCE_LANGUAGE_MAP: Final[dict[str, str]] = {
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "console": "bash",
    "c++": "cpp",
    "cc": "cpp",
    "hpp": "cpp",
    "c#": "csharp",
    "cs": "csharp",
    "f#": "fsharp",
    "fs": "fsharp",
    "golang": "go",
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "py3": "python",
    "rb": "ruby",
    "rs": "rust",
    "kt": "kotlin",
    "kts": "kotlin",
    "md": "markdown",
    "yml": "yaml",
    "ps1": "powershell",
    "pwsh": "powershell",
    "bat": "dos",
    "cmd": "dos",
    "tex": "latex",
    "objc": "objective-c",
    "objectivec": "objective-c",
    "vb": "vbnet",
    "proto": "protobuf",
    "dockerfile": "docker",
    "hs": "haskell",
    "ex": "elixir",
    "exs": "elixir",
    "erl": "erlang",
    "pl": "perl",
    "text": "plaintext",
    "txt": "plaintext",
    "plain": "plaintext",
}

# =============================================================================
# Callouts (block quotes opening with "[!kind]")
# =============================================================================

CALLOUT_PATTERN: Final = re.compile(r"^\[!(?P<kind>[\w-]+)\][+-]?[ \t]*")

DEFAULT_PANEL_TYPE: Final = "info"

CALLOUT_PANEL_TYPES: Final[dict[str, str]] = {
    "note": "note",
    "info": "info",
    "todo": "info",
    "abstract": "info",
    "summary": "info",
    "tldr": "info",
    "quote": "info",
    "cite": "info",
    "example": "note",
    "tip": "tip",
    "hint": "tip",
    "important": "tip",
    "success": "success",
    "check": "success",
    "done": "success",
    "question": "warning",
    "help": "warning",
    "faq": "warning",
    "warning": "warning",
    "caution": "warning",
    "attention": "warning",
    "failure": "error",
    "fail": "error",
    "missing": "error",
    "danger": "error",
    "error": "error",
    "bug": "error",
    PANEL_TYPE_TOC: PANEL_TYPE_TOC,
    PANEL_TYPE_EXCERPT: PANEL_TYPE_EXCERPT,
    PANEL_TYPE_PROPERTIES: PANEL_TYPE_PROPERTIES,
}

# =============================================================================
# Documents
# =============================================================================

ADF_DOC_VERSION: Final = 1

FRONTMATTER_PATTERN: Final = re.compile(r"^\s*?---\n([\s\S]*?)\n---\s*")

DEFAULT_FOLDER_TO_PUBLISH: Final = "Confluence Pages"

CONFIG_FILENAMES: Final = (".md2adf.toml", ".md2adf.yaml", ".md2adf.yml", ".md2adf.json", "pyproject.toml")

# =============================================================================
# Markdown encoding
# =============================================================================

DEFAULT_MISTUNE_PLUGINS: Final = ("strikethrough", "table", "url")

# Canonical ADF mark order; text runs list their marks in this order
MARK_ORDER: Final = ("link", "em", "strong", "strike", "code")
