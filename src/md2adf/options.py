#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/options.py
"""Publishing options for the markdown to ADF converter.

:class:`ConfluenceOptions` is an immutable settings object. It can be built
directly, from a mapping using either the snake_case field names or the
camelCase keys of the publisher settings file, or loaded from a TOML, YAML,
JSON or ``pyproject.toml`` (``[tool.md2adf]``) file with :func:`load_options`.

Examples
--------
    >>> options = ConfluenceOptions(confluence_base_url="https://example.atlassian.net")
    >>> options = options.create_updated(jira_url="https://jira.example.com")

"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
    from typing import Self
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
    from typing_extensions import Self

import yaml

from md2adf.constants import CONFIG_FILENAMES, DEFAULT_FOLDER_TO_PUBLISH
from md2adf.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

_PYPROJECT_SECTION = "md2adf"

# Settings-file spellings accepted by from_mapping
_CAMEL_CASE_KEYS: dict[str, str] = {
    "confluenceBaseUrl": "confluence_base_url",
    "confluenceParentId": "confluence_parent_id",
    "atlassianUserName": "atlassian_user_name",
    "atlassianApiToken": "atlassian_api_token",
    "folderToPublish": "folder_to_publish",
    "contentRoot": "content_root",
    "firstHeadingPageTitle": "first_heading_page_title",
    "jiraUrl": "jira_url",
    "updatableUsers": "updatable_users",
    "updateableUsers": "updatable_users",
}


class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)  # type: ignore[type-var]


def _is_http_url(value: str) -> bool:
    lowered = value.lower()
    return lowered.startswith("http://") or lowered.startswith("https://")


@dataclass(frozen=True)
class ConfluenceOptions(CloneFrozenMixin):
    """Settings used when converting and publishing markdown pages.

    Parameters
    ----------
    confluence_base_url : str, default ""
        Confluence site root, e.g. ``https://example.atlassian.net``
    confluence_parent_id : str, default ""
        Page id under which converted pages are published
    atlassian_user_name : str, default ""
        Account used by the publisher
    atlassian_api_token : str, default ""
        API token for ``atlassian_user_name``; never shown in ``repr``
    folder_to_publish : str, default "Confluence Pages"
        Folder (relative to ``content_root``) holding the pages to publish
    content_root : str, default current working directory
        Root of the markdown content tree
    first_heading_page_title : bool, default False
        Use the text of the first heading as the page title
    jira_url : str, default ""
        Jira site root; enables the Jira link plugin when set
    updatable_users : tuple of str, default ()
        Users whose edits to published pages may be overwritten

    Raises
    ------
    ValidationError
        If ``confluence_base_url`` or ``jira_url`` is set to a non-http(s) URL

    """

    confluence_base_url: str = field(
        default="",
        metadata={"help": "Confluence site root URL"},
    )
    confluence_parent_id: str = field(
        default="",
        metadata={"help": "Parent page id for published pages"},
    )
    atlassian_user_name: str = field(
        default="",
        metadata={"help": "Atlassian account user name"},
    )
    atlassian_api_token: str = field(
        default="",
        repr=False,
        metadata={"help": "Atlassian API token"},
    )
    folder_to_publish: str = field(
        default=DEFAULT_FOLDER_TO_PUBLISH,
        metadata={"help": "Folder of markdown pages to publish"},
    )
    content_root: str = field(
        default_factory=os.getcwd,
        metadata={"help": "Root directory of the markdown content"},
    )
    first_heading_page_title: bool = field(
        default=False,
        metadata={"help": "Use the first heading as the page title"},
    )
    jira_url: str = field(
        default="",
        metadata={"help": "Jira site root URL for JIRA:<ISSUE> links"},
    )
    updatable_users: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Users whose page edits may be overwritten"},
    )

    def __post_init__(self) -> None:
        """Validate URL options and normalize the user list."""
        for name in ("confluence_base_url", "jira_url"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValidationError(f"{name} must be a string", parameter_name=name, parameter_value=value)
            if value and not _is_http_url(value):
                raise ValidationError(
                    f"{name} must be an http(s) URL, got {value!r}", parameter_name=name, parameter_value=value
                )

        if isinstance(self.updatable_users, str):
            object.__setattr__(self, "updatable_users", (self.updatable_users,))
        elif not isinstance(self.updatable_users, tuple):
            object.__setattr__(self, "updatable_users", tuple(self.updatable_users))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConfluenceOptions":
        """Build options from a settings mapping.

        Keys may be the dataclass field names or the camelCase settings keys
        (``confluenceBaseUrl``, ``jiraUrl``, ...). Unknown keys are skipped
        with a warning.

        Parameters
        ----------
        data : Mapping[str, Any]
            Settings mapping

        Returns
        -------
        ConfluenceOptions
            Options built from ``data``

        """
        field_names = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in field_names:
                logger.warning(f"Ignoring unknown option: {key}")
                continue
            kwargs[name] = value
        return cls(**kwargs)


def _load_pyproject_section(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get(_PYPROJECT_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"[tool.{_PYPROJECT_SECTION}] section in {path} must be a table, got {type(section).__name__}",
            config_path=str(path),
        )
    return section


def load_options_mapping(path: Path | str) -> dict[str, Any]:
    """Read a settings mapping from a configuration file.

    The format is chosen from the file name: ``pyproject.toml`` (the
    ``[tool.md2adf]`` table), ``.toml``, ``.yaml``/``.yml`` or ``.json``.

    Parameters
    ----------
    path : Path or str
        Configuration file

    Returns
    -------
    dict
        Settings mapping; empty for an empty file or missing pyproject table

    Raises
    ------
    ConfigurationError
        If the file is missing, unreadable, malformed or has an unsupported
        extension

    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    ext = config_path.suffix.lower()
    try:
        if config_path.name.lower() == "pyproject.toml":
            return _load_pyproject_section(config_path)
        elif ext == ".toml":
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", config_path=str(config_path)
            )
    except ConfigurationError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        # tomllib.TOMLDecodeError and json.JSONDecodeError are ValueErrors
        raise ConfigurationError(
            f"Error reading config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration in {config_path} must be a mapping, got {type(data).__name__}",
            config_path=str(config_path),
        )
    return data


def load_options(path: Path | str) -> ConfluenceOptions:
    """Load :class:`ConfluenceOptions` from a configuration file.

    Raises
    ------
    ConfigurationError
        If the file cannot be read or its values are invalid

    """
    mapping = load_options_mapping(path)
    try:
        options = ConfluenceOptions.from_mapping(mapping)
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"Invalid options in {path}: {e}", config_path=str(path), original_error=e) from e
    logger.debug(f"Loaded options from {path}")
    return options


def find_options_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Search ``start_dir`` and its parents for a configuration file.

    Each directory is checked for ``.md2adf.toml``, ``.md2adf.yaml``,
    ``.md2adf.yml``, ``.md2adf.json`` and finally a ``pyproject.toml`` with a
    ``[tool.md2adf]`` table. The first match wins.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from; defaults to the current working directory

    Returns
    -------
    Path or None
        The configuration file found, if any

    """
    current = (start_dir or Path.cwd()).resolve()
    while True:
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml":
                return candidate
            try:
                if _load_pyproject_section(candidate):
                    return candidate
            except (OSError, ValueError, ConfigurationError) as e:
                logger.debug(f"Skipping unreadable {candidate}: {e}")

        parent = current.parent
        if parent == current:
            return None
        current = parent


__all__ = [
    "CloneFrozenMixin",
    "ConfluenceOptions",
    "load_options_mapping",
    "load_options",
    "find_options_file",
]
