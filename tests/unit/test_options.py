#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for publishing options and options file loading."""
import dataclasses
import json
import logging
import os
from pathlib import Path

import pytest

from md2adf.exceptions import ConfigurationError, ValidationError
from md2adf.options import ConfluenceOptions, find_options_file, load_options, load_options_mapping


@pytest.mark.unit
class TestConfluenceOptions:
    """Test the options dataclass."""

    def test_defaults(self) -> None:
        """Test default values."""
        options = ConfluenceOptions()

        assert options.confluence_base_url == ""
        assert options.folder_to_publish == "Confluence Pages"
        assert options.content_root == os.getcwd()
        assert options.first_heading_page_title is False
        assert options.jira_url == ""
        assert options.updatable_users == ()

    def test_frozen(self) -> None:
        """Test options cannot be mutated."""
        options = ConfluenceOptions()

        with pytest.raises(dataclasses.FrozenInstanceError):
            options.jira_url = "https://jira.example.com"  # type: ignore[misc]

    def test_create_updated(self) -> None:
        """Test create_updated returns a modified copy."""
        options = ConfluenceOptions(confluence_base_url="https://example.atlassian.net")

        updated = options.create_updated(first_heading_page_title=True)

        assert updated.first_heading_page_title is True
        assert updated.confluence_base_url == "https://example.atlassian.net"
        assert options.first_heading_page_title is False

    def test_create_updated_validates(self) -> None:
        """Test validation also runs on updated copies."""
        with pytest.raises(ValidationError):
            ConfluenceOptions().create_updated(jira_url="jira.example.com")

    @pytest.mark.parametrize("field_name", ["confluence_base_url", "jira_url"])
    def test_url_must_be_http(self, field_name) -> None:
        """Test site URLs must use http(s)."""
        with pytest.raises(ValidationError) as exc_info:
            ConfluenceOptions(**{field_name: "ftp://example.com"})

        assert exc_info.value.parameter_name == field_name

    def test_token_hidden_from_repr(self) -> None:
        """Test the API token never appears in repr."""
        options = ConfluenceOptions(atlassian_user_name="me", atlassian_api_token="s3cr3t")

        assert "s3cr3t" not in repr(options)
        assert "me" in repr(options)

    def test_users_normalized_to_tuple(self) -> None:
        """Test user lists are stored as tuples."""
        assert ConfluenceOptions(updatable_users=["a", "b"]).updatable_users == ("a", "b")  # type: ignore[arg-type]
        assert ConfluenceOptions(updatable_users="a").updatable_users == ("a",)  # type: ignore[arg-type]

    def test_fields_have_help(self) -> None:
        """Test every field documents itself."""
        assert all(f.metadata.get("help") for f in dataclasses.fields(ConfluenceOptions))


@pytest.mark.unit
class TestFromMapping:
    """Test building options from settings mappings."""

    def test_camel_case_keys(self) -> None:
        """Test settings-file spellings are accepted."""
        options = ConfluenceOptions.from_mapping(
            {
                "confluenceBaseUrl": "https://example.atlassian.net",
                "confluenceParentId": "42",
                "folderToPublish": "Docs",
                "firstHeadingPageTitle": True,
                "jiraUrl": "https://jira.example.com",
                "updateableUsers": ["alice"],
            }
        )

        assert options.confluence_base_url == "https://example.atlassian.net"
        assert options.confluence_parent_id == "42"
        assert options.folder_to_publish == "Docs"
        assert options.first_heading_page_title is True
        assert options.jira_url == "https://jira.example.com"
        assert options.updatable_users == ("alice",)

    def test_snake_case_keys(self) -> None:
        """Test field names are accepted."""
        options = ConfluenceOptions.from_mapping({"content_root": "/docs", "updatable_users": ["bob"]})

        assert options.content_root == "/docs"
        assert options.updatable_users == ("bob",)

    def test_unknown_keys_warned(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test unknown keys are skipped with a warning."""
        with caplog.at_level(logging.WARNING, logger="md2adf"):
            options = ConfluenceOptions.from_mapping({"mystery": 1})

        assert options == ConfluenceOptions(content_root=options.content_root)
        assert "Ignoring unknown option: mystery" in caplog.text


@pytest.mark.unit
class TestLoadOptions:
    """Test loading options files."""

    def test_toml(self, tmp_path: Path) -> None:
        """Test TOML files."""
        path = tmp_path / ".md2adf.toml"
        path.write_text('confluenceBaseUrl = "https://example.atlassian.net"\nfirst_heading_page_title = true\n')

        options = load_options(path)

        assert options.confluence_base_url == "https://example.atlassian.net"
        assert options.first_heading_page_title is True

    def test_yaml(self, tmp_path: Path) -> None:
        """Test YAML files."""
        path = tmp_path / "settings.yaml"
        path.write_text("jiraUrl: https://jira.example.com\nupdatableUsers:\n  - alice\n")

        options = load_options(path)

        assert options.jira_url == "https://jira.example.com"
        assert options.updatable_users == ("alice",)

    def test_json(self, tmp_path: Path) -> None:
        """Test JSON files."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"folderToPublish": "Pages"}))

        assert load_options(path).folder_to_publish == "Pages"

    def test_pyproject(self, tmp_path: Path) -> None:
        """Test the [tool.md2adf] table of pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.md2adf]\nconfluence_parent_id = "7"\n')

        assert load_options(path).confluence_parent_id == "7"

    def test_pyproject_without_section(self, tmp_path: Path) -> None:
        """Test a pyproject.toml without the table gives defaults."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')

        assert load_options_mapping(path) == {}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """Test an empty YAML file gives an empty mapping."""
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert load_options_mapping(path) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="does not exist") as exc_info:
            load_options(tmp_path / "nope.toml")

        assert exc_info.value.config_path.endswith("nope.toml")

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        """Test unknown formats are rejected."""
        path = tmp_path / "settings.ini"
        path.write_text("[x]\n")

        with pytest.raises(ConfigurationError, match="Unsupported"):
            load_options(path)

    @pytest.mark.parametrize(
        "name,content",
        [("bad.toml", "key = "), ("bad.json", "{"), ("bad.yaml", "key: [unclosed")],
    )
    def test_malformed(self, tmp_path: Path, name: str, content: str) -> None:
        """Test parse errors are wrapped in ConfigurationError."""
        path = tmp_path / name
        path.write_text(content)

        with pytest.raises(ConfigurationError) as exc_info:
            load_options(path)

        assert exc_info.value.original_error is not None

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Test a top-level list is rejected."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_options(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Test invalid option values become configuration errors."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"jiraUrl": "not a url"}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_options(path)

        assert isinstance(exc_info.value.original_error, ValidationError)


@pytest.mark.unit
class TestFindOptionsFile:
    """Test searching parent directories for options files."""

    def test_found_in_parent(self, tmp_path: Path) -> None:
        """Test the search walks up from the start directory."""
        (tmp_path / ".md2adf.yaml").write_text("jiraUrl: https://jira.example.com\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_options_file(nested) == (tmp_path / ".md2adf.yaml").resolve()

    def test_dedicated_file_preferred(self, tmp_path: Path) -> None:
        """Test .md2adf.toml wins over pyproject.toml in the same directory."""
        (tmp_path / "pyproject.toml").write_text('[tool.md2adf]\njiraUrl = "https://jira.example.com"\n')
        (tmp_path / ".md2adf.toml").write_text("")

        assert find_options_file(tmp_path) == (tmp_path / ".md2adf.toml").resolve()

    def test_pyproject_needs_section(self, tmp_path: Path) -> None:
        """Test a pyproject.toml without [tool.md2adf] is skipped."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        project = tmp_path / "project"
        project.mkdir()
        (project / "pyproject.toml").write_text('[tool.md2adf]\nfolderToPublish = "Docs"\n')

        assert find_options_file(project) == (project / "pyproject.toml").resolve()
        assert find_options_file(tmp_path) != (tmp_path / "pyproject.toml").resolve()
