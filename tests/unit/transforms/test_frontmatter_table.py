#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the frontmatter table materializer."""
import logging

import pytest
from utils import grid_text, span

from md2adf.adf import builders as b
from md2adf.adf.nodes import Node
from md2adf.transforms.frontmatter_table import (
    entry_as_row,
    include_frontmatter_table,
    stringify_value,
    yaml_to_table,
)


@pytest.mark.unit
class TestStringifyValue:
    """Test conversion of frontmatter values to cell source."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (2.5, "2.5"),
            ("text", "text"),
            (["a", "b", 1], "a, b, 1"),
            ({"owner": "me", "done": True}, "owner: me, done: true"),
        ],
    )
    def test_values(self, value, expected) -> None:
        """Test each value type is written as expected."""
        assert stringify_value(value) == expected


@pytest.mark.unit
class TestEntryAsRow:
    """Test row construction for a single entry."""

    def test_new_keys_extend_headers(self, render) -> None:
        """Test unseen keys add header cells in order."""
        labels: list = []
        headers: list[Node] = []

        row = entry_as_row({"a": 1, "b": 2}, labels, headers, [], render)

        assert labels == ["a", "b"]
        assert [h.type for h in headers] == ["tableHeader", "tableHeader"]
        assert grid_text(b.table([row])) == [["1", "2"]]

    def test_back_fill_previous_rows(self, render) -> None:
        """Test a new column appends '<' to every earlier row."""
        labels = ["a"]
        headers = [b.table_header([b.p("a")])]
        earlier = b.table_row([b.table_cell([b.p("1")])])

        entry_as_row({"a": 2, "b": 3}, labels, headers, [earlier], render)

        assert grid_text(b.table([earlier])) == [["1", "<"]]

    def test_missing_value_merges_up(self, render) -> None:
        """Test a key absent from the entry yields a '^' cell."""
        row = entry_as_row({"a": 1}, ["a", "b"], [], [], render)

        assert grid_text(b.table([row])) == [["1", "^"]]

    def test_none_value_merges_up(self, render) -> None:
        """Test an explicit null is treated like a missing value."""
        row = entry_as_row({"a": None}, [], [], [], render)

        assert grid_text(b.table([row])) == [["^"]]

    def test_scalar_entry(self, render) -> None:
        """Test scalars are placed in a 'value' column."""
        labels: list = []
        row = entry_as_row("plain", labels, [], [], render)

        assert labels == ["value"]
        assert grid_text(b.table([row])) == [["plain"]]

    def test_empty_render_gives_empty_paragraph(self) -> None:
        """Test cells never end up without content."""
        row = entry_as_row({"a": ""}, [], [], [], lambda source: [])

        assert row.content[0].content == [b.paragraph()]


@pytest.mark.unit
class TestYamlToTable:
    """Test materializing whole values as tables."""

    def test_mapping(self, render) -> None:
        """Test a mapping becomes a header row and one data row."""
        table = yaml_to_table({"owner": "me", "tags": ["x", "y"]}, render)

        assert table.type == "table"
        assert grid_text(table) == [["owner", "tags"], ["me", "x, y"]]
        assert [c.type for c in table.content[0].content] == ["tableHeader", "tableHeader"]

    def test_scalar(self, render) -> None:
        """Test a scalar becomes a single 'value' column."""
        assert grid_text(yaml_to_table("hello", render)) == [["value"], ["hello"]]

    def test_new_column_back_fills_with_colspan(self, render) -> None:
        """Test a later key widens earlier rows by merging left."""
        table = yaml_to_table([{"a": 1}, {"a": 1, "b": 2}], render)

        assert grid_text(table) == [["a", "b"], ["1"], ["1", "2"]]
        assert span(table.content[1].content[0], "colspan") == 2

    def test_missing_key_merges_up(self, render) -> None:
        """Test a key missing from a later entry spans the cell above."""
        table = yaml_to_table([{"a": 1, "b": 2}, {"a": 3}], render)

        assert grid_text(table) == [["a", "b"], ["1", "2"], ["3"]]
        assert span(table.content[1].content[1], "rowspan") == 2

    def test_mixed_entries(self, render) -> None:
        """Test scalars and mappings share one table."""
        table = yaml_to_table(["x", {"name": "n"}], render)

        assert grid_text(table)[0] == ["value", "name"]

    def test_cells_rendered_through_callable(self) -> None:
        """Test labels and values are passed through the renderer."""
        seen: list[str] = []

        def render(source: str) -> list[Node]:
            seen.append(source)
            return [b.p(source.upper())]

        table = yaml_to_table({"k": "v"}, render)

        assert seen == ["k", "v"]
        assert grid_text(table) == [["K"], ["V"]]


@pytest.mark.unit
class TestIncludeFrontmatterTable:
    """Test looking up section data in the frontmatter."""

    def test_exact_key(self, render) -> None:
        """Test the key is used as-is when present."""
        content: list[Node] = []

        key = include_frontmatter_table({"Summary": {"a": 1}}, "Summary", content, render)

        assert key == "Summary"
        assert [n.type for n in content] == ["table"]

    def test_slug_fallback(self, render) -> None:
        """Test the lower-cased, dashed key is tried next."""
        content: list[Node] = [b.p("body")]

        key = include_frontmatter_table({"release-notes": ["x"]}, "Release Notes", content, render)

        assert key == "release-notes"
        assert [n.type for n in content] == ["paragraph", "table"]

    def test_absent_key(self, render) -> None:
        """Test nothing is appended when neither key exists."""
        content: list[Node] = []

        key = include_frontmatter_table({}, "My Section", content, render)

        assert key == "my-section"
        assert content == []

    def test_frontmatter_not_modified(self, render) -> None:
        """Test the frontmatter mapping is only read."""
        frontmatter = {"props": [{"a": 1}, {"b": 2}]}

        include_frontmatter_table(frontmatter, "props", [], render)

        assert frontmatter == {"props": [{"a": 1}, {"b": 2}]}

    def test_active_key_skipped(self, render, caplog: pytest.LogCaptureFixture) -> None:
        """Test a key already being rendered gets no nested table."""
        content: list[Node] = []

        with caplog.at_level(logging.WARNING, logger="md2adf"):
            key = include_frontmatter_table({"Summary": "x"}, "Summary", content, render, {"Summary"})

        assert key == "Summary"
        assert content == []
        assert "already being rendered" in caplog.text

    def test_active_key_released(self) -> None:
        """Test the key is active only while its own table is built."""
        active: set[str] = set()
        seen: list[set[str]] = []

        def render(source: str) -> list[Node]:
            seen.append(set(active))
            return [b.p(source)]

        include_frontmatter_table({"Summary": {"a": 1}}, "Summary", [], render, active)

        assert seen and all(keys == {"Summary"} for keys in seen)
        assert active == set()
