#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for table span merging."""
import copy

import pytest
from utils import cell, grid_text, span, table_from_grid

from md2adf.adf import builders as b
from md2adf.adf.serialization import node_to_dict
from md2adf.transforms.tables import has_content_string, increment_attr, merge_cells


@pytest.mark.unit
class TestHasContentString:
    """Test sentinel detection in cells."""

    def test_paragraph_wrapped(self) -> None:
        """Test text inside the cell's paragraph is matched."""
        assert has_content_string(cell("^"), "^")
        assert not has_content_string(cell("^ "), "^")

    def test_bare_text(self) -> None:
        """Test a cell holding a text run directly is matched."""
        assert has_content_string(b.table_cell([b.text("<")]), "<")

    def test_empty_cell(self) -> None:
        """Test empty cells and empty paragraphs never match."""
        assert not has_content_string(b.table_cell([]), "^")
        assert not has_content_string(b.table_cell([b.paragraph()]), "^")


@pytest.mark.unit
class TestMergeCells:
    """Test resolving merge sentinels."""

    def test_merge_up_sets_rowspan(self) -> None:
        """Test '^' extends the cell above to two rows."""
        table = table_from_grid([["A", "B"], ["^", "C"]])

        merge_cells(table)

        assert grid_text(table) == [["A", "B"], ["C"]]
        assert span(table.content[0].content[0], "rowspan") == 2

    def test_merge_left_sets_colspan(self) -> None:
        """Test '<' extends the cell to the left to two columns."""
        table = table_from_grid([["A", "<"], ["B", "C"]])

        merge_cells(table)

        assert grid_text(table) == [["A"], ["B", "C"]]
        assert span(table.content[0].content[0], "colspan") == 2

    def test_chained_merge_up(self) -> None:
        """Test stacked '^' cells accumulate into a three-row span."""
        table = table_from_grid([["A", "B"], ["^", "C"], ["^", "D"]])

        merge_cells(table)

        assert grid_text(table) == [["A", "B"], ["C"], ["D"]]
        assert span(table.content[0].content[0], "rowspan") == 3

    def test_chained_merge_left(self) -> None:
        """Test consecutive '<' cells accumulate into a three-column span."""
        table = table_from_grid([["A", "<", "<"]])

        merge_cells(table)

        assert grid_text(table) == [["A"]]
        assert span(table.content[0].content[0], "colspan") == 3

    def test_block_merge(self) -> None:
        """Test '<' and '^' together produce a two-by-two cell."""
        table = table_from_grid([["A", "<", "B"], ["^", "<", "C"]])

        merge_cells(table)

        top_left = table.content[0].content[0]
        assert grid_text(table) == [["A", "B"], ["C"]]
        assert span(top_left, "colspan") == 2
        assert span(top_left, "rowspan") == 2

    def test_target_located_by_colspan_walk(self) -> None:
        """Test existing colspans are honored when locating the target column."""
        table = b.table(
            [
                b.table_row([cell("A", colspan=2), cell("B")]),
                b.table_row([cell("C"), cell("D"), cell("^")]),
            ]
        )

        merge_cells(table)

        assert span(table.content[0].content[1], "rowspan") == 2
        assert span(table.content[0].content[0], "rowspan") is None

    def test_existing_span_is_incremented(self) -> None:
        """Test a target that already has a span grows by the source amount."""
        table = b.table([b.table_row([cell("A", rowspan=2)]), b.table_row([cell("^")])])

        merge_cells(table)

        assert span(table.content[0].content[0], "rowspan") == 3

    def test_source_span_counts_towards_target(self) -> None:
        """Test a target without the attribute gets one plus the source span."""
        table = b.table([b.table_row([cell("A")]), b.table_row([cell("^", rowspan=3)])])

        merge_cells(table)

        assert span(table.content[0].content[0], "rowspan") == 4

    def test_walked_cells_get_attrs(self) -> None:
        """Test every cell walked over ends up with an attribute map."""
        table = b.table(
            [
                b.table_row([b.table_cell([b.p("A")], None), b.table_cell([b.p("B")], None)]),
                b.table_row([cell("C"), cell("^")]),
            ]
        )
        table.content[0].content[0].attrs = None
        table.content[0].content[1].attrs = None

        merge_cells(table)

        assert table.content[0].content[0].attrs == {}
        assert table.content[0].content[1].attrs == {"rowspan": 2}

    def test_merge_up_in_first_row_is_dropped(self) -> None:
        """Test a '^' without a row above is removed without merging."""
        table = table_from_grid([["^", "A"]])

        merge_cells(table)

        assert grid_text(table) == [["A"]]
        assert span(table.content[0].content[0], "rowspan") is None

    def test_merge_left_in_first_column_is_dropped(self) -> None:
        """Test a '<' without a cell to its left is removed without merging."""
        table = table_from_grid([["<", "A"]])

        merge_cells(table)

        assert grid_text(table) == [["A"]]
        assert span(table.content[0].content[0], "colspan") is None

    def test_merge_up_past_short_row(self) -> None:
        """Test a '^' beyond the end of the row above is dropped."""
        table = table_from_grid([["A"], ["B", "^"]])

        merge_cells(table)

        assert grid_text(table) == [["A"], ["B"]]
        assert table.content[0].content[0].attrs == {}

    def test_header_cells_merge(self) -> None:
        """Test header cells are merged like body cells."""
        table = table_from_grid([["H", "<"], ["A", "B"]], header=True)

        merge_cells(table)

        assert table.content[0].content[0].type == "tableHeader"
        assert span(table.content[0].content[0], "colspan") == 2

    def test_no_sentinels_is_noop(self) -> None:
        """Test tables without sentinels are left untouched."""
        table = table_from_grid([["A", "B"], ["C", "D"]])
        before = copy.deepcopy(table)

        merge_cells(table)

        assert table == before

    def test_idempotent(self) -> None:
        """Test merging an already merged table changes nothing."""
        table = table_from_grid([["A", "<", "B"], ["^", "<", "C"], ["D", "E", "^"]])
        merge_cells(table)
        once = node_to_dict(table)

        merge_cells(table)

        assert node_to_dict(table) == once

    def test_empty_table(self) -> None:
        """Test tables without rows or with empty rows are accepted."""
        table = b.table([b.table_row([])])

        merge_cells(table)
        merge_cells(b.table())

        assert table.content[0].content == []


@pytest.mark.unit
class TestIncrementAttr:
    """Test the span increment primitive directly."""

    def test_out_of_range_row(self) -> None:
        """Test row indexes outside the table are ignored."""
        table = table_from_grid([["A"]])

        increment_attr(table, 5, 0, cell("^"), "rowspan")
        increment_attr(table, -1, 0, cell("^"), "rowspan")

        assert span(table.content[0].content[0], "rowspan") is None

    def test_column_past_row_end(self) -> None:
        """Test a column beyond the row's cells changes no span."""
        table = table_from_grid([["A", "B"]])

        increment_attr(table, 0, 4, cell("<"), "colspan")

        assert all(span(c, "colspan") is None for c in table.content[0].content)
