"""
Unit Tests for Worksheet

Rows, cells, column lookup and column condensation.
"""
import pytest

from sheet_engine.models import ColumnStyle, WorksheetSettings
from sheet_engine.validation import DuplicateKeyError, InvalidArgumentError
from sheet_engine.worksheet import Worksheet


@pytest.fixture
def ws():
    return Worksheet(WorksheetSettings(name="Data"))


class TestCells:
    """Tests for cell and row access."""

    def test_get_cell_creates(self, ws):
        cell = ws.get_cell(3, 2)
        assert cell.address == "B3"
        assert ws.get_cell(3, 2) is cell
        assert ws.row_count == 3

    def test_find_cell_does_not_create(self, ws):
        assert ws.find_cell(1, 1) is None
        assert ws.row_count == 0

    @pytest.mark.parametrize("row, col", [(0, 1), (1, 0), (-2, 3)])
    def test_invalid_coordinates(self, ws, row, col):
        with pytest.raises(InvalidArgumentError):
            ws.get_cell(row, col)

    def test_add_row_positional(self, ws):
        ws.get_cell(1, 1).value = "Header"
        row = ws.add_row([1, None, "x"])
        assert row.number == 2
        assert row.values == [1, None, "x"]
        assert row.find_cell(2) is None

    def test_add_row_by_key(self, ws):
        ws.columns = [{"key": "id"}, {"key": "name"}]
        row = ws.add_row({"name": "Ada", "id": 7})
        assert row.values == [7, "Ada"]

    def test_add_row_unknown_key(self, ws):
        ws.columns = [{"key": "id"}]
        with pytest.raises(InvalidArgumentError):
            ws.add_row({"missing": 1})

    def test_each_row_skips_gaps(self, ws):
        ws.get_cell(1, 1)
        ws.get_cell(4, 1)
        seen = []
        ws.each_row(lambda row, n: seen.append(n))
        assert seen == [1, 4]

    def test_each_row_include_empty(self, ws):
        ws.get_cell(3, 1)
        seen = []
        ws.each_row(lambda row, n: seen.append(n), include_empty=True)
        assert seen == [1, 2, 3]

    def test_cell_style_attributes(self, ws):
        cell = ws.get_cell(1, 1)
        cell.font = {"bold": True}
        assert list(cell.style_attributes().values()) == [{"bold": True}]


class TestColumns:
    """Tests for column lookup and definition."""

    def test_one_column_per_number(self, ws):
        assert ws.get_column(4) is ws.get_column(4)
        assert ws.get_column("D") is ws.get_column(4)
        assert ws.get_column("d") is ws.get_column(4)

    def test_lookup_by_key(self, ws):
        ws.columns = [{"key": "id"}, {"key": "amount"}]
        assert ws.get_column("amount").number == 2

    def test_unknown_reference(self, ws):
        with pytest.raises(InvalidArgumentError):
            ws.get_column("not-a-key")

    def test_set_columns_replaces_columns_and_keys(self, ws):
        ws.columns = [{"key": "a"}, {"key": "b"}]
        old = ws.get_column(1)
        ws.columns = [{"key": "c", "header": "C"}]
        assert ws.keys == {"c": ws.get_column(1)}
        assert ws.get_column(1) is not old
        assert [c.number for c in ws.columns] == [1]
        assert ws.get_cell(1, 1).value == "C"

    def test_set_columns_duplicate_keys(self, ws):
        with pytest.raises(DuplicateKeyError):
            ws.columns = [{"key": "a"}, {"key": "a"}]

    def test_failed_set_columns_keeps_existing_columns(self, ws):
        ws.columns = [{"key": "a", "header": "A"}]
        existing = ws.get_column(1)
        with pytest.raises(DuplicateKeyError):
            ws.set_columns([{"key": "x"}, {"key": "x"}])
        assert ws.keys == {"a": existing}
        assert ws.columns == [existing]
        assert ws.get_column("a") is existing
        assert ws.get_column(1) is existing

    def test_invalid_definition_keeps_existing_columns(self, ws):
        from pydantic import ValidationError

        ws.columns = [{"key": "a"}]
        existing = ws.get_column(1)
        with pytest.raises(ValidationError):
            ws.set_columns([{"key": "b"}, {"width": "wide"}])
        assert ws.keys == {"a": existing}
        assert ws.columns == [existing]

    def test_header_cells_pick_up_definition_style(self, ws):
        ws.columns = [{"header": "Amount", "style": {"numFmt": "0.00"}}]
        assert ws.get_cell(1, 1).num_fmt == "0.00"

    def test_header_row_count(self, ws):
        ws.columns = [{"header": "A"}, {"header": ["B1", "B2", "B3"]}]
        assert ws.header_row_count == 3

    def test_column_count(self, ws):
        ws.get_cell(1, 5)
        ws.get_column(2)
        assert ws.column_count == 5


class TestCondensedColumns:
    """Tests for collapsing columns into export ranges."""

    def test_equivalent_neighbours_merge(self, ws):
        ws.columns = [
            {"width": 12},
            {"width": 12},
            {},
            {"width": 12},
            {"width": 20, "style": {"font": {"bold": True}}},
        ]
        ranges = ws.condensed_columns()
        assert [(r.min, r.max, r.width) for r in ranges] == [(1, 2, 12), (4, 4, 12), (5, 5, 20)]
        assert ranges[0].letters == "A:B"
        assert ranges[2].style.font == {"bold": True}

    def test_style_difference_splits_run(self, ws):
        ws.columns = [
            {"width": 10, "style": {"numFmt": "0"}},
            {"width": 10, "style": {"numFmt": "0.00"}},
        ]
        assert len(ws.condensed_columns()) == 2

    def test_all_default(self, ws):
        ws.columns = [{}, {"width": 8}, {"header": "x"}]
        assert ws.condensed_columns() == []

    def test_prune_default_columns(self, ws):
        ws.columns = [{}, {"key": "k"}, {"header": "H"}, {"width": 30}]
        ws.get_column(9)
        assert ws.prune_default_columns() == [1, 9]
        assert [c.number for c in ws.columns] == [2, 3, 4]
        assert ws.keys["k"].number == 2

    def test_range_style_is_column_style(self, ws):
        ws.columns = [{"width": 11, "style": {"fill": {"pattern": "solid"}}}]
        (col_range,) = ws.condensed_columns()
        assert col_range.style == ColumnStyle(fill={"pattern": "solid"})
