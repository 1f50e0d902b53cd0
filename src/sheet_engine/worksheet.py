"""
Sheet Engine Worksheet

Minimal in-memory worksheet: rows of cells, the column key table and the
Column objects, plus column condensation for export.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Union

from openpyxl.utils import column_index_from_string, get_column_letter

from sheet_engine.column import NO_DEFINITION, Column, DefinitionLike
from sheet_engine.models import ColumnDefinition, ColumnStyle, StyleSlot, WorksheetSettings
from sheet_engine.validation import (
    DuplicateKeyError,
    InvalidArgumentError,
    validate_column_number,
    validate_row_number,
)


logger = logging.getLogger(__name__)


@dataclass
class Cell:
    """A single worksheet cell: a value plus the column style attributes."""
    row_number: int
    column_number: int
    value: Any = None
    num_fmt: Optional[str] = None
    font: Optional[dict[str, Any]] = None
    alignment: Optional[dict[str, Any]] = None
    border: Optional[dict[str, Any]] = None
    fill: Optional[dict[str, Any]] = None

    @property
    def address(self) -> str:
        return f"{get_column_letter(self.column_number)}{self.row_number}"

    def style_attributes(self) -> dict[StyleSlot, Any]:
        """Style slots holding a value."""
        return {slot: getattr(self, slot.value) for slot in StyleSlot if getattr(self, slot.value)}


@dataclass(frozen=True)
class ColumnRange:
    """A run of consecutive columns sharing width and style."""
    min: int
    max: int
    width: Optional[float]
    style: ColumnStyle

    @property
    def letters(self) -> str:
        return f"{get_column_letter(self.min)}:{get_column_letter(self.max)}"


class Row:
    """A worksheet row holding cells by column number."""

    def __init__(self, worksheet: "Worksheet", number: int):
        self._worksheet = worksheet
        self.number = number
        self._cells: dict[int, Cell] = {}

    def __repr__(self) -> str:
        return f"Row(number={self.number}, cells={len(self._cells)})"

    def find_cell(self, column_number: int) -> Optional[Cell]:
        """Look up a cell without creating it."""
        return self._cells.get(column_number)

    def get_cell(self, column_number: int) -> Cell:
        """Get or create the cell at a column number."""
        cell = self._cells.get(column_number)
        if cell is None:
            validate_column_number(column_number)
            cell = Cell(row_number=self.number, column_number=column_number)
            column = self._worksheet.find_column(column_number)
            if column is not None:
                for slot, value in column.style.overrides().items():
                    setattr(cell, slot.value, value)
            self._cells[column_number] = cell
        return cell

    @property
    def cells(self) -> list[Cell]:
        return [self._cells[n] for n in sorted(self._cells)]

    @property
    def values(self) -> list[Any]:
        """Cell values indexed by column_number - 1, None for gaps."""
        if not self._cells:
            return []
        values: list[Any] = [None] * max(self._cells)
        for number, cell in self._cells.items():
            values[number - 1] = cell.value
        return values

    @property
    def has_values(self) -> bool:
        return any(cell.value is not None for cell in self._cells.values())


ColumnRef = Union[int, str]


class Worksheet:
    """
    In-memory worksheet.

    Owns its rows, its Column objects (one per column number) and the key
    table mapping column keys to columns.
    """

    def __init__(self, settings: Optional[WorksheetSettings] = None):
        self.settings = settings or WorksheetSettings()
        self._rows: dict[int, Row] = {}
        self._columns: dict[int, Column] = {}
        self.keys: dict[str, Column] = {}

    def __repr__(self) -> str:
        return f"Worksheet(name={self.name!r}, rows={self.row_count}, columns={self.column_count})"

    @property
    def name(self) -> str:
        return self.settings.name

    @property
    def default_column_width(self) -> float:
        return self.settings.default_column_width

    # ------------------------------------------------------------------
    # Rows and cells
    # ------------------------------------------------------------------

    def find_row(self, row_number: int) -> Optional[Row]:
        return self._rows.get(row_number)

    def get_row(self, row_number: int) -> Row:
        row = self._rows.get(row_number)
        if row is None:
            row = Row(self, validate_row_number(row_number))
            self._rows[row_number] = row
        return row

    def add_row(self, values: Union[Iterable[Any], Mapping[str, Any]]) -> Row:
        """
        Append a row below the last row.

        Values are either positional (one per column) or a mapping of column
        key to value.
        """
        if isinstance(values, Mapping):
            unknown = [key for key in values if key not in self.keys]
            if unknown:
                raise InvalidArgumentError(f"Unknown column keys: {unknown}")
            values = {self.keys[key].number: value for key, value in values.items()}
        else:
            values = {index + 1: value for index, value in enumerate(values)}

        row = self.get_row(self.row_count + 1)
        for column_number, value in values.items():
            if value is not None:
                row.get_cell(column_number).value = value
        return row

    def find_cell(self, row_number: int, column_number: int) -> Optional[Cell]:
        row = self._rows.get(row_number)
        return row.find_cell(column_number) if row is not None else None

    def get_cell(self, row_number: int, column_number: int) -> Cell:
        """Get or create the cell at 1-based coordinates."""
        return self.get_row(row_number).get_cell(column_number)

    @property
    def row_count(self) -> int:
        return max(self._rows, default=0)

    def iter_rows(self, include_empty: bool = False) -> Iterator[tuple[int, Row]]:
        """Yield (row_number, row) in row order; include_empty fills the gaps."""
        if include_empty:
            for row_number in range(1, self.row_count + 1):
                yield row_number, self.get_row(row_number)
        else:
            for row_number in sorted(self._rows):
                yield row_number, self._rows[row_number]

    def each_row(self, callback: Callable[[Row, int], Any], *, include_empty: bool = False) -> None:
        for row_number, row in self.iter_rows(include_empty=include_empty):
            callback(row, row_number)

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    @property
    def column_count(self) -> int:
        widest_row = max((max(row._cells, default=0) for row in self._rows.values()), default=0)
        return max(max(self._columns, default=0), widest_row)

    def find_column(self, number: int) -> Optional[Column]:
        return self._columns.get(number)

    def get_column(self, ref: ColumnRef) -> Column:
        """
        Get a column by number, letter or key.

        Keys take precedence over letters. Columns are created on first access
        by number or letter; a string that is neither raises
        InvalidArgumentError.
        """
        if isinstance(ref, str):
            if ref in self.keys:
                return self.keys[ref]
            try:
                number = column_index_from_string(ref.upper())
            except ValueError:
                raise InvalidArgumentError(f"Unknown column key or letter: {ref!r}")
        else:
            number = validate_column_number(ref)

        column = self._columns.get(number)
        if column is None:
            column = Column(self, number, NO_DEFINITION)
            self._columns[number] = column
        return column

    @property
    def columns(self) -> list[Column]:
        return [self._columns[n] for n in sorted(self._columns)]

    @columns.setter
    def columns(self, definitions: Iterable[DefinitionLike]) -> None:
        self.set_columns(definitions)

    def set_columns(self, definitions: Iterable[DefinitionLike]) -> list[Column]:
        """
        Replace every column with columns built from the given definitions.

        Definitions are validated, and checked for duplicate keys, before the
        existing columns are discarded.

        Raises:
            DuplicateKeyError: If two definitions share a key
        """
        definitions = [
            ColumnDefinition.model_validate(d) if isinstance(d, Mapping) and d else d or None
            for d in definitions
        ]
        owners: dict[str, int] = {}
        for index, definition in enumerate(definitions):
            key = definition.key if definition else None
            if key:
                if key in owners:
                    raise DuplicateKeyError(key, owners[key], index + 1)
                owners[key] = index + 1

        self._columns = {}
        self.keys = {}
        for index, definition in enumerate(definitions):
            column = Column(self, index + 1, NO_DEFINITION)
            self._columns[column.number] = column
            column.set_definition(definition)
        logger.debug("Worksheet %s: defined %d column(s)", self.name, len(self._columns))
        return self.columns

    @property
    def header_row_count(self) -> int:
        return max((column.header_count for column in self._columns.values()), default=0)

    def condensed_columns(self) -> list[ColumnRange]:
        """
        Collapse runs of adjacent, equivalent, non-default columns.

        Default columns are left out: they need no <col> entry on export.
        """
        ranges: list[ColumnRange] = []
        run: list[Column] = []

        def close_run() -> None:
            if run:
                first = run[0]
                ranges.append(ColumnRange(first.number, run[-1].number, first.width, first.style))
                run.clear()

        for column in self.columns:
            if column.is_default:
                close_run()
                continue
            if run and (column.number != run[-1].number + 1 or not column.equivalent_to(run[0])):
                close_run()
            run.append(column)
        close_run()
        return ranges

    def prune_default_columns(self) -> list[int]:
        """Discard default columns that hold no key and no header."""
        pruned = [
            number for number, column in self._columns.items()
            if column.is_default and not column.key and not column.headers
        ]
        for number in pruned:
            del self._columns[number]
        if pruned:
            logger.debug("Worksheet %s: pruned default columns %s", self.name, pruned)
        return sorted(pruned)
