"""
Sheet Engine Column

Column-level metadata for one column of a worksheet: header rows, key,
width and style. Header and style changes are pushed to the worksheet cells
as soon as they are made; the worksheet condenses columns when it is exported.
"""
from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional, Union

from openpyxl.utils import get_column_letter

from sheet_engine.models import ColumnDefinition, ColumnStyle, StyleSlot
from sheet_engine.validation import (
    DuplicateKeyError,
    validate_column_number,
    validate_style_slot,
)

if TYPE_CHECKING:
    from sheet_engine.worksheet import Cell, Worksheet


logger = logging.getLogger(__name__)


class _NoDefinition:
    def __repr__(self) -> str:
        return "NO_DEFINITION"


# Pass as the definition to build a column whose fields are populated afterwards
NO_DEFINITION = _NoDefinition()

CellIteratee = Callable[["Cell", int], Any]
DefinitionLike = Union[ColumnDefinition, Mapping, None]


def _style_property(slot: StyleSlot) -> property:
    def getter(self: "Column") -> Any:
        return self.style.get(slot)

    def setter(self: "Column", value: Any) -> None:
        self.apply_style(slot, value)

    return property(getter, setter, doc=f"Column {slot.value}, applied to every existing cell when set.")


class Column:
    """
    Metadata for a single worksheet column.

    Owned by a Worksheet, which creates exactly one Column per column number.
    The column keeps a back-reference to the worksheet and writes through it:
    headers go to rows 1..N of the column, keys go to the worksheet key table,
    and style attributes go to every cell already present in the column.
    """

    def __init__(
        self,
        worksheet: "Worksheet",
        number: int,
        definition: Union[DefinitionLike, _NoDefinition] = None,
    ):
        """
        Initialize a column.

        Args:
            worksheet: Owning worksheet
            number: 1-based column number
            definition: Column definition to apply, or NO_DEFINITION to skip
                initialization
        """
        self._worksheet = worksheet
        self._number = validate_column_number(number)
        self._header: Any = None
        self._key: Optional[str] = None
        self._style = ColumnStyle()
        self.width: Optional[float] = None

        if definition is not NO_DEFINITION:
            self.set_definition(definition)

    def __repr__(self) -> str:
        return f"Column(number={self._number}, key={self._key!r})"

    def __str__(self) -> str:
        return self.to_string()

    @property
    def number(self) -> int:
        return self._number

    @property
    def letter(self) -> str:
        return get_column_letter(self._number)

    @property
    def worksheet(self) -> "Worksheet":
        return self._worksheet

    # ------------------------------------------------------------------
    # Definition
    # ------------------------------------------------------------------

    @property
    def definition(self) -> ColumnDefinition:
        return ColumnDefinition.model_construct(
            header=copy.deepcopy(self._header),
            key=self._key,
            width=self.width,
            style=self._style.model_copy(deep=True),
        )

    @definition.setter
    def definition(self, value: DefinitionLike) -> None:
        self.set_definition(value)

    def set_definition(self, value: DefinitionLike) -> None:
        """
        Apply key, width, style and header in one step.

        The header is written last so that header cells created by the write
        inherit the new style. A falsy value clears the column.
        """
        if isinstance(value, Mapping):
            value = ColumnDefinition.model_validate(value) if value else None

        if value:
            self.set_key(value.key)
            self.width = value.width
            self.style = value.style if value.style is not None else ColumnStyle()
            self.set_header(value.header)
        else:
            self._blank_header_cells()
            self._header = None
            self.set_key(None)
            self.width = None
            self.style = ColumnStyle()

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    @property
    def header(self) -> Any:
        return self._header

    @header.setter
    def header(self, value: Any) -> None:
        self.set_header(value)

    def set_header(self, value: Any) -> Any:
        """
        Store the header and write each header line into rows 1..N.

        Header rows left over from a longer previous header are blanked.
        Setting None stores an empty header and blanks every header cell
        previously written by this column.
        """
        if value is None:
            self._blank_header_cells()
            self._header = []
            return value

        previous_count = self.header_count
        self._header = value
        for index, text in enumerate(self.headers):
            self._worksheet.get_cell(index + 1, self._number).value = text
        self._blank_header_cells(start=self.header_count + 1, stop=previous_count)
        logger.debug("Column %s: wrote %d header row(s)", self.letter, self.header_count)
        return value

    def _blank_header_cells(self, start: int = 1, stop: Optional[int] = None) -> None:
        if stop is None:
            stop = self.header_count
        for row_number in range(start, stop + 1):
            cell = self._worksheet.find_cell(row_number, self._number)
            if cell is not None:
                cell.value = None

    @property
    def headers(self) -> list[Any]:
        """Header as a list with one entry per header row."""
        header = self._header
        if header is None:
            return []
        if isinstance(header, list):
            return header
        if isinstance(header, tuple):
            return list(header)
        return [header]

    @property
    def header_count(self) -> int:
        return len(self.headers)

    # ------------------------------------------------------------------
    # Key
    # ------------------------------------------------------------------

    @property
    def key(self) -> Optional[str]:
        return self._key

    @key.setter
    def key(self, value: Optional[str]) -> None:
        self.set_key(value)

    def set_key(self, value: Optional[str]) -> Optional[str]:
        """
        Move this column's entry in the worksheet key table to a new key.

        Raises:
            DuplicateKeyError: If another column already holds the key
        """
        keys = self._worksheet.keys
        if value:
            owner = keys.get(value)
            if owner is not None and owner is not self:
                raise DuplicateKeyError(value, owner.number, self._number)

        if self._key and keys.get(self._key) is self:
            del keys[self._key]
        self._key = value
        if value:
            keys[value] = self
            logger.debug("Column %s: registered key %r", self.letter, value)
        return value

    # ------------------------------------------------------------------
    # Style
    # ------------------------------------------------------------------

    @property
    def style(self) -> ColumnStyle:
        return self._style

    @style.setter
    def style(self, value: Union[ColumnStyle, Mapping, None]) -> None:
        if value is None:
            value = ColumnStyle()
        elif isinstance(value, Mapping):
            value = ColumnStyle.model_validate(value)
        self._style = value.model_copy(deep=True)

    def apply_style(self, slot: Union[StyleSlot, str], value: Any) -> Any:
        """
        Set a style attribute on the column and on every existing cell in it.

        Cells created later pick the attribute up from the column when the
        worksheet creates them.
        """
        slot = validate_style_slot(slot)
        self._style.set(slot, value)

        touched = 0
        for _, cell in self.iter_cells():
            setattr(cell, slot.value, value)
            touched += 1
        logger.debug("Column %s: applied %s to %d cell(s)", self.letter, slot.value, touched)
        return value

    num_fmt = _style_property(StyleSlot.NUM_FMT)
    font = _style_property(StyleSlot.FONT)
    alignment = _style_property(StyleSlot.ALIGNMENT)
    border = _style_property(StyleSlot.BORDER)
    fill = _style_property(StyleSlot.FILL)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def equivalent_to(self, other: "Column") -> bool:
        """True when both columns share width and style."""
        return (
            self.width == other.width
            and self._style.model_dump() == other.style.model_dump()
        )

    @property
    def is_default(self) -> bool:
        """True when the column needs no explicit width or style when exported."""
        if self.width is not None and self.width != self._worksheet.default_column_width:
            return False
        return self._style.is_empty

    def to_string(self) -> str:
        data: dict[str, Any] = {}
        if self._key is not None:
            data["key"] = self._key
        if self.width is not None:
            data["width"] = self.width
        if self.headers:
            data["headers"] = self.headers
        return json.dumps(data, default=str)

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------

    def each_cell(
        self,
        options: Union[Mapping, CellIteratee, None] = None,
        iteratee: Optional[CellIteratee] = None,
        *,
        include_empty: bool = False,
    ) -> None:
        """
        Call iteratee(cell, row_number) for the cells of this column.

        Either ``each_cell(fn)`` or ``each_cell({"include_empty": True}, fn)``.
        By default only existing cells are visited. With include_empty every
        worksheet row is visited and missing cells are created.
        """
        if iteratee is None:
            iteratee, options = options, None
        if options is not None and not isinstance(options, Mapping):
            raise TypeError("each_cell() options must be a mapping")
        if options:
            include_empty = bool(options.get("include_empty", options.get("includeEmpty", include_empty)))
        if iteratee is None:
            raise TypeError("each_cell() requires an iteratee")

        number = self._number
        if include_empty:
            def visit(row, row_number):
                iteratee(row.get_cell(number), row_number)
        else:
            def visit(row, row_number):
                cell = row.find_cell(number)
                if cell is not None:
                    iteratee(cell, row_number)

        self._worksheet.each_row(visit, include_empty=include_empty)

    def iter_cells(self, include_empty: bool = False) -> Iterator[tuple[int, "Cell"]]:
        """Yield (row_number, cell) pairs, same rules as each_cell."""
        for row_number, row in self._worksheet.iter_rows(include_empty=include_empty):
            if include_empty:
                yield row_number, row.get_cell(self._number)
            else:
                cell = row.find_cell(self._number)
                if cell is not None:
                    yield row_number, cell

    @property
    def values(self) -> list[Any]:
        """Cell values indexed by row_number - 1, None for gaps."""
        values: list[Any] = []
        for row_number, cell in self.iter_cells():
            values.extend([None] * (row_number - 1 - len(values)))
            values.append(cell.value)
        return values

    @values.setter
    def values(self, values: list[Any]) -> None:
        for index, value in enumerate(values):
            if value is not None:
                self._worksheet.get_cell(index + 1, self._number).value = value
