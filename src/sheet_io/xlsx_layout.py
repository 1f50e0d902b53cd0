"""
XLSX Export Layout

Row and column layout of an exported worksheet.
"""
from __future__ import annotations

from dataclasses import dataclass

from openpyxl.utils import get_column_letter

from sheet_engine.worksheet import Worksheet


@dataclass(frozen=True)
class SheetLayout:
    """Where header rows end and data rows begin."""
    header_rows: int = 1

    @property
    def data_start_row(self) -> int:
        return self.header_rows + 1

    @classmethod
    def for_worksheet(cls, ws: Worksheet) -> "SheetLayout":
        return cls(header_rows=ws.header_row_count)

    @staticmethod
    def cell(col: int, row: int) -> str:
        return f"{get_column_letter(col)}{row}"
