"""
Sheet I/O Writers

Export worksheets to XLSX and CSV formats.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from sheet_engine.worksheet import Cell, Worksheet
from sheet_io.xlsx_layout import SheetLayout


logger = logging.getLogger(__name__)

# camelCase attribute names used in definition files -> openpyxl keyword names
_FONT_KEYS = {
    "name": "name",
    "size": "size",
    "bold": "bold",
    "italic": "italic",
    "underline": "underline",
    "strike": "strike",
    "color": "color",
    "vertAlign": "vertAlign",
    "family": "family",
    "scheme": "scheme",
}
_ALIGNMENT_KEYS = {
    "horizontal": "horizontal",
    "vertical": "vertical",
    "wrapText": "wrap_text",
    "wrap_text": "wrap_text",
    "shrinkToFit": "shrink_to_fit",
    "shrink_to_fit": "shrink_to_fit",
    "indent": "indent",
    "textRotation": "text_rotation",
    "text_rotation": "text_rotation",
}
_BORDER_SIDES = ("left", "right", "top", "bottom", "diagonal")


def _color(value: Any) -> Optional[str]:
    """Accept "FF0000" or {"argb": "FFFF0000"}."""
    if isinstance(value, dict):
        return value.get("argb") or value.get("rgb")
    return value


def _remap(attrs: dict[str, Any], names: dict[str, str]) -> dict[str, Any]:
    return {names[k]: v for k, v in attrs.items() if k in names}


def to_openpyxl_font(font: dict[str, Any]) -> Font:
    kwargs = _remap(font, _FONT_KEYS)
    if "color" in kwargs:
        kwargs["color"] = _color(kwargs["color"])
    if kwargs.get("underline") is True:
        kwargs["underline"] = "single"
    return Font(**kwargs)


def to_openpyxl_alignment(alignment: dict[str, Any]) -> Alignment:
    return Alignment(**_remap(alignment, _ALIGNMENT_KEYS))


def to_openpyxl_border(border: dict[str, Any]) -> Border:
    sides = {}
    for side in _BORDER_SIDES:
        attrs = border.get(side)
        if attrs:
            sides[side] = Side(style=attrs.get("style"), color=_color(attrs.get("color")))
    return Border(**sides)


def to_openpyxl_fill(fill: dict[str, Any]) -> PatternFill:
    fg = _color(fill.get("fgColor") or fill.get("start_color"))
    bg = _color(fill.get("bgColor") or fill.get("end_color")) or fg
    kwargs: dict[str, Any] = {"fill_type": fill.get("pattern") or fill.get("fill_type")}
    if fg:
        kwargs["start_color"] = fg
    if bg:
        kwargs["end_color"] = bg
    return PatternFill(**kwargs)


def _style_xlsx_cell(target, cell: Cell) -> None:
    """Copy the style attributes of a model cell onto an openpyxl cell."""
    if cell.num_fmt:
        target.number_format = cell.num_fmt
    if cell.font:
        target.font = to_openpyxl_font(cell.font)
    if cell.alignment:
        target.alignment = to_openpyxl_alignment(cell.alignment)
    if cell.border:
        target.border = to_openpyxl_border(cell.border)
    if cell.fill:
        target.fill = to_openpyxl_fill(cell.fill)


def _write_column_widths(xl_ws, ws: Worksheet) -> None:
    for col_range in ws.condensed_columns():
        width = col_range.width if col_range.width is not None else ws.default_column_width
        for number in range(col_range.min, col_range.max + 1):
            xl_ws.column_dimensions[get_column_letter(number)].width = width


def write_worksheet(wb: Workbook, ws: Worksheet) -> None:
    """Add a worksheet with its values, cell styles and column widths to a workbook."""
    xl_ws = wb.create_sheet(title=ws.name[:31])
    for row_number, row in ws.iter_rows():
        for cell in row.cells:
            target = xl_ws.cell(row=row_number, column=cell.column_number)
            target.value = cell.value
            _style_xlsx_cell(target, cell)

    _write_column_widths(xl_ws, ws)

    layout = SheetLayout.for_worksheet(ws)
    if layout.header_rows:
        xl_ws.freeze_panes = layout.cell(1, layout.data_start_row)


def export_xlsx(ws: Worksheet, path: str | Path) -> None:
    """
    Export a worksheet to an Excel file.

    Args:
        ws: Worksheet to export
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    wb.remove(wb.active)
    write_worksheet(wb, ws)
    wb.save(path)
    logger.info("Exported worksheet %r to %s", ws.name, path)


# ============================================================================
# TABLES
# ============================================================================

def _create_columns_table(ws: Worksheet) -> pd.DataFrame:
    """Create the column summary table."""
    rows = []
    for column in ws.columns:
        rows.append({
            "Column": column.number,
            "Letter": column.letter,
            "Key": column.key or "",
            "Width": column.width if column.width is not None else "",
            "Headers": " / ".join(str(h) for h in column.headers),
            "Style": ", ".join(slot.value for slot in column.style.overrides()),
            "Default": column.is_default,
        })
    return pd.DataFrame(rows, columns=["Column", "Letter", "Key", "Width", "Headers", "Style", "Default"])


def _create_values_table(ws: Worksheet) -> pd.DataFrame:
    """Create the data table below the header rows, labelled by key or letter."""
    width = ws.column_count
    labels = []
    for number in range(1, width + 1):
        column = ws.find_column(number)
        labels.append(column.key if column is not None and column.key else get_column_letter(number))

    layout = SheetLayout.for_worksheet(ws)
    rows = []
    for row_number in range(layout.data_start_row, ws.row_count + 1):
        row = ws.find_row(row_number)
        values = row.values if row is not None else []
        rows.append(values + [None] * (width - len(values)))
    return pd.DataFrame(rows, columns=labels)


def format_tables(ws: Worksheet) -> dict[str, pd.DataFrame]:
    """Format worksheet contents as named tables."""
    return {
        "columns": _create_columns_table(ws),
        "cells": _create_values_table(ws),
    }


def export_csv(ws: Worksheet, output_dir: str | Path) -> list[Path]:
    """
    Export worksheet tables to CSV files (one per table).

    Args:
        ws: Worksheet to export
        output_dir: Directory to write CSV files

    Returns:
        List of created file paths
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    tables = format_tables(ws)
    created_files = []

    for table_name, df in tables.items():
        file_path = output_dir / f"{table_name}.csv"
        df.to_csv(file_path, index=False)
        created_files.append(file_path)

    logger.info("Exported %d CSV file(s) to %s", len(created_files), output_dir)
    return created_files
