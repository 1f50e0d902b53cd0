"""
Sheet CLI Display

Rich table formatting for terminal output.
"""
from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text

from sheet_engine.worksheet import Worksheet


console = Console()


def display_header(title: str) -> None:
    """Display a section header."""
    console.print()
    console.print(Panel(Text(title, style="bold white"), style="blue"))


def display_columns(ws: Worksheet) -> None:
    """Display column definitions."""
    display_header(f"Columns: {ws.name}")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Letter", justify="center")
    table.add_column("Key")
    table.add_column("Headers")
    table.add_column("Width", justify="right")
    table.add_column("Style", style="dim")
    table.add_column("Default", justify="center")

    for column in ws.columns:
        table.add_row(
            str(column.number),
            column.letter,
            column.key or "",
            " / ".join(str(h) for h in column.headers),
            f"{column.width:g}" if column.width is not None else f"({ws.default_column_width:g})",
            ", ".join(slot.value for slot in column.style.overrides()),
            "✓" if column.is_default else "",
        )

    console.print(table)


def display_column_ranges(ws: Worksheet) -> None:
    """Display the condensed column ranges written on export."""
    display_header("Column Ranges")

    ranges = ws.condensed_columns()
    if not ranges:
        console.print("[dim]All columns use the default width and style.[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Range", justify="center")
    table.add_column("Width", justify="right")
    table.add_column("Style", style="dim")

    for col_range in ranges:
        table.add_row(
            col_range.letters,
            f"{col_range.width:g}" if col_range.width is not None else "",
            ", ".join(slot.value for slot in col_range.style.overrides()),
        )

    console.print(table)


def display_all(ws: Worksheet) -> None:
    """Display every section."""
    display_columns(ws)
    display_column_ranges(ws)
    console.print(f"\n  Rows: {ws.row_count}  Header rows: {ws.header_row_count}")
