"""
Sheet CLI Application

Typer-based command-line interface for worksheet column definitions.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sheet_io.readers import read_sheet_file
from sheet_io.writers import export_xlsx, export_csv
from sheet_ui_cli.display import display_all
from sheet_ui_cli.log import setup_logging


app = typer.Typer(
    name="sheetcols",
    help="Worksheet column definitions: inspect, validate and export",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show debug logging",
    ),
) -> None:
    setup_logging(verbose)


def _resolve_input_file(input_file: Optional[Path], input_option: Optional[Path]) -> Path:
    """Resolve input file from positional arg or --input option."""
    resolved = input_option or input_file
    if resolved is None:
        raise typer.BadParameter("Missing input file. Provide a positional INPUT_FILE or --input.")
    if not resolved.exists():
        raise typer.BadParameter(f"Input file not found: {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Input path is not a file: {resolved}")
    return resolved


@app.command()
def show(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="Path to sheet definition file (YAML or JSON)",
    ),
    input_option: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to sheet definition file (YAML or JSON)",
    ),
) -> None:
    """
    Show the columns of a sheet definition.

    Lists every column with its key, headers, width and style overrides,
    followed by the column ranges written on export.
    """
    try:
        input_file = _resolve_input_file(input_file, input_option)
        console.print(f"[dim]Reading sheet definition: {input_file}[/dim]")
        ws = read_sheet_file(input_file)
        display_all(ws)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def validate(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="Path to sheet definition file (YAML or JSON)",
    ),
    input_option: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to sheet definition file (YAML or JSON)",
    ),
) -> None:
    """
    Validate a sheet definition without exporting it.

    Checks column definitions, key uniqueness and row data.
    """
    try:
        input_file = _resolve_input_file(input_file, input_option)
        console.print(f"[dim]Validating: {input_file}[/dim]")
        ws = read_sheet_file(input_file)

        console.print("[green]✓ Sheet definition is valid[/green]")

        console.print(f"\n  Sheet: {ws.name}")
        console.print(f"  Columns: {len(ws.columns)}")
        console.print(f"  Keys: {', '.join(ws.keys) or '-'}")
        console.print(f"  Rows: {ws.row_count}")

    except Exception as e:
        console.print(f"[red]Validation failed: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def export(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="Path to sheet definition file (YAML or JSON)",
    ),
    input_option: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to sheet definition file (YAML or JSON)",
    ),
    output: Path = typer.Option(
        ...,
        "--output", "-o",
        help="Output Excel file path",
    ),
    include_csv: bool = typer.Option(
        False,
        "--csv",
        help="Also export CSV files to a csv/ directory next to the output",
    ),
) -> None:
    """
    Build the worksheet and export it to Excel.

    Optionally also exports the column summary and cell values as CSV.
    """
    try:
        input_file = _resolve_input_file(input_file, input_option)
        ws = read_sheet_file(input_file)

        export_xlsx(ws, output)
        console.print(f"[green]✓ Exported to {output}[/green]")

        if include_csv:
            csv_dir = output.parent / "csv"
            files = export_csv(ws, csv_dir)
            console.print(f"[green]✓ Exported {len(files)} CSV files to {csv_dir}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
