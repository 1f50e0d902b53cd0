"""
Sheet I/O Readers

YAML and JSON sheet-definition parsing.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from sheet_engine.models import ColumnDefinition, WorksheetSettings
from sheet_engine.worksheet import Worksheet


logger = logging.getLogger(__name__)


def _parse_settings(data: dict) -> WorksheetSettings:
    """Parse worksheet-level settings from the top of the file."""
    settings: dict[str, Any] = {}
    if data.get("name") is not None:
        settings["name"] = data["name"]
    if data.get("default_column_width") is not None:
        settings["default_column_width"] = data["default_column_width"]
    return WorksheetSettings(**settings)


def _parse_columns(data: list) -> list[ColumnDefinition]:
    """Parse the columns section."""
    if not isinstance(data, list):
        raise ValueError("'columns' must be a list of column definitions")
    return [ColumnDefinition.model_validate(entry or {}) for entry in data]


def parse_sheet_dict(data: dict[str, Any]) -> Worksheet:
    """
    Build a worksheet from a dictionary.

    This is the core parsing function used by both YAML and JSON readers.
    Columns are defined first, so header rows come before data rows.

    Args:
        data: Raw sheet definition

    Returns:
        Populated Worksheet
    """
    if not isinstance(data, dict):
        raise ValueError("Sheet definition must be a mapping")

    ws = Worksheet(_parse_settings(data))
    ws.set_columns(_parse_columns(data.get("columns") or []))

    for values in data.get("rows") or []:
        ws.add_row(values)

    logger.info(
        "Parsed sheet %r: %d column(s), %d row(s)", ws.name, len(ws.columns), ws.row_count
    )
    return ws


def read_yaml(path: str | Path) -> Worksheet:
    """
    Read a sheet definition from a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Populated Worksheet
    """
    path = Path(path)
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    return parse_sheet_dict(data)


def read_json(path: str | Path) -> Worksheet:
    """
    Read a sheet definition from a JSON file.

    Args:
        path: Path to JSON file

    Returns:
        Populated Worksheet
    """
    path = Path(path)
    with open(path, "r") as f:
        data = json.load(f)

    return parse_sheet_dict(data)


def read_sheet_file(path: str | Path) -> Worksheet:
    """
    Read a sheet definition from a file (auto-detects format).

    Args:
        path: Path to definition file (YAML or JSON)

    Returns:
        Populated Worksheet
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        return read_yaml(path)
    elif suffix == ".json":
        return read_json(path)
    else:
        raise ValueError(f"Unsupported file format: {suffix}")
