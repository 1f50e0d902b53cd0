"""
Sheet Engine Errors and Argument Checks

Fail-fast validation for column arguments with precise error messages.
"""
from __future__ import annotations

from typing import Any

from sheet_engine.models import STYLE_SLOT_ALIASES, StyleSlot


class ColumnError(Exception):
    """Base class for column model errors."""
    pass


class InvalidArgumentError(ColumnError, ValueError):
    """Raised when a column operation receives an unusable argument."""
    pass


class DuplicateKeyError(ColumnError):
    """Raised when a key is already held by another column of the worksheet."""

    def __init__(self, key: str, owner_number: int, requested_number: int):
        self.key = key
        self.owner_number = owner_number
        self.requested_number = requested_number
        super().__init__(
            f"Key {key!r} is already used by column {owner_number}; "
            f"cannot assign it to column {requested_number}"
        )


def validate_column_number(number: Any) -> int:
    """Ensure a column number is a positive integer."""
    if isinstance(number, bool) or not isinstance(number, int):
        raise InvalidArgumentError(
            f"Column number must be an integer, got {type(number).__name__}"
        )
    if number < 1:
        raise InvalidArgumentError(f"Column number must be >= 1, got {number}")
    return number


def validate_row_number(number: Any) -> int:
    """Ensure a row number is a positive integer."""
    if isinstance(number, bool) or not isinstance(number, int):
        raise InvalidArgumentError(
            f"Row number must be an integer, got {type(number).__name__}"
        )
    if number < 1:
        raise InvalidArgumentError(f"Row number must be >= 1, got {number}")
    return number


def validate_style_slot(name: Any) -> StyleSlot:
    """Resolve a style slot name, accepting the camel-case alias numFmt."""
    if name in STYLE_SLOT_ALIASES:
        return STYLE_SLOT_ALIASES[name]
    try:
        return StyleSlot(name)
    except ValueError:
        valid = ", ".join(slot.value for slot in StyleSlot)
        raise InvalidArgumentError(f"Unknown style attribute {name!r}; expected one of: {valid}")
