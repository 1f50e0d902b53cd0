"""
Sheet Engine Data Models

Pydantic models for column definitions, column styles and worksheet settings.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class StyleSlot(str, Enum):
    """Named style attributes carried by a column and its cells."""
    NUM_FMT = "num_fmt"
    FONT = "font"
    ALIGNMENT = "alignment"
    BORDER = "border"
    FILL = "fill"


# ============================================================================
# CONSTANTS
# ============================================================================

# Width a column is rendered with when none is given
DEFAULT_COLUMN_WIDTH = 8

# Camel-case names accepted in definition files
STYLE_SLOT_ALIASES = {
    "numFmt": StyleSlot.NUM_FMT,
    "font": StyleSlot.FONT,
    "alignment": StyleSlot.ALIGNMENT,
    "border": StyleSlot.BORDER,
    "fill": StyleSlot.FILL,
}


# ============================================================================
# STYLE
# ============================================================================

class ColumnStyle(BaseModel):
    """
    Style overrides for a column.

    A slot left as None inherits the worksheet default. An empty ColumnStyle
    means the style was set explicitly with no overrides.
    """
    num_fmt: Optional[str] = Field(None, alias="numFmt", description="Number format code")
    font: Optional[dict[str, Any]] = Field(None, description="Font attributes (name, size, bold, ...)")
    alignment: Optional[dict[str, Any]] = Field(None, description="Alignment attributes")
    border: Optional[dict[str, Any]] = Field(None, description="Border attributes per side")
    fill: Optional[dict[str, Any]] = Field(None, description="Fill attributes")

    model_config = {"populate_by_name": True}

    def get(self, slot: StyleSlot) -> Any:
        return getattr(self, StyleSlot(slot).value)

    def set(self, slot: StyleSlot, value: Any) -> None:
        setattr(self, StyleSlot(slot).value, value)

    def overrides(self) -> dict[StyleSlot, Any]:
        """Slots holding a truthy value."""
        return {slot: self.get(slot) for slot in StyleSlot if self.get(slot)}

    @property
    def is_empty(self) -> bool:
        return not self.overrides()


# ============================================================================
# COLUMN DEFINITION
# ============================================================================

class ColumnDefinition(BaseModel):
    """Aggregate view of a column: header, key, width and style."""
    header: Any = Field(None, description="Header text, or one text per header row")
    key: Optional[str] = Field(None, description="Identifier used for key-based column lookup")
    width: Optional[float] = Field(None, gt=0, description="Display width in characters")
    style: Optional[ColumnStyle] = Field(None, description="Column style overrides")

    @field_validator("header")
    @classmethod
    def validate_header(cls, v: Any) -> Any:
        if isinstance(v, tuple):
            return list(v)
        return v


# ============================================================================
# WORKSHEET SETTINGS
# ============================================================================

class WorksheetSettings(BaseModel):
    """Worksheet-level configuration."""
    name: str = Field("Sheet1", min_length=1, max_length=31, description="Worksheet title")
    default_column_width: float = Field(
        DEFAULT_COLUMN_WIDTH, gt=0, description="Width of columns without an explicit width"
    )
