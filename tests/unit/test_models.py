"""
Unit Tests for Sheet Engine Models
"""
import pytest
from pydantic import ValidationError

from sheet_engine.models import (
    DEFAULT_COLUMN_WIDTH,
    ColumnDefinition,
    ColumnStyle,
    StyleSlot,
    WorksheetSettings,
)
from sheet_engine.validation import InvalidArgumentError, validate_style_slot


class TestColumnStyle:
    """Tests for ColumnStyle model."""

    def test_num_fmt_alias(self):
        style = ColumnStyle.model_validate({"numFmt": "0.00"})
        assert style.num_fmt == "0.00"
        assert ColumnStyle(num_fmt="0.00").num_fmt == "0.00"

    def test_empty_style(self):
        style = ColumnStyle()
        assert style.is_empty
        assert style.overrides() == {}

    def test_overrides_skip_falsy_slots(self):
        style = ColumnStyle(font={"bold": True}, fill={})
        assert style.overrides() == {StyleSlot.FONT: {"bold": True}}
        assert not style.is_empty

    def test_get_and_set_by_slot(self):
        style = ColumnStyle()
        style.set(StyleSlot.BORDER, {"left": {"style": "thin"}})
        assert style.get("border") == {"left": {"style": "thin"}}


class TestColumnDefinition:
    """Tests for ColumnDefinition model."""

    def test_defaults(self):
        defn = ColumnDefinition()
        assert defn.header is None
        assert defn.key is None
        assert defn.width is None
        assert defn.style is None

    def test_width_must_be_positive(self):
        with pytest.raises(ValidationError):
            ColumnDefinition(width=0)

    def test_tuple_header_becomes_list(self):
        assert ColumnDefinition(header=("a", "b")).header == ["a", "b"]

    def test_nested_style(self):
        defn = ColumnDefinition.model_validate({"style": {"numFmt": "0%", "font": {"size": 9}}})
        assert defn.style.num_fmt == "0%"
        assert defn.style.font == {"size": 9}


class TestWorksheetSettings:
    """Tests for WorksheetSettings model."""

    def test_defaults(self):
        settings = WorksheetSettings()
        assert settings.name == "Sheet1"
        assert settings.default_column_width == DEFAULT_COLUMN_WIDTH == 8

    def test_name_length_limit(self):
        with pytest.raises(ValidationError):
            WorksheetSettings(name="x" * 32)


class TestStyleSlotValidation:
    """Tests for style slot name resolution."""

    @pytest.mark.parametrize("name, expected", [
        ("numFmt", StyleSlot.NUM_FMT),
        ("num_fmt", StyleSlot.NUM_FMT),
        ("fill", StyleSlot.FILL),
        (StyleSlot.ALIGNMENT, StyleSlot.ALIGNMENT),
    ])
    def test_known_names(self, name, expected):
        assert validate_style_slot(name) is expected

    def test_unknown_name(self):
        with pytest.raises(InvalidArgumentError, match="Unknown style attribute"):
            validate_style_slot("colour")
