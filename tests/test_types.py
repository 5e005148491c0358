"""Tests for column data types."""

from __future__ import annotations

import pytest

from flat_tables.types import DataType


class TestValidate:
    """Tests for DataType.validate."""

    def test_text_accepts_anything(self):
        assert DataType.TEXT.validate("")
        assert DataType.TEXT.validate("hello world")
        assert DataType.TEXT.validate("42")

    @pytest.mark.parametrize("value", ["0", "5", "-12", "+7", "007"])
    def test_integer_valid(self, value):
        assert DataType.INTEGER.validate(value)

    @pytest.mark.parametrize("value", ["", "1.5", "abc", "1e3", " 5", "--1", "5\n", "\u0663", "1_0"])
    def test_integer_invalid(self, value):
        assert not DataType.INTEGER.validate(value)

    @pytest.mark.parametrize("value", ["0.0", "3.14", "-2", "1e3", ".5", "2.", "-1.5E-3"])
    def test_float_valid(self, value):
        assert DataType.FLOAT.validate(value)

    @pytest.mark.parametrize("value", ["", "abc", "nan", "inf", " 1.5 ", "1_0", "1.5\n", "1e999", "\u0663.5", "0x10"])
    def test_float_invalid(self, value):
        assert not DataType.FLOAT.validate(value)

    def test_boolean(self):
        assert DataType.BOOLEAN.validate("true")
        assert DataType.BOOLEAN.validate("false")
        assert not DataType.BOOLEAN.validate("True")
        assert not DataType.BOOLEAN.validate("1")

    def test_non_string_rejected(self):
        """Stored values are strings; other Python values never validate."""
        assert not DataType.INTEGER.validate(5)  # type: ignore[arg-type]
        assert not DataType.TEXT.validate(None)  # type: ignore[arg-type]


class TestDefaults:
    """Every default is a valid stored value of its own type."""

    def test_default_values(self):
        assert DataType.TEXT.default() == ""
        assert DataType.INTEGER.default() == "0"
        assert DataType.FLOAT.default() == "0.0"
        assert DataType.BOOLEAN.default() == "false"

    @pytest.mark.parametrize("dtype", list(DataType))
    def test_default_is_valid(self, dtype):
        assert dtype.validate(dtype.default())


class TestCoerce:
    def test_coerce_numbers(self):
        assert DataType.INTEGER.coerce("10") == 10
        assert DataType.FLOAT.coerce("2.5") == 2.5

    def test_coerce_boolean(self):
        assert DataType.BOOLEAN.coerce("true") is True
        assert DataType.BOOLEAN.coerce("false") is False

    def test_coerce_invalid_raises(self):
        with pytest.raises(ValueError):
            DataType.INTEGER.coerce("ten")


class TestParse:
    def test_parse_tags(self):
        assert DataType.parse("Text") is DataType.TEXT
        assert DataType.parse("INTEGER") is DataType.INTEGER
        assert DataType.parse("boolean") is DataType.BOOLEAN

    def test_parse_aliases(self):
        assert DataType.parse("int") is DataType.INTEGER
        assert DataType.parse("varchar") is DataType.TEXT
        assert DataType.parse("bool") is DataType.BOOLEAN
        assert DataType.parse("double") is DataType.FLOAT

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown data type"):
            DataType.parse("blob")

    def test_tags_are_enum_values(self):
        """Schema files store the tag string."""
        assert DataType("Integer") is DataType.INTEGER
