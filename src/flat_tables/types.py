"""Column type tags for flat tables."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any


_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

_BOOLEAN_VALUES = {"true": True, "false": False}


class DataType(Enum):
    """Closed set of column types.

    Every stored value is a string; a type only decides which strings may be
    written to a column and what existing rows receive when the column is added.
    """

    TEXT = "Text"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"

    def validate(self, value: str) -> bool:
        """Return whether ``value`` is a valid stored form for this type."""
        if not isinstance(value, str):
            return False
        if self is DataType.TEXT:
            return True
        if self is DataType.INTEGER:
            return _INTEGER_RE.fullmatch(value) is not None
        if self is DataType.FLOAT:
            if _FLOAT_RE.fullmatch(value) is None:
                return False
            return math.isfinite(float(value))
        return value in _BOOLEAN_VALUES

    def default(self) -> str:
        """Return the canonical value used to backfill a new column."""
        return _DEFAULTS[self]

    def coerce(self, value: str) -> Any:
        """Convert a stored string to a comparable Python value.

        Raises:
            ValueError: If the string is not valid for this type.
        """
        if not self.validate(value):
            raise ValueError(f"{value!r} is not a valid {self.value} value")
        if self is DataType.INTEGER:
            return int(value)
        if self is DataType.FLOAT:
            return float(value)
        if self is DataType.BOOLEAN:
            return _BOOLEAN_VALUES[value]
        return value

    @property
    def is_numeric(self) -> bool:
        return self in (DataType.INTEGER, DataType.FLOAT)

    @classmethod
    def parse(cls, name: str) -> DataType:
        """Look up a type by tag or alias, case-insensitively.

        Raises:
            ValueError: If the name is not a known type.
        """
        try:
            return TYPE_NAMES[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown data type: {name}") from None


_DEFAULTS: dict[DataType, str] = {
    DataType.TEXT: "",
    DataType.INTEGER: "0",
    DataType.FLOAT: "0.0",
    DataType.BOOLEAN: "false",
}


# Mapping from lower-cased type names (tags and common SQL spellings) to DataType
TYPE_NAMES: dict[str, DataType] = {dt.value.lower(): dt for dt in DataType}
TYPE_NAMES.update({
    "string": DataType.TEXT,
    "varchar": DataType.TEXT,
    "int": DataType.INTEGER,
    "bigint": DataType.INTEGER,
    "real": DataType.FLOAT,
    "double": DataType.FLOAT,
    "bool": DataType.BOOLEAN,
})
