"""Query specification types: predicates and column projections."""

from __future__ import annotations

import operator as op
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Sequence

from flat_tables.types import DataType


class Operator(Enum):
    """Comparison operators usable in a condition."""

    EQ = "="
    NOT_EQ = "!="
    GT = ">"
    LT = "<"
    GT_EQ = ">="
    LT_EQ = "<="

    @property
    def is_ordering(self) -> bool:
        return self not in (Operator.EQ, Operator.NOT_EQ)

    @classmethod
    def parse(cls, symbol: str) -> Operator:
        """Look up an operator by its symbol (``=``, ``!=``, ``<``, ...)."""
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Unknown operator: {symbol}") from None


_OPERATOR_FUNCS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: op.eq,
    Operator.NOT_EQ: op.ne,
    Operator.GT: op.gt,
    Operator.LT: op.lt,
    Operator.GT_EQ: op.ge,
    Operator.LT_EQ: op.le,
}


class Comparison(Enum):
    """How ordering operators compare stored values.

    LEXICOGRAPHIC compares the stored strings ("10" < "9").
    TYPED coerces values of Integer, Float and Boolean columns first.
    """

    LEXICOGRAPHIC = "lexicographic"
    TYPED = "typed"


@dataclass(frozen=True)
class Condition:
    """A single ``column <operator> literal`` predicate."""

    key: str
    operator: Operator
    value: str

    def matches(
        self,
        entry: dict[str, str],
        dtype: DataType | None = None,
        comparison: Comparison = Comparison.LEXICOGRAPHIC,
    ) -> bool:
        """Return whether ``entry`` satisfies this condition.

        An entry without the condition's column never matches. Equality is
        always exact string equality; ``dtype`` only matters for ordering
        operators under typed comparison.
        """
        stored = entry.get(self.key)
        if stored is None:
            return False

        compare = _OPERATOR_FUNCS[self.operator]
        if (
            comparison is Comparison.TYPED
            and self.operator.is_ordering
            and dtype is not None
            and dtype is not DataType.TEXT
        ):
            try:
                return compare(dtype.coerce(stored), dtype.coerce(self.value))
            except ValueError:
                return False

        return compare(stored, self.value)

    def __str__(self) -> str:
        return f"{self.key} {self.operator.value} {self.value!r}"


@dataclass(frozen=True)
class SelectCols:
    """Column projection: every column (``SelectCols.ALL``) or an explicit list."""

    columns: tuple[str, ...] | None = None
    ALL: ClassVar[SelectCols]

    @classmethod
    def of(cls, columns: Sequence[str]) -> SelectCols:
        """Build an explicit, ordered column selection."""
        return cls(columns=tuple(columns))

    @property
    def is_all(self) -> bool:
        return self.columns is None

    def resolve(self, schema_columns: Sequence[str]) -> list[str]:
        """Return the ordered column list, expanding ALL to the schema order."""
        if self.columns is None:
            return list(schema_columns)
        return list(self.columns)


SelectCols.ALL = SelectCols()
