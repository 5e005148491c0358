"""Tables: a JSON schema file plus a JSON array of row entries."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

from flat_tables.errors import (
    ColumnAlreadyExistsError,
    ColumnNotFoundError,
    ColumnTypeNotFoundError,
    DataTypeError,
    NumberMismatchError,
    SerializationError,
    TableAlreadyExistsError,
    TableIOError,
    TableNotFoundError,
)
from flat_tables.query import Comparison, Condition, SelectCols
from flat_tables.storage import read_json, write_json
from flat_tables.types import DataType

if TYPE_CHECKING:
    from flat_tables.database import Database

logger = logging.getLogger(__name__)


Entry = dict[str, str]


@dataclass
class Schema:
    """Ordered column names paired 1:1 with their types."""

    cols: list[str] = field(default_factory=list)
    types: list[DataType] = field(default_factory=list)

    def position(self, col: str) -> int | None:
        """Return the index of ``col``, or None if it is not a column."""
        try:
            return self.cols.index(col)
        except ValueError:
            return None

    def has_column(self, col: str) -> bool:
        return self.position(col) is not None

    def type_of(self, col: str) -> DataType:
        """Return the type of ``col``.

        Raises:
            ColumnNotFoundError: If ``col`` is not in the schema.
            ColumnTypeNotFoundError: If the schema has no type at its position.
        """
        pos = self.position(col)
        if pos is None:
            raise ColumnNotFoundError(col)
        if pos >= len(self.types):
            raise ColumnTypeNotFoundError(col)
        return self.types[pos]

    def to_json(self) -> dict[str, Any]:
        return {"cols": list(self.cols), "types": [t.value for t in self.types]}

    @classmethod
    def from_json(cls, data: Any) -> Schema:
        """Build a schema from its decoded JSON record."""
        if not isinstance(data, dict) or "cols" not in data or "types" not in data:
            raise SerializationError("Schema must be an object with 'cols' and 'types'")
        cols, types = data["cols"], data["types"]
        if not isinstance(cols, list) or not all(isinstance(c, str) for c in cols):
            raise SerializationError("Schema 'cols' must be a list of strings")
        if not isinstance(types, list):
            raise SerializationError("Schema 'types' must be a list")
        try:
            parsed = [DataType(t) for t in types]
        except ValueError as e:
            raise SerializationError(f"Unknown type tag in schema: {e}") from e
        return cls(cols=list(cols), types=parsed)


class Table:
    """Handle on one table of one database.

    The handle is lazy: construction only checks that the database exists.
    Every operation re-checks that both table files exist, loads what it
    needs fully into memory and writes whole files back.
    """

    def __init__(
        self,
        database: Database,
        db_name: str,
        name: str,
        comparison: Comparison = Comparison.LEXICOGRAPHIC,
    ) -> None:
        database.exists_or_err(db_name)
        self.database = database
        self.db_name = db_name
        self.name = name
        self.comparison = comparison

    @property
    def schema_path(self) -> Path:
        return self.database.path(self.db_name) / f"{self.name}.schema.json"

    @property
    def entries_path(self) -> Path:
        return self.database.path(self.db_name) / f"{self.name}.json"

    def exists(self) -> bool:
        """Return whether both the schema and the entries file exist."""
        return self.schema_path.exists() and self.entries_path.exists()

    def exists_or_err(self) -> None:
        self.database.exists_or_err(self.db_name)
        if not self.exists():
            raise TableNotFoundError(self.name)

    def create(
        self,
        columns: Sequence[str],
        types: Sequence[DataType],
        replace: bool = True,
    ) -> None:
        """Write a new schema and an empty entries file.

        An existing table with the same name is overwritten unless
        ``replace`` is False, in which case TableAlreadyExistsError is raised.
        """
        self.database.exists_or_err(self.db_name)
        if not replace and self.exists():
            raise TableAlreadyExistsError(self.name)
        if len(columns) != len(types):
            raise NumberMismatchError(
                f"cols = {len(columns)}, types = {len(types)}",
                {"cols": len(columns), "types": len(types)},
            )
        seen: set[str] = set()
        for col in columns:
            if col in seen:
                raise ColumnAlreadyExistsError(col)
            seen.add(col)

        schema = Schema(cols=list(columns), types=list(types))
        write_json(self.schema_path, schema.to_json(), pretty=True)
        write_json(self.entries_path, [])
        logger.info("Created table %s@%s with columns %s", self.name, self.db_name, schema.cols)

    def insert(self, columns: SelectCols, rows: Sequence[Sequence[str]]) -> int:
        """Append rows after validating all of them.

        Nothing is written unless every row has the right number of values
        and every value passes its column's type check. Columns left out of
        ``columns`` are filled with their type's default.

        Returns:
            Number of inserted rows.
        """
        schema = self.read_schema()
        cols = columns.resolve(schema.cols)
        for idx, col in enumerate(cols):
            if col in cols[:idx]:
                raise ColumnAlreadyExistsError(col)
        col_types = [(col, schema.type_of(col)) for col in cols]

        new_entries = []
        for idx, row in enumerate(rows):
            if len(row) != len(cols):
                raise NumberMismatchError(
                    f"Row {idx} has {len(row)} values for {len(cols)} columns",
                    {"row": idx, "values": len(row), "columns": len(cols)},
                )

            values: Entry = {}
            for (col, dtype), value in zip(col_types, row):
                if not dtype.validate(value):
                    raise DataTypeError(col, dtype.value, value)
                values[col] = value
            new_entries.append(self._materialize(values, schema))

        entries = self._read_entries()
        entries.extend(new_entries)
        self._write_entries(entries)
        return len(new_entries)

    def select(
        self,
        columns: SelectCols = SelectCols.ALL,
        condition: Condition | None = None,
    ) -> list[Entry]:
        """Return matching entries projected to ``columns``.

        Raises:
            ColumnNotFoundError: If a projected column is missing from a matching entry.
        """
        schema = self.read_schema()
        entries = [e for e in self._read_entries() if self._matches(condition, e, schema)]

        if columns.is_all:
            return entries

        result = []
        for entry in entries:
            projected: Entry = {}
            for col in columns.resolve(schema.cols):
                if col not in entry:
                    raise ColumnNotFoundError(col)
                projected[col] = entry[col]
            result.append(projected)
        return result

    def delete(self, condition: Condition) -> int:
        """Remove every entry matching ``condition``.

        Returns:
            Number of removed rows.
        """
        schema = self.read_schema()
        entries = self._read_entries()
        kept = [e for e in entries if not self._matches(condition, e, schema)]
        self._write_entries(kept)
        return len(entries) - len(kept)

    def alter(self, column: str, new_type: DataType, revalidate: bool = False) -> None:
        """Change the declared type of ``column``.

        Stored values are left as they are. With ``revalidate`` every stored
        value of the column must pass the new type first, otherwise
        DataTypeError is raised and the schema is unchanged.
        """
        self.exists_or_err()
        schema = self.read_schema()
        schema.type_of(column)
        pos = schema.position(column)

        if revalidate:
            for entry in self._read_entries():
                value = entry.get(column)
                if value is not None and not new_type.validate(value):
                    raise DataTypeError(column, new_type.value, value)

        schema.types[pos] = new_type
        self._write_schema(schema)
        logger.info("Altered %s.%s@%s to %s", self.name, column, self.db_name, new_type.value)

    def drop(self) -> None:
        """Delete both table files."""
        self.exists_or_err()
        try:
            self.schema_path.unlink()
            self.entries_path.unlink()
        except OSError as e:
            raise TableIOError(f"Cannot drop table {self.name}: {e}", {"table": self.name}) from e
        logger.info("Dropped table %s@%s", self.name, self.db_name)

    def truncate(self) -> None:
        """Remove all entries, keeping the schema."""
        self._write_entries([])

    def add_col(self, column: str, dtype: DataType) -> None:
        """Append a column and give every existing entry its default value."""
        schema = self.read_schema()
        if schema.has_column(column):
            raise ColumnAlreadyExistsError(column)
        if len(schema.cols) != len(schema.types):
            raise NumberMismatchError(
                f"cols = {len(schema.cols)}, types = {len(schema.types)}",
                {"cols": len(schema.cols), "types": len(schema.types)},
            )

        schema.cols.append(column)
        schema.types.append(dtype)

        default = dtype.default()
        entries = self._read_entries()
        for entry in entries:
            entry[column] = default

        self._write_entries(entries)
        self._write_schema(schema)
        logger.info("Added column %s %s to %s@%s", column, dtype.value, self.name, self.db_name)

    def remove_col(self, column: str) -> None:
        """Remove a column from the schema and from every stored entry."""
        schema = self.read_schema()
        pos = schema.position(column)
        if pos is None:
            raise ColumnNotFoundError(column)

        del schema.cols[pos]
        if pos < len(schema.types):
            del schema.types[pos]

        entries = self._read_entries()
        for entry in entries:
            entry.pop(column, None)

        self._write_entries(entries)
        self._write_schema(schema)
        logger.info("Removed column %s from %s@%s", column, self.name, self.db_name)

    def read_schema(self) -> Schema:
        """Load the table's schema."""
        self.exists_or_err()
        return Schema.from_json(read_json(self.schema_path))

    def _write_schema(self, schema: Schema) -> None:
        self.exists_or_err()
        write_json(self.schema_path, schema.to_json(), pretty=True)

    def _read_entries(self) -> list[Entry]:
        self.exists_or_err()
        data = read_json(self.entries_path)
        if not isinstance(data, list):
            raise SerializationError(f"Entries of {self.name} must be a JSON array")
        for entry in data:
            if not isinstance(entry, dict) or not all(
                isinstance(v, str) for v in entry.values()
            ):
                raise SerializationError(
                    f"Entries of {self.name} must map column names to strings"
                )
        return data

    def _write_entries(self, entries: list[Entry]) -> None:
        self.exists_or_err()
        write_json(self.entries_path, entries)
        logger.debug("[%s@%s] %d entries", self.name, self.db_name, len(entries))

    def _materialize(self, values: Entry, schema: Schema) -> Entry:
        """Return an entry holding every schema column, in schema order."""
        entry: Entry = {}
        for col, dtype in zip(schema.cols, schema.types):
            entry[col] = values[col] if col in values else dtype.default()
        return entry

    def _matches(self, condition: Condition | None, entry: Entry, schema: Schema) -> bool:
        if condition is None:
            return True
        dtype = None
        pos = schema.position(condition.key)
        if pos is not None and pos < len(schema.types):
            dtype = schema.types[pos]
        return condition.matches(entry, dtype, self.comparison)

    def __repr__(self) -> str:
        return f"Table({self.db_name!r}, {self.name!r})"
