"""
Error types for flat tables.

Two layers:
- DatabaseError: namespace-level failures (duplicate, missing, I/O)
- TableError: table-level failures (missing table/column, arity, type, I/O, JSON)

Table operations check database existence through Database.exists_or_err,
so a missing database surfaces as DatabaseNotFoundError from any table call.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FlatTablesError(Exception):
    """Base exception for all flat tables errors.

    Attributes:
        message: Error message
        details: Additional error context
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DatabaseError(FlatTablesError):
    """Base class for database-level errors."""


class DuplicatedDatabaseError(DatabaseError):
    """A database with this name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicated database: {name}", {"database": name})
        self.name = name


class DatabaseNotFoundError(DatabaseError):
    """The database directory does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Database not found: {name}", {"database": name})
        self.name = name


class DatabaseIOError(DatabaseError):
    """Filesystem failure while managing a database."""


class NoDatabaseSelectedError(DatabaseError):
    """A table statement was issued before any database was selected."""

    def __init__(self) -> None:
        super().__init__("No database selected. Use 'use <name>' to select a database first.")


class TableError(FlatTablesError):
    """Base class for table-level errors."""


class TableNotFoundError(TableError):
    """The table's schema or entries file is missing."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Table not found: {table}", {"table": table})
        self.table = table


class TableAlreadyExistsError(TableError):
    """Raised by create when replacing an existing table is not allowed."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Table already exists: {table}", {"table": table})
        self.table = table


class ColumnNotFoundError(TableError):
    """A referenced column is not part of the schema or the entry."""

    def __init__(self, column: str) -> None:
        super().__init__(f"Column not found: {column}", {"column": column})
        self.column = column


class ColumnTypeNotFoundError(TableError):
    """A schema column has no type at its position."""

    def __init__(self, column: str) -> None:
        super().__init__(f"Column type not found: {column}", {"column": column})
        self.column = column


class ColumnAlreadyExistsError(TableError):
    """The column is already part of the schema."""

    def __init__(self, column: str) -> None:
        super().__init__(f"Column already exists: {column}", {"column": column})
        self.column = column


class NumberMismatchError(TableError):
    """Number of values doesn't match number of columns."""


class DataTypeError(TableError):
    """A value failed its column's type validator."""

    def __init__(self, column: str, type_name: str, value: str) -> None:
        super().__init__(
            f"Invalid {type_name} value for column '{column}': {value!r}",
            {"column": column, "type": type_name, "value": value},
        )
        self.column = column
        self.type_name = type_name
        self.value = value


class TableIOError(TableError):
    """Filesystem failure while reading or writing table files."""


class SerializationError(TableError):
    """A table file does not hold the expected JSON structure."""
