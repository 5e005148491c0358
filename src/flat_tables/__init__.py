"""Flat Tables - A minimal flat-file tabular data store."""

from flat_tables.database import Database
from flat_tables.errors import (
    ColumnAlreadyExistsError,
    ColumnNotFoundError,
    ColumnTypeNotFoundError,
    DatabaseError,
    DatabaseIOError,
    DatabaseNotFoundError,
    DataTypeError,
    DuplicatedDatabaseError,
    FlatTablesError,
    NoDatabaseSelectedError,
    NumberMismatchError,
    SerializationError,
    TableAlreadyExistsError,
    TableError,
    TableIOError,
    TableNotFoundError,
)
from flat_tables.query import Comparison, Condition, Operator, SelectCols
from flat_tables.table import Schema, Table
from flat_tables.types import DataType

__all__ = [
    # Main API
    "Database",
    "Table",
    "Schema",
    # Query specification
    "Condition",
    "Operator",
    "SelectCols",
    "Comparison",
    "DataType",
    # Errors
    "FlatTablesError",
    "DatabaseError",
    "DuplicatedDatabaseError",
    "DatabaseNotFoundError",
    "DatabaseIOError",
    "NoDatabaseSelectedError",
    "TableError",
    "TableNotFoundError",
    "TableAlreadyExistsError",
    "ColumnNotFoundError",
    "ColumnTypeNotFoundError",
    "ColumnAlreadyExistsError",
    "NumberMismatchError",
    "DataTypeError",
    "TableIOError",
    "SerializationError",
]

__version__ = "0.1.0"
