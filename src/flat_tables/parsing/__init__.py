"""Parsing module for the FTQ statement language."""

from flat_tables.parsing.query_parser import (
    ColumnDef,
    Query,
    QueryParser,
    SelectQuery,
)

__all__ = [
    "ColumnDef",
    "Query",
    "QueryParser",
    "SelectQuery",
]
