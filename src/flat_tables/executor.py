"""Query executor for FTQ statements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from flat_tables.database import Database
from flat_tables.errors import DatabaseError, FlatTablesError, NoDatabaseSelectedError
from flat_tables.parsing.query_parser import (
    AddColumnQuery,
    AlterColumnQuery,
    CreateDatabaseQuery,
    CreateTableQuery,
    DeleteQuery,
    DescribeQuery,
    DropColumnQuery,
    DropDatabaseQuery,
    DropTableQuery,
    InsertQuery,
    Query,
    SelectQuery,
    ShowDatabasesQuery,
    ShowTablesQuery,
    TruncateQuery,
    UseQuery,
)
from flat_tables.query import Comparison, SelectCols
from flat_tables.table import Table
from flat_tables.types import DataType

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Result of a query execution."""

    columns: list[str]
    rows: list[dict[str, Any]]
    message: str | None = None


@dataclass
class UseResult(QueryResult):
    """Result of a USE query."""

    database: str = ""


@dataclass
class CreateResult(QueryResult):
    """Result of CREATE DATABASE / CREATE TABLE."""

    pass


@dataclass
class DropResult(QueryResult):
    """Result of DROP DATABASE / DROP TABLE / TRUNCATE."""

    pass


@dataclass
class InsertResult(QueryResult):
    """Result of an INSERT query."""

    count: int = 0


@dataclass
class DeleteResult(QueryResult):
    """Result of a DELETE query."""

    count: int = 0


@dataclass
class AlterResult(QueryResult):
    """Result of an ALTER TABLE query."""

    pass


class QueryExecutor:
    """Executes parsed FTQ statements against a database root."""

    def __init__(
        self,
        database: Database,
        current_db: str | None = None,
        comparison: Comparison = Comparison.LEXICOGRAPHIC,
    ) -> None:
        self.database = database
        self.comparison = comparison
        if current_db is None:
            try:
                current_db = database.get_curr_db()
            except DatabaseError:
                current_db = None
        self.current_db = current_db

    def execute(self, query: Query) -> QueryResult:
        """Execute a query and return results.

        Store errors are reported through ``QueryResult.message``.
        """
        handlers = {
            CreateDatabaseQuery: self._execute_create_database,
            DropDatabaseQuery: self._execute_drop_database,
            UseQuery: self._execute_use,
            ShowDatabasesQuery: self._execute_show_databases,
            ShowTablesQuery: self._execute_show_tables,
            DescribeQuery: self._execute_describe,
            CreateTableQuery: self._execute_create_table,
            DropTableQuery: self._execute_drop_table,
            TruncateQuery: self._execute_truncate,
            InsertQuery: self._execute_insert,
            SelectQuery: self._execute_select,
            DeleteQuery: self._execute_delete,
            AddColumnQuery: self._execute_add_column,
            DropColumnQuery: self._execute_drop_column,
            AlterColumnQuery: self._execute_alter_column,
        }
        handler = handlers.get(type(query))
        if handler is None:
            return QueryResult(columns=[], rows=[], message=f"Unknown query type: {type(query).__name__}")

        try:
            return handler(query)
        except (FlatTablesError, ValueError) as e:
            logger.debug("Query %r failed: %s", query, e)
            return QueryResult(columns=[], rows=[], message=str(e))

    def _table(self, name: str) -> Table:
        if self.current_db is None:
            raise NoDatabaseSelectedError()
        return self.database.table(self.current_db, name, comparison=self.comparison)

    def _execute_create_database(self, query: CreateDatabaseQuery) -> QueryResult:
        self.database.new(query.name)
        return CreateResult(columns=[], rows=[], message=f"Created database: {query.name}")

    def _execute_drop_database(self, query: DropDatabaseQuery) -> QueryResult:
        self.database.drop(query.name)
        if self.current_db == query.name:
            self.current_db = None
        return DropResult(columns=[], rows=[], message=f"Dropped database: {query.name}")

    def _execute_use(self, query: UseQuery) -> QueryResult:
        self.database.use_db(query.name)
        self.current_db = query.name
        return UseResult(
            columns=[], rows=[], message=f"Switched to database: {query.name}", database=query.name
        )

    def _execute_show_databases(self, query: ShowDatabasesQuery) -> QueryResult:
        names = self.database.get_dbs()
        return QueryResult(columns=["database"], rows=[{"database": n} for n in names])

    def _execute_show_tables(self, query: ShowTablesQuery) -> QueryResult:
        if self.current_db is None:
            raise NoDatabaseSelectedError()
        names = self.database.get_tables(self.current_db)
        return QueryResult(columns=["table"], rows=[{"table": n} for n in names])

    def _execute_describe(self, query: DescribeQuery) -> QueryResult:
        schema = self._table(query.table).read_schema()
        rows = [{"column": c, "type": t.value} for c, t in zip(schema.cols, schema.types)]
        return QueryResult(columns=["column", "type"], rows=rows)

    def _execute_create_table(self, query: CreateTableQuery) -> QueryResult:
        table = self._table(query.table)
        table.create(
            [c.name for c in query.columns],
            [DataType.parse(c.type_name) for c in query.columns],
        )
        return CreateResult(columns=[], rows=[], message=f"Created table: {query.table}")

    def _execute_drop_table(self, query: DropTableQuery) -> QueryResult:
        self._table(query.table).drop()
        return DropResult(columns=[], rows=[], message=f"Dropped table: {query.table}")

    def _execute_truncate(self, query: TruncateQuery) -> QueryResult:
        self._table(query.table).truncate()
        return DropResult(columns=[], rows=[], message=f"Truncated table: {query.table}")

    def _execute_insert(self, query: InsertQuery) -> QueryResult:
        columns = SelectCols.ALL if query.columns is None else SelectCols.of(query.columns)
        count = self._table(query.table).insert(columns, query.rows)
        return InsertResult(
            columns=[],
            rows=[],
            message=f"Inserted {count} row{'s' if count != 1 else ''} into {query.table}",
            count=count,
        )

    def _execute_select(self, query: SelectQuery) -> QueryResult:
        table = self._table(query.table)
        if query.columns is None:
            columns = table.read_schema().cols
            rows = table.select(SelectCols.ALL, query.where)
        else:
            columns = list(query.columns)
            rows = table.select(SelectCols.of(columns), query.where)
        return QueryResult(columns=columns, rows=rows)

    def _execute_delete(self, query: DeleteQuery) -> QueryResult:
        count = self._table(query.table).delete(query.where)
        return DeleteResult(
            columns=[],
            rows=[],
            message=f"Deleted {count} row{'s' if count != 1 else ''} from {query.table}",
            count=count,
        )

    def _execute_add_column(self, query: AddColumnQuery) -> QueryResult:
        dtype = DataType.parse(query.column.type_name)
        self._table(query.table).add_col(query.column.name, dtype)
        return AlterResult(
            columns=[], rows=[], message=f"Added column {query.column.name} to {query.table}"
        )

    def _execute_drop_column(self, query: DropColumnQuery) -> QueryResult:
        self._table(query.table).remove_col(query.column)
        return AlterResult(
            columns=[], rows=[], message=f"Removed column {query.column} from {query.table}"
        )

    def _execute_alter_column(self, query: AlterColumnQuery) -> QueryResult:
        dtype = DataType.parse(query.column.type_name)
        self._table(query.table).alter(query.column.name, dtype)
        return AlterResult(
            columns=[],
            rows=[],
            message=f"Altered column {query.column.name} of {query.table} to {dtype.value}",
        )
