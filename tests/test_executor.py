"""Tests for executing FTQ statements."""

from __future__ import annotations

from pathlib import Path

import pytest

from flat_tables.database import Database
from flat_tables.executor import (
    AlterResult,
    CreateResult,
    DeleteResult,
    DropResult,
    InsertResult,
    QueryExecutor,
    QueryResult,
    UseResult,
)
from flat_tables.parsing.query_parser import QueryParser
from flat_tables.query import Comparison


@pytest.fixture
def database(tmp_path: Path) -> Database:
    return Database(tmp_path / "sql")


@pytest.fixture
def executor(database) -> QueryExecutor:
    return QueryExecutor(database)


@pytest.fixture
def run(executor):
    parser = QueryParser()

    def _run(statement: str) -> QueryResult:
        return executor.execute(parser.parse(statement))

    return _run


@pytest.fixture
def shop(run):
    """Database 'shop' selected, with a populated items table."""
    run("create database shop")
    run("use shop")
    run("create table items (sku text, qty integer)")
    run('insert into items values ("a1", 5), ("a2", 3)')
    return run


class TestDatabaseStatements:
    def test_create_and_use(self, run, executor, database):
        result = run("create database shop")
        assert isinstance(result, CreateResult)
        result = run("use shop")
        assert isinstance(result, UseResult)
        assert result.database == "shop"
        assert executor.current_db == "shop"
        assert database.get_curr_db() == "shop"

    def test_create_duplicated(self, run):
        run("create database shop")
        result = run("create database shop")
        assert not isinstance(result, CreateResult)
        assert "Duplicated database" in result.message

    def test_show_databases(self, run):
        run("create database b")
        run("create database a")
        result = run("show databases")
        assert result.columns == ["database"]
        assert result.rows == [{"database": "a"}, {"database": "b"}]

    def test_drop_current_database(self, run, executor):
        run("create database shop")
        run("use shop")
        result = run("drop database shop")
        assert isinstance(result, DropResult)
        assert executor.current_db is None

    def test_current_db_restored_from_pointer(self, run, database):
        run("create database shop")
        run("use shop")
        assert QueryExecutor(database).current_db == "shop"

    def test_table_statement_without_database(self, run):
        result = run("select * from items")
        assert "No database selected" in result.message


class TestTableStatements:
    def test_select_all(self, shop):
        result = shop("select * from items")
        assert result.message is None
        assert result.columns == ["sku", "qty"]
        assert result.rows == [{"sku": "a1", "qty": "5"}, {"sku": "a2", "qty": "3"}]

    def test_select_projection_where(self, shop):
        result = shop("select qty from items where sku = 'a2'")
        assert result.columns == ["qty"]
        assert result.rows == [{"qty": "3"}]

    def test_insert_result(self, shop):
        result = shop("insert into items (sku) values ('a3')")
        assert isinstance(result, InsertResult)
        assert result.count == 1
        assert shop("select * from items where sku = 'a3'").rows == [{"sku": "a3", "qty": "0"}]

    def test_insert_non_ascii_text(self, shop):
        shop("insert into items values ('café', 1)")
        result = shop("select sku from items where sku = 'café'")
        assert result.rows == [{"sku": "café"}]

    def test_insert_type_error(self, shop):
        result = shop("insert into items values ('a3', 'many')")
        assert "Invalid Integer value" in result.message
        assert len(shop("select * from items").rows) == 2

    def test_delete(self, shop):
        result = shop("delete from items where qty = 3")
        assert isinstance(result, DeleteResult)
        assert result.count == 1
        assert shop("select * from items").rows == [{"sku": "a1", "qty": "5"}]

    def test_show_tables_and_describe(self, shop):
        assert shop("show tables").rows == [{"table": "items"}]
        result = shop("describe items")
        assert result.rows == [
            {"column": "sku", "type": "Text"},
            {"column": "qty", "type": "Integer"},
        ]

    def test_unknown_type_name(self, shop):
        result = shop("create table bad (x blob)")
        assert "Unknown data type" in result.message

    def test_alter_statements(self, shop):
        assert isinstance(shop("alter table items add column active bool"), AlterResult)
        assert shop("select active from items").rows == [{"active": "false"}, {"active": "false"}]
        assert isinstance(shop("alter table items alter column qty float"), AlterResult)
        assert shop("describe items").rows[1] == {"column": "qty", "type": "Float"}
        assert isinstance(shop("alter table items drop column active"), AlterResult)
        assert shop("select * from items").columns == ["sku", "qty"]

    def test_truncate_and_drop(self, shop):
        assert isinstance(shop("truncate items"), DropResult)
        assert shop("select * from items").rows == []
        assert isinstance(shop("drop table items"), DropResult)
        assert "Table not found" in shop("select * from items").message

    def test_typed_comparison(self, database, shop):
        shop("insert into items values ('a3', 10)")
        parser = QueryParser()
        typed = QueryExecutor(database, comparison=Comparison.TYPED)
        result = typed.execute(parser.parse("select sku from items where qty > 4"))
        assert result.rows == [{"sku": "a1"}, {"sku": "a3"}]
        result = shop("select sku from items where qty > 4")
        assert result.rows == [{"sku": "a1"}]
