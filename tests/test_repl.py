"""Tests for the ftq command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from flat_tables.database import Database
from flat_tables.executor import QueryExecutor, QueryResult
from flat_tables.repl import _split_statements, format_value, main, print_result, run_file


class TestSplitStatements:
    def test_split_on_semicolons(self):
        assert _split_statements("use a; show tables;") == ["use a", "show tables"]

    def test_semicolon_in_string(self):
        stmts = _split_statements("insert into t values ('a;b'); select * from t")
        assert stmts == ["insert into t values ('a;b')", "select * from t"]

    def test_quote_in_trailing_comment(self):
        stmts = _split_statements("select * from t -- don't\n; select * from u")
        assert stmts == ["select * from t", "select * from u"]

    def test_comment_marker_in_string(self):
        stmts = _split_statements("insert into t values ('a--b'); show tables")
        assert stmts == ["insert into t values ('a--b')", "show tables"]

    def test_trailing_statement_without_semicolon(self):
        assert _split_statements("show databases") == ["show databases"]


class TestFormatting:
    def test_format_value(self):
        assert format_value(None) == "NULL"
        assert format_value("abc") == "abc"
        assert format_value("x" * 50, max_width=10) == "xxxxxxx..."

    def test_print_rows(self, capsys):
        print_result(QueryResult(columns=["sku"], rows=[{"sku": "a1"}, {"sku": "a2"}]))
        out = capsys.readouterr().out
        assert "sku" in out
        assert "a2" in out
        assert "(2 rows)" in out

    def test_print_error(self, capsys):
        print_result(QueryResult(columns=[], rows=[], message="Table not found: x"))
        assert capsys.readouterr().out == "Error: Table not found: x\n"

    def test_print_empty(self, capsys):
        print_result(QueryResult(columns=["a"], rows=[]))
        assert "(no results)" in capsys.readouterr().out


class TestRunFile:
    def test_script(self, tmp_path: Path, capsys):
        root = tmp_path / "sql"
        script = tmp_path / "setup.ftq"
        script.write_text("""
-- set up a small shop
create database shop;
use shop;
create table items (sku text, qty integer);
insert into items values ("a1", 5), ("a2", 3);
select sku from items where qty = 3;
""")
        exit_code = run_file(script, QueryExecutor(Database(root)), verbose=True)
        assert exit_code == 0
        out = capsys.readouterr().out
        assert "ftq> use shop;" in out
        assert "a2" in out
        assert (root / "shop" / "items.json").exists()

    def test_script_stops_at_first_error(self, tmp_path: Path, capsys):
        root = tmp_path / "sql"
        script = tmp_path / "bad.ftq"
        script.write_text("create database shop; use nowhere; create database never;")
        exit_code = run_file(script, QueryExecutor(Database(root)))
        assert exit_code == 1
        assert "Database not found: nowhere" in capsys.readouterr().err
        assert not (root / "never").exists()

    def test_script_syntax_error(self, tmp_path: Path, capsys):
        script = tmp_path / "bad.ftq"
        script.write_text("select from;")
        assert run_file(script, QueryExecutor(Database(tmp_path))) == 1
        assert "Syntax error" in capsys.readouterr().err

    def test_empty_script(self, tmp_path: Path):
        script = tmp_path / "empty.ftq"
        script.write_text("-- nothing here\n")
        assert run_file(script, QueryExecutor(Database(tmp_path))) == 1


class TestMain:
    def test_command(self, tmp_path: Path, capsys):
        root = tmp_path / "sql"
        assert main([str(root), "-c", "create database stats"]) == 0
        assert (root / "stats").is_dir()
        assert "Created database: stats" in capsys.readouterr().out

    def test_command_error(self, tmp_path: Path, capsys):
        assert main([str(tmp_path), "-c", "drop database nope"]) == 1
        assert "Database not found" in capsys.readouterr().err

    def test_command_syntax_error(self, tmp_path: Path, capsys):
        assert main([str(tmp_path), "-c", "drop everything"]) == 1
        assert "Syntax error" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys):
        assert main([str(tmp_path), "-f", str(tmp_path / "missing.ftq")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_root_from_environment(self, tmp_path: Path, monkeypatch):
        root = tmp_path / "env_root"
        monkeypatch.setenv("FLAT_TABLES_ROOT_DIR", str(root))
        assert main(["-c", "create database stats"]) == 0
        assert (root / "stats").is_dir()

    def test_invalid_comparison(self, tmp_path: Path):
        with pytest.raises(SystemExit):
            main([str(tmp_path), "--comparison", "numeric", "-c", "show databases"])
