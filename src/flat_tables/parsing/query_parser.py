"""Parser for the FTQ (Flat Tables Query) language."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import ply.yacc as yacc

from flat_tables.parsing.query_lexer import QueryLexer
from flat_tables.query import Condition, Operator


@dataclass
class ColumnDef:
    """A column definition in CREATE TABLE or ALTER TABLE."""

    name: str
    type_name: str


@dataclass
class CreateDatabaseQuery:
    """A CREATE DATABASE query."""

    name: str


@dataclass
class DropDatabaseQuery:
    """A DROP DATABASE query."""

    name: str


@dataclass
class UseQuery:
    """A USE query to select the current database."""

    name: str


@dataclass
class ShowDatabasesQuery:
    """A SHOW DATABASES query."""

    pass


@dataclass
class ShowTablesQuery:
    """A SHOW TABLES query."""

    pass


@dataclass
class DescribeQuery:
    """A DESCRIBE query."""

    table: str


@dataclass
class CreateTableQuery:
    """A CREATE TABLE query."""

    table: str
    columns: list[ColumnDef] = field(default_factory=list)


@dataclass
class DropTableQuery:
    """A DROP TABLE query."""

    table: str


@dataclass
class TruncateQuery:
    """A TRUNCATE query."""

    table: str


@dataclass
class InsertQuery:
    """An INSERT query. ``columns`` is None when no column list is given."""

    table: str
    columns: list[str] | None = None
    rows: list[list[str]] = field(default_factory=list)


@dataclass
class SelectQuery:
    """A SELECT query. ``columns`` is None for ``select *``."""

    table: str
    columns: list[str] | None = None
    where: Condition | None = None


@dataclass
class DeleteQuery:
    """A DELETE query."""

    table: str
    where: Condition


@dataclass
class AddColumnQuery:
    """ALTER TABLE ... ADD COLUMN."""

    table: str
    column: ColumnDef


@dataclass
class DropColumnQuery:
    """ALTER TABLE ... DROP COLUMN."""

    table: str
    column: str


@dataclass
class AlterColumnQuery:
    """ALTER TABLE ... ALTER COLUMN <col> <type>."""

    table: str
    column: ColumnDef


Query = CreateDatabaseQuery | DropDatabaseQuery | UseQuery | ShowDatabasesQuery | ShowTablesQuery | DescribeQuery | CreateTableQuery | DropTableQuery | TruncateQuery | InsertQuery | SelectQuery | DeleteQuery | AddColumnQuery | DropColumnQuery | AlterColumnQuery


class QueryParser:
    """Parser for FTQ statements."""

    tokens = QueryLexer.tokens

    def __init__(self) -> None:
        self.lexer = QueryLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : query SEMICOLON
                     | query"""
        p[0] = p[1]

    # --- Databases ---

    def p_query_create_database(self, p: yacc.YaccProduction) -> None:
        """query : CREATE DATABASE name"""
        p[0] = CreateDatabaseQuery(name=p[3])

    def p_query_drop_database(self, p: yacc.YaccProduction) -> None:
        """query : DROP DATABASE name"""
        p[0] = DropDatabaseQuery(name=p[3])

    def p_query_use(self, p: yacc.YaccProduction) -> None:
        """query : USE name"""
        p[0] = UseQuery(name=p[2])

    def p_query_show_databases(self, p: yacc.YaccProduction) -> None:
        """query : SHOW DATABASES"""
        p[0] = ShowDatabasesQuery()

    def p_query_show_tables(self, p: yacc.YaccProduction) -> None:
        """query : SHOW TABLES"""
        p[0] = ShowTablesQuery()

    # --- Tables ---

    def p_query_describe(self, p: yacc.YaccProduction) -> None:
        """query : DESCRIBE name"""
        p[0] = DescribeQuery(table=p[2])

    def p_query_create_table(self, p: yacc.YaccProduction) -> None:
        """query : CREATE TABLE name LPAREN column_def_list RPAREN"""
        p[0] = CreateTableQuery(table=p[3], columns=p[5])

    def p_query_drop_table(self, p: yacc.YaccProduction) -> None:
        """query : DROP TABLE name"""
        p[0] = DropTableQuery(table=p[3])

    def p_query_truncate(self, p: yacc.YaccProduction) -> None:
        """query : TRUNCATE name
                 | TRUNCATE TABLE name"""
        p[0] = TruncateQuery(table=p[len(p) - 1])

    def p_query_alter_add(self, p: yacc.YaccProduction) -> None:
        """query : ALTER TABLE name ADD COLUMN column_def"""
        p[0] = AddColumnQuery(table=p[3], column=p[6])

    def p_query_alter_drop(self, p: yacc.YaccProduction) -> None:
        """query : ALTER TABLE name DROP COLUMN IDENTIFIER"""
        p[0] = DropColumnQuery(table=p[3], column=p[6])

    def p_query_alter_column(self, p: yacc.YaccProduction) -> None:
        """query : ALTER TABLE name ALTER COLUMN column_def"""
        p[0] = AlterColumnQuery(table=p[3], column=p[6])

    def p_column_def_list_single(self, p: yacc.YaccProduction) -> None:
        """column_def_list : column_def"""
        p[0] = [p[1]]

    def p_column_def_list_multiple(self, p: yacc.YaccProduction) -> None:
        """column_def_list : column_def_list COMMA column_def"""
        p[0] = p[1] + [p[3]]

    def p_column_def(self, p: yacc.YaccProduction) -> None:
        """column_def : IDENTIFIER IDENTIFIER"""
        p[0] = ColumnDef(name=p[1], type_name=p[2])

    # --- Rows ---

    def p_query_insert(self, p: yacc.YaccProduction) -> None:
        """query : INSERT INTO name VALUES row_list"""
        p[0] = InsertQuery(table=p[3], rows=p[5])

    def p_query_insert_columns(self, p: yacc.YaccProduction) -> None:
        """query : INSERT INTO name LPAREN identifier_list RPAREN VALUES row_list"""
        p[0] = InsertQuery(table=p[3], columns=p[5], rows=p[8])

    def p_row_list_single(self, p: yacc.YaccProduction) -> None:
        """row_list : row"""
        p[0] = [p[1]]

    def p_row_list_multiple(self, p: yacc.YaccProduction) -> None:
        """row_list : row_list COMMA row"""
        p[0] = p[1] + [p[3]]

    def p_row(self, p: yacc.YaccProduction) -> None:
        """row : LPAREN value_list RPAREN"""
        p[0] = p[2]

    def p_value_list_single(self, p: yacc.YaccProduction) -> None:
        """value_list : value"""
        p[0] = [p[1]]

    def p_value_list_multiple(self, p: yacc.YaccProduction) -> None:
        """value_list : value_list COMMA value"""
        p[0] = p[1] + [p[3]]

    def p_query_select_star(self, p: yacc.YaccProduction) -> None:
        """query : SELECT STAR FROM name where_clause"""
        p[0] = SelectQuery(table=p[4], where=p[5])

    def p_query_select_columns(self, p: yacc.YaccProduction) -> None:
        """query : SELECT identifier_list FROM name where_clause"""
        p[0] = SelectQuery(table=p[4], columns=p[2], where=p[5])

    def p_query_delete(self, p: yacc.YaccProduction) -> None:
        """query : DELETE FROM name WHERE condition"""
        p[0] = DeleteQuery(table=p[3], where=p[5])

    def p_where_clause_empty(self, p: yacc.YaccProduction) -> None:
        """where_clause : """
        p[0] = None

    def p_where_clause(self, p: yacc.YaccProduction) -> None:
        """where_clause : WHERE condition"""
        p[0] = p[2]

    def p_condition_comparison(self, p: yacc.YaccProduction) -> None:
        """condition : IDENTIFIER EQ value
                     | IDENTIFIER NEQ value
                     | IDENTIFIER LT value
                     | IDENTIFIER LTE value
                     | IDENTIFIER GT value
                     | IDENTIFIER GTE value"""
        p[0] = Condition(key=p[1], operator=Operator.parse(p[2]), value=p[3])

    # --- Terminals ---

    def p_value_literal(self, p: yacc.YaccProduction) -> None:
        """value : STRING
                 | INTEGER
                 | FLOAT"""
        p[0] = p[1]

    def p_value_boolean(self, p: yacc.YaccProduction) -> None:
        """value : TRUE
                 | FALSE"""
        p[0] = p[1].lower()

    def p_name(self, p: yacc.YaccProduction) -> None:
        """name : IDENTIFIER
                | STRING"""
        p[0] = p[1]

    def p_identifier_list_single(self, p: yacc.YaccProduction) -> None:
        """identifier_list : IDENTIFIER"""
        p[0] = [p[1]]

    def p_identifier_list_multiple(self, p: yacc.YaccProduction) -> None:
        """identifier_list : identifier_list COMMA IDENTIFIER"""
        p[0] = p[1] + [p[3]]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="statement", **kwargs)

    def parse(self, data: str) -> Query:
        """Parse a single statement."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        return self.parser.parse(data, lexer=self.lexer.lexer)
