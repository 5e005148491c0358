"""Interactive REPL for FTQ (Flat Tables Query) statements."""

from __future__ import annotations

import argparse
import logging
import readline  # noqa: F401 - enables line editing in input()
import sys
from pathlib import Path
from typing import Any

from flat_tables.config import Settings
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

# Results whose message reports success rather than an error
_SUCCESS_RESULTS = (UseResult, CreateResult, DropResult, InsertResult, DeleteResult, AlterResult)


def _split_statements(content: str) -> list[str]:
    """Split content into statements on semicolons outside string literals.

    ``--`` comments outside string literals are dropped up to the end of the line.
    """
    statements = []
    current = []
    quote: str | None = None
    escape_next = False
    in_comment = False

    for i, ch in enumerate(content):
        if in_comment:
            if ch == "\n":
                in_comment = False
                current.append(ch)
            continue

        if escape_next:
            current.append(ch)
            escape_next = False
            continue

        if quote is not None:
            if ch == "\\":
                escape_next = True
            elif ch == quote:
                quote = None
            current.append(ch)
            continue

        if ch == "-" and content.startswith("--", i):
            in_comment = True
        elif ch in ('"', "'"):
            quote = ch
            current.append(ch)
        elif ch == ";":
            stmt = "".join(current).strip()
            if stmt:
                statements.append(stmt)
            current = []
        else:
            current.append(ch)

    # Handle any remaining content
    stmt = "".join(current).strip()
    if stmt:
        statements.append(stmt)

    return statements


def format_value(value: Any, max_width: int = 40) -> str:
    """Format a stored value for display."""
    if value is None:
        return "NULL"
    s = str(value)
    if len(s) > max_width:
        return s[: max_width - 3] + "..."
    return s


def print_result(result: QueryResult, max_width: int = 80) -> None:
    """Print query results in a formatted table."""
    if isinstance(result, _SUCCESS_RESULTS):
        if result.message:
            print(result.message)
        if not result.rows:
            return
    elif result.message:
        print(f"Error: {result.message}")
        return

    if not result.rows:
        print("(no results)")
        return

    # Calculate column widths
    col_widths = {}
    for col in result.columns:
        col_widths[col] = len(col)

    for row in result.rows:
        for col in result.columns:
            val = format_value(row.get(col))
            col_widths[col] = max(col_widths[col], len(val))

    # Cap column widths
    max_col_width = 40
    for col in col_widths:
        col_widths[col] = min(col_widths[col], max_col_width)

    # Print header
    header = " | ".join(col.ljust(col_widths[col])[:col_widths[col]] for col in result.columns)
    print(header)
    print("-" * min(len(header), max_width))

    # Print rows
    for row in result.rows:
        values = []
        for col in result.columns:
            val = format_value(row.get(col))
            if len(val) > col_widths[col]:
                val = val[: col_widths[col] - 3] + "..."
            values.append(val.ljust(col_widths[col]))
        print(" | ".join(values))

    print(f"\n({len(result.rows)} row{'s' if len(result.rows) != 1 else ''})")


def print_help() -> None:
    """Print help information."""
    print("""
FTQ - Flat Tables Query Language

DATABASE:
  create database <db>     Create an empty database directory
  drop database <db>       Remove a database (drop its tables first)
  use <db>                 Select the current database
  show databases           List all databases
  show tables              List tables of the current database

TABLES:
  create table <t> (<col> <type>, ...)
                           Create (or replace) a table
                           Types: text, integer, float, boolean
  describe <t>             Show the columns of a table
  drop table <t>           Delete a table
  truncate <t>             Remove all rows, keep the schema
  alter table <t> add column <col> <type>
  alter table <t> drop column <col>
  alter table <t> alter column <col> <type>

ROWS:
  insert into <t> [(<col>, ...)] values (<v>, ...), ...
                           Omitted columns get their type's default
  select * from <t> [where <col> <op> <v>]
  select <col>, ... from <t> [where <col> <op> <v>]
  delete from <t> where <col> <op> <v>
                           Operators: = != < <= > >=

OTHER:
  help                     Show this help
  clear                    Clear the screen
  exit, quit               Leave the REPL

Statements end with ';'. Lines starting with -- are comments.
""")


def run_file(file_path: Path, executor: QueryExecutor, verbose: bool = False) -> int:
    """Execute statements from a file, stopping at the first error.

    Args:
        file_path: Path to the file containing statements
        executor: Executor bound to the database root
        verbose: If True, print each statement before executing

    Returns:
        0 on success, 1 on error
    """
    try:
        content = file_path.read_text()
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    # Strip comments (lines starting with --)
    lines = []
    for line in content.split("\n"):
        if line.strip().startswith("--"):
            continue
        lines.append(line)

    statements = _split_statements("\n".join(lines))
    if not statements:
        print("No statements found in file", file=sys.stderr)
        return 1

    parser = QueryParser()
    for stmt in statements:
        if verbose:
            print(f"ftq> {stmt};")
        try:
            query = parser.parse(stmt)
        except SyntaxError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        result = executor.execute(query)
        if result.message and not isinstance(result, _SUCCESS_RESULTS):
            print(f"Error: {result.message}", file=sys.stderr)
            return 1
        print_result(result)

    return 0


def run_repl(executor: QueryExecutor) -> int:
    """Run the interactive REPL."""
    print("FTQ REPL - Flat Tables Query Language")
    print(f"Root directory: {executor.database.root}")
    if executor.current_db:
        print(f"Current database: {executor.current_db}")
    else:
        print("No database selected. Use 'use <db>' to select a database.")
    print("Type 'help' for commands, 'exit' to quit.\n")

    parser = QueryParser()

    # Command history
    history_file = Path.home() / ".ftq_history"
    try:
        readline.read_history_file(history_file)
    except (FileNotFoundError, OSError):
        pass

    try:
        while True:
            prompt = f"ftq:{executor.current_db}> " if executor.current_db else "ftq> "
            try:
                line = input(prompt).strip()
            except EOFError:
                print()
                break

            if not line:
                continue

            lower = line.lower().rstrip(";")
            if lower in ("exit", "quit"):
                break
            elif lower == "help":
                print_help()
                continue
            elif lower == "clear":
                print("\033[2J\033[H", end="")
                continue

            # Multi-line statements continue until a semicolon or an empty line
            while not line.endswith(";"):
                try:
                    continuation = input("...> ").strip()
                except EOFError:
                    break
                if not continuation:
                    break
                line += " " + continuation

            try:
                query = parser.parse(line)
            except SyntaxError as e:
                print(f"Error: {e}")
                print()
                continue

            print_result(executor.execute(query))
            print()
    except KeyboardInterrupt:
        print("\nInterrupted.")
    finally:
        try:
            readline.write_history_file(history_file)
        except OSError:
            pass

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    settings = Settings()

    arg_parser = argparse.ArgumentParser(
        description="Interactive REPL for Flat Tables Query Language"
    )
    arg_parser.add_argument(
        "root_dir",
        type=Path,
        nargs="?",
        default=settings.root_dir,
        help="Directory holding the databases (default: %(default)s)",
    )
    arg_parser.add_argument(
        "-c", "--command",
        type=str,
        help="Execute a single statement and exit",
    )
    arg_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Execute statements from a file and exit",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print each statement before executing (for -f/--file)",
    )
    arg_parser.add_argument(
        "--comparison",
        choices=[c.value for c in Comparison],
        default=settings.comparison.value,
        help="How <, <=, > and >= compare values (default: %(default)s)",
    )
    arg_parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s)",
    )

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    executor = QueryExecutor(Database(args.root_dir), comparison=Comparison(args.comparison))

    if args.file:
        if not args.file.exists():
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 1
        return run_file(args.file, executor, args.verbose)

    if args.command:
        try:
            query = QueryParser().parse(args.command)
        except SyntaxError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        result = executor.execute(query)
        if result.message and not isinstance(result, _SUCCESS_RESULTS):
            print(f"Error: {result.message}", file=sys.stderr)
            return 1
        print_result(result)
        return 0

    return run_repl(executor)


if __name__ == "__main__":
    sys.exit(main())
