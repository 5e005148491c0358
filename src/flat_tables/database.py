"""Databases as directories under a root, plus the current-database pointer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from flat_tables.errors import (
    DatabaseIOError,
    DatabaseNotFoundError,
    DuplicatedDatabaseError,
)
from flat_tables.query import Comparison

if TYPE_CHECKING:
    from flat_tables.table import Table

logger = logging.getLogger(__name__)


SCHEMA_SUFFIX = ".schema.json"
ENTRIES_SUFFIX = ".json"


class Database:
    """Catalog of databases stored under a single root directory.

    Each database is a directory ``<root>/<name>``; the name of the current
    database is kept as raw text in ``<root>/curr_db``. A Database instance is
    the context every table operation is given, so the root is never global.
    """

    CURR_DB = "curr_db"

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def path(self, name: str) -> Path:
        """Return the directory of database ``name`` (no I/O)."""
        return self.root / name

    def exists(self, name: str) -> bool:
        return self.path(name).is_dir()

    def exists_or_err(self, name: str) -> None:
        """Raise DatabaseNotFoundError unless database ``name`` exists."""
        if not self.exists(name):
            raise DatabaseNotFoundError(name)

    def new(self, name: str) -> None:
        """Create an empty database.

        Raises:
            DuplicatedDatabaseError: If the directory already exists.
            DatabaseIOError: If the directory cannot be created, or a file
                (such as the current-database pointer) holds the name.
        """
        db_dir = self.path(name)
        if self.exists(name):
            raise DuplicatedDatabaseError(name)
        if db_dir.exists():
            raise DatabaseIOError(
                f"Cannot create database {name}: a file with that name exists", {"database": name}
            )

        try:
            db_dir.mkdir(parents=True)
        except OSError as e:
            raise DatabaseIOError(f"Cannot create database {name}: {e}", {"database": name}) from e
        logger.info("Created database %s at %s", name, db_dir)

    def drop(self, name: str) -> None:
        """Remove an empty database.

        All of its tables must be dropped first; a non-empty directory is
        reported as DatabaseIOError and left in place.
        """
        self.exists_or_err(name)
        db_dir = self.path(name)

        try:
            db_dir.rmdir()
        except OSError as e:
            raise DatabaseIOError(f"Cannot drop database {name}: {e}", {"database": name}) from e

        curr_db = self.root / self.CURR_DB
        try:
            if curr_db.is_file() and curr_db.read_text(encoding="utf-8").strip() == name:
                curr_db.unlink()
        except OSError as e:
            raise DatabaseIOError(f"Cannot clear current database: {e}", {"database": name}) from e
        logger.info("Dropped database %s", name)

    def use_db(self, name: str) -> None:
        """Make ``name`` the current database."""
        self.exists_or_err(name)
        try:
            (self.root / self.CURR_DB).write_text(name, encoding="utf-8")
        except OSError as e:
            raise DatabaseIOError(f"Cannot set current database: {e}", {"database": name}) from e
        logger.info("Using database %s", name)

    def get_curr_db(self) -> str:
        """Return the current database, re-checking that it still exists.

        Raises:
            DatabaseIOError: If no current database has been set.
            DatabaseNotFoundError: If the current database was removed.
        """
        try:
            name = (self.root / self.CURR_DB).read_text(encoding="utf-8").strip()
        except OSError as e:
            raise DatabaseIOError(f"No current database: {e}") from e
        self.exists_or_err(name)
        return name

    def get_dbs(self) -> list[str]:
        """List all database names under the root."""
        if not self.root.is_dir():
            return []
        try:
            return sorted(p.name for p in self.root.iterdir() if p.is_dir())
        except OSError as e:
            raise DatabaseIOError(f"Cannot list databases: {e}") from e

    def get_tables(self, name: str) -> list[str]:
        """List the tables of database ``name`` that have both of their files."""
        self.exists_or_err(name)
        db_dir = self.path(name)
        try:
            files = {p.name for p in db_dir.iterdir() if p.is_file()}
        except OSError as e:
            raise DatabaseIOError(f"Cannot list tables of {name}: {e}", {"database": name}) from e

        tables = []
        for file_name in files:
            if not file_name.endswith(SCHEMA_SUFFIX):
                continue
            table_name = file_name[: -len(SCHEMA_SUFFIX)]
            if table_name + ENTRIES_SUFFIX in files:
                tables.append(table_name)
        return sorted(tables)

    def table(
        self,
        db_name: str,
        table_name: str,
        comparison: Comparison = Comparison.LEXICOGRAPHIC,
    ) -> Table:
        """Return a handle for ``table_name`` in database ``db_name``."""
        from flat_tables.table import Table

        return Table(self, db_name, table_name, comparison=comparison)
