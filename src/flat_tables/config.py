"""
Configuration for flat tables.

Settings come from environment variables prefixed with FLAT_TABLES_, e.g.
FLAT_TABLES_ROOT_DIR=/var/lib/ftq or FLAT_TABLES_COMPARISON=typed.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from flat_tables.query import Comparison


class Settings(BaseSettings):
    """Flat tables configuration."""

    # Directory holding one sub-directory per database
    root_dir: Path = Field(default=Path("./sql"))

    # How <, <=, > and >= compare stored values
    comparison: Comparison = Field(
        default=Comparison.LEXICOGRAPHIC,
        description="'lexicographic' compares stored strings, 'typed' compares numbers as numbers",
    )

    log_level: str = Field(default="WARNING")

    model_config = {"env_prefix": "FLAT_TABLES_"}
