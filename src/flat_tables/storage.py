"""Whole-file JSON persistence for table files."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from flat_tables.errors import SerializationError, TableIOError


def read_json(path: Path) -> Any:
    """Read and decode a JSON file.

    Raises:
        TableIOError: If the file cannot be read.
        SerializationError: If the content is not valid JSON.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TableIOError(f"Cannot read {path}: {e}", {"path": str(path)}) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON in {path}: {e}", {"path": str(path)}) from e


def write_json(path: Path, data: Any, pretty: bool = False) -> None:
    """Encode ``data`` and replace ``path`` with it atomically.

    The content goes to a temporary file in the same directory, which is then
    renamed over the target, so readers never observe a half-written file.

    Args:
        path: Destination file.
        data: JSON-compatible value.
        pretty: Indent by two spaces (schema files) instead of compact encoding.

    Raises:
        TableIOError: If the file cannot be written.
        SerializationError: If ``data`` is not JSON-serializable.
    """
    try:
        if pretty:
            content = json.dumps(data, indent=2)
        else:
            content = json.dumps(data, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode {path.name}: {e}", {"path": str(path)}) from e

    temp_path = None
    try:
        temp_fd, temp_path = tempfile.mkstemp(
            prefix=f".{path.name}.tmp.",
            dir=path.parent,
        )
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(temp_path, path)
    except OSError as e:
        if temp_path is not None and os.path.exists(temp_path):
            os.unlink(temp_path)
        raise TableIOError(f"Cannot write {path}: {e}", {"path": str(path)}) from e
