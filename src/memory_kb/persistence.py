"""Whole-store JSON persistence."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError, EncodeError, StorageIOError
from .models import StoreSnapshot

log = logging.getLogger(__name__)


def load(path: Path) -> StoreSnapshot:
    """Read a snapshot from disk.

    A missing file is a fresh knowledge base and yields an empty snapshot.

    Raises:
        StorageIOError: If the file exists but cannot be read.
        DecodeError: If the file is not a valid snapshot.
    """
    if not path.exists():
        log.info("No data file at %s, starting empty", path)
        return StoreSnapshot()

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageIOError(path, f"Failed to read data file: {e}") from e

    try:
        snapshot = StoreSnapshot.model_validate_json(raw)
    except PydanticValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")
        raise DecodeError(path, "Invalid data file:\n" + "\n".join(errors)) from e

    log.info("Loaded %d entries from %s", sum(len(v) for v in snapshot.lists().values()), path)
    return snapshot


def save(path: Path, snapshot: StoreSnapshot) -> None:
    """Write a snapshot to disk, replacing the previous file atomically.

    Every field is written, including empty link lists.

    Raises:
        EncodeError: If the snapshot cannot be serialized.
        StorageIOError: If the file cannot be written.
    """
    try:
        payload = snapshot.model_dump_json(indent=2)
    except (ValueError, TypeError) as e:
        raise EncodeError(path, f"Failed to encode data: {e}") from e

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageIOError(path, f"Failed to write data file: {e}") from e

    log.info("Saved data to %s", path)
