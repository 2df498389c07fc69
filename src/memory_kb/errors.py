"""Typed errors for memory-kb.

Every failure the store, persistence gateway or editor round-trip can raise
derives from KBError, which carries a stable ErrorCode and a details dict so
the CLI can report it as text or JSON (--json-errors).
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for programmatic error handling."""

    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORMAT_ERROR = "FORMAT_ERROR"
    STORAGE_IO_ERROR = "STORAGE_IO_ERROR"
    ENCODE_ERROR = "ENCODE_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    EDITOR_ERROR = "EDITOR_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


def format_error_json(code: str, message: str, details: dict | None = None) -> str:
    """Format an error as JSON for --json-errors output."""
    error: dict[str, dict[str, object]] = {"error": {"code": code, "message": message}}
    if details:
        error["error"]["details"] = details
    return json.dumps(error, default=str)


class KBError(Exception):
    """Base class for all knowledge base errors."""

    code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_json(self) -> str:
        return format_error_json(self.code.value, self.message, self.details)


class NotFoundError(KBError):
    """Lookup by type and name failed."""

    code = ErrorCode.ENTRY_NOT_FOUND

    def __init__(self, entry_type: str, name: str, *, excluded: bool = False) -> None:
        self.entry_type = entry_type
        self.name = name
        if excluded:
            message = f"{entry_type} '{name}' is excluded (use --all to include it)"
        else:
            message = f"There is no {entry_type.lower()} named '{name}'"
        super().__init__(message, {"type": entry_type, "name": name, "excluded": excluded})


class DuplicateNameError(KBError):
    """Create or rename collides with an existing slug anywhere in the store."""

    code = ErrorCode.DUPLICATE_NAME

    def __init__(self, name: str, slug: str, existing_type: str) -> None:
        self.name = name
        self.slug = slug
        self.existing_type = existing_type
        super().__init__(
            f"An entry named '{name}' already exists ({existing_type} '{slug}')",
            {"name": name, "slug": slug, "existing_type": existing_type},
        )


class ValidationError(KBError):
    """Entry fails validation (name too long, unsluggable, bad type)."""

    code = ErrorCode.VALIDATION_ERROR


class FormatError(KBError):
    """Markup could not be parsed back into an entry.

    The offending text is kept on the exception so callers can preserve the
    user's edits.
    """

    code = ErrorCode.FORMAT_ERROR

    def __init__(self, message: str, text: str) -> None:
        self.text = text
        super().__init__(message)


class StorageError(KBError):
    """Base for persistence boundary failures."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}", {"path": str(path)})


class StorageIOError(StorageError):
    code = ErrorCode.STORAGE_IO_ERROR


class EncodeError(StorageError):
    code = ErrorCode.ENCODE_ERROR


class DecodeError(StorageError):
    code = ErrorCode.DECODE_ERROR


class EditorError(KBError):
    """The external editor failed to launch or exited non-zero.

    `content` holds whatever was in the temporary file, `path` where it still
    lives on disk.
    """

    code = ErrorCode.EDITOR_ERROR

    def __init__(self, message: str, path: Path, content: str | None) -> None:
        self.path = path
        self.content = content
        super().__init__(message, {"path": str(path)})
