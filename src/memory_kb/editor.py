"""Hand text to an external editor and read it back."""

from __future__ import annotations

import logging
import shlex
import subprocess
import tempfile
from pathlib import Path

from .errors import EditorError

log = logging.getLogger(__name__)


def _read_if_present(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        return None


def use_editor(text: str, command: str, *, suffix: str = ".md") -> str:
    """Open `text` in the editor and return the edited content.

    Writes a temporary file, runs `command` on it, blocks until the editor
    exits and returns what the file holds afterwards. The temporary file is
    removed only on success.

    Raises:
        EditorError: If the editor cannot be launched or exits non-zero.
            The error carries the temporary path and its current content.
    """
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", prefix="memory-", suffix=suffix, delete=False
    ) as tmp:
        tmp.write(text)
        path = Path(tmp.name)

    argv = [*shlex.split(command), str(path)]
    log.info("Launching editor: %s", " ".join(argv))
    try:
        result = subprocess.run(argv, check=False)
    except OSError as e:
        raise EditorError(
            f"Failed to launch editor '{command}': {e}",
            path,
            _read_if_present(path),
        ) from e

    if result.returncode != 0:
        raise EditorError(
            f"Editor '{command}' exited with status {result.returncode}",
            path,
            _read_if_present(path),
        )

    try:
        edited = path.read_text(encoding="utf-8")
    except OSError as e:
        raise EditorError(f"Failed to read temporary file: {e}", path, None) from e

    try:
        path.unlink()
    except OSError as e:
        log.warning("Failed to delete temporary file %s: %s", path, e)
    return edited
