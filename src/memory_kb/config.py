"""Configuration management for memory-kb.

This module contains all configurable constants for the knowledge base.
Magic numbers are documented here rather than scattered throughout the codebase.
"""

import os
from pathlib import Path
from typing import Any

import yaml


class ConfigurationError(Exception):
    """Raised when configuration cannot be read or written."""

    pass


# =============================================================================
# File Locations
# =============================================================================

# Default home directory, relative to the user's home.
DEFAULT_HOME_DIRNAME = ".memory"

# Whole-store JSON document holding every entry.
DATA_FILE = "memory.json"

# User preferences (editor command).
SETTINGS_FILE = "settings.yaml"

# Edited text that failed to parse is parked here so no work is lost.
RECOVERY_DIR = "recovered"


def get_home(override: str | Path | None = None) -> Path:
    """Get the directory where memory-kb keeps its data and settings.

    Discovery order:
    1. Explicit override (the CLI's --home option)
    2. MEMORY_HOME environment variable
    3. ~/.memory
    """
    if override:
        return Path(override).expanduser()
    root = os.environ.get("MEMORY_HOME")
    if root:
        return Path(root).expanduser()
    return Path.home() / DEFAULT_HOME_DIRNAME


def data_path(home: Path) -> Path:
    return home / DATA_FILE


def settings_path(home: Path) -> Path:
    return home / SETTINGS_FILE


def recovery_dir(home: Path) -> Path:
    return home / RECOVERY_DIR


# =============================================================================
# Entry Limits
# =============================================================================

# Maximum length of an entry name (display identifier).
MAX_NAME_LEN = 50

# Display truncation for long values (descriptions in tables).
TRUNCATE_AT = 300


# =============================================================================
# Query Limits
# =============================================================================

# Ceiling applied when a query asks for a non-positive limit.
# Large enough to mean "everything" for a personal KB while still bounding output.
DEFAULT_QUERY_LIMIT = 999

# Default number of rows shown by `mem list`.
DEFAULT_LIST_LIMIT = 20


# =============================================================================
# Editor
# =============================================================================

# Last-resort editor when neither settings nor environment name one.
FALLBACK_EDITOR = "vi"


def load_settings(home: Path) -> dict[str, Any]:
    """Read settings.yaml from the home directory.

    Returns an empty dict when the file does not exist.

    Raises:
        ConfigurationError: If the file exists but cannot be read or parsed.
    """
    path = settings_path(home)
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read settings from {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    return data


def save_settings(home: Path, settings: dict[str, Any]) -> Path:
    """Write settings.yaml, creating the home directory if needed."""
    path = settings_path(home)
    try:
        home.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(settings, default_flow_style=False), encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Failed to write settings to {path}: {e}") from e
    return path


def get_editor_command(home: Path) -> str:
    """Resolve the editor command.

    Discovery order:
    1. `editor` key in settings.yaml
    2. VISUAL environment variable
    3. EDITOR environment variable
    4. FALLBACK_EDITOR
    """
    editor = load_settings(home).get("editor")
    if isinstance(editor, str) and editor.strip():
        return editor.strip()
    for var in ("VISUAL", "EDITOR"):
        value = os.environ.get(var)
        if value:
            return value
    return FALLBACK_EDITOR
