"""Shared test fixtures for memory-kb test suite.

Design:
- tmp_home: isolated home directory (MEMORY_HOME) in a temp directory
- store: EntryStore seeded with the Apple Pie / Apple Tree / Banana scenario
- kb: KnowledgeBase over tmp_home with the same seed entries, saved to disk
- runner / cli_invoke: CliRunner bound to tmp_home
"""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from click.testing import CliRunner

from memory_kb.cli import cli
from memory_kb.core import KnowledgeBase
from memory_kb.models import Entry, EntryType, new_entry
from memory_kb.slugs import slug
from memory_kb.store import EntryStore


def make_entry(entry_type: EntryType | str, name: str, **kwargs) -> Entry:
    """Build an unsaved entry; kwargs are passed to new_entry."""
    return new_entry(entry_type, name, **kwargs)


def seed(store: EntryStore) -> None:
    """Apple Pie -> Banana, Apple Tree -> Banana, plus an unrelated person."""
    store.create(make_entry(EntryType.NOTE, "Apple Pie", tags=["food"], links_to=["Banana"]))
    store.create(make_entry(EntryType.NOTE, "Apple Tree", tags=["plant"], links_to=["Banana"]))
    store.create(make_entry(EntryType.NOTE, "Banana", tags=["food"]))
    store.create(make_entry(EntryType.PERSON, "Ada Lovelace", tags=["Math"]))


def stamp(store: EntryStore, name: str, minutes: int) -> None:
    """Force an entry's modified time, relative to a fixed base."""
    entry = store._index[slug(name)]
    entry.modified = datetime(2024, 1, 1, tzinfo=UTC) + timedelta(minutes=minutes)


# ─────────────────────────────────────────────────────────────────────────────
# Core Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def tmp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty home directory, set as MEMORY_HOME for the test."""
    home = tmp_path / "memory"
    home.mkdir()
    monkeypatch.setenv("MEMORY_HOME", str(home))
    for var in ("VISUAL", "EDITOR", "MEMORY_QUIET"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def store() -> EntryStore:
    """Store seeded with the scenario entries."""
    s = EntryStore()
    seed(s)
    return s


@pytest.fixture
def kb(tmp_home: Path) -> KnowledgeBase:
    """KnowledgeBase over tmp_home with the scenario entries saved to disk."""
    knowledge_base = KnowledgeBase(tmp_home)
    seed(knowledge_base.store)
    knowledge_base.save()
    return knowledge_base


@pytest.fixture
def cli_invoke(runner: CliRunner, tmp_home: Path):
    """Helper for invoking CLI against tmp_home.

    Usage:
        def test_list(cli_invoke):
            result = cli_invoke(["list"])
            assert result.exit_code == 0
    """

    def _invoke(args: list[str], input: str | None = None):
        return runner.invoke(cli, args, input=input, catch_exceptions=False)

    return _invoke


@pytest.fixture
def set_modified():
    """Return stamp(store, name, minutes) for forcing modified times."""
    return stamp
