"""Core business logic for memory-kb.

KnowledgeBase ties one EntryStore to its data file and exposes the
operations the CLI uses. There is no module-level state: each
KnowledgeBase owns its own store, so several can live in one process.

Mutations change the in-memory store only; callers persist with save().
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from . import config as _config
from . import markup, persistence
from .editor import use_editor
from .errors import StorageIOError
from .graph import Asymmetry, Neighbor
from .models import Entry, EntryType, QueryResult, QuerySpec
from .query import SearchBackend, run_query
from .slugs import slug as make_slug
from .store import EntryStore

log = logging.getLogger(__name__)


def _with_detected_links(entry: Entry, previous: Entry | None = None) -> Entry:
    """Add [[Name]] references in the description to the entry's links_to.

    Mentions that `previous` already carried without a link (the target was
    deleted or the link removed) stay unlinked.
    """
    skip = set(markup.unlinked_mentions(previous)) if previous is not None else set()
    detected = set(markup.extract_link_slugs(entry.description)) - skip
    if detected <= set(entry.links_to):
        return entry
    return entry.model_copy(update={"links_to": sorted({*entry.links_to, *detected})})


class KnowledgeBase:
    """A store plus the home directory it is loaded from and saved to."""

    def __init__(
        self,
        home: Path,
        store: EntryStore | None = None,
        *,
        search_backend: SearchBackend | None = None,
    ) -> None:
        self.home = home
        self.store = store if store is not None else EntryStore()
        self.search_backend = search_backend

    @classmethod
    def open(cls, home: str | Path | None = None, **kwargs) -> KnowledgeBase:
        """Load the knowledge base stored under home (see config.get_home).

        Raises:
            StorageIOError: If the data file cannot be read.
            DecodeError: If the data file is not a valid snapshot.
        """
        kb = cls(_config.get_home(home), **kwargs)
        kb.load()
        return kb

    @property
    def data_path(self) -> Path:
        return _config.data_path(self.home)

    # ─────────────────────────────────────────────────────────────────────
    # Persistence
    # ─────────────────────────────────────────────────────────────────────

    def load(self) -> None:
        """Replace the in-memory store with the contents of the data file."""
        snapshot = persistence.load(self.data_path)
        self.store = EntryStore.from_snapshot(snapshot, max_name_len=self.store.max_name_len)

    def save(self) -> Path:
        """Write the whole store to the data file."""
        persistence.save(self.data_path, self.store.snapshot())
        return self.data_path

    # ─────────────────────────────────────────────────────────────────────
    # Entries
    # ─────────────────────────────────────────────────────────────────────

    def create_entry(self, entry: Entry) -> Entry:
        return self.store.create(_with_detected_links(entry))

    def get_entry(
        self,
        entry_type: EntryType | str,
        name: str,
        *,
        include_excluded: bool = False,
    ) -> Entry:
        return self.store.get(entry_type, name, include_excluded=include_excluded)

    def update_entry(self, entry: Entry, *, name: str | None = None) -> Entry:
        previous = self.store.resolve(make_slug(name if name is not None else entry.name))
        return self.store.update(_with_detected_links(entry, previous), name=name)

    def rename_entry(self, entry_type: EntryType | str, name: str, new_name: str) -> Entry:
        """Rename an entry; every link to it follows the new name."""
        entry = self.store.get(entry_type, name, include_excluded=True)
        entry.name = new_name.strip()
        return self.store.update(entry, name=name)

    def delete_entry(self, entry_type: EntryType | str, name: str) -> Entry:
        return self.store.delete(entry_type, name)

    def count(self) -> int:
        """Total number of entries, excluded ones included."""
        return self.store.count()

    # ─────────────────────────────────────────────────────────────────────
    # Views
    # ─────────────────────────────────────────────────────────────────────

    def query(self, spec: QuerySpec | None = None, **params) -> QueryResult:
        """Filter, sort and limit the collection.

        Accepts a QuerySpec or its fields as keyword arguments.
        """
        spec = spec if spec is not None else QuerySpec(**params)
        return run_query(self.store.entries(), spec, backend=self.search_backend)

    def neighbors(self, entry_type: EntryType | str, name: str) -> list[Neighbor]:
        return self.store.neighbors(entry_type, name)

    def check(self) -> list[Asymmetry]:
        return self.store.check()

    def dangling_links(self) -> list[tuple[str, str]]:
        """(source, target) slug pairs whose target resolves to no entry."""
        return [
            (entry.slug, target)
            for entry in self.store.entries()
            for target in entry.links_to
            if self.store.resolve(target) is None
        ]

    def tag_counts(self) -> dict[str, int]:
        """Tag usage counts, most used first.

        Tags are grouped case-insensitively and reported in the spelling
        first seen.
        """
        spelling: dict[str, str] = {}
        counts: dict[str, int] = {}
        for entry in self.store.entries():
            for tag in entry.tags:
                key = tag.lower()
                spelling.setdefault(key, tag)
                counts[key] = counts.get(key, 0) + 1
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return {spelling[key]: count for key, count in ordered}

    # ─────────────────────────────────────────────────────────────────────
    # Editing
    # ─────────────────────────────────────────────────────────────────────

    def edit_entry(
        self,
        entry_type: EntryType | str,
        name: str,
        *,
        editor: str | None = None,
        text: str | None = None,
    ) -> Entry:
        """Round-trip an entry through the external editor and store the result.

        `text` overrides the initial document (used to retry with edits that
        previously failed to parse).

        Raises:
            EditorError: If the editor fails; the edits stay on disk.
            FormatError: If the edited text does not parse; it keeps the text.
            DuplicateNameError / ValidationError: If the edited name is rejected.
        """
        original = self.store.get(entry_type, name, include_excluded=True)
        initial = text if text is not None else markup.render(original)
        command = editor or _config.get_editor_command(self.home)
        edited_text = use_editor(initial, command)
        # parse() already resolved description mentions against `unlinked`
        edited = markup.parse(edited_text)
        if edited.name != original.name:
            log.info("Entry renamed in editor: %s -> %s", original.name, edited.name)
        return self.store.update(edited, name=original.name)

    def save_recovery(self, name: str, text: str) -> Path:
        """Park text that failed to parse under the recovery directory.

        Raises:
            StorageIOError: If the recovery file cannot be written.
        """
        directory = _config.recovery_dir(self.home)
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
        path = directory / f"{make_slug(name) or 'entry'}-{stamp}.md"
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StorageIOError(path, f"Failed to write recovery file: {e}") from e
        log.warning("Saved unparsed edits to %s", path)
        return path
