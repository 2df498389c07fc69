"""In-memory entry store.

The store owns every entry: one insertion-ordered list per type plus a
slug index used for lookups and link resolution. Slugs are unique across
the whole store, not just within a type.

Entries handed out by the store are copies. The only way to change a
stored entry is `update`, which keeps the index and the link graph in step.
Every operation validates before it mutates anything, so a failed call
leaves the store exactly as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime

from .config import MAX_NAME_LEN
from .errors import DuplicateNameError, NotFoundError, ValidationError
from .graph import Asymmetry, LinkGraph, Neighbor
from .models import Entry, EntryType, StoreSnapshot
from .slugs import slug as make_slug

log = logging.getLogger(__name__)


def _normalize_links(values: Iterable[str]) -> list[str]:
    """Accept names or slugs; return the canonical slug set."""
    return sorted({s for s in (make_slug(v) for v in values) if s})


class EntryView:
    """Restartable, lazy view over the entries of one type.

    Each iteration walks the live list in insertion order and yields copies.
    """

    def __init__(self, entries: list[Entry]) -> None:
        self._entries = entries

    def __iter__(self) -> Iterator[Entry]:
        for entry in self._entries:
            yield entry.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._entries)


class EntryStore:
    """The authoritative collection of entries for one knowledge base."""

    def __init__(self, *, max_name_len: int = MAX_NAME_LEN) -> None:
        self.max_name_len = max_name_len
        self._lists: dict[EntryType, list[Entry]] = {t: [] for t in EntryType}
        self._index: dict[str, Entry] = {}
        self._graph = LinkGraph(self._index)

    # ─────────────────────────────────────────────────────────────────────
    # Snapshots
    # ─────────────────────────────────────────────────────────────────────

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot, *, max_name_len: int = MAX_NAME_LEN) -> EntryStore:
        """Build a store from persisted data.

        Timestamps are kept as saved. linked_from is recomputed from links_to
        so a hand-edited file cannot leave the graph asymmetric.

        Raises:
            DuplicateNameError: If two saved entries share a slug.
        """
        store = cls(max_name_len=max_name_len)
        for entries in snapshot.lists().values():
            for entry in entries:
                slug = entry.slug
                existing = store._index.get(slug)
                if existing is not None:
                    raise DuplicateNameError(entry.name, slug, existing.type.value)
                stored = entry.model_copy(deep=True)
                stored.links_to = _normalize_links(stored.links_to)
                # Filed under its own type even if saved in another list
                store._lists[stored.type].append(stored)
                store._index[slug] = stored
        store._graph.rebuild()
        return store

    def snapshot(self) -> StoreSnapshot:
        lists = {t: [e.model_copy(deep=True) for e in self._lists[t]] for t in EntryType}
        return StoreSnapshot(
            notes=lists[EntryType.NOTE],
            events=lists[EntryType.EVENT],
            people=lists[EntryType.PERSON],
            places=lists[EntryType.PLACE],
            things=lists[EntryType.THING],
        )

    # ─────────────────────────────────────────────────────────────────────
    # Validation
    # ─────────────────────────────────────────────────────────────────────

    def _validate_name(self, name: str) -> str:
        """Check a name and return its slug."""
        if not name:
            raise ValidationError("Name is required")
        if len(name) > self.max_name_len:
            raise ValidationError(
                f"Name '{name}' is longer than {self.max_name_len} characters",
                {"name": name, "max_length": self.max_name_len},
            )
        slug = make_slug(name)
        if not slug:
            raise ValidationError(
                f"Name '{name}' must contain at least one letter or digit",
                {"name": name},
            )
        return slug

    def _check_unique(self, name: str, slug: str, own: Entry | None = None) -> None:
        existing = self._index.get(slug)
        if existing is not None and existing is not own:
            raise DuplicateNameError(name, slug, existing.type.value)

    def _lookup(self, entry_type: EntryType | str, name: str) -> Entry:
        resolved = EntryType.parse(entry_type)
        entry = self._index.get(make_slug(name))
        if entry is None or entry.type != resolved:
            raise NotFoundError(resolved.value, name)
        return entry

    # ─────────────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────────────

    def create(self, entry: Entry) -> Entry:
        """Add a new entry and wire it into the link graph.

        Raises:
            ValidationError: If the name is empty, too long or unsluggable.
            DuplicateNameError: If the slug exists anywhere in the store.
        """
        slug = self._validate_name(entry.name)
        self._check_unique(entry.name, slug)

        now = datetime.now(UTC)
        stored = entry.model_copy(deep=True)
        stored.created = now
        stored.modified = now
        stored.links_to = _normalize_links(stored.links_to)
        stored.linked_from = []

        self._lists[stored.type].append(stored)
        self._index[slug] = stored
        self._graph.attach(stored)
        log.debug("Created %s %s", stored.type.value, slug)
        return stored.model_copy(deep=True)

    def get(self, entry_type: EntryType | str, name: str, *, include_excluded: bool = False) -> Entry:
        """Look up an entry by type and name.

        Raises:
            NotFoundError: If no entry of that type has the name's slug, or
                the entry is excluded and include_excluded is not set.
        """
        entry = self._lookup(entry_type, name)
        if entry.exclude and not include_excluded:
            raise NotFoundError(entry.type.value, name, excluded=True)
        return entry.model_copy(deep=True)

    def resolve(self, slug: str) -> Entry | None:
        """Resolve a link target by slug, excluded entries included."""
        entry = self._index.get(slug)
        return entry.model_copy(deep=True) if entry is not None else None

    def update(self, entry: Entry, *, name: str | None = None) -> Entry:
        """Replace a stored entry with an edited version.

        `name` identifies the stored entry and defaults to `entry.name`; pass
        the previous name to rename. `created` and `linked_from` are kept
        from the stored entry, `modified` is bumped.

        Raises:
            NotFoundError: If no entry has the slug of `name`.
            ValidationError: If the new name is invalid.
            DuplicateNameError: If the new slug belongs to another entry.
        """
        previous_name = name if name is not None else entry.name
        old_slug = make_slug(previous_name)
        current = self._index.get(old_slug)
        if current is None:
            raise NotFoundError(entry.type.value, previous_name)

        new_slug = self._validate_name(entry.name)
        self._check_unique(entry.name, new_slug, own=current)

        updated = entry.model_copy(deep=True)
        updated.created = current.created
        updated.modified = datetime.now(UTC)
        updated.linked_from = list(current.linked_from)
        updated.links_to = _normalize_links(updated.links_to)
        old_links = list(current.links_to)

        entries = self._lists[current.type]
        position = next(i for i, e in enumerate(entries) if e is current)
        if updated.type == current.type:
            entries[position] = updated
        else:
            del entries[position]
            self._lists[updated.type].append(updated)
        del self._index[old_slug]
        self._index[new_slug] = updated

        if new_slug != old_slug:
            self._graph.rename(old_slug, new_slug, updated.name)
            old_links = [new_slug if s == old_slug else s for s in old_links]
            log.info("Renamed %s to %s", old_slug, new_slug)
        self._graph.relink(updated, old_links, updated.links_to)
        log.debug("Updated %s %s", updated.type.value, new_slug)
        return updated.model_copy(deep=True)

    def delete(self, entry_type: EntryType | str, name: str) -> Entry:
        """Remove an entry and strip its slug from every link set.

        Returns the removed entry as it was just before removal.

        Raises:
            NotFoundError: If no entry of that type has the name's slug.
        """
        entry = self._lookup(entry_type, name)
        slug = entry.slug
        entries = self._lists[entry.type]
        del entries[next(i for i, e in enumerate(entries) if e is entry)]
        del self._index[slug]
        self._graph.remove(slug)
        log.debug("Deleted %s %s", entry.type.value, slug)
        return entry.model_copy(deep=True)

    def all(self, entry_type: EntryType | str) -> EntryView:
        """Entries of one type in insertion order."""
        return EntryView(self._lists[EntryType.parse(entry_type)])

    def entries(self) -> list[Entry]:
        """Copies of every entry, grouped by type, insertion order within a type."""
        return [entry for t in EntryType for entry in self.all(t)]

    def count(self) -> int:
        return len(self._index)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and make_slug(name) in self._index

    # ─────────────────────────────────────────────────────────────────────
    # Graph
    # ─────────────────────────────────────────────────────────────────────

    def neighbors(self, entry_type: EntryType | str, name: str) -> list[Neighbor]:
        """Links to and from an entry, dangling slugs resolved to None."""
        entry = self._lookup(entry_type, name)
        return [
            Neighbor(n.slug, n.direction, n.entry.model_copy(deep=True) if n.entry else None)
            for n in self._graph.neighbors(entry)
        ]

    def check(self) -> list[Asymmetry]:
        """Audit the link graph; an empty list means every edge is symmetric."""
        return self._graph.check()
