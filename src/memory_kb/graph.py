"""Link graph maintenance.

Entries reference each other by slug. Every edge is recorded twice: the
source lists the target in `links_to`, the target lists the source in
`linked_from`. LinkGraph is the only code that writes `linked_from`, and it
keeps both sides in step as entries are created, relinked, renamed and
deleted.

Repairs scan every entry (O(n)), which is fine for a personal knowledge base.
A slug that no longer resolves (a dangling link) is tolerated everywhere.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Literal, NamedTuple

from .markup import replace_links
from .models import Entry

log = logging.getLogger(__name__)

LinkField = Literal["links_to", "linked_from"]


class Neighbor(NamedTuple):
    """One side of an edge as seen from an entry."""

    slug: str
    direction: Literal["to", "from"]
    entry: Entry | None  # None when the slug is dangling


class Asymmetry(NamedTuple):
    """An edge recorded on one side only."""

    source: str
    target: str
    missing: LinkField  # Which side lacks its half of the edge


def _add(entry: Entry, field: LinkField, value: str) -> bool:
    current = getattr(entry, field)
    if value in current:
        return False
    setattr(entry, field, sorted([*current, value]))
    return True


def _discard(entry: Entry, field: LinkField, value: str) -> bool:
    current = getattr(entry, field)
    if value not in current:
        return False
    setattr(entry, field, [v for v in current if v != value])
    return True


def _replace(entry: Entry, field: LinkField, old: str, new: str) -> bool:
    current = getattr(entry, field)
    if old not in current:
        return False
    setattr(entry, field, sorted({new if v == old else v for v in current}))
    return True


class LinkGraph:
    """Keeps links_to/linked_from symmetric over a slug index.

    The index is owned by the store; LinkGraph reads it and mutates the
    entries in it, never the index itself.
    """

    def __init__(self, index: Mapping[str, Entry]) -> None:
        self._index = index

    def relink(self, entry: Entry, old_links: Iterable[str], new_links: Iterable[str]) -> None:
        """Apply a change in `entry`'s outgoing links to the targets' linked_from."""
        old = set(old_links)
        new = set(new_links)
        source = entry.slug

        for target_slug in sorted(new - old):
            target = self._index.get(target_slug)
            if target is None:
                log.debug("%s links to unknown entry %s", source, target_slug)
                continue
            _add(target, "linked_from", source)

        for target_slug in sorted(old - new):
            target = self._index.get(target_slug)
            if target is None:
                continue
            _discard(target, "linked_from", source)

    def attach(self, entry: Entry) -> None:
        """Wire a newly indexed entry into the graph.

        Outgoing links get their reciprocal edge, and entries whose links_to
        already named this slug (previously dangling) now become linked_from.
        """
        self.relink(entry, (), entry.links_to)
        entry.linked_from = sorted(
            other.slug for other in self._index.values() if entry.slug in other.links_to
        )

    def rename(self, old_slug: str, new_slug: str, new_name: str | None = None) -> int:
        """Rewrite every reference to old_slug as new_slug.

        With new_name, [[Old Name]] mentions in descriptions are rewritten
        too, so the text keeps agreeing with the link sets.

        Must be called after the index maps new_slug to the renamed entry.
        Returns the number of entries touched.
        """
        touched = 0
        for other in self._index.values():
            changed = _replace(other, "links_to", old_slug, new_slug)
            changed = _replace(other, "linked_from", old_slug, new_slug) or changed
            if new_name is not None:
                description = replace_links(other.description, old_slug, new_name)
                if description != other.description:
                    other.description = description
                    changed = True
            touched += int(changed)

        # References that were dangling on the new name now resolve
        renamed = self._index.get(new_slug)
        if renamed is not None:
            for other in self._index.values():
                if new_slug in other.links_to:
                    _add(renamed, "linked_from", other.slug)

        log.debug("Renamed %s -> %s in %d entries", old_slug, new_slug, touched)
        return touched

    def remove(self, slug: str) -> int:
        """Strip a deleted slug from every link set. Returns entries touched."""
        touched = 0
        for other in self._index.values():
            changed = _discard(other, "links_to", slug)
            changed = _discard(other, "linked_from", slug) or changed
            touched += int(changed)
        log.debug("Removed %s from %d entries", slug, touched)
        return touched

    def rebuild(self) -> int:
        """Recompute every linked_from from the links_to sets.

        Used after loading a snapshot that may have been edited by hand.
        Returns the number of entries whose linked_from changed.
        """
        inbound: dict[str, set[str]] = {slug: set() for slug in self._index}
        for source in self._index.values():
            for target_slug in source.links_to:
                if target_slug in inbound:
                    inbound[target_slug].add(source.slug)

        changed = 0
        for slug, entry in self._index.items():
            expected = sorted(inbound[slug])
            if entry.linked_from != expected:
                entry.linked_from = expected
                changed += 1
        if changed:
            log.info("Repaired linked_from on %d entries", changed)
        return changed

    def neighbors(self, entry: Entry) -> list[Neighbor]:
        """Outgoing then incoming links, each resolved to an entry or None."""
        result = [Neighbor(s, "to", self._index.get(s)) for s in entry.links_to]
        result.extend(Neighbor(s, "from", self._index.get(s)) for s in entry.linked_from)
        return result

    def check(self) -> list[Asymmetry]:
        """Find every edge recorded on only one side.

        Dangling slugs (targets that do not resolve) are not asymmetries.
        """
        problems: list[Asymmetry] = []
        for source in self._index.values():
            for target_slug in source.links_to:
                target = self._index.get(target_slug)
                if target is not None and source.slug not in target.linked_from:
                    problems.append(Asymmetry(source.slug, target_slug, "linked_from"))
            for origin_slug in source.linked_from:
                origin = self._index.get(origin_slug)
                if origin is not None and source.slug not in origin.links_to:
                    problems.append(Asymmetry(origin_slug, source.slug, "links_to"))
        return problems
