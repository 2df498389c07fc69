"""Filter, sort and limit entries.

Queries are pure: they take a list of entries and a QuerySpec and return a
QueryResult without touching the store. Filters run in a fixed order and
each one is a no-op when its criterion is empty, so an unsatisfiable query
simply yields no entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from .config import DEFAULT_QUERY_LIMIT
from .models import Entry, EntryType, QueryResult, QuerySpec, SortOrder


class SearchBackend(Protocol):
    """Free-text search over descriptions and custom fields.

    Implementations narrow (and may reorder) the entries that match
    `keywords`. Ranking is left entirely to the backend.
    """

    def filter(self, entries: list[Entry], keywords: str) -> list[Entry]: ...


class PassThroughSearch:
    """Default backend: keeps every entry."""

    def filter(self, entries: list[Entry], keywords: str) -> list[Entry]:
        return entries


def covers_all_types(types: Iterable[EntryType]) -> bool:
    """True if the selection is empty or names every type (both mean "all")."""
    selected = set(types)
    return not selected or selected == set(EntryType)


def describe_types(types: Iterable[EntryType]) -> str:
    """Human-readable selection, e.g. "All types" or "Notes, Events"."""
    selected = set(types)
    if covers_all_types(selected):
        return "All types"
    return ", ".join(t.plural for t in EntryType if t in selected)


def filter_excluded(entries: list[Entry], include_excluded: bool) -> list[Entry]:
    if include_excluded:
        return entries
    return [e for e in entries if not e.exclude]


def filter_types(entries: list[Entry], types: Iterable[EntryType]) -> list[Entry]:
    selected = set(types)
    if covers_all_types(selected):
        return entries
    return [e for e in entries if e.type in selected]


def filter_starts_with(entries: list[Entry], starts_with: str) -> list[Entry]:
    if not starts_with:
        return entries
    prefix = starts_with.lower()
    return [e for e in entries if e.name.lower().startswith(prefix)]


def filter_contains(entries: list[Entry], contains: str) -> list[Entry]:
    if not contains:
        return entries
    needle = contains.lower()
    return [e for e in entries if needle in e.name.lower()]


def filter_tags(entries: list[Entry], tags: Iterable[str]) -> list[Entry]:
    """Keep entries carrying any of the tags (case-insensitive)."""
    wanted = {t.strip().lower() for t in tags if t.strip()}
    if not wanted:
        return entries
    return [e for e in entries if any(t.lower() in wanted for t in e.tags)]


def filter_search(
    entries: list[Entry],
    keywords: str,
    backend: SearchBackend | None = None,
) -> list[Entry]:
    if not keywords:
        return entries
    return (backend or PassThroughSearch()).filter(entries, keywords)


def sort_entries(entries: Sequence[Entry], order: SortOrder | str) -> list[Entry]:
    """Sort by name ascending or by modified descending.

    Both sorts are stable, so ties keep their incoming order.
    """
    if SortOrder.parse(order) is SortOrder.RECENT:
        return sorted(entries, key=_modified_key, reverse=True)
    return sorted(entries, key=lambda e: e.name)


def _modified_key(entry: Entry) -> float:
    return entry.modified.timestamp() if entry.modified else float("-inf")


def effective_limit(limit: int) -> int:
    """Non-positive limits mean "everything", bounded by DEFAULT_QUERY_LIMIT."""
    return limit if limit > 0 else DEFAULT_QUERY_LIMIT


def limit_entries(entries: list[Entry], limit: int) -> list[Entry]:
    return entries[: effective_limit(limit)]


def run_query(
    entries: Iterable[Entry],
    spec: QuerySpec,
    *,
    backend: SearchBackend | None = None,
) -> QueryResult:
    """Apply spec's filters, sort and limit to entries."""
    result = list(entries)
    result = filter_excluded(result, spec.include_excluded)
    result = filter_types(result, spec.types)
    result = filter_starts_with(result, spec.starts_with)
    result = filter_contains(result, spec.contains)
    result = filter_tags(result, spec.tags)
    result = filter_search(result, spec.search, backend)

    order = SortOrder.parse(spec.sort)
    limit = effective_limit(spec.limit)
    result = sort_entries(result, order)[:limit]

    return QueryResult(
        entries=result,
        types=list(spec.types),
        starts_with=spec.starts_with,
        contains=spec.contains,
        search=spec.search,
        tags=list(spec.tags),
        sort=order,
        limit=limit,
        include_excluded=spec.include_excluded,
    )
