"""Editable markup for a single entry.

An entry is rendered as markdown with YAML frontmatter: the frontmatter
holds the name, type, type-specific fields, tags and link sets; the body is
the description. References written as [[Name]] in the description become
outgoing links, so the frontmatter `links` list only carries links that are
not already mentioned in the text.

A mention whose link was removed (its target deleted, or the link dropped
by hand) is listed under `unlinked` so parsing does not bring it back.
"""

from __future__ import annotations

import re
from typing import Any

import frontmatter
from pydantic import ValidationError as PydanticValidationError

from .errors import FormatError, ValidationError
from .models import DETAILS_BY_TYPE, Entry, EntryType
from .slugs import slug as make_slug

# Pattern for [[link]] syntax - captures content between double brackets.
# [[Name|label]] links to Name.
LINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")


def extract_links(text: str) -> list[str]:
    """Extract [[Name]] references from text.

    Returns:
        Unique link targets (display names) in order of first appearance.
    """
    seen: set[str] = set()
    links: list[str] = []
    for match in LINK_PATTERN.findall(text):
        target = match.split("|", 1)[0].strip()
        if target and target not in seen:
            seen.add(target)
            links.append(target)
    return links


def extract_link_slugs(text: str) -> list[str]:
    """Slugs of every [[Name]] reference in text."""
    return sorted({s for s in (make_slug(name) for name in extract_links(text)) if s})


def unlinked_mentions(entry: Entry) -> list[str]:
    """Slugs mentioned as [[Name]] in the description but absent from links_to."""
    return [s for s in extract_link_slugs(entry.description) if s not in entry.links_to]


def replace_links(text: str, old_slug: str, new_name: str) -> str:
    """Point every [[Name]] / [[Name|label]] resolving to old_slug at new_name.

    Labels are kept.
    """

    def swap(match: re.Match[str]) -> str:
        target, sep, label = match.group(1).partition("|")
        if make_slug(target) != old_slug:
            return match.group(0)
        return f"[[{new_name}{sep}{label}]]"

    return LINK_PATTERN.sub(swap, text)


def render(entry: Entry) -> str:
    """Render an entry as markdown with YAML frontmatter."""
    mentioned = set(extract_link_slugs(entry.description))

    metadata: dict[str, Any] = {
        "name": entry.name,
        "type": entry.type.value,
    }
    metadata.update(entry.details.model_dump(exclude={"kind"}))
    metadata["tags"] = list(entry.tags)
    metadata["links"] = [s for s in entry.links_to if s not in mentioned]
    unlinked = unlinked_mentions(entry)
    if unlinked:
        metadata["unlinked"] = unlinked
    metadata["linked_from"] = list(entry.linked_from)
    metadata["custom"] = dict(entry.custom)
    metadata["exclude"] = entry.exclude
    if entry.created:
        metadata["created"] = entry.created.isoformat()
    if entry.modified:
        metadata["modified"] = entry.modified.isoformat()

    post = frontmatter.Post(entry.description, **metadata)
    return frontmatter.dumps(post, sort_keys=False, allow_unicode=True) + "\n"


def _as_list(value: Any, field: str, text: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    raise FormatError(f"'{field}' must be a list", text)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def parse(text: str) -> Entry:
    """Parse markup produced by render (possibly edited) back into an entry.

    Raises:
        FormatError: If the frontmatter is missing or malformed. The error
            keeps the full text so the edits can be recovered.
    """
    try:
        post = frontmatter.loads(text)
    except Exception as e:
        raise FormatError(f"Failed to parse frontmatter: {e}", text) from e

    meta = post.metadata
    if not meta:
        raise FormatError("Missing frontmatter (YAML block required at start of text)", text)

    name = _as_text(meta.get("name")).strip()
    if not name:
        raise FormatError("Frontmatter must include a name", text)

    try:
        entry_type = EntryType.parse(_as_text(meta.get("type") or EntryType.NOTE.value))
    except ValidationError as e:
        raise FormatError(e.message, text) from e

    details_cls = DETAILS_BY_TYPE[entry_type]
    details = {
        field: _as_text(meta.get(field))
        for field in details_cls.model_fields
        if field != "kind"
    }

    custom = meta.get("custom") or {}
    if not isinstance(custom, dict):
        raise FormatError("'custom' must be a mapping of names to values", text)

    exclude = meta.get("exclude", False)
    if exclude is None:
        exclude = False
    if not isinstance(exclude, bool):
        raise FormatError("'exclude' must be true or false", text)

    description = post.content
    unlinked = {make_slug(v) for v in _as_list(meta.get("unlinked"), "unlinked", text)}
    links = [make_slug(v) for v in _as_list(meta.get("links"), "links", text)]
    links.extend(s for s in extract_link_slugs(description) if s not in unlinked)

    data = {
        "name": name,
        "details": {"kind": entry_type.value, **details},
        "description": description,
        "tags": _as_list(meta.get("tags"), "tags", text),
        "links_to": [s for s in links if s],
        "linked_from": [make_slug(v) for v in _as_list(meta.get("linked_from"), "linked_from", text)],
        "custom": {str(k): _as_text(v) for k, v in custom.items()},
        "exclude": exclude,
        "created": meta.get("created"),
        "modified": meta.get("modified"),
    }

    try:
        return Entry.model_validate(data)
    except PydanticValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")
        raise FormatError("Invalid frontmatter:\n" + "\n".join(errors), text) from e
