"""Pydantic models for the knowledge base."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Iterable, Literal, Union

from pydantic import BaseModel, Field, field_validator

from .errors import ValidationError
from .slugs import slug as make_slug


class EntryType(str, Enum):
    """The closed set of entry types."""

    NOTE = "Note"
    EVENT = "Event"
    PERSON = "Person"
    PLACE = "Place"
    THING = "Thing"

    @property
    def plural(self) -> str:
        return _PLURALS[self]

    @classmethod
    def parse(cls, value: str | EntryType) -> EntryType:
        """Parse a type name, accepting singular or plural in any case.

        Raises:
            ValidationError: If the value names no entry type.
        """
        if isinstance(value, EntryType):
            return value
        key = value.strip().lower()
        for entry_type in cls:
            if key in (entry_type.value.lower(), entry_type.plural.lower()):
                return entry_type
        raise ValidationError(
            f"{value} is not a valid entry type.",
            {"type": value, "valid_types": [t.value for t in cls]},
        )


_PLURALS = {
    EntryType.NOTE: "Notes",
    EntryType.EVENT: "Events",
    EntryType.PERSON: "People",
    EntryType.PLACE: "Places",
    EntryType.THING: "Things",
}


def parse_types(values: Iterable[str]) -> list[EntryType]:
    """Parse a list of type names, silently skipping unknown ones.

    Comma-separated values are split, so ["notes,events"] works too.
    """
    types: list[EntryType] = []
    for value in values:
        for part in value.split(","):
            try:
                entry_type = EntryType.parse(part)
            except ValidationError:
                continue
            if entry_type not in types:
                types.append(entry_type)
    return types


# ─────────────────────────────────────────────────────────────────────────────
# Type-specific payloads
# ─────────────────────────────────────────────────────────────────────────────


class NoteDetails(BaseModel):
    kind: Literal["Note"] = "Note"


class EventDetails(BaseModel):
    kind: Literal["Event"] = "Event"
    start: str = ""
    end: str = ""


class PersonDetails(BaseModel):
    kind: Literal["Person"] = "Person"


class PlaceDetails(BaseModel):
    kind: Literal["Place"] = "Place"
    latitude: str = ""
    longitude: str = ""
    address: str = ""


class ThingDetails(BaseModel):
    kind: Literal["Thing"] = "Thing"


EntryDetails = Annotated[
    Union[NoteDetails, EventDetails, PersonDetails, PlaceDetails, ThingDetails],
    Field(discriminator="kind"),
]

DETAILS_BY_TYPE: dict[EntryType, type[BaseModel]] = {
    EntryType.NOTE: NoteDetails,
    EntryType.EVENT: EventDetails,
    EntryType.PERSON: PersonDetails,
    EntryType.PLACE: PlaceDetails,
    EntryType.THING: ThingDetails,
}


def _ensure_aware(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware, assuming UTC for naive datetimes."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def _unique_slugs(values: Iterable[str]) -> list[str]:
    return sorted({v for v in values if v})


def _unique_tags(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    tags: list[str] = []
    for value in values:
        tag = value.strip()
        if tag and tag.lower() not in seen:
            seen.add(tag.lower())
            tags.append(tag)
    return tags


class Entry(BaseModel):
    """A Note, Event, Person, Place or Thing.

    Fields shared by every type live here; fields that only one type has live
    on `details`, a union discriminated by `kind`.

    `links_to` and `linked_from` are sets of slugs kept as sorted lists so the
    representation is canonical. `linked_from` is owned by the link graph and
    is only ever written by the store.
    """

    name: str
    details: EntryDetails = Field(default_factory=NoteDetails)
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    links_to: list[str] = Field(default_factory=list)
    linked_from: list[str] = Field(default_factory=list)
    created: datetime | None = None
    modified: datetime | None = None
    custom: dict[str, str] = Field(default_factory=dict)
    exclude: bool = False  # Hidden from default listings, still a valid link target

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: str) -> str:
        return value.strip()

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        return _unique_tags(value)

    @field_validator("links_to", "linked_from")
    @classmethod
    def _canonical_links(cls, value: list[str]) -> list[str]:
        return _unique_slugs(value)

    @field_validator("created", "modified")
    @classmethod
    def _aware(cls, value: datetime | None) -> datetime | None:
        return _ensure_aware(value)

    @property
    def type(self) -> EntryType:
        return EntryType(self.details.kind)

    @property
    def slug(self) -> str:
        return make_slug(self.name)

    def has_tag(self, tag: str) -> bool:
        wanted = tag.strip().lower()
        return any(t.lower() == wanted for t in self.tags)

    def tags_string(self) -> str:
        """Tags as a comma-separated string."""
        return ",".join(self.tags)


def new_entry(
    entry_type: EntryType | str,
    name: str,
    description: str = "",
    tags: list[str] | None = None,
    *,
    links_to: list[str] | None = None,
    custom: dict[str, str] | None = None,
    exclude: bool = False,
    **details: Any,
) -> Entry:
    """Build an unsaved entry of the given type.

    Type-specific fields (start/end for events; latitude/longitude/address
    for places) are passed as keyword arguments.

    Raises:
        ValidationError: If the type is unknown or a detail field does not
            belong to that type.
    """
    resolved = EntryType.parse(entry_type)
    details_cls = DETAILS_BY_TYPE[resolved]
    unknown = set(details) - (set(details_cls.model_fields) - {"kind"})
    if unknown:
        raise ValidationError(
            f"{resolved.value} entries have no field(s): {', '.join(sorted(unknown))}",
            {"type": resolved.value, "fields": sorted(unknown)},
        )
    return Entry(
        name=name,
        details=details_cls(**details),
        description=description,
        tags=tags or [],
        links_to=links_to or [],
        custom=custom or {},
        exclude=exclude,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Queries
# ─────────────────────────────────────────────────────────────────────────────


class SortOrder(str, Enum):
    """The two supported result orderings."""

    RECENT = "recent"  # Modified, most recent first
    NAME = "name"  # Name, ascending

    @classmethod
    def parse(cls, value: str | SortOrder) -> SortOrder:
        """Resolve a sort request; anything unrecognized sorts by name."""
        if isinstance(value, SortOrder):
            return value
        if value.strip().lower() in ("recent", "modified"):
            return cls.RECENT
        return cls.NAME


class QuerySpec(BaseModel):
    """Filter, sort and limit parameters for a query."""

    types: list[EntryType] = Field(default_factory=list)
    starts_with: str = ""
    contains: str = ""
    search: str = ""
    tags: list[str] = Field(default_factory=list)
    sort: str = SortOrder.RECENT.value
    limit: int = 0
    include_excluded: bool = False

    @field_validator("types", mode="before")
    @classmethod
    def _parse_types(cls, value: Any) -> list[EntryType]:
        """Accept type names in any spelling; unknown names are dropped."""
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return parse_types(v.value if isinstance(v, EntryType) else str(v) for v in value)


class QueryResult(BaseModel):
    """Entries produced by a query plus the parameters that produced them."""

    entries: list[Entry] = Field(default_factory=list)
    types: list[EntryType] = Field(default_factory=list)
    starts_with: str = ""
    contains: str = ""
    search: str = ""
    tags: list[str] = Field(default_factory=list)
    sort: SortOrder = SortOrder.RECENT
    limit: int = 0
    include_excluded: bool = False

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]


# ─────────────────────────────────────────────────────────────────────────────
# Persistence
# ─────────────────────────────────────────────────────────────────────────────


class StoreSnapshot(BaseModel):
    """Everything that gets saved: one list per entry type."""

    notes: list[Entry] = Field(default_factory=list)
    events: list[Entry] = Field(default_factory=list)
    people: list[Entry] = Field(default_factory=list)
    places: list[Entry] = Field(default_factory=list)
    things: list[Entry] = Field(default_factory=list)

    def lists(self) -> dict[EntryType, list[Entry]]:
        return {
            EntryType.NOTE: self.notes,
            EntryType.EVENT: self.events,
            EntryType.PERSON: self.people,
            EntryType.PLACE: self.places,
            EntryType.THING: self.things,
        }
