"""
Data models for CDDA game data.

`GameObjectRecord` is the decoded form of one object definition from the
game's ``data/json`` tree (item, monster, furniture...). Only the fields
needed to reason about visual coverage are kept.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence

from ..decoding import TextValue, list_like, nested, plain
from ..errors import CoverageResolutionError

# Ids starting with this prefix are reserved for overlay sprites
OVERLAY_PREFIX = "_overlay"


class Identifiable(Protocol):
    """Anything carrying an ordered sequence of ids."""

    @property
    def ids(self) -> Sequence[str]: ...


class IdentifiableFilter(Enum):
    """Exclusion filters over the ids of a record or tile entry."""
    NO_EMPTY_ID = "no_empty_id"
    NO_OVERLAYS = "no_overlays"

    def matches(self, item: Identifiable) -> bool:
        """Return True if `item` should be excluded."""
        match self:
            case IdentifiableFilter.NO_EMPTY_ID:
                return not item.ids or any(not id_ for id_ in item.ids)
            case IdentifiableFilter.NO_OVERLAYS:
                return bool(item.ids) and item.ids[0].startswith(OVERLAY_PREFIX)


def excluded_by(item: Identifiable, filters: Iterable[IdentifiableFilter]) -> bool:
    """Return True if any of `filters` matches `item`."""
    return any(f.matches(item) for f in filters)


@dataclass(frozen=True, eq=False)
class GameObjectRecord:
    """One object definition from the game data.

    Records are equal when they have the same type and the same ids; all
    other fields are descriptive.
    """
    type: str = plain(default="")
    ids: tuple[str, ...] = list_like("id")
    name_text: Optional[TextValue] = nested("name")
    description_text: Optional[TextValue] = nested("description")
    # One color per season
    foreground_color: tuple[str, ...] = list_like("color")
    background_color: tuple[str, ...] = list_like("bgcolor")
    looks_like: Optional[str] = plain()
    copy_from: Optional[str] = plain("copy-from")

    @property
    def primary_id(self) -> str:
        """First id of the record, empty if it has none."""
        return self.ids[0] if self.ids else ""

    @property
    def name(self) -> str:
        """Display name, empty if none was given."""
        return self.name_text.get() if self.name_text else ""

    @property
    def description(self) -> str:
        """Description text, empty if none was given."""
        return self.description_text.get() if self.description_text else ""

    def looks_like_what(self, objects: Iterable["GameObjectRecord"]) -> "GameObjectRecord":
        """Follow the ``looks_like`` chain of this record through `objects`.

        See `resolve_looks_like`.
        """
        return resolve_looks_like(self, objects)

    def copy_from_what(self) -> str:
        """Return the id this record copies from, empty if none."""
        return self.copy_from or ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameObjectRecord):
            return NotImplemented
        return self.type == other.type and self.ids == other.ids

    def __hash__(self) -> int:
        return hash((self.type, self.ids))

    def __str__(self) -> str:
        return (
            f"type: {self.type}, ids: {list(self.ids)}, name: {self.name}, "
            f"description: {self.description}, color: {list(self.foreground_color)}, "
            f"bgcolor: {list(self.background_color)}, looks_like: {self.looks_like or ''}, "
            f"copy-from: {self.copy_from_what()}"
        )


RecordIndex = Mapping[str, GameObjectRecord]
"""Maps primary id to record."""


def index_by_primary_id(objects: Iterable[GameObjectRecord]) -> dict[str, GameObjectRecord]:
    """Index records by their first id; the later record wins for a shared id."""
    return {obj.primary_id: obj for obj in objects if obj.ids}


def resolve_looks_like(
    record: GameObjectRecord,
    objects: RecordIndex | Iterable[GameObjectRecord],
) -> GameObjectRecord:
    """Resolve the record whose sprite `record` ends up using.

    Follows ``looks_like`` references hop by hop through `objects` (records
    or an index built by `index_by_primary_id`). Resolution stops at the
    first record without ``looks_like`` or whose target is not in
    `objects`; that record is returned. `record` itself is returned when it
    has no ``looks_like`` or `objects` is empty.

    A record shadowed in the index by a later record with the same id may
    still be resolved; the chain then continues through the indexed record.

    Raises:
        CoverageResolutionError: if the chain reaches a record it already
            went through.
    """
    index = objects if isinstance(objects, Mapping) else index_by_primary_id(objects)

    chain = [record.primary_id]
    # Records compare by (type, ids), duplicates must still count as distinct hops
    visited = {id(record)}
    current = record
    while current.looks_like and index:
        target = index.get(current.looks_like)
        if target is None:
            break
        chain.append(target.primary_id)
        if id(target) in visited:
            raise CoverageResolutionError(chain)
        visited.add(id(target))
        current = target
    return current
