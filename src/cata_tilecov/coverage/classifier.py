"""
Coverage classifier.

For one tileset and a set of source files, decides for every game object
whether the tileset draws it directly (UNIQUE), through its ``looks_like``
chain (INHERITED) or not at all (NO_COVERAGE).

Usage:
    coverage = (
        TilesetCoverage.Builder.create(gfx_dir / "MshockXotto+")
        .exclude_overlays()
        .with_objects("items/tools.json", records)
        .build()
    )
    coverage.get_coverage_of_type(CoverageType.INHERITED, "items/tools.json")
"""

import logging
from functools import reduce
from pathlib import Path
from types import MappingProxyType
from typing import AbstractSet, Collection, Iterable, Mapping

from ..errors import CoverageResolutionError
from ..game_data.models import (
    GameObjectRecord,
    IdentifiableFilter,
    RecordIndex,
    excluded_by,
    index_by_primary_id,
    resolve_looks_like,
)
from ..tilesets import Tileset
from .models import CoverageMap, CoverageStats, CoverageType

logger = logging.getLogger(__name__)


def classify(
    record: GameObjectRecord,
    tile_ids: AbstractSet[str],
    index: RecordIndex,
) -> CoverageType:
    """Classify one record.

    Args:
        record: Record to classify, must have at least one id
        tile_ids: Ids the tileset draws
        index: Records of the same file by primary id, used to follow
               ``looks_like`` references

    Returns:
        Coverage of the record. A ``looks_like`` cycle is logged and
        classified as NO_COVERAGE.
    """
    if record.primary_id in tile_ids:
        return CoverageType.UNIQUE
    try:
        resolved = resolve_looks_like(record, index)
    except CoverageResolutionError as e:
        logger.warning(f"Unable to resolve '{record.primary_id}': {e}")
        return CoverageType.NO_COVERAGE
    if resolved != record:
        return CoverageType.INHERITED
    return CoverageType.NO_COVERAGE


def classify_file(
    records: Collection[GameObjectRecord],
    tile_ids: AbstractSet[str],
    filters: Iterable[IdentifiableFilter],
) -> dict[str, CoverageType]:
    """Classify every record of one file not excluded by `filters`.

    Records sharing a primary id produce one entry; the later one in
    `records` wins, both for the entry and for `looks_like` lookups. Pass
    records in source order (as `JsonFileTree` keeps them) for a stable
    result.
    """
    filters = tuple(filters)
    index = index_by_primary_id(records)
    coverage: dict[str, CoverageType] = {}
    for record in records:
        if excluded_by(record, filters):
            continue
        coverage[record.primary_id] = classify(record, tile_ids, index)
    return coverage


class TilesetCoverage:
    """Coverage of a set of source files by one tileset.

    Build instances with `TilesetCoverage.Builder`. Results are computed on
    construction and read-only afterwards.
    """

    def __init__(
        self,
        tileset: Tileset,
        objects: Mapping[Path, Collection[GameObjectRecord]],
        filters: AbstractSet[IdentifiableFilter],
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.tileset = tileset
        self.filters = frozenset(filters)

        # Every tile counts, filters only apply to game objects
        tile_ids = tileset.get_tile_ids()

        data: dict[Path, CoverageMap] = {}
        stats: dict[Path, CoverageStats] = {}
        for path in sorted(objects):
            coverage = classify_file(objects[path], tile_ids, self.filters)
            data[path] = MappingProxyType(coverage)
            stats[path] = CoverageStats.from_coverage(coverage)
            self.logger.debug(f"{tileset.name}: {path} -> {stats[path]}")

        self.data: Mapping[Path, CoverageMap] = MappingProxyType(data)
        self.stats: Mapping[Path, CoverageStats] = MappingProxyType(stats)
        self.logger.info(f"Computed coverage of {len(data)} files for tileset '{tileset.name}'")

    def get_coverage(self, path: str | Path) -> frozenset[str]:
        """Return the ids classified for `path`, empty if the file is unknown."""
        return frozenset(self.data.get(Path(path), {}))

    def get_coverage_of_type(self, coverage_type: CoverageType, path: str | Path) -> set[str]:
        """Return the ids of `path` classified as `coverage_type`."""
        return {
            object_id
            for object_id, value in self.data.get(Path(path), {}).items()
            if value is coverage_type
        }

    def totals(self) -> CoverageStats:
        """Return the statistics summed over every file."""
        return reduce(lambda a, b: a + b, self.stats.values(), CoverageStats())

    class Builder:
        """Collect the inputs of a `TilesetCoverage`.

        ``NO_EMPTY_ID`` is always active.
        """

        def __init__(self, tileset: Tileset):
            self.tileset = tileset
            self.filters: set[IdentifiableFilter] = {IdentifiableFilter.NO_EMPTY_ID}
            self.objects: dict[Path, Collection[GameObjectRecord]] = {}

        @classmethod
        def create(cls, tileset: Tileset | str | Path) -> "TilesetCoverage.Builder":
            """Create a builder for a loaded tileset or a tileset directory.

            A directory is loaded with `Tileset.load` and its errors propagate.
            """
            if not isinstance(tileset, Tileset):
                tileset = Tileset.load(tileset)
            return cls(tileset)

        def exclude_overlays(self) -> "TilesetCoverage.Builder":
            """Leave out objects whose first id is an overlay id."""
            self.filters.add(IdentifiableFilter.NO_OVERLAYS)
            return self

        def with_objects(
            self, path: str | Path, objects: Collection[GameObjectRecord]
        ) -> "TilesetCoverage.Builder":
            """Register the records of one source file."""
            self.objects[Path(path)] = objects
            return self

        def build(self) -> "TilesetCoverage":
            return TilesetCoverage(self.tileset, self.objects, self.filters)
