"""
JSON file tree of a game data directory.

Walks a directory such as ``data/json``, decodes every JSON file into a tuple
of `GameObjectRecord` in source order and keeps them keyed by path relative
to the root.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from ..decoding import RecordDecoder, RecordStoreBuilder
from ..errors import NullJsonObjectError
from .models import GameObjectRecord, IdentifiableFilter, excluded_by

# Files nested deeper than this many directories below the root are ignored
MAX_DEPTH = 10

# Relative paths never included in a tree
PATH_BLACKLIST = frozenset({
    Path("monsters/monster_goals.json"),
})


def _starts_with(path: Path, prefix: Path) -> bool:
    """Component-wise path prefix test (``items`` matches ``items/x.json``)."""
    return path.parts[:len(prefix.parts)] == prefix.parts


class JsonFileTree:
    """Decoded JSON files under one root directory.

    Args:
        root: Directory to walk
        target: Optional directory relative to `root`; when given only files
                located directly in it are included
        max_workers: Size of the decoding thread pool

    Raises:
        FileNotFoundError: if `root` does not exist
        NotADirectoryError: if `root` is not a directory
        NullJsonObjectError: if a file decodes to nothing
        MalformedJsonError: if a file cannot be decoded
    """

    def __init__(self, root: str | Path, target: Optional[str | Path] = None, max_workers: int = 8):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.root = Path(root)
        self.target = Path(target) if target is not None else None

        if not self.root.exists():
            raise FileNotFoundError(f"Unable to find JSON directory: {self.root}")
        if not self.root.is_dir():
            raise NotADirectoryError(f"Expected path to be directory: {self.root}")

        json_files = self._find_files()
        self.logger.info(f"Found {len(json_files)} JSON files in {self.root}")

        files: dict[Path, tuple[GameObjectRecord, ...]] = {}
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_path = {
                executor.submit(self._load_file, json_file): json_file.relative_to(self.root)
                for json_file in json_files
            }
            for future in as_completed(future_to_path):
                relative = future_to_path[future]
                files[relative] = future.result()
                self.logger.debug(f"Loaded {len(files[relative])} objects from {relative}")

        self._files = MappingProxyType(dict(sorted(files.items())))

    def _should_include(self, relative: Path) -> bool:
        if len(relative.parts) > MAX_DEPTH:
            return False
        if relative in PATH_BLACKLIST:
            return False
        if self.target is not None:
            return relative.parent == self.target
        return True

    def _find_files(self) -> list[Path]:
        return [
            path for path in self.root.rglob("*.json")
            if path.is_file() and self._should_include(path.relative_to(self.root))
        ]

    def _load_file(self, path: Path) -> tuple[GameObjectRecord, ...]:
        records = (
            RecordStoreBuilder.create()
            .of_type(GameObjectRecord)
            .as_list()
            .with_decoder(RecordDecoder)
            .build(path)
        )
        if records is None:
            raise NullJsonObjectError(GameObjectRecord)
        return tuple(records)

    @property
    def files(self) -> Mapping[Path, tuple[GameObjectRecord, ...]]:
        """Read-only mapping of relative path to records.

        Paths are sorted; the records of each file keep their source order.
        """
        return self._files

    def get_json_objects(
        self, path: str | Path, *filters: IdentifiableFilter
    ) -> set[GameObjectRecord]:
        """Return records of every file located under `path`.

        Args:
            path: Relative file or directory path
            filters: Records matched by any of these are left out

        Returns:
            Set of records, empty if no file matches
        """
        prefix = Path(path)
        result: set[GameObjectRecord] = set()
        for relative, records in self._files.items():
            if _starts_with(relative, prefix):
                result.update(r for r in records if not excluded_by(r, filters))
        return result

    def get_object_ids(self, *filters: IdentifiableFilter) -> set[str]:
        """Return all ids of all records not matched by `filters`."""
        return {
            id_
            for records in self._files.values()
            for record in records
            if not excluded_by(record, filters)
            for id_ in record.ids
        }

    def __iter__(self) -> Iterator[tuple[Path, tuple[GameObjectRecord, ...]]]:
        return iter(self._files.items())

    def __len__(self) -> int:
        return len(self._files)
