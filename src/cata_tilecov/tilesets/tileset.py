"""
Tileset model.

A tileset is a directory under the game's ``gfx`` folder holding a
``tileset.txt`` metadata file, which names the tile-config JSON file, and
the sprite sheets that file references.
"""

import logging
from pathlib import Path
from typing import Optional

from ..decoding import RecordStoreBuilder
from ..errors import (
    ConfigFileNotFoundError,
    DirectoryNotFoundError,
    MalformedMetadataError,
    MetadataNotFoundError,
    MissingConfigPathError,
    NullConfigObjectError,
)
from ..game_data.models import IdentifiableFilter, excluded_by
from .models import TileAtlas, TileConfig, TileConfigDecoder

logger = logging.getLogger(__name__)

METADATA_FILE = "tileset.txt"
UNKNOWN = "Unknown"

# Metadata keys
NAME_KEY = "NAME"
VIEW_KEY = "VIEW"
JSON_KEY = "JSON"


def parse_metadata(path: Path) -> dict[str, str]:
    """Parse a ``tileset.txt`` file into a key/value dict.

    Lines have the form ``KEY: value`` or ``KEY=value`` and are split on the
    first separator. Blank lines and lines starting with ``#`` or ``!`` are
    ignored, as are lines without a separator. Later keys override earlier
    ones.

    Raises:
        MalformedMetadataError: if the file is not valid UTF-8
    """
    metadata: dict[str, str] = {}
    try:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as e:
        raise MalformedMetadataError(path, str(e)) from e
    for line in lines:
        line = line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        separators = [i for i in (line.find(":"), line.find("=")) if i != -1]
        if not separators:
            continue
        split = min(separators)
        metadata[line[:split].strip()] = line[split + 1:].strip()
    return metadata


class Tileset:
    """Loaded tileset: metadata plus decoded tile config.

    Use `Tileset.load` to create instances from a directory.
    """

    def __init__(
        self,
        name: str,
        display_name: str,
        directory: Path,
        config_path: Path,
        config: TileConfig,
    ):
        self.name = name
        self.display_name = display_name
        self.directory = directory
        self.config_path = config_path
        self.config = config

    @classmethod
    def load(cls, directory: str | Path) -> "Tileset":
        """Load the tileset located in `directory`.

        Args:
            directory: Tileset directory containing ``tileset.txt``

        Returns:
            Loaded tileset

        Raises:
            DirectoryNotFoundError: if `directory` does not exist
            MetadataNotFoundError: if ``tileset.txt`` is missing
            MalformedMetadataError: if ``tileset.txt`` is not valid UTF-8
            MissingConfigPathError: if ``tileset.txt`` has no (or an empty)
                ``JSON`` entry
            ConfigFileNotFoundError: if the tile-config file is missing
            NullConfigObjectError: if the tile-config file holds no data
            MalformedJsonError: if the tile-config file cannot be decoded
        """
        directory = Path(directory)
        if not directory.exists():
            raise DirectoryNotFoundError(directory)

        metadata_path = directory / METADATA_FILE
        if not metadata_path.is_file():
            raise MetadataNotFoundError(directory)

        metadata = parse_metadata(metadata_path)
        name = metadata.get(NAME_KEY, UNKNOWN)
        display_name = metadata.get(VIEW_KEY, UNKNOWN)

        config_name = metadata.get(JSON_KEY)
        if not config_name:
            raise MissingConfigPathError(name)

        config_path = directory / config_name
        if not config_path.is_file():
            raise ConfigFileNotFoundError(name, config_path)

        config: Optional[TileConfig] = (
            RecordStoreBuilder.create()
            .of_type(TileConfig)
            .as_single()
            .with_decoder(TileConfigDecoder)
            .build(config_path)
        )
        if config is None:
            raise NullConfigObjectError(TileConfig)

        logger.info(
            f"Loaded tileset '{name}' ({display_name}) with {len(config.atlases)} atlases"
        )
        return cls(name, display_name, directory, config_path, config)

    @property
    def tile_width(self) -> int:
        return self.config.tile_info.width

    @property
    def tile_height(self) -> int:
        return self.config.tile_info.height

    @property
    def pixelscale(self) -> int:
        return self.config.tile_info.pixelscale

    @property
    def is_iso(self) -> bool:
        return self.config.tile_info.iso

    @property
    def atlases(self) -> tuple[TileAtlas, ...]:
        return self.config.atlases

    def get_tile_ids(self, *filters: IdentifiableFilter) -> set[str]:
        """Return every id this tileset can draw.

        Tile entries matched by any of `filters` are left out.
        """
        return {
            id_
            for atlas in self.config.atlases
            for entry in atlas.tiles
            if not excluded_by(entry, filters)
            for id_ in entry.ids
        }

    def __repr__(self) -> str:
        return f"Tileset(name={self.name!r}, display_name={self.display_name!r}, directory={self.directory})"
