"""
Tilesets.

Loads tileset metadata and tile-config files and exposes the set of ids a
tileset can draw.
"""

from .models import TileAtlas, TileConfig, TileEntry, TileInfo, TileAtlasDecoder, TileConfigDecoder
from .tileset import Tileset, parse_metadata

__all__ = [
    "Tileset",
    "parse_metadata",
    "TileConfig",
    "TileInfo",
    "TileAtlas",
    "TileEntry",
    "TileConfigDecoder",
    "TileAtlasDecoder",
]
