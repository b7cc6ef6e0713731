"""
Cata-Tilecov: tileset coverage reports for Cataclysm: Dark Days Ahead

Computes, per tileset and per game data file, how many objects have their
own sprite, inherit one through ``looks_like`` or have none at all.
"""

__version__ = "0.1.0"
__author__ = "Cata-Tilecov Contributors"

from .errors import TilecovError
from .game_data import GameObjectRecord, IdentifiableFilter, JsonFileTree
from .tilesets import Tileset
from .coverage import CoverageReport, CoverageStats, CoverageType, TilesetCoverage

__all__ = [
    "TilecovError",
    # Game data
    "GameObjectRecord",
    "IdentifiableFilter",
    "JsonFileTree",
    # Tilesets
    "Tileset",
    # Coverage
    "TilesetCoverage",
    "CoverageType",
    "CoverageStats",
    "CoverageReport",
]
