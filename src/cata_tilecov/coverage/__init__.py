"""
Tileset coverage.

Classifies game objects by how a tileset draws them, aggregates per-file
statistics and renders HTML reports.
"""

from .models import CoverageMap, CoverageStats, CoverageType
from .classifier import TilesetCoverage, classify, classify_file
from .report import CoverageReport

__all__ = [
    "CoverageType",
    "CoverageStats",
    "CoverageMap",
    "TilesetCoverage",
    "classify",
    "classify_file",
    "CoverageReport",
]
