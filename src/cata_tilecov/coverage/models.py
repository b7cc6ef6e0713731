"""
Data models for tileset coverage.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class CoverageType(Enum):
    """How an object is drawn by a tileset."""
    UNIQUE = "unique"
    """The tileset has a sprite for the object's own id."""
    INHERITED = "inherited"
    """The object borrows a sprite through its ``looks_like`` chain."""
    NO_COVERAGE = "no_coverage"
    """The object has no visual representation."""


CoverageMap = Mapping[str, CoverageType]
"""Maps object id to its coverage in one file."""


@dataclass(frozen=True)
class CoverageStats:
    """Coverage counts for one file (or a sum over files)."""
    total: int = 0
    unique: int = 0
    inherited: int = 0
    no_coverage: int = 0

    @classmethod
    def from_coverage(cls, coverage: CoverageMap) -> "CoverageStats":
        """Tally a coverage map."""
        counts = Counter(coverage.values())
        return cls(
            total=len(coverage),
            unique=counts[CoverageType.UNIQUE],
            inherited=counts[CoverageType.INHERITED],
            no_coverage=counts[CoverageType.NO_COVERAGE],
        )

    @property
    def covered(self) -> int:
        """Objects with any sprite, own or inherited."""
        return self.unique + self.inherited

    @property
    def percent(self) -> float:
        """Share of covered objects in percent, 0.0 when there are none."""
        if not self.total:
            return 0.0
        return self.covered / self.total * 100

    def __add__(self, other: "CoverageStats") -> "CoverageStats":
        if not isinstance(other, CoverageStats):
            return NotImplemented
        return CoverageStats(
            total=self.total + other.total,
            unique=self.unique + other.unique,
            inherited=self.inherited + other.inherited,
            no_coverage=self.no_coverage + other.no_coverage,
        )
