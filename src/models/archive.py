"""Archive catalog data models."""

import re
from dataclasses import dataclass
from pathlib import Path

from .category import Category

YEAR_MONTH_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})")


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month, ordered chronologically."""
    year: int
    month: int

    @classmethod
    def parse(cls, text: str) -> "YearMonth | None":
        """Parse ``YYYY-MM``; returns None for anything else."""
        match = YEAR_MONTH_PATTERN.fullmatch(text.strip())
        if match is None:
            return None
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            return None
        return cls(year, month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class ArchiveFile:
    """A single downloadable archive within a category."""
    name: str
    path: Path
    size_bytes: int
    date: YearMonth | None  # None when the filename carries no YYYY-MM stamp
    has_clock_data: bool
    game_count: int = 0


@dataclass(frozen=True)
class Catalog:
    """Archive files of one category, newest first."""
    category: Category
    files: tuple[ArchiveFile, ...]

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self):
        return iter(self.files)


@dataclass(frozen=True)
class Totals:
    """Aggregate figures for a catalog."""
    file_count: int = 0
    total_size_bytes: int = 0
    total_games: int = 0
