"""Data models for the game database index generator."""

from .archive import ArchiveFile, Catalog, Totals, YearMonth
from .category import Category, TableLayout
from .config import DEFAULT_VARIANTS, IndexConfig

__all__ = [
    "ArchiveFile",
    "Catalog",
    "Category",
    "DEFAULT_VARIANTS",
    "IndexConfig",
    "TableLayout",
    "Totals",
    "YearMonth",
]
