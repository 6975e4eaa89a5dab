"""Configuration data models."""

from dataclasses import dataclass

from .archive import YearMonth
from .category import Category

DEFAULT_VARIANTS: tuple[str, ...] = (
    "standard",
    "antichess",
    "atomic",
    "chess960",
    "crazyhouse",
    "horde",
    "kingOfTheHill",
    "racingKings",
    "threeCheck",
)


@dataclass(frozen=True)
class IndexConfig:
    """Index generator configuration settings."""
    base_url: str = "https://database.lichess.org"
    variants: tuple[str, ...] = DEFAULT_VARIANTS
    broadcast_directory: str = "broadcast"
    clock_since: str = "2017-04"  # archives from this month on carry clock data
    output_file: str = "index.html"
    list_file: str = "list.txt"
    log_level: str = "INFO"

    @property
    def categories(self) -> tuple[Category, ...]:
        """Categories in processing order: variants first, broadcasts last."""
        variants = tuple(Category.variant(v) for v in self.variants)
        return variants + (Category.broadcast(self.broadcast_directory),)

    @property
    def clock_threshold(self) -> YearMonth:
        threshold = YearMonth.parse(self.clock_since)
        if threshold is None:
            raise ValueError(f"clock_since is not a YYYY-MM month: {self.clock_since!r}")
        return threshold
