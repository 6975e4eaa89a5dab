"""Catalog service: discovers the dated archives of a category."""

import re
from pathlib import Path

import structlog

from ..models import ArchiveFile, Catalog, Category, YearMonth
from .counts import COUNTS_FILE, CountIndex
from .filesystem import FileSystemService

log = structlog.stdlib.get_logger()

ARCHIVE_SUFFIX = ".pgn.zst"
ARCHIVE_DATE_PATTERN = re.compile(r"([0-9]{4}-[0-9]{2})" + re.escape(ARCHIVE_SUFFIX) + "$")

DEFAULT_CLOCK_SINCE = YearMonth(2017, 4)


def archive_date(name: str) -> YearMonth | None:
    """Extract the YYYY-MM stamp right before the archive suffix."""
    match = ARCHIVE_DATE_PATTERN.search(name)
    if match is None:
        return None
    return YearMonth.parse(match.group(1))


def sort_newest_first(files: list[ArchiveFile]) -> list[ArchiveFile]:
    """Stable sort by date, newest first; undated archives go last."""
    dated = [f for f in files if f.date is not None]
    undated = [f for f in files if f.date is None]
    dated.sort(key=lambda f: f.date, reverse=True)
    return dated + undated


class CatalogService:
    """Builds catalogs from category directories."""

    def __init__(
        self,
        filesystem: FileSystemService,
        clock_since: YearMonth = DEFAULT_CLOCK_SINCE,
    ) -> None:
        """Initialize the catalog service.

        Args:
            filesystem: File system service used for listing and stat calls
            clock_since: First month whose archives carry clock data
        """
        self._filesystem = filesystem
        self._clock_since = clock_since

    async def load_counts(self, category: Category, source_dir: Path) -> CountIndex:
        return await CountIndex.load(source_dir / category.directory / COUNTS_FILE, self._filesystem)

    async def build(
        self,
        category: Category,
        source_dir: Path,
        counts: CountIndex | None = None,
    ) -> Catalog:
        """Scan a category directory and return its catalog, newest first.

        Args:
            category: Category to scan
            source_dir: Root of the database tree
            counts: Game counts; read from the category's counts.txt if omitted

        Raises:
            OSError: If the directory cannot be listed, the counts file
                cannot be read, or an archive cannot be stat'ed
        """
        if counts is None:
            counts = await self.load_counts(category, source_dir)

        directory = source_dir / category.directory
        names = await self._filesystem.list_directory(directory)

        files: list[ArchiveFile] = []
        for name in sorted(n for n in names if n.endswith(ARCHIVE_SUFFIX)):
            files.append(await self._archive_file(directory / name, counts))

        catalog = Catalog(category=category, files=tuple(sort_newest_first(files)))
        log.info(
            "Catalog built",
            category=category.id,
            directory=str(directory),
            file_count=len(catalog),
            undated=sum(1 for f in catalog if f.date is None),
        )
        return catalog

    async def _archive_file(self, path: Path, counts: CountIndex) -> ArchiveFile:
        name = path.name
        date = archive_date(name)
        if date is None:
            log.warning("Archive name has no YYYY-MM stamp", name=name)

        return ArchiveFile(
            name=name,
            path=path,
            size_bytes=await self._filesystem.get_file_size(path),
            date=date,
            has_clock_data=date is not None and date >= self._clock_since,
            game_count=counts.lookup(name),
        )
