"""Index builder: runs every category through the pipeline and writes the page."""

from datetime import datetime, timezone
from pathlib import Path

import structlog

from ..models import Category, IndexConfig
from .catalog import CatalogService
from .filesystem import FileSystemService
from .formatting import format_count
from .reporter import ReporterService
from .templates import TemplateSet, placeholder, substitute

log = structlog.stdlib.get_logger()

PUZZLE_COUNT_FILE = "puzzle-count.txt"
EVAL_COUNT_FILE = "eval-count.txt"


def parse_total(text: str, source: str) -> int:
    """Parse a standalone count file; malformed content counts as 0."""
    value = text.strip()
    if not (value.isascii() and value.isdecimal()):
        log.warning("Malformed count file, using 0", source=source, content=text[:50])
        return 0
    return int(value)


class IndexBuilderService:
    """Builds index.html and the per-category URL lists for a database tree."""

    def __init__(
        self,
        template_dir: Path,
        config: IndexConfig | None = None,
        filesystem: FileSystemService | None = None,
        now: datetime | None = None,
    ) -> None:
        """Initialize the index builder.

        Args:
            template_dir: Directory holding the page templates and style sheet
            config: Generator settings (defaults if omitted)
            filesystem: File system service (a new one if omitted)
            now: Timestamp stamped into the page (current UTC time if omitted)
        """
        self._template_dir = template_dir
        self._config = config or IndexConfig()
        self._filesystem = filesystem or FileSystemService()
        self._now = now or datetime.now(timezone.utc)
        self._catalogs = CatalogService(self._filesystem, clock_since=self._config.clock_threshold)
        self._reporter = ReporterService(
            self._filesystem,
            base_url=self._config.base_url,
            list_file=self._config.list_file,
        )

    @property
    def date_updated(self) -> str:
        """ISO calendar date of ``now`` in UTC."""
        now = self._now
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date().isoformat()

    async def build(self, source_dir: Path) -> Path:
        """Run the whole pipeline and write the index page.

        Categories are processed one after another. Any failure aborts the
        run before the index page is written.

        Returns:
            Path of the written index page
        """
        log.info("Building index", source_dir=str(source_dir), categories=len(self._config.categories))
        templates = await TemplateSet.load(self._template_dir, self._filesystem)

        page = templates.index
        for category in self._config.categories:
            page = await self._render_category(category, source_dir, templates, page)

        page = await self._substitute_total(page, source_dir / PUZZLE_COUNT_FILE, "nbPuzzles")
        page = await self._substitute_total(page, source_dir / EVAL_COUNT_FILE, "nbEvals")
        page = substitute(page, "dateUpdated", self.date_updated, replace_all=True)
        page = substitute(page, "style", templates.style)

        output = source_dir / self._config.output_file
        await self._filesystem.write_text_atomic(output, page)
        log.info("Index built", output=str(output), date_updated=self.date_updated)
        return output

    async def _render_category(
        self,
        category: Category,
        source_dir: Path,
        templates: TemplateSet,
        page: str,
    ) -> str:
        catalog = await self._catalogs.build(category, source_dir)
        table = await self._reporter.report(catalog, source_dir, templates.table_for(category))

        if placeholder(category.placeholder) not in page:
            log.warning("Index template has no slot for category", category=category.id, placeholder=category.placeholder)
            return page
        return substitute(page, category.placeholder, table)

    async def _substitute_total(self, page: str, path: Path, name: str) -> str:
        total = parse_total(await self._filesystem.read_text(path), source=path.name)
        log.debug("Global total read", name=name, total=total)
        return substitute(page, name, format_count(total), replace_all=True)
