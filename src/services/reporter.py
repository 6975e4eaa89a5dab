"""Reporter: renders catalogs into table markup and URL lists."""

import html
from pathlib import Path

import structlog

from ..models import ArchiveFile, Catalog, TableLayout, Totals
from .aggregator import compute_totals
from .filesystem import FileSystemService
from .formatting import format_bytes, format_count, format_game_count, format_month
from .templates import substitute

log = structlog.stdlib.get_logger()

DEFAULT_BASE_URL = "https://database.lichess.org"
LIST_FILE = "list.txt"


class ReporterService:
    """Renders catalogs and writes their URL lists."""

    def __init__(
        self,
        filesystem: FileSystemService,
        base_url: str = DEFAULT_BASE_URL,
        list_file: str = LIST_FILE,
    ) -> None:
        self._filesystem = filesystem
        self._base_url = base_url.rstrip("/")
        self._list_file = list_file

    def render_row(self, archive: ArchiveFile, catalog: Catalog) -> str:
        directory = catalog.category.directory
        href = html.escape(f"{directory}/{archive.name}")
        links = f'<a href="{href}">.pgn.zst</a>'
        if catalog.category.layout is TableLayout.STANDARD:
            links += f' <span class="sep">/</span> <a href="{href}.torrent">.torrent</a>'

        return (
            "<tr>\n"
            f"    <td>{format_month(archive.date)}</td>\n"
            f'    <td class="right">{format_bytes(archive.size_bytes)}</td>\n'
            f'    <td class="right">{format_game_count(archive.game_count)}</td>\n'
            f"    <td>{links}</td>\n"
            "</tr>"
        )

    def render_rows(self, catalog: Catalog) -> str:
        """One table row per archive, in catalog order."""
        return "\n".join(self.render_row(archive, catalog) for archive in catalog)

    def render_totals_row(self, totals: Totals) -> str:
        return (
            '<tr class="total">\n'
            f"  <td>Total: {totals.file_count} files</td>\n"
            f'  <td class="right">{format_bytes(totals.total_size_bytes)}</td>\n'
            f'  <td class="right">{format_count(totals.total_games)}</td>\n'
            "  <td></td>\n"
            "  <td></td>\n"
            "</tr>"
        )

    def render_url_list(self, catalog: Catalog) -> list[str]:
        """Absolute download URLs, in catalog order."""
        directory = catalog.category.directory
        return [f"{self._base_url}/{directory}/{archive.name}" for archive in catalog]

    def url_list_text(self, catalog: Catalog) -> str:
        return "\n".join(self.render_url_list(catalog))

    def render_table(self, catalog: Catalog, template: str) -> str:
        """Fill a category table template.

        ``nbGames`` receives this category's own game total.
        ``variant`` is only filled for standard layouts.
        """
        totals = compute_totals(catalog)
        table = substitute(template, "nbGames", format_count(totals.total_games))
        table = substitute(table, "files", self.render_rows(catalog))
        table = substitute(table, "total", self.render_totals_row(totals))
        if catalog.category.layout is TableLayout.STANDARD:
            table = substitute(table, "variant", catalog.category.id, replace_all=True)
        return table

    async def write_url_list(self, catalog: Catalog, source_dir: Path) -> Path:
        """Write the category's list.txt, replacing the previous one."""
        path = source_dir / catalog.category.directory / self._list_file
        await self._filesystem.write_text(path, self.url_list_text(catalog))
        log.info("URL list written", category=catalog.category.id, path=str(path), urls=len(catalog))
        return path

    async def report(self, catalog: Catalog, source_dir: Path, template: str) -> str:
        """Write the URL list, then return the rendered table."""
        await self.write_url_list(catalog, source_dir)
        return self.render_table(catalog, template)
