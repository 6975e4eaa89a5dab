"""Page templates and ``<!-- name -->`` placeholder substitution."""

from dataclasses import dataclass
from pathlib import Path

import structlog

from ..models import Category, TableLayout
from .errors import TemplateError
from .filesystem import FileSystemService

log = structlog.stdlib.get_logger()

INDEX_TEMPLATE = "index.html.tpl"
TABLE_TEMPLATE = "table.html.tpl"
BROADCAST_TABLE_TEMPLATE = "broadcast-table.html.tpl"
STYLE_FILE = "style.css"


def placeholder(name: str) -> str:
    return f"<!-- {name} -->"


def substitute(template: str, name: str, value: str, replace_all: bool = False) -> str:
    """Replace the first (or every) ``<!-- name -->`` marker with ``value``."""
    return template.replace(placeholder(name), value, -1 if replace_all else 1)


@dataclass(frozen=True)
class TemplateSet:
    """Verbatim template texts used to render the index page."""
    index: str
    table: str
    broadcast_table: str
    style: str

    def table_for(self, category: Category) -> str:
        if category.layout is TableLayout.BROADCAST:
            return self.broadcast_table
        return self.table

    @classmethod
    async def load(cls, template_dir: Path, filesystem: FileSystemService) -> "TemplateSet":
        """Load all templates from ``template_dir``.

        Raises:
            TemplateError: If any template file cannot be read
        """
        texts: dict[str, str] = {}
        for name in (INDEX_TEMPLATE, TABLE_TEMPLATE, BROADCAST_TABLE_TEMPLATE, STYLE_FILE):
            path = template_dir / name
            try:
                texts[name] = await filesystem.read_text(path)
            except OSError as e:
                raise TemplateError(
                    f"Cannot read template {name}",
                    template=str(path),
                    original_error=e,
                ) from e

        log.info("Templates loaded", template_dir=str(template_dir))
        return cls(
            index=texts[INDEX_TEMPLATE],
            table=texts[TABLE_TEMPLATE],
            broadcast_table=texts[BROADCAST_TABLE_TEMPLATE],
            style=texts[STYLE_FILE],
        )
