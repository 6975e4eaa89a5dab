"""Category descriptors."""

from dataclasses import dataclass
from enum import Enum


class TableLayout(Enum):
    """Row shape used when rendering a category table."""
    STANDARD = "standard"  # archive link + companion .torrent link
    BROADCAST = "broadcast"  # archive link only


@dataclass(frozen=True)
class Category:
    """A named group of archives living in its own source subdirectory."""
    id: str
    directory: str
    placeholder: str
    layout: TableLayout = TableLayout.STANDARD

    @classmethod
    def variant(cls, variant_id: str) -> "Category":
        """Standard variant category stored under a directory of the same name."""
        return cls(
            id=variant_id,
            directory=variant_id,
            placeholder=f"table-{variant_id}",
            layout=TableLayout.STANDARD,
        )

    @classmethod
    def broadcast(cls, directory: str = "broadcast") -> "Category":
        return cls(
            id="broadcast",
            directory=directory,
            placeholder="table-broadcasts",
            layout=TableLayout.BROADCAST,
        )
