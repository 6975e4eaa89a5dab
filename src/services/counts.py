"""Game count index read from a category's counts.txt."""

from pathlib import Path

import structlog

from .filesystem import FileSystemService

log = structlog.stdlib.get_logger()

COUNTS_FILE = "counts.txt"


class CountIndex:
    """Mapping from archive filename to its game count.

    The source is a text table of ``<filename> <count>`` lines. Values are
    kept as text and parsed on lookup, so a malformed entry only affects
    the archive it belongs to.
    """

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    @classmethod
    def parse(cls, raw_text: str) -> "CountIndex":
        entries: dict[str, str] = {}
        for line in raw_text.split("\n"):
            line = line.strip()
            if not line:
                continue
            key, _, value = line.partition(" ")
            entries[key] = value  # last one wins
        return cls(entries)

    @classmethod
    async def load(cls, path: Path, filesystem: FileSystemService) -> "CountIndex":
        """Read and parse a counts file; a missing file is an error."""
        index = cls.parse(await filesystem.read_text(path))
        log.debug("Count index loaded", path=str(path), entries=len(index))
        return index

    def lookup(self, name: str) -> int:
        """Game count for ``name``; 0 when missing or malformed."""
        raw = self._entries.get(name)
        if raw is None:
            return 0

        tokens = raw.split()
        value = tokens[0] if tokens else ""
        if not (value.isascii() and value.isdecimal()):
            log.debug("Malformed game count, using 0", name=name, value=raw)
            return 0
        return int(value)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
