"""Totals over a catalog."""

from collections.abc import Iterable

from ..models import ArchiveFile, Totals


def compute_totals(files: Iterable[ArchiveFile]) -> Totals:
    """Reduce archives to file count, byte size and game count."""
    file_count = 0
    total_size = 0
    total_games = 0
    for archive in files:
        file_count += 1
        total_size += archive.size_bytes
        total_games += archive.game_count
    return Totals(file_count=file_count, total_size_bytes=total_size, total_games=total_games)
