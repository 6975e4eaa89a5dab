"""Shared fixtures: a small database tree and the shipped templates."""

from pathlib import Path

import pytest

from src.models import DEFAULT_VARIANTS


def make_database(root: Path) -> Path:
    """Create a database tree with every default category."""
    for variant in DEFAULT_VARIANTS:
        directory = root / variant
        directory.mkdir(parents=True)
        counts = []
        for month, size, games in (("2023-01", 1000, 5), ("2023-02", 2000, 10)):
            name = f"lichess_db_{variant}_rated_{month}.pgn.zst"
            (directory / name).write_bytes(b"\0" * size)
            counts.append(f"{name} {games}")
        (directory / "counts.txt").write_text("\n".join(counts), encoding="utf-8")

    broadcast = root / "broadcast"
    broadcast.mkdir()
    (broadcast / "lichess_db_broadcast_2024-01.pgn.zst").write_bytes(b"\0" * 4321)
    (broadcast / "counts.txt").write_text("", encoding="utf-8")

    (root / "puzzle-count.txt").write_text("1234567\n", encoding="utf-8")
    (root / "eval-count.txt").write_text("98765432", encoding="utf-8")
    return root


@pytest.fixture
def database(tmp_path: Path) -> Path:
    return make_database(tmp_path / "db")


@pytest.fixture
def template_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "templates"
