"""Tests for the catalog service."""

import asyncio
import tempfile
from pathlib import Path

import pytest
from hypothesis import given, strategies as st

from src.models import ArchiveFile, Category, YearMonth
from src.services import CatalogService, CountIndex, FileSystemService, archive_date, sort_newest_first


def write_archive(directory: Path, name: str, size: int) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_bytes(b"\0" * size)


@pytest.fixture
def service() -> CatalogService:
    return CatalogService(FileSystemService())


year_months = st.builds(
    YearMonth,
    year=st.integers(min_value=2013, max_value=2030),
    month=st.integers(min_value=1, max_value=12),
)


@st.composite
def archive_strategy(draw: st.DrawFn) -> ArchiveFile:
    date = draw(st.one_of(st.none(), year_months))
    name = f"lichess_db_{draw(st.integers(min_value=0, max_value=10**6))}_{date or 'x'}.pgn.zst"
    return ArchiveFile(
        name=name,
        path=Path("/db/standard") / name,
        size_bytes=draw(st.integers(min_value=0, max_value=10**12)),
        date=date,
        has_clock_data=False,
        game_count=draw(st.integers(min_value=0, max_value=10**8)),
    )


class TestArchiveDate:
    """Tests for extracting the month from archive names."""

    def test_lichess_style_name(self) -> None:
        assert archive_date("lichess_db_standard_rated_2023-01.pgn.zst") == YearMonth(2023, 1)

    def test_bare_month_name(self) -> None:
        assert archive_date("2023-02.pgn.zst") == YearMonth(2023, 2)

    def test_name_without_stamp(self) -> None:
        assert archive_date("lichess_db_standard_rated.pgn.zst") is None

    def test_invalid_month(self) -> None:
        assert archive_date("lichess_db_2023-13.pgn.zst") is None

    def test_stamp_must_precede_suffix(self) -> None:
        assert archive_date("2023-01-extra.pgn.zst") is None

    def test_non_ascii_digits_are_not_a_date(self) -> None:
        # Arabic-Indic digits for 2023-01
        assert archive_date("lichess_db_٢٠٢٣-٠١.pgn.zst") is None
        assert YearMonth.parse("٢٠٢٣-٠١") is None


@given(st.lists(archive_strategy(), max_size=30))
def test_sort_is_newest_first(files: list[ArchiveFile]) -> None:
    """Property: dates never increase along a sorted catalog, and undated
    archives come after every dated one.
    """
    ordered = sort_newest_first(files)

    assert sorted(ordered, key=id) == sorted(files, key=id)
    dated = [f.date for f in ordered if f.date is not None]
    assert all(a >= b for a, b in zip(dated, dated[1:]))
    first_undated = next((i for i, f in enumerate(ordered) if f.date is None), len(ordered))
    assert all(f.date is None for f in ordered[first_undated:])


@given(st.lists(archive_strategy(), max_size=30))
def test_sort_is_stable_for_equal_dates(files: list[ArchiveFile]) -> None:
    """Property: archives sharing a month keep their relative order."""
    ordered = sort_newest_first(files)

    for date in {f.date for f in files}:
        assert [f for f in ordered if f.date == date] == [f for f in files if f.date == date]


class TestCatalogBuild:
    """Tests for scanning category directories."""

    @pytest.mark.asyncio
    async def test_two_months_scenario(self, service: CatalogService, tmp_path: Path) -> None:
        category_dir = tmp_path / "standard"
        write_archive(category_dir, "2023-01.pgn.zst", 1000)
        write_archive(category_dir, "2023-02.pgn.zst", 2000)
        (category_dir / "counts.txt").write_text("2023-01.pgn.zst 5\n2023-02.pgn.zst 10", encoding="utf-8")

        catalog = await service.build(Category.variant("standard"), tmp_path)

        assert [f.name for f in catalog] == ["2023-02.pgn.zst", "2023-01.pgn.zst"]
        assert [f.size_bytes for f in catalog] == [2000, 1000]
        assert [f.game_count for f in catalog] == [10, 5]
        assert [f.date for f in catalog] == [YearMonth(2023, 2), YearMonth(2023, 1)]
        assert all(f.has_clock_data for f in catalog)
        assert catalog.files[0].path == category_dir / "2023-02.pgn.zst"

    @pytest.mark.asyncio
    async def test_ignores_other_entries(self, service: CatalogService, tmp_path: Path) -> None:
        category_dir = tmp_path / "atomic"
        write_archive(category_dir, "lichess_db_atomic_rated_2020-05.pgn.zst", 10)
        write_archive(category_dir, "lichess_db_atomic_rated_2020-05.pgn.zst.torrent", 10)
        write_archive(category_dir, "list.txt", 10)
        (category_dir / "old").mkdir()
        (category_dir / "counts.txt").write_text("", encoding="utf-8")

        catalog = await service.build(Category.variant("atomic"), tmp_path)

        assert [f.name for f in catalog] == ["lichess_db_atomic_rated_2020-05.pgn.zst"]

    @pytest.mark.asyncio
    async def test_missing_counts_resolve_to_zero(self, service: CatalogService, tmp_path: Path) -> None:
        category_dir = tmp_path / "horde"
        write_archive(category_dir, "lichess_db_horde_rated_2021-01.pgn.zst", 10)
        (category_dir / "counts.txt").write_text("something_else.pgn.zst 3\n", encoding="utf-8")

        catalog = await service.build(Category.variant("horde"), tmp_path)

        assert catalog.files[0].game_count == 0

    @pytest.mark.asyncio
    async def test_clock_threshold(self, service: CatalogService, tmp_path: Path) -> None:
        category_dir = tmp_path / "standard"
        for month in ("2017-03", "2017-04", "2017-05"):
            write_archive(category_dir, f"lichess_db_standard_rated_{month}.pgn.zst", 1)
        (category_dir / "counts.txt").write_text("", encoding="utf-8")

        catalog = await service.build(Category.variant("standard"), tmp_path)

        clocks = {str(f.date): f.has_clock_data for f in catalog}
        assert clocks == {"2017-05": True, "2017-04": True, "2017-03": False}

    @pytest.mark.asyncio
    async def test_custom_clock_threshold(self, tmp_path: Path) -> None:
        service = CatalogService(FileSystemService(), clock_since=YearMonth(2020, 1))
        category_dir = tmp_path / "standard"
        write_archive(category_dir, "lichess_db_standard_rated_2019-12.pgn.zst", 1)

        catalog = await service.build(Category.variant("standard"), tmp_path, counts=CountIndex())

        assert not catalog.files[0].has_clock_data

    @pytest.mark.asyncio
    async def test_undated_archive_sorts_last(self, service: CatalogService, tmp_path: Path) -> None:
        category_dir = tmp_path / "broadcast"
        write_archive(category_dir, "lichess_db_broadcast_2022-01.pgn.zst", 1)
        write_archive(category_dir, "lichess_db_broadcast_latest.pgn.zst", 1)
        write_archive(category_dir, "lichess_db_broadcast_2023-01.pgn.zst", 1)
        (category_dir / "counts.txt").write_text("", encoding="utf-8")

        catalog = await service.build(Category.broadcast(), tmp_path)

        assert [f.name for f in catalog][-1] == "lichess_db_broadcast_latest.pgn.zst"
        assert catalog.files[-1].date is None
        assert not catalog.files[-1].has_clock_data
        assert catalog.category.id == "broadcast"

    @pytest.mark.asyncio
    async def test_empty_directory(self, service: CatalogService, tmp_path: Path) -> None:
        (tmp_path / "chess960").mkdir()
        (tmp_path / "chess960" / "counts.txt").write_text("", encoding="utf-8")

        catalog = await service.build(Category.variant("chess960"), tmp_path)

        assert len(catalog) == 0

    @pytest.mark.asyncio
    async def test_missing_directory_raises(self, service: CatalogService, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await service.build(Category.variant("standard"), tmp_path, counts=CountIndex())

    @pytest.mark.asyncio
    async def test_missing_counts_file_raises(self, service: CatalogService, tmp_path: Path) -> None:
        write_archive(tmp_path / "standard", "2023-01.pgn.zst", 1)

        with pytest.raises(FileNotFoundError):
            await service.build(Category.variant("standard"), tmp_path)


@given(st.dictionaries(
    keys=st.tuples(st.integers(min_value=2013, max_value=2030), st.integers(min_value=1, max_value=12)),
    values=st.integers(min_value=0, max_value=5000),
    max_size=15,
))
def test_built_catalog_is_sorted(months: dict[tuple[int, int], int]) -> None:
    """Property: a catalog built from disk lists every archive once, newest first."""
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        category_dir = root / "standard"
        category_dir.mkdir()
        for (year, month), size in months.items():
            write_archive(category_dir, f"lichess_db_standard_rated_{year:04d}-{month:02d}.pgn.zst", size)

        catalog = asyncio.run(
            CatalogService(FileSystemService()).build(Category.variant("standard"), root, counts=CountIndex())
        )

    assert len(catalog) == len(months)
    dates = [(f.date.year, f.date.month) for f in catalog]
    assert dates == sorted(months, reverse=True)
    assert [f.size_bytes for f in catalog] == [months[d] for d in dates]
