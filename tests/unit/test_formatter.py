"""Tests for the report formatter: byte formatting, bucketing, sort order, layout."""

from __future__ import annotations

import pytest

from buildsize.core.formatter import NO_CHANGES, categorize, format_report, pretty_bytes
from buildsize.models.diff import ArtifactChange, DiffResult
from buildsize.models.reports import ChangeStatus


@pytest.fixture
def make_change(make_descriptor):
    """Factory fixture: an ArtifactChange with the given gzip delta."""

    def _factory(name: str, delta: int, base: int = 1000, renamed: bool = False) -> ArtifactChange:
        old_path = f"/d/{name}-old.js" if renamed else f"/d/{name}-x.js"
        new_path = f"/d/{name}-new.js" if renamed else f"/d/{name}-x.js"
        return ArtifactChange(
            previous=make_descriptor(old_path, base),
            current=make_descriptor(new_path, base + delta),
        )

    return _factory


class TestPrettyBytes:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (1, "1 B"),
            (999, "999 B"),
            (1000, "1 kB"),
            (1200, "1.2 kB"),
            (1536, "1.54 kB"),
            (1_234_567, "1.23 MB"),
            (999_500, "1000 kB"),
            (5_000_000_000, "5 GB"),
        ],
    )
    def test_unsigned(self, size, expected):
        assert pretty_bytes(size) == expected

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, " 0 B"),
            (200, "+200 B"),
            (-500, "-500 B"),
            (-1536, "-1.54 kB"),
            (2048, "+2.05 kB"),
        ],
    )
    def test_signed(self, size, expected):
        assert pretty_bytes(size, signed=True) == expected

    def test_negative_unsigned_keeps_sign(self):
        assert pretty_bytes(-1200) == "-1.2 kB"


class TestCategorize:
    def test_major_and_minor_order(self, make_change):
        changes = [
            make_change("a", 50),
            make_change("b", 300),
            make_change("c", -20),
            make_change("d", -500),
        ]
        major, minor = categorize(changes)
        assert [r.bytes_diff for r in major] == [300, -500]
        assert [r.bytes_diff for r in minor] == [50, -20]

    def test_threshold_boundaries(self, make_change):
        changes = [
            make_change("a", 100),
            make_change("b", 101),
            make_change("c", -100),
            make_change("d", -101),
        ]
        major, minor = categorize(changes)
        assert [r.bytes_diff for r in major] == [101, -101]
        assert [r.bytes_diff for r in minor] == [100, -100]

    def test_full_sort_order(self, make_change):
        changes = [
            make_change("inc-small", 150),
            make_change("dec-small", -150),
            make_change("ren-1", 0, renamed=True),
            make_change("minor-inc-small", 10),
            make_change("inc-big", 900),
            make_change("minor-dec-small", -5),
            make_change("dec-big", -900),
            make_change("minor-inc-big", 90),
            make_change("ren-2", 0, renamed=True),
            make_change("minor-dec-big", -95),
        ]
        major, minor = categorize(changes)
        assert [r.bytes_diff for r in major] == [900, 150, -900, -150]
        assert [r.bytes_diff for r in minor] == [0, 0, 90, 10, -95, -5]
        assert [r.name for r in minor[:2]] == ["ren-1", "ren-2"]

    def test_statuses(self, make_change):
        major, minor = categorize([make_change("a", 500), make_change("b", -500), make_change("c", 0)])
        assert [r.status for r in major] == [ChangeStatus.GREW, ChangeStatus.SHRANK]
        assert minor[0].status == ChangeStatus.RENAMED

    def test_custom_threshold(self, make_change):
        major, minor = categorize([make_change("a", 50)], threshold=10)
        assert [r.bytes_diff for r in major] == [50]
        assert minor == []


class TestFormatReport:
    def test_empty_diff_is_single_notice(self):
        report = format_report(DiffResult())
        assert report.major == NO_CHANGES
        assert report.minor == ""
        assert report.has_changes is False
        assert "|" not in report.major

    def test_renamed_major_increase(self, make_descriptor):
        diff = DiffResult(
            changed_artifacts=(
                ArtifactChange(
                    previous=make_descriptor("/d/app-aaa.js", 1000),
                    current=make_descriptor("/d/app-bbb.js", 1200),
                ),
            )
        )
        report = format_report(diff)
        assert report.major == "\n".join(
            [
                "### Changes in existing chunks :pencil2:",
                "| Size Change | Current Size | Status | Chunk",
                "| --- | --- | :---: | :--- |",
                "| **+200 B** | 1.2 kB | :small_red_triangle: | app",
                "### New chunks :heavy_plus_sign:",
                "Size | Status | Chunk",
                "| --- | :---: | :--- |",
                "### Removed chunks :heavy_minus_sign:",
                "Size | Status | Chunk",
                "| --- | :---: | :--- |",
            ]
        )
        assert report.minor == "| Size Change | Current Size | Status | Chunk\n| --- | --- | :---: | :--- |"

    def test_new_and_removed_tables(self, make_descriptor):
        diff = DiffResult(
            new_artifacts=(make_descriptor("/d/fresh-1.js", 2500),),
            removed_artifacts=(make_descriptor("/d/gone-2.js", 40),),
        )
        report = format_report(diff)
        assert "| **2.5 kB** | :exclamation: | fresh" in report.major
        assert "| **40 B** | :negative_squared_cross_mark: | gone" in report.major
        assert report.major.index("New chunks") < report.major.index("Removed chunks")

    def test_minor_rows_in_collapsed_section(self, make_change):
        diff = DiffResult(changed_artifacts=(make_change("tiny", -20), make_change("same", 0, renamed=True)))
        report = format_report(diff)
        assert "tiny" not in report.major
        minor_lines = report.minor.splitlines()
        assert minor_lines[2] == "|  0 B | 1 kB | :o: | same"
        assert minor_lines[3] == "| -20 B | 980 B | :arrow_down: | tiny"
        rendered = report.render()
        assert rendered.index("<details>") < rendered.index("tiny")
