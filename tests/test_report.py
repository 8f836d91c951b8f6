"""Tests for sitemin.report."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitemin.models import (
    KIND_COPY,
    KIND_CSS,
    KIND_HTML,
    BuildStats,
    FileResult,
    OutputFile,
    SourceFile,
)
from sitemin.report import (
    elapsed_seconds,
    format_file_line,
    human_size,
    percent_saved,
    render_summary,
)


def _result(kind: str, rel_path: str, original: int, new: int | None, error: str | None = None) -> FileResult:
    source = SourceFile(rel_path=rel_path, path=Path("/src") / rel_path, extension=kind, size=original)
    output = None
    if new is not None:
        output = OutputFile(rel_path=rel_path, path=Path("/dist") / rel_path, size=new)
    return FileResult(kind=kind, source=source, output=output, error=error)


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0B"),
        (1023, "1023B"),
        (1024, "1.00KB"),
        (1536, "1.50KB"),
        (1_048_575, "1023.99KB"),
        (1_048_576, "1.00MB"),
        (3 * 1_048_576 + 524_288, "3.50MB"),
    ],
)
def test_human_size_uses_binary_units(size: int, expected: str) -> None:
    assert human_size(size) == expected


@pytest.mark.parametrize(
    ("original", "new", "expected"),
    [
        (100, 55, 45),
        (100, 100, 0),
        (100, 120, 0),
        (3, 2, 34),
        (0, 0, 0),
        (0, 10, 0),
    ],
)
def test_percent_saved_is_never_negative(original: int, new: int, expected: int) -> None:
    assert percent_saved(original, new) == expected


def test_elapsed_seconds() -> None:
    assert elapsed_seconds(10.0, 12.5) == pytest.approx(2.5)
    assert elapsed_seconds(5.0, 4.0) == 0.0


def test_format_file_line_tags_each_kind() -> None:
    assert format_file_line(_result(KIND_HTML, "index.html", 100, 55)) == "[HTML] 45%  saved : index.html"
    assert format_file_line(_result(KIND_CSS, "css/site.css", 100, 120)) == "[CSS ] 0%   saved : css/site.css"
    assert format_file_line(_result(KIND_COPY, "img/a.png", 10, 10)) == "[COPY]             : img/a.png"
    assert (
        format_file_line(_result(KIND_HTML, "bad.html", 10, None, error="Permission denied"))
        == "[SKIP] bad.html (Permission denied)"
    )


def test_render_summary_reports_counts_and_savings() -> None:
    stats = BuildStats(started_at=100.0)
    stats.record(_result(KIND_HTML, "index.html", 2048, 1024))
    stats.record(_result(KIND_CSS, "site.css", 1024, 512))
    stats.record(_result(KIND_COPY, "logo.png", 1024, 1024))
    stats.record(_result(KIND_HTML, "broken.html", 50, None, error="Permission denied"))
    stats.finished_at = 101.5

    summary = render_summary(stats)

    assert "BUILD SUMMARY" in summary
    assert "Total Time:     1.50 seconds" in summary
    assert "HTML: 1 | CSS: 1 | Assets: 1" in summary
    assert "Source Size:    4.00KB" in summary
    assert "Build Size:     2.50KB" in summary
    assert "Total Saved:    1.50KB (38%)" in summary
    assert "Skipped:        1" in summary
    assert "broken.html: Permission denied" in summary


def test_render_summary_never_reports_negative_savings() -> None:
    stats = BuildStats(started_at=0.0)
    stats.record(_result(KIND_HTML, "index.html", 100, 120))
    stats.finish()

    summary = render_summary(stats)

    assert "Total Saved:    0B (0%)" in summary
