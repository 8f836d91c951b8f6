"""Size formatting and build summary rendering."""

from __future__ import annotations

from typing import List

from .models import KIND_COPY, KIND_CSS, KIND_HTML, BuildStats, FileResult

_KB = 1024
_MB = 1024 * 1024

_TAGS = {
    KIND_HTML: "HTML",
    KIND_CSS: "CSS ",
    KIND_COPY: "COPY",
}

_RULE = "=" * 46


def human_size(size: int) -> str:
    """Render a byte count using binary units, truncated to hundredths."""
    if size < _KB:
        return f"{size}B"
    if size < _MB:
        return f"{(size * 100) // _KB / 100:.2f}KB"
    return f"{(size * 100) // _MB / 100:.2f}MB"


def percent_saved(original: int, new: int) -> int:
    """Whole-number percentage saved, never negative."""
    if original <= 0:
        return 0
    return max(0, 100 - (new * 100 // original))


def elapsed_seconds(start: float, end: float) -> float:
    return max(0.0, end - start)


def format_file_line(result: FileResult) -> str:
    """Return the per-file console line for a processed file."""
    rel_path = result.source.rel_path
    if result.output is None:
        return f"[SKIP] {rel_path} ({result.error or 'unknown error'})"
    tag = _TAGS.get(result.kind, result.kind.upper()[:4])
    if result.kind == KIND_COPY:
        return f"[{tag}]             : {rel_path}"
    pct = f"{percent_saved(result.source.size, result.output.size)}%"
    return f"[{tag}] {pct:<4} saved : {rel_path}"


def render_summary(stats: BuildStats) -> str:
    """Render the final summary block for a finished build."""
    end = stats.finished_at if stats.finished_at is not None else stats.started_at
    elapsed = elapsed_seconds(stats.started_at, end)
    saved = max(0, stats.saved_bytes)
    lines: List[str] = [
        _RULE,
        "               BUILD SUMMARY",
        _RULE,
        f" Total Time:     {elapsed:.2f} seconds",
        (
            f" Processed:      HTML: {stats.counts.get(KIND_HTML, 0)}"
            f" | CSS: {stats.counts.get(KIND_CSS, 0)}"
            f" | Assets: {stats.counts.get(KIND_COPY, 0)}"
        ),
        f" Source Size:    {human_size(stats.original_bytes)}",
        f" Build Size:     {human_size(stats.output_bytes)}",
        (
            f" Total Saved:    {human_size(saved)}"
            f" ({percent_saved(stats.original_bytes, stats.output_bytes)}%)"
        ),
    ]
    if stats.skipped:
        lines.append(f" Skipped:        {len(stats.skipped)}")
        for rel_path, reason in stats.skipped:
            lines.append(f"   - {rel_path}: {reason}")
    lines.append(_RULE)
    return "\n".join(lines)


__all__ = [
    "elapsed_seconds",
    "format_file_line",
    "human_size",
    "percent_saved",
    "render_summary",
]
