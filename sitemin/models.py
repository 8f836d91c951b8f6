"""Core data models shared across sitemin components."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

KIND_HTML = "html"
KIND_CSS = "css"
KIND_COPY = "copy"

FILE_KINDS: Tuple[str, ...] = (KIND_HTML, KIND_CSS, KIND_COPY)


@dataclass(frozen=True)
class SourceFile:
    """A regular file discovered under the source root."""

    rel_path: str
    path: Path
    extension: str
    size: int


@dataclass(frozen=True)
class OutputFile:
    """A file written under the build root."""

    rel_path: str
    path: Path
    size: int


@dataclass
class FileResult:
    """Outcome of processing a single source file."""

    kind: str
    source: SourceFile
    output: Optional[OutputFile] = None
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.output is None


@dataclass
class BuildStats:
    """Aggregate counters for a build run, owned by the orchestrator."""

    counts: Dict[str, int] = field(default_factory=lambda: {kind: 0 for kind in FILE_KINDS})
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    original_bytes: int = 0
    output_bytes: int = 0
    started_at: float = field(default_factory=time.monotonic)
    finished_at: Optional[float] = None

    def record(self, result: FileResult) -> None:
        """Fold a single file result into the running totals."""
        if result.output is None:
            self.skipped.append((result.source.rel_path, result.error or "unknown error"))
            return
        self.counts[result.kind] = self.counts.get(result.kind, 0) + 1
        self.original_bytes += result.source.size
        self.output_bytes += result.output.size

    def finish(self) -> None:
        if self.finished_at is None:
            self.finished_at = time.monotonic()

    @property
    def processed(self) -> int:
        return sum(self.counts.values())

    @property
    def saved_bytes(self) -> int:
        return self.original_bytes - self.output_bytes
