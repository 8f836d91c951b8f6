"""Build orchestration: cleanup, walk, dispatch, aggregate, report."""

from __future__ import annotations

import os
import shutil
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .config import SiteConfig, load_config
from .gallery import GalleryGenerator, GalleryResult
from .logging import FILE_LINE, get_logger
from .minify.base import check_strictness
from .models import BuildStats, FileResult, SourceFile
from .report import format_file_line, render_summary
from .walker import iter_source_files, process_file

# Written into every build root; only directories carrying it are ever cleared.
BUILD_MARKER = ".sitemin-build"


class BuildError(RuntimeError):
    """Raised when a build cannot run or cannot finish."""


class SourceRootError(BuildError):
    """The source root is missing, unreadable, or overlaps the build root."""


class OutputRootError(BuildError):
    """The build root cannot be cleared or created."""


@dataclass
class BuildOutcome:
    """Result of a build run."""

    source_root: Path
    build_root: Path
    stats: BuildStats
    results: List[FileResult] = field(default_factory=list)

    @property
    def summary(self) -> str:
        return render_summary(self.stats)


class Orchestrator:
    """Coordinates the build and gallery pipelines."""

    def __init__(self, gallery_generator: GalleryGenerator | None = None) -> None:
        self._gallery_generator = gallery_generator
        self.logger = get_logger("orchestrator")

    def run_build(
        self,
        path: str | Path,
        *,
        build_dir: str | Path | None = None,
        strictness: str | None = None,
        workers: int | None = None,
    ) -> BuildOutcome:
        """Rebuild the output tree for the site rooted at ``path``."""
        source_root = self._resolve_source_root(path)
        config = load_config(source_root)
        if build_dir is not None:
            config.build_dir = str(build_dir)
        if strictness is not None:
            config.strictness = check_strictness(strictness)
        if workers is not None:
            if workers < 1:
                raise BuildError("workers must be a positive integer")
            config.workers = workers

        build_root = self._resolve_build_root(config)
        self.logger.info("Starting build of %s into %s", source_root, build_root)
        self.logger.debug(
            "Strictness=%s workers=%d ignore=%s",
            config.strictness,
            config.workers,
            ", ".join(config.ignore_dirs),
        )
        self._prepare_build_root(build_root)

        stats = BuildStats()
        outcome = BuildOutcome(source_root=source_root, build_root=build_root, stats=stats)
        sources = iter_source_files(
            source_root,
            ignore_dirs=config.ignore_dirs,
            exclude_files=config.exclude_files,
            build_root=build_root,
        )
        try:
            for result in self._process_all(sources, build_root, config):
                stats.record(result)
                outcome.results.append(result)
                if result.skipped:
                    self.logger.warning(format_file_line(result), extra=FILE_LINE)
                else:
                    self.logger.info(format_file_line(result), extra=FILE_LINE)
        except OSError as exc:
            raise BuildError(f"Build aborted by I/O failure: {exc}") from exc
        finally:
            stats.finish()

        self.logger.info(
            "Build finished: %d file(s) written, %d skipped",
            stats.processed,
            len(stats.skipped),
        )
        return outcome

    def run_gallery(
        self,
        path: str | Path,
        *,
        source_dir: str | None = None,
        output_dir: str | None = None,
        html_file: str | None = None,
    ) -> GalleryResult:
        """Regenerate the gallery page for the site rooted at ``path``."""
        root = self._resolve_source_root(path)
        generator = self._gallery_generator
        if generator is None:
            gallery_config = load_config(root).gallery
            if source_dir is not None:
                gallery_config.source_dir = source_dir
            if output_dir is not None:
                gallery_config.output_dir = output_dir
            if html_file is not None:
                gallery_config.html_file = html_file
            generator = GalleryGenerator(gallery_config)
        return generator.generate(root)

    def _process_all(
        self, sources: Iterable[SourceFile], build_root: Path, config: SiteConfig
    ) -> Iterator[FileResult]:
        def _process(source: SourceFile) -> FileResult:
            return process_file(source, build_root, strictness=config.strictness)

        if config.workers <= 1:
            for source in sources:
                yield _process(source)
            return

        # Results come back in traversal order and only this thread touches the stats.
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            yield from executor.map(_process, sources)

    @staticmethod
    def _resolve_source_root(path: str | Path) -> Path:
        source_root = Path(path).expanduser().resolve()
        if not source_root.exists():
            raise SourceRootError(f"Source directory not found: {path}")
        if not source_root.is_dir():
            raise SourceRootError(f"Source path is not a directory: {path}")
        if not os.access(source_root, os.R_OK | os.X_OK):
            raise SourceRootError(f"Source directory is not readable: {path}")
        return source_root

    @staticmethod
    def _resolve_build_root(config: SiteConfig) -> Path:
        build_root = config.build_root
        source_root = config.root
        if build_root == source_root or build_root in source_root.parents:
            raise SourceRootError(
                f"Build directory {build_root} would overwrite the source tree {source_root}"
            )
        return build_root

    def _prepare_build_root(self, build_root: Path) -> None:
        if build_root.exists() and not build_root.is_dir():
            raise OutputRootError(f"Build path {build_root} exists and is not a directory")
        if build_root.is_dir() and not self._is_disposable(build_root):
            raise OutputRootError(
                f"Refusing to clear {build_root}: it is not empty and holds no {BUILD_MARKER} "
                "from an earlier build"
            )
        try:
            if build_root.is_dir():
                shutil.rmtree(build_root)
            build_root.mkdir(parents=True)
            (build_root / BUILD_MARKER).write_text("sitemin\n", encoding="utf-8")
        except OSError as exc:
            raise OutputRootError(f"Cannot create build directory {build_root}: {exc}") from exc
        self.logger.debug("Created clean build directory %s", build_root)

    @staticmethod
    def _is_disposable(build_root: Path) -> bool:
        try:
            return (build_root / BUILD_MARKER).is_file() or not any(build_root.iterdir())
        except OSError as exc:
            raise OutputRootError(f"Cannot inspect build directory {build_root}: {exc}") from exc


__all__ = [
    "BUILD_MARKER",
    "BuildError",
    "BuildOutcome",
    "Orchestrator",
    "OutputRootError",
    "SourceRootError",
]
