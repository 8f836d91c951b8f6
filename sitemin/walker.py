"""Source tree traversal and per-file dispatch."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Callable, Collection, Dict, Iterator, Optional

from .logging import get_logger
from .minify import STRICTNESS_SAFE, minify_css, minify_html
from .models import KIND_COPY, KIND_CSS, KIND_HTML, FileResult, OutputFile, SourceFile

_KIND_BY_EXTENSION: Dict[str, str] = {
    "html": KIND_HTML,
    "htm": KIND_HTML,
    "css": KIND_CSS,
}

_MINIFIERS: Dict[str, Callable[..., str]] = {
    KIND_HTML: minify_html,
    KIND_CSS: minify_css,
}

# Undecodable bytes round-trip unchanged through the text rules.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"

logger = get_logger("walker")


def _extension(name: str) -> str:
    stem, dot, ext = name.rpartition(".")
    return ext if dot and stem else ""


def iter_source_files(
    source_root: Path,
    *,
    ignore_dirs: Collection[str] = (),
    exclude_files: Collection[str] = (),
    build_root: Optional[Path] = None,
) -> Iterator[SourceFile]:
    """Yield regular files under ``source_root`` in sorted traversal order.

    Directories named in ``ignore_dirs`` are pruned wherever they appear, as is
    ``build_root`` when it lives inside the source tree. Files named in
    ``exclude_files`` are skipped at any depth.
    """
    root = source_root.resolve()
    resolved_build = build_root.resolve() if build_root is not None else None

    def _on_error(exc: OSError) -> None:
        logger.warning("Cannot read directory %s: %s", exc.filename, exc.strerror or exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        current_dir = Path(dirpath)
        dirnames[:] = sorted(
            name
            for name in dirnames
            if name not in ignore_dirs and (current_dir / name) != resolved_build
        )

        for filename in sorted(filenames):
            if filename in exclude_files:
                continue
            path = current_dir / filename
            if path.is_symlink():
                logger.warning("Skipping symlink %s", path.relative_to(root).as_posix())
                continue
            if not path.is_file():
                logger.debug("Skipping non-regular file %s", path.relative_to(root).as_posix())
                continue
            try:
                size = path.stat().st_size
            except OSError as exc:
                logger.warning("Cannot stat %s: %s", path, exc)
                continue
            yield SourceFile(
                rel_path=path.relative_to(root).as_posix(),
                path=path,
                extension=_extension(filename),
                size=size,
            )


def classify(source: SourceFile) -> str:
    """Return the processing kind for a file. Extension matching is case-sensitive."""
    return _KIND_BY_EXTENSION.get(source.extension, KIND_COPY)


def process_file(
    source: SourceFile,
    build_root: Path,
    *,
    strictness: str = STRICTNESS_SAFE,
) -> FileResult:
    """Transform or copy ``source`` into the mirrored location under ``build_root``.

    I/O failures are captured on the returned result rather than raised so a
    single bad file cannot stop the batch.
    """
    kind = classify(source)
    destination = build_root.joinpath(*source.rel_path.split("/"))
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        if kind == KIND_COPY:
            shutil.copy2(source.path, destination)
            # Copies never count as savings.
            size = source.size
        else:
            text = source.path.read_text(encoding=_ENCODING, errors=_ERRORS)
            minified = _MINIFIERS[kind](text, strictness=strictness)
            payload = minified.encode(_ENCODING, errors=_ERRORS)
            destination.write_bytes(payload)
            size = len(payload)
    except OSError as exc:
        return FileResult(kind=kind, source=source, error=exc.strerror or str(exc))

    output = OutputFile(rel_path=source.rel_path, path=destination, size=size)
    return FileResult(kind=kind, source=source, output=output)


__all__ = ["classify", "iter_source_files", "process_file"]
