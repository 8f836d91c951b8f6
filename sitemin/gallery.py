"""Gallery page generation from a directory of images and caption files."""

from __future__ import annotations

import html
import os
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from PIL import Image

from .config import GalleryConfig
from .logging import get_logger

IMAGE_EXTENSIONS: Tuple[str, ...] = ("jpg", "jpeg", "png")

NO_DESCRIPTION = "No description provided."

_PAGE_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
{head_extra}</head>
<body>
    <main>
        <div class="content-wrapper-gallery">
            <header>
                <h1 class="title">{title}</h1>
            </header>
{intro}            <section class="gallery-container">
"""

_ITEM = """                <div class="gallery-item">
                    <a href="{href}" target="_blank" title="Click to view full image">
                        <img src="{href}" alt="{alt}" loading="lazy">
                    </a>
                    <p class="caption">{caption}</p>
                </div>
"""

_PAGE_FOOT = """            </section>
        </div>
    </main>
</body>
</html>
"""

Converter = Callable[[Path, Path, int, int], None]


class GalleryError(RuntimeError):
    """Raised when the gallery cannot be generated at all."""


@dataclass
class GalleryItem:
    """One rendered gallery entry."""

    name: str
    image: Path
    webp: Path
    alt_text: str
    caption: str


@dataclass
class GalleryResult:
    """Outcome of a gallery generation run."""

    html_path: Path
    output_dir: Path
    items: List[GalleryItem] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    elapsed: float = 0.0


def convert_to_webp(source: Path, destination: Path, quality: int, max_size: int) -> None:
    """Transcode an image to WebP, shrinking it to fit ``max_size`` when larger."""
    with Image.open(source) as image:
        if image.width > max_size or image.height > max_size:
            image.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)
        if image.mode not in ("RGB", "RGBA"):
            has_alpha = "A" in image.mode or "transparency" in image.info
            image = image.convert("RGBA" if has_alpha else "RGB")
        image.save(destination, "WEBP", quality=quality)


def read_caption(text_file: Path, image_name: str) -> Tuple[str, str]:
    """Return ``(alt_text, caption_html)`` for an image.

    The caption escapes markup characters and joins non-blank lines with
    ``<br>``; the alt text is the first line with double quotes removed.
    """
    if not text_file.is_file():
        return f"Gallery image {image_name}", NO_DESCRIPTION

    lines = text_file.read_text(encoding="utf-8").splitlines()
    caption = "<br>".join(html.escape(line, quote=False) for line in lines if line.strip())
    first_line = lines[0] if lines else ""
    alt_text = html.escape(first_line.replace('"', ""), quote=False)
    return alt_text, caption


def _collect_images(source_dir: Path) -> List[Path]:
    images: List[Path] = []
    for extension in IMAGE_EXTENSIONS:
        images.extend(
            sorted(path for path in source_dir.glob(f"*.{extension}") if path.is_file())
        )
    return images


def _render_head(config: GalleryConfig) -> str:
    title = html.escape(config.title)
    extra: List[str] = []
    if config.description:
        extra.append(
            f'    <meta name="description" content="{html.escape(config.description)}">\n'
        )
    for stylesheet in config.stylesheets:
        extra.append(f'    <link rel="stylesheet" href="{html.escape(stylesheet)}">\n')
    intro = ""
    if config.description:
        intro = f"            <p>{html.escape(config.description, quote=False)}</p>\n"
    return _PAGE_HEAD.format(title=title, head_extra="".join(extra), intro=intro)


class GalleryGenerator:
    """Builds a gallery page and its WebP images from a source directory."""

    def __init__(
        self,
        config: GalleryConfig | None = None,
        converter: Optional[Converter] = None,
    ) -> None:
        self.config = config or GalleryConfig()
        self._convert = converter or convert_to_webp
        self.logger = get_logger("gallery")

    def generate(self, root: Path) -> GalleryResult:
        """Regenerate the gallery page under ``root`` from scratch."""
        started = time.monotonic()
        root = root.expanduser().resolve()
        source_dir = root / self.config.source_dir
        output_dir = root / self.config.output_dir
        html_path = root / self.config.html_file

        if not source_dir.is_dir():
            raise GalleryError(f"Gallery source directory not found: {source_dir}")

        self.logger.info("Starting gallery generation in %s", root)
        try:
            html_path.unlink(missing_ok=True)
            if output_dir.exists():
                shutil.rmtree(output_dir)
            output_dir.mkdir(parents=True)
        except OSError as exc:
            raise GalleryError(f"Cannot prepare gallery output {output_dir}: {exc}") from exc
        self.logger.debug("Created clean gallery directory %s", output_dir)

        result = GalleryResult(html_path=html_path, output_dir=output_dir)
        fragments: List[str] = []
        for image in _collect_images(source_dir):
            self.logger.info("Processing: %s", image.name)
            webp = output_dir / f"{image.stem}.webp"
            try:
                self._convert(image, webp, self.config.quality, self.config.max_size)
                alt_text, caption = read_caption(source_dir / f"{image.stem}.txt", image.name)
            except (OSError, ValueError) as exc:
                self.logger.warning("Skipping %s: %s", image.name, exc)
                result.skipped.append((image.name, str(exc)))
                continue
            self.logger.debug("Alt text for %s: %s", image.name, alt_text)

            href = Path(os.path.relpath(webp, html_path.parent)).as_posix()
            fragments.append(_ITEM.format(href=href, alt=alt_text, caption=caption))
            result.items.append(
                GalleryItem(
                    name=image.name,
                    image=image,
                    webp=webp,
                    alt_text=alt_text,
                    caption=caption,
                )
            )

        page = _render_head(self.config) + "".join(fragments) + _PAGE_FOOT
        try:
            html_path.write_text(page, encoding="utf-8")
        except OSError as exc:
            raise GalleryError(f"Cannot write {html_path}: {exc}") from exc

        result.elapsed = time.monotonic() - started
        self.logger.info(
            "Gallery generated with %d item(s): %s", len(result.items), html_path
        )
        return result


__all__ = [
    "GalleryError",
    "GalleryGenerator",
    "GalleryItem",
    "GalleryResult",
    "convert_to_webp",
    "read_caption",
]
