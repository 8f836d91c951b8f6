"""Configuration loading for sitemin (.sitemin.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .minify.base import STRICTNESS_LEVELS, STRICTNESS_SAFE

CONFIG_FILENAME = ".sitemin.yml"

DEFAULT_BUILD_DIR = "dist"
DEFAULT_IGNORE_DIRS = (".git", "node_modules", "venv")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GalleryConfig:
    """Gallery generation settings."""

    source_dir: str = "gallery"
    output_dir: str = "gallery-prod"
    html_file: str = "gallery.html"
    quality: int = 60
    max_size: int = 900
    title: str = "Gallery"
    description: Optional[str] = None
    stylesheets: List[str] = field(default_factory=list)


@dataclass
class SiteConfig:
    """Represents the settings defined in .sitemin.yml."""

    root: Path
    build_dir: str = DEFAULT_BUILD_DIR
    ignore_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))
    exclude_files: List[str] = field(default_factory=lambda: [CONFIG_FILENAME])
    strictness: str = STRICTNESS_SAFE
    workers: int = 1
    gallery: GalleryConfig = field(default_factory=GalleryConfig)

    @property
    def build_root(self) -> Path:
        return (self.root / self.build_dir).resolve()


def load_config(config_path: Path) -> SiteConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SiteConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = SiteConfig(root=root)

    build_dir = _as_str(data.get("build_dir"))
    if build_dir:
        config.build_dir = build_dir

    for name in _as_str_list(data.get("ignore_dirs")):
        if name not in config.ignore_dirs:
            config.ignore_dirs.append(name)

    for name in _as_str_list(data.get("exclude_files")):
        if name not in config.exclude_files:
            config.exclude_files.append(name)

    strictness = _as_str(data.get("strictness"))
    if strictness is not None:
        if strictness not in STRICTNESS_LEVELS:
            raise ConfigError(
                f"strictness must be one of {', '.join(STRICTNESS_LEVELS)}, got '{strictness}'"
            )
        config.strictness = strictness

    if "workers" in data:
        workers = _as_int(data.get("workers"))
        if workers is None or workers < 1:
            raise ConfigError("workers must be a positive integer")
        config.workers = workers

    gallery_data = _as_dict(data.get("gallery"))
    if gallery_data:
        config.gallery = _parse_gallery(gallery_data)

    return config


def _parse_gallery(data: Dict[str, Any]) -> GalleryConfig:
    gallery = GalleryConfig()
    for key in ("source_dir", "output_dir", "html_file", "title"):
        value = _as_str(data.get(key))
        if value:
            setattr(gallery, key, value)
    gallery.description = _as_str(data.get("description"))
    gallery.stylesheets = _as_str_list(data.get("stylesheets"))

    if "quality" in data:
        quality = _as_int(data.get("quality"))
        if quality is None or not 1 <= quality <= 100:
            raise ConfigError("gallery.quality must be an integer between 1 and 100")
        gallery.quality = quality
    if "max_size" in data:
        max_size = _as_int(data.get("max_size"))
        if max_size is None or max_size < 1:
            raise ConfigError("gallery.max_size must be a positive integer")
        gallery.max_size = max_size
    return gallery


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
