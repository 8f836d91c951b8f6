"""sitemin: minify and package a static website."""

from .minify import minify_css, minify_html
from .orchestrator import BuildOutcome, Orchestrator

__version__ = "1.0.0"

__all__ = ["BuildOutcome", "Orchestrator", "__version__", "minify_css", "minify_html"]
