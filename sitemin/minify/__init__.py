"""Text-rewriting minifiers for HTML and CSS."""

from __future__ import annotations

from .base import (
    STRICTNESS_AGGRESSIVE,
    STRICTNESS_LEVELS,
    STRICTNESS_SAFE,
    FixedPointRule,
    Rule,
    RuleSet,
)
from .css import CSS_RULES, CSS_RULES_AGGRESSIVE, css_rules, minify_css
from .html import HTML_RULES, HTML_RULES_AGGRESSIVE, html_rules, minify_html

__all__ = [
    "CSS_RULES",
    "CSS_RULES_AGGRESSIVE",
    "FixedPointRule",
    "HTML_RULES",
    "HTML_RULES_AGGRESSIVE",
    "Rule",
    "RuleSet",
    "STRICTNESS_AGGRESSIVE",
    "STRICTNESS_LEVELS",
    "STRICTNESS_SAFE",
    "css_rules",
    "html_rules",
    "minify_css",
    "minify_html",
]
