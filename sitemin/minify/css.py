"""CSS minification rules.

Rules operate on raw text and do not understand strings, ``url(...)`` or
attribute selector values. Content inside those constructs can be rewritten
like any other CSS; this is accepted for hand-authored stylesheets.

As in the HTML rules, only ASCII whitespace is collapsed or stripped.
"""

from __future__ import annotations

import re

from .base import (
    STRICTNESS_AGGRESSIVE,
    STRICTNESS_SAFE,
    FixedPointRule,
    Rule,
    RuleSet,
    check_strictness,
)

ZERO_UNITS = ("px", "em", "ex", "cm", "mm", "in", "pt", "pc", "%")

STRIP_COMMENTS = Rule("strip_comments", r"/\*.*?\*/", "", flags=re.DOTALL)
COLLAPSE_WHITESPACE = Rule("collapse_whitespace", r"\s+", " ", flags=re.ASCII)
TIGHTEN_DELIMITERS = Rule(
    "tighten_delimiters", r"\s*([{};:,>])\s*", r"\1", flags=re.ASCII
)
# 0.5 -> .5 unless the zero is part of a larger number.
LEADING_ZERO_FRACTION = Rule(
    "leading_zero_fraction", r"(?<=[^0-9])0\.([0-9]+)", r".\1"
)
ZERO_UNITS_RULE = Rule(
    "zero_units",
    r"(?<=[: ])0(?:%s)(?![\w%%])" % "|".join(re.escape(unit) for unit in ZERO_UNITS),
    "0",
)
SHORTEN_HEX = Rule(
    "shorten_hex",
    r"#([0-9a-fA-F])\1([0-9a-fA-F])\2([0-9a-fA-F])\3(?![0-9a-fA-F])",
    r"#\1\2\3",
)
DROP_TRAILING_SEMICOLON = Rule("drop_trailing_semicolon", r";\}", "}")
# Repeated so that an at-rule block emptied by one pass goes in the next.
DROP_EMPTY_RULES = FixedPointRule("drop_empty_rules", r"[^{};]*\{\}", "")
TRIM = Rule("trim", r"^\s+|\s+$", "", flags=re.ASCII)

CSS_RULES = RuleSet(
    "css",
    (
        STRIP_COMMENTS,
        COLLAPSE_WHITESPACE,
        TIGHTEN_DELIMITERS,
        LEADING_ZERO_FRACTION,
        ZERO_UNITS_RULE,
        SHORTEN_HEX,
        DROP_TRAILING_SEMICOLON,
        TRIM,
    ),
)

CSS_RULES_AGGRESSIVE = CSS_RULES.extend(DROP_EMPTY_RULES, before="trim")

_RULES_BY_STRICTNESS = {
    STRICTNESS_SAFE: CSS_RULES,
    STRICTNESS_AGGRESSIVE: CSS_RULES_AGGRESSIVE,
}


def css_rules(strictness: str = STRICTNESS_SAFE) -> RuleSet:
    """Return the CSS rule set for a strictness level."""
    return _RULES_BY_STRICTNESS[check_strictness(strictness)]


def minify_css(source: str, *, strictness: str = STRICTNESS_SAFE) -> str:
    """Return a shorter, equivalent stylesheet. Never raises on odd input."""
    return css_rules(strictness).apply(source)


__all__ = ["CSS_RULES", "CSS_RULES_AGGRESSIVE", "css_rules", "minify_css"]
