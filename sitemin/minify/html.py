"""HTML minification rules.

Whitespace means ASCII whitespace only. Non-breaking and other Unicode spaces
are page content and pass through untouched.
"""

from __future__ import annotations

import re

from .base import STRICTNESS_AGGRESSIVE, STRICTNESS_SAFE, Rule, RuleSet, check_strictness

STRIP_COMMENTS = Rule("strip_comments", r"<!--.*?-->", "", flags=re.DOTALL)
SHORT_DOCTYPE = Rule("short_doctype", r"<!DOCTYPE[^>]+>", "<!doctype html>", flags=re.IGNORECASE)
DROP_DEFAULT_TYPES = Rule(
    "drop_default_types",
    r"""\s+type=(["'])text/(?:javascript|css)\1""",
    "",
    flags=re.IGNORECASE | re.ASCII,
)
COLLAPSE_WHITESPACE = Rule("collapse_whitespace", r"\s+", " ", flags=re.ASCII)
# Only merge when the next "<" opens or closes a real tag, so text such as
# "<p> > < </p>" keeps its spacing.
MERGE_TAGS_SAFE = Rule("merge_tags", r">\s+<(?=[a-zA-Z/])", "><", flags=re.ASCII)
MERGE_TAGS_ALL = Rule("merge_tags", r">\s+<", "><", flags=re.ASCII)
TRIM = Rule("trim", r"^\s+|\s+$", "", flags=re.ASCII)

HTML_RULES = RuleSet(
    "html",
    (
        STRIP_COMMENTS,
        SHORT_DOCTYPE,
        DROP_DEFAULT_TYPES,
        COLLAPSE_WHITESPACE,
        MERGE_TAGS_SAFE,
        TRIM,
    ),
)

HTML_RULES_AGGRESSIVE = HTML_RULES.replace(MERGE_TAGS_ALL)

_RULES_BY_STRICTNESS = {
    STRICTNESS_SAFE: HTML_RULES,
    STRICTNESS_AGGRESSIVE: HTML_RULES_AGGRESSIVE,
}


def html_rules(strictness: str = STRICTNESS_SAFE) -> RuleSet:
    return _RULES_BY_STRICTNESS[check_strictness(strictness)]


def minify_html(source: str, *, strictness: str = STRICTNESS_SAFE) -> str:
    """Return shorter, markup-equivalent HTML. Never raises on odd input."""
    return html_rules(strictness).apply(source)


__all__ = ["HTML_RULES", "HTML_RULES_AGGRESSIVE", "html_rules", "minify_html"]
