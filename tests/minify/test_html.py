"""Tests for sitemin.minify.html."""

from __future__ import annotations

import pytest

from sitemin.minify import STRICTNESS_AGGRESSIVE, minify_html
from sitemin.minify.html import HTML_RULES, HTML_RULES_AGGRESSIVE


def test_minify_html_regression_fixture() -> None:
    source = "<!DOCTYPE html>\n<html>\n  <body>\n    <p>Hi</p>\n  </body>\n</html>"
    assert minify_html(source) == "<!doctype html><html><body><p>Hi</p></body></html>"


@pytest.mark.parametrize(
    "doctype",
    [
        "<!DOCTYPE html>",
        "<!doctype HTML>",
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
        '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">',
        '<!Doctype html SYSTEM "about:legacy-compat">',
    ],
)
def test_minify_html_shortens_any_doctype(doctype: str) -> None:
    assert minify_html(f"{doctype}\n<p>x</p>") == "<!doctype html><p>x</p>"


def test_minify_html_strips_multiline_comments() -> None:
    source = "<p>a</p>\n<!-- navigation\n     goes here -->\n<p>b</p>"
    assert minify_html(source) == "<p>a</p><p>b</p>"


def test_minify_html_removes_default_type_attributes() -> None:
    source = (
        '<script type="text/javascript" src="a.js"></script>\n'
        "<link rel=\"stylesheet\" type='text/css' href=\"a.css\">\n"
        '<style TYPE="TEXT/CSS"></style>\n'
        '<script type="module" src="m.js"></script>'
    )
    assert minify_html(source) == (
        '<script src="a.js"></script>'
        '<link rel="stylesheet" href="a.css">'
        "<style></style>"
        '<script type="module" src="m.js"></script>'
    )


def test_minify_html_collapses_text_whitespace() -> None:
    assert minify_html("<p>Hello\n\t   world</p>") == "<p>Hello world</p>"


def test_minify_html_trims_document() -> None:
    assert minify_html("  \n<p>x</p>\n\n") == "<p>x</p>"


def test_minify_html_merges_real_tags() -> None:
    source = "<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>"
    assert minify_html(source) == "<ul><li>a</li><li>b</li></ul>"


def test_minify_html_safe_merge_preserves_stray_brackets() -> None:
    assert minify_html("<p> > < </p>") == "<p> > < </p>"
    assert minify_html("<span>a</span> <3") == "<span>a</span> <3"


def test_minify_html_aggressive_merges_all_tag_whitespace() -> None:
    assert minify_html("<span>a</span> <3", strictness=STRICTNESS_AGGRESSIVE) == "<span>a</span><3"


@pytest.mark.parametrize("strictness", ["safe", STRICTNESS_AGGRESSIVE])
@pytest.mark.parametrize(
    "source",
    [
        "<p>10\u00a0km</p>",
        "<p>\u3000indent</p>",
        "<td>a</td>\u00a0<td>b</td>",
        "\u00a0<p>x</p>\u00a0",
    ],
)
def test_minify_html_keeps_non_ascii_spaces(source: str, strictness: str) -> None:
    assert minify_html(source, strictness=strictness) == source


def test_html_rule_sets_differ_only_in_tag_merging() -> None:
    assert HTML_RULES.names() == HTML_RULES_AGGRESSIVE.names()
    assert HTML_RULES.get("merge_tags") != HTML_RULES_AGGRESSIVE.get("merge_tags")


@pytest.mark.parametrize("source", ["", "<", "<!-- open", "<<>>", "<!DOCTYPE>"])
def test_minify_html_never_fails(source: str) -> None:
    assert isinstance(minify_html(source), str)
