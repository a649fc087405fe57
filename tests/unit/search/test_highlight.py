"""Unit tests for HTML-safe highlighting."""

import pytest

from passage_search.domain import HighlightResult, Passage, SearchQuery
from passage_search.search.highlight import (
    CLOSE_SENTINEL,
    OPEN_SENTINEL,
    escape_text,
    highlight,
    highlight_name,
    highlight_preview,
    mark_matches,
)
from passage_search.search.pattern import compile_query


pytestmark = pytest.mark.unit

OPEN = '<span class="highlight">'
CLOSE = "</span>"


def _pattern(raw: str, **kwargs):
    return compile_query(SearchQuery(raw_pattern=raw, **kwargs))


def test_preview_escapes_markup_in_content():
    result = highlight_preview("<b>x</b>", _pattern("x"))

    assert result == f"&lt;b&gt;{OPEN}x{CLOSE}&lt;/b&gt;"


def test_matched_span_content_is_escaped_inside_markup():
    result = highlight_preview("a&b c", _pattern("a&b"))

    assert result == f"{OPEN}a&amp;b{CLOSE} c"


def test_quotes_are_escaped():
    result = highlight_preview("say \"hi\" it's", _pattern("hi"))

    assert result == f"say &quot;{OPEN}hi{CLOSE}&quot; it&#x27;s"


def test_sentinel_characters_in_content_cannot_become_markup():
    body = f"{OPEN_SENTINEL}x{CLOSE_SENTINEL}"

    result = highlight_preview(body, _pattern("x"))

    assert result == f"&#xe000;{OPEN}x{CLOSE}&#xe001;"


def test_mark_matches_uses_sentinels():
    marked = mark_matches("a cat", _pattern("cat"))

    assert marked == f"a {OPEN_SENTINEL}cat{CLOSE_SENTINEL}"


def test_escape_text_removes_sentinels():
    escaped = escape_text(f"<{OPEN_SENTINEL}{CLOSE_SENTINEL}>")

    assert OPEN_SENTINEL not in escaped
    assert CLOSE_SENTINEL not in escaped
    assert escaped.startswith("&lt;")


def test_highlights_every_match_preserving_original_case():
    result = highlight_preview("Cat cat", _pattern("cat"))

    assert result == f"{OPEN}Cat{CLOSE} {OPEN}cat{CLOSE}"


def test_empty_pattern_only_escapes():
    assert highlight_preview("a & b", _pattern("")) == "a &amp; b"


def test_name_not_highlighted_when_names_excluded():
    assert highlight_name("<Cat>", _pattern("cat"), include_names=False) == "&lt;Cat&gt;"


def test_name_highlighted_when_names_included():
    result = highlight_name("<Cat>", _pattern("cat"), include_names=True)

    assert result == f"&lt;{OPEN}Cat{CLOSE}&gt;"


def test_name_flag_defaults_to_query():
    assert OPEN in highlight_name("Cat", _pattern("cat", include_names=True))
    assert OPEN not in highlight_name("Cat", _pattern("cat", include_names=False))


def test_custom_css_class():
    result = highlight_preview("cat", _pattern("cat"), css_class="hit")

    assert result == '<span class="hit">cat</span>'


def test_rejects_css_class_that_could_break_markup():
    with pytest.raises(ValueError):
        highlight_preview("cat", _pattern("cat"), css_class='x" onclick="y')


def test_highlight_returns_both_fields():
    passage = Passage(id=7, name="Cat", body="<i>cat</i>")

    result = highlight(passage, _pattern("cat", include_names=True))

    assert isinstance(result, HighlightResult)
    assert result.name_html == f"{OPEN}Cat{CLOSE}"
    assert result.body_html == f"&lt;i&gt;{OPEN}cat{CLOSE}&lt;/i&gt;"


def test_regex_highlight_spans():
    result = highlight_preview("a1 b22", _pattern(r"\d+", is_regex=True))

    assert result == f"a{OPEN}1{CLOSE} b{OPEN}22{CLOSE}"
