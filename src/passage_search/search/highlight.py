"""HTML-safe highlighting of matched spans.

Highlighting happens in three passes so that passage content can never
inject markup and the highlight markup is never escaped:

1. Split the raw text on match spans and HTML-escape every segment. The two
   sentinel characters are escaped into character references here, so they
   cannot survive in escaped output.
2. Wrap each escaped matched segment in the open/close sentinels.
3. Rewrite the sentinels into real markup in a single translation pass.
"""

from __future__ import annotations

import html
import re

from passage_search.domain.model import HighlightResult, PassageLike
from passage_search.search.matcher import resolve_include_names
from passage_search.search.pattern import CompiledPattern


# Private-use code points reserved as span boundaries
OPEN_SENTINEL = "\ue000"
CLOSE_SENTINEL = "\ue001"

DEFAULT_HIGHLIGHT_CLASS = "highlight"

_SENTINEL_REFERENCES = {
    ord(OPEN_SENTINEL): "&#xe000;",
    ord(CLOSE_SENTINEL): "&#xe001;",
}
_CSS_CLASS_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


def escape_text(text: str) -> str:
    """HTML-escape ``text`` and neutralise sentinel characters."""
    return html.escape(text, quote=True).translate(_SENTINEL_REFERENCES)


def _markup_table(css_class: str) -> dict[int, str]:
    if not _CSS_CLASS_PATTERN.match(css_class):
        raise ValueError(f"Invalid highlight class: {css_class!r}")
    return {
        ord(OPEN_SENTINEL): f'<span class="{css_class}">',
        ord(CLOSE_SENTINEL): "</span>",
    }


def mark_matches(text: str, pattern: CompiledPattern) -> str:
    """Escape ``text`` and wrap matched spans in sentinel characters."""
    pieces: list[str] = []
    position = 0
    for match in pattern.finditer(text):
        start, end = match.span(1)
        pieces.append(escape_text(text[position:start]))
        pieces.append(OPEN_SENTINEL + escape_text(text[start:end]) + CLOSE_SENTINEL)
        position = end
    pieces.append(escape_text(text[position:]))
    return "".join(pieces)


def highlight_text(text: str, pattern: CompiledPattern, css_class: str = DEFAULT_HIGHLIGHT_CLASS) -> str:
    """Return ``text`` escaped with every match wrapped in a highlight span."""
    table = _markup_table(css_class)
    if pattern.is_empty:
        return escape_text(text)
    return mark_matches(text, pattern).translate(table)


def highlight_name(
    name: str,
    pattern: CompiledPattern,
    include_names: bool | None = None,
    *,
    css_class: str = DEFAULT_HIGHLIGHT_CLASS,
) -> str:
    """Escape a passage name, highlighting matches only when names are searched."""
    if not resolve_include_names(pattern, include_names):
        return escape_text(name)
    return highlight_text(name, pattern, css_class)


def highlight_preview(body: str, pattern: CompiledPattern, *, css_class: str = DEFAULT_HIGHLIGHT_CLASS) -> str:
    """Escape a passage body with every match highlighted."""
    return highlight_text(body, pattern, css_class)


def highlight(
    passage: PassageLike,
    pattern: CompiledPattern,
    include_names: bool | None = None,
    *,
    css_class: str = DEFAULT_HIGHLIGHT_CLASS,
) -> HighlightResult:
    """Highlight both the name and the body of a passage."""
    return HighlightResult(
        name_html=highlight_name(passage.name, pattern, include_names, css_class=css_class),
        body_html=highlight_preview(passage.body, pattern, css_class=css_class),
    )
