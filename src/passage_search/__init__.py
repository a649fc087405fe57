"""Search-and-replace engine over collections of named passages."""

from passage_search.config import Settings, get_settings
from passage_search.domain import (
    HighlightResult,
    Passage,
    PassageLike,
    ReplaceSummary,
    SearchQuery,
    SearchResultRow,
    SearchResults,
)
from passage_search.observability import configure_logging, init_tracing_from_settings
from passage_search.search.highlight import highlight, highlight_name, highlight_preview
from passage_search.search.matcher import count_matches
from passage_search.search.pattern import (
    CompiledPattern,
    InvalidPatternError,
    InvalidReplacementError,
    PatternError,
    compile_query,
    escape_literal,
)
from passage_search.search.replacer import replace_all, replace_in_passage
from passage_search.service_layer import (
    PassageNotFoundError,
    replace_all_passages,
    replace_in_passage_by_id,
    search_passages,
)


__all__ = [
    "CompiledPattern",
    "HighlightResult",
    "InvalidPatternError",
    "InvalidReplacementError",
    "Passage",
    "PassageLike",
    "PassageNotFoundError",
    "PatternError",
    "ReplaceSummary",
    "SearchQuery",
    "SearchResultRow",
    "SearchResults",
    "Settings",
    "compile_query",
    "configure_logging",
    "count_matches",
    "escape_literal",
    "get_settings",
    "highlight",
    "highlight_name",
    "highlight_preview",
    "init_tracing_from_settings",
    "replace_all",
    "replace_all_passages",
    "replace_in_passage",
    "replace_in_passage_by_id",
    "search_passages",
]
