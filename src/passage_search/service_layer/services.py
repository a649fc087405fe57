"""Service layer - search and replace use cases consumed by the UI.

Each use case compiles the query once and hands the same compiled pattern
to every engine component it calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

from passage_search.config import Settings, get_settings
from passage_search.domain.model import (
    PassageId,
    PassageLike,
    ReplaceSummary,
    SearchQuery,
    SearchResultRow,
    SearchResults,
)
from passage_search.observability.tracing import create_span
from passage_search.search.highlight import highlight_name, highlight_preview
from passage_search.search.matcher import count_matches
from passage_search.search.pattern import CompiledPattern, PatternError, compile_query
from passage_search.search.replacer import replace_all, replace_in_passage


logger = logging.getLogger(__name__)


class PassageNotFoundError(LookupError):
    """Raised when a passage id is not present in the collection."""

    def __init__(self, passage_id: PassageId) -> None:
        super().__init__(f"No passage with id {passage_id!r}")
        self.passage_id = passage_id


def _compile(query: SearchQuery, settings: Settings) -> CompiledPattern:
    return compile_query(query, max_pattern_length=settings.max_pattern_length)


def _query_attributes(query: SearchQuery) -> dict[str, object]:
    return {
        "search.is_regex": query.is_regex,
        "search.case_sensitive": query.case_sensitive,
        "search.include_names": query.include_names,
        "search.pattern_length": len(query.raw_pattern),
    }


def search_passages(
    passages: Iterable[PassageLike],
    query: SearchQuery,
    settings: Settings | None = None,
) -> SearchResults:
    """List every passage matching ``query`` with highlighted name and preview.

    An empty query returns no rows. A query that does not compile returns no
    rows and carries the error reason instead of raising.
    """
    settings = settings or get_settings()
    with create_span(
        "passage_search.search",
        attributes=_query_attributes(query),
        enabled=settings.tracing_enabled,
    ) as span:
        try:
            pattern = _compile(query, settings)
        except PatternError as exc:
            reason = getattr(exc, "reason", "invalid-pattern")
            logger.warning("Search pattern rejected (%s): %s", reason, exc)
            span.set_attribute("search.error", reason)
            return SearchResults(error=reason)

        if pattern.is_empty:
            return SearchResults()

        rows: list[SearchResultRow] = []
        for passage in passages:
            num_matches = count_matches(passage, pattern)
            if num_matches == 0:
                continue
            rows.append(
                SearchResultRow(
                    result_number=len(rows) + 1,
                    passage_id=passage.id,
                    name_html=highlight_name(passage.name, pattern, css_class=settings.highlight_class),
                    preview_html=highlight_preview(passage.body, pattern, css_class=settings.highlight_class),
                    num_matches=num_matches,
                )
            )

        span.set_attribute("search.passages_matched", len(rows))
        logger.info("Search matched %d passage(s)", len(rows))
        return SearchResults(rows=rows, passages_matched=len(rows))


def find_passage(passages: Iterable[PassageLike], passage_id: PassageId) -> PassageLike:
    """Return the passage with ``passage_id`` or raise ``PassageNotFoundError``."""
    for passage in passages:
        if passage.id == passage_id:
            return passage
    raise PassageNotFoundError(passage_id)


def replace_in_passage_by_id(
    passages: Iterable[PassageLike],
    passage_id: PassageId,
    query: SearchQuery,
    replacement: str,
    settings: Settings | None = None,
) -> int:
    """Replace matches in the single passage identified by ``passage_id``.

    Returns:
        Number of substitutions made.

    Raises:
        PassageNotFoundError: If no passage has that id.
        PatternError: If the query does not compile or the replacement
            template is invalid; the passage is left untouched.
    """
    settings = settings or get_settings()
    with create_span(
        "passage_search.replace_in_passage",
        attributes=_query_attributes(query),
        enabled=settings.tracing_enabled,
    ) as span:
        passage = find_passage(passages, passage_id)
        pattern = _compile(query, settings)
        replaced = replace_in_passage(passage, pattern, replacement)
        span.set_attribute("replace.total_replacements", replaced)
        logger.info("Replaced %d match(es) in passage %r", replaced, passage_id)
        return replaced


def replace_all_passages(
    passages: Sequence[PassageLike],
    query: SearchQuery,
    replacement: str,
    settings: Settings | None = None,
) -> ReplaceSummary:
    """Replace matches across the whole collection and report statistics.

    Raises:
        PatternError: If the query does not compile or the replacement
            template is invalid; nothing is touched.
    """
    settings = settings or get_settings()
    with create_span(
        "passage_search.replace_all",
        attributes={**_query_attributes(query), "replace.passages_total": len(passages)},
        enabled=settings.tracing_enabled,
    ) as span:
        pattern = _compile(query, settings)
        summary = replace_all(passages, pattern, replacement)
        span.set_attributes(
            {
                "replace.passages_matched": summary.passages_matched,
                "replace.total_replacements": summary.total_replacements,
            }
        )
        logger.info(
            "%d replacement(s) made in %d passage(s)",
            summary.total_replacements,
            summary.passages_matched,
        )
        return summary
