"""Domain layer - passages, queries and result value objects.

Key principles:
1. No dependencies on infrastructure
2. Immutability for value objects
3. Type safety with Pydantic
"""

from passage_search.domain.model import (
    HighlightResult,
    Passage,
    PassageId,
    PassageLike,
    ReplaceSummary,
    SearchQuery,
    SearchResultRow,
    SearchResults,
)


__all__ = [
    "HighlightResult",
    "Passage",
    "PassageId",
    "PassageLike",
    "ReplaceSummary",
    "SearchQuery",
    "SearchResultRow",
    "SearchResults",
]
