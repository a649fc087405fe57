"""Service layer - search/replace use case orchestration."""

from .services import (
    PassageNotFoundError,
    find_passage,
    replace_all_passages,
    replace_in_passage_by_id,
    search_passages,
)


__all__ = [
    "PassageNotFoundError",
    "find_passage",
    "replace_all_passages",
    "replace_in_passage_by_id",
    "search_passages",
]
