"""Count matches of a compiled pattern in a passage."""

from __future__ import annotations

from passage_search.domain.model import PassageLike
from passage_search.search.pattern import CompiledPattern


def resolve_include_names(pattern: CompiledPattern, include_names: bool | None) -> bool:
    """Return the effective include-names flag, defaulting to the pattern's."""
    return pattern.include_names if include_names is None else include_names


def count_in_text(text: str, pattern: CompiledPattern) -> int:
    """Count non-overlapping matches of ``pattern`` in ``text``."""
    return sum(1 for _ in pattern.finditer(text))


def count_matches(
    passage: PassageLike,
    pattern: CompiledPattern,
    include_names: bool | None = None,
) -> int:
    """Count matches in a passage's body, and its name when names are included.

    Fields are scanned separately; a match never spans name and body. The
    count is computed fresh on every call.
    """
    if pattern.is_empty:
        return 0
    total = count_in_text(passage.body, pattern)
    if resolve_include_names(pattern, include_names):
        total += count_in_text(passage.name, pattern)
    return total
