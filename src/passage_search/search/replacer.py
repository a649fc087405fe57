"""In-place substitution within one passage or across a collection.

Replacement text is a ``re`` template expanded against the compiled pattern:
``\\1`` (or ``\\g<1>``) is the whole matched span, and groups of a user regex
start at ``\\2``. Templates are checked before any passage is touched.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import re

from passage_search.domain.model import PassageLike, ReplaceSummary
from passage_search.search.matcher import count_matches, resolve_include_names
from passage_search.search.pattern import CompiledPattern, InvalidReplacementError


logger = logging.getLogger(__name__)


def validate_replacement(pattern: CompiledPattern, replacement: str) -> None:
    """Raise ``InvalidReplacementError`` if ``replacement`` cannot be expanded.

    ``re`` parses the template before scanning, so substituting into an empty
    string surfaces bad escapes and unknown group references without a match.
    """
    if pattern.regex is None:
        return
    try:
        pattern.regex.sub(replacement, "")
    except (re.error, IndexError) as exc:
        raise InvalidReplacementError(replacement, str(exc)) from exc


def replace_in_text(text: str, pattern: CompiledPattern, replacement: str) -> tuple[str, int]:
    """Replace every match in ``text`` with the expanded ``replacement``.

    Returns:
        Tuple of (new_text, substitutions_made).
    """
    if pattern.regex is None:
        return text, 0
    return pattern.regex.subn(replacement, text)


def replace_in_passage(
    passage: PassageLike,
    pattern: CompiledPattern,
    replacement: str,
    include_names: bool | None = None,
) -> int:
    """Replace all matches in a passage's body, and its name when included.

    Both fields are computed before either is assigned, so a passage never
    ends up with only one of them rewritten.

    Returns:
        Number of substitutions made. Zero means the passage was not touched.

    Raises:
        InvalidReplacementError: If the template is invalid; nothing changes.
    """
    if pattern.is_empty:
        return 0
    validate_replacement(pattern, replacement)

    new_body, body_hits = replace_in_text(passage.body, pattern, replacement)
    new_name, name_hits = passage.name, 0
    if resolve_include_names(pattern, include_names):
        new_name, name_hits = replace_in_text(passage.name, pattern, replacement)

    if body_hits:
        passage.body = new_body
    if name_hits:
        passage.name = new_name
    return body_hits + name_hits


def replace_all(
    passages: Iterable[PassageLike],
    pattern: CompiledPattern,
    replacement: str,
    include_names: bool | None = None,
) -> ReplaceSummary:
    """Replace matches in every passage of a collection.

    Each passage is counted first with the same pattern and flags used for
    the substitution; passages without matches are skipped entirely.

    Raises:
        InvalidReplacementError: If the template is invalid; no passage changes.
    """
    if pattern.is_empty:
        return ReplaceSummary()
    validate_replacement(pattern, replacement)

    names = resolve_include_names(pattern, include_names)
    passages_matched = 0
    total_replacements = 0
    for passage in passages:
        num_matches = count_matches(passage, pattern, names)
        if num_matches == 0:
            continue
        passages_matched += 1
        total_replacements += num_matches
        replace_in_passage(passage, pattern, replacement, names)
        logger.debug("Replaced %d match(es) in passage %r", num_matches, passage.id)

    return ReplaceSummary(passages_matched=passages_matched, total_replacements=total_replacements)
