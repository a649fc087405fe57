"""Compile user search input into a capture-grouped regular expression.

Every consumer (matcher, highlighter, replacer) works from the same
``CompiledPattern`` so they agree on what a match is. The source is always
wrapped in one leading capturing group; group 1 is the match span. Groups
in a user regex therefore shift up by one, and numeric references to them
are renumbered so the wrapped pattern matches exactly what the bare one does.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from passage_search.domain.model import SearchQuery


logger = logging.getLogger(__name__)

INVALID_PATTERN = "invalid-pattern"
PATTERN_TOO_LONG = "pattern-too-long"
INVALID_REPLACEMENT = "invalid-replacement"

# Characters escaped in literal mode; whitespace is escaped as well.
LITERAL_METACHARACTERS = re.compile(r"[-\[\]{}()*+?.,\\^$|#\s]")
# One or more leading global flag groups, e.g. "(?s)" or "(?i)(?m)"
GLOBAL_FLAGS_PREFIX = re.compile(r"(?:\(\?[aiLmsux]+\))+")
CONDITIONAL_GROUP = re.compile(r"\(\?\((\d+)\)")
DIGITS = "0123456789"
OCTDIGITS = "01234567"


class PatternError(ValueError):
    """Base error for search patterns that cannot be used."""


class InvalidPatternError(PatternError):
    """Raised when a query cannot be compiled into a pattern."""

    def __init__(self, pattern: str, message: str, reason: str = INVALID_PATTERN) -> None:
        super().__init__(f"{reason}: {message}")
        self.pattern = pattern
        self.message = message
        self.reason = reason


class InvalidReplacementError(PatternError):
    """Raised when a replacement template cannot be expanded against a pattern."""

    def __init__(self, replacement: str, message: str) -> None:
        super().__init__(f"{INVALID_REPLACEMENT}: {message}")
        self.replacement = replacement
        self.message = message
        self.reason = INVALID_REPLACEMENT


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """Read-only compiled form of a ``SearchQuery``.

    ``regex`` is ``None`` for the empty pattern, which matches nothing.
    """

    source: str
    regex: re.Pattern[str] | None
    case_sensitive: bool = False
    include_names: bool = False

    @property
    def is_empty(self) -> bool:
        return self.regex is None

    def finditer(self, text: str):
        if self.regex is None:
            return iter(())
        return self.regex.finditer(text)


def escape_literal(text: str) -> str:
    """Backslash-escape regex metacharacters and whitespace in ``text``."""
    return LITERAL_METACHARACTERS.sub(lambda match: "\\" + match.group(0), text)


def _split_global_flags(source: str) -> tuple[str, str]:
    """Split leading global flag groups such as ``(?s)`` off ``source``."""
    match = GLOBAL_FLAGS_PREFIX.match(source)
    if match is None:
        return "", source
    return match.group(0), source[match.end() :]


def shift_group_references(source: str, *, verbose: bool = False) -> str:
    """Renumber numeric group references in ``source`` up by one.

    Used when ``source`` is nested inside an extra leading group. Handles
    ``\\N``/``\\NN`` backreferences and ``(?(N)...)`` conditionals outside
    character classes; three-digit octal escapes are left as they are.
    """
    out: list[str] = []
    length = len(source)
    in_class = False
    i = 0
    while i < length:
        char = source[i]
        if char == "\\" and i + 1 < length:
            first = source[i + 1]
            if in_class or first not in "123456789":
                out.append(source[i : i + 2])
                i += 2
                continue
            digits = first
            j = i + 2
            if j < length and source[j] in DIGITS:
                if first in OCTDIGITS and source[j] in OCTDIGITS and j + 1 < length and source[j + 1] in OCTDIGITS:
                    out.append(source[i : j + 2])
                    i = j + 2
                    continue
                digits += source[j]
                j += 1
            group = int(digits) + 1
            if group > 99:
                raise re.error(f"cannot renumber group reference {digits}", source, i)
            out.append(f"\\{group}")
            i = j
            continue
        if in_class:
            if char == "]":
                in_class = False
            out.append(char)
            i += 1
            continue
        if char == "[":
            # "]" right after "[" or "[^" is a literal member of the class
            end = i + 1
            if source.startswith("^", end):
                end += 1
            if source.startswith("]", end):
                end += 1
            out.append(source[i:end])
            in_class = True
            i = end
            continue
        if verbose and char == "#":
            end = source.find("\n", i)
            end = length if end == -1 else end
            out.append(source[i:end])
            i = end
            continue
        conditional = CONDITIONAL_GROUP.match(source, i)
        if conditional is not None:
            out.append(f"(?({int(conditional.group(1)) + 1})")
            i = conditional.end()
            continue
        out.append(char)
        i += 1
    return "".join(out)


def wrap_source(source: str) -> str:
    """Wrap ``source`` in the match group, keeping global flags in front."""
    flags_prefix, body = _split_global_flags(source)
    verbose = "x" in flags_prefix
    body = shift_group_references(body, verbose=verbose)
    # A trailing verbose-mode comment would swallow the closing parenthesis
    closing = "\n)" if verbose else ")"
    return f"{flags_prefix}({body}{closing}"


def compile_query(query: SearchQuery, *, max_pattern_length: int | None = None) -> CompiledPattern:
    """Compile ``query`` into a ``CompiledPattern``.

    Args:
        query: The search inputs.
        max_pattern_length: Reject raw patterns longer than this when set.

    Returns:
        The compiled pattern; an empty pattern when ``raw_pattern`` is empty.

    Raises:
        InvalidPatternError: If regex mode is on and the pattern does not
            compile, or the pattern exceeds ``max_pattern_length``.
    """
    raw = query.raw_pattern
    if not raw:
        return CompiledPattern(
            source="",
            regex=None,
            case_sensitive=query.case_sensitive,
            include_names=query.include_names,
        )

    if max_pattern_length is not None and len(raw) > max_pattern_length:
        raise InvalidPatternError(
            raw,
            f"pattern is {len(raw)} characters, limit is {max_pattern_length}",
            reason=PATTERN_TOO_LONG,
        )

    source = raw if query.is_regex else escape_literal(raw)
    flags = 0 if query.case_sensitive else re.IGNORECASE
    try:
        # The bare source must compile on its own, otherwise text like "a)|(b"
        # would rebalance the wrapper group.
        re.compile(source, flags)
        regex = re.compile(wrap_source(source), flags)
    except re.error as exc:
        logger.debug("Rejected search pattern %r: %s", raw, exc)
        raise InvalidPatternError(raw, str(exc)) from exc

    return CompiledPattern(
        source=source,
        regex=regex,
        case_sensitive=query.case_sensitive,
        include_names=query.include_names,
    )
