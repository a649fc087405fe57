"""Domain model - entities and value objects.

Following Cosmic Python principles:
- Passages are entities: identity is stable, name and body change in place
- Queries and results are immutable value objects
- No infrastructure dependencies
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.dataclasses import dataclass


PassageId = str | int


@runtime_checkable
class PassageLike(Protocol):
    """Anything the engine can search and mutate in place."""

    id: PassageId
    name: str
    body: str


# Entities (have identity, can be mutable)
@dataclass
class Passage:
    """A named unit of text in a story.

    The engine only ever rewrites ``name`` and ``body``; ``id`` is owned by the
    caller's collection and never changes.
    """

    id: PassageId
    name: str = ""
    body: str = ""


# Value Objects (immutable)
class SearchQuery(BaseModel):
    """Value object for one search pass.

    Rebuilt whenever any search input changes. An empty ``raw_pattern`` is a
    valid query that matches nothing.
    """

    model_config = ConfigDict(frozen=True)

    raw_pattern: str = ""
    is_regex: bool = False
    case_sensitive: bool = False
    include_names: bool = False


class ReplaceSummary(BaseModel):
    """Terminal result of a replace-all pass."""

    model_config = ConfigDict(frozen=True)

    passages_matched: int = Field(default=0, ge=0)
    total_replacements: int = Field(default=0, ge=0)


class HighlightResult(BaseModel):
    """Escaped, highlighted HTML for a passage's name and body."""

    model_config = ConfigDict(frozen=True)

    name_html: str
    body_html: str


class SearchResultRow(BaseModel):
    """One matching passage as listed in the search results."""

    model_config = ConfigDict(frozen=True)

    result_number: int = Field(ge=1)
    passage_id: PassageId
    name_html: str
    preview_html: str
    num_matches: int = Field(ge=1)


class SearchResults(BaseModel):
    """Value object for a complete search listing.

    ``error`` holds the compile error reason when the query could not be
    compiled, so callers can tell a syntax error from an empty result set.
    """

    model_config = ConfigDict(frozen=True)

    rows: list[SearchResultRow] = Field(default_factory=list)
    passages_matched: int = Field(default=0, ge=0)
    error: str | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None
