"""Shared test fixtures and configuration."""

import os

import pytest


# Complete test environment that overrides every config value
TEST_ENV = {
    "PASSAGE_SEARCH_HIGHLIGHT_CLASS": "highlight",
    "PASSAGE_SEARCH_MAX_PATTERN_LENGTH": "1000",
    "PASSAGE_SEARCH_LOG_LEVEL": "info",
    "PASSAGE_SEARCH_LOG_JSON": "true",
    "PASSAGE_SEARCH_TRACING_ENABLED": "true",
    "PASSAGE_SEARCH_SERVICE_NAME": "passage-search-tests",
}


# Set environment variables immediately when conftest.py is loaded
for key, value in TEST_ENV.items():
    os.environ[key] = value

from passage_search.config import get_settings
from passage_search.domain import Passage, SearchQuery
from passage_search.observability import reset_tracer, trace_context


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin the test environment and drop cached settings/tracers around each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    reset_tracer()
    token = trace_context.set(None)
    yield
    trace_context.reset(token)
    get_settings.cache_clear()
    reset_tracer()


@pytest.fixture
def story_passages() -> list[Passage]:
    """Two passages where one matches in the body and one only in the name."""
    return [
        Passage(id=1, name="Intro", body="cat sat"),
        Passage(id=2, name="Cat", body="dog ran"),
    ]


@pytest.fixture
def cat_query() -> SearchQuery:
    return SearchQuery(raw_pattern="cat", is_regex=False, case_sensitive=False, include_names=True)
