"""Unit tests for single-passage and collection-wide replacement."""

import pytest

from passage_search.domain import Passage, ReplaceSummary, SearchQuery
from passage_search.search.matcher import count_matches
from passage_search.search.pattern import INVALID_REPLACEMENT, InvalidReplacementError, compile_query
from passage_search.search.replacer import (
    replace_all,
    replace_in_passage,
    replace_in_text,
    validate_replacement,
)


pytestmark = pytest.mark.unit


def _pattern(raw: str, **kwargs):
    return compile_query(SearchQuery(raw_pattern=raw, **kwargs))


class TestReplaceInPassage:
    """In-place substitution within one passage."""

    def test_replaces_every_body_match(self):
        passage = Passage(id=1, name="cat", body="cat and Cat")

        replaced = replace_in_passage(passage, _pattern("cat"), "dog")

        assert replaced == 2
        assert passage.body == "dog and dog"
        assert passage.name == "cat"

    def test_replaces_name_when_included(self):
        passage = Passage(id=1, name="Cat", body="dog ran")

        replaced = replace_in_passage(passage, _pattern("cat"), "dog", include_names=True)

        assert replaced == 1
        assert passage.name == "dog"
        assert passage.body == "dog ran"

    def test_zero_matches_is_a_no_op(self):
        passage = Passage(id=1, name="n", body="nothing here")

        assert replace_in_passage(passage, _pattern("cat"), "dog") == 0
        assert passage.body == "nothing here"

    def test_empty_pattern_is_a_no_op(self):
        passage = Passage(id=1, name="n", body="text")

        assert replace_in_passage(passage, _pattern(""), "x", include_names=True) == 0
        assert passage.body == "text"
        assert passage.name == "n"

    def test_group_one_expands_to_the_matched_span(self):
        passage = Passage(id=1, body="cat and Cat")

        replace_in_passage(passage, _pattern("cat"), r"<\1>")

        assert passage.body == "<cat> and <Cat>"

    def test_regex_groups_follow_the_match_group(self):
        passage = Passage(id=1, body="me@host")

        replace_in_passage(passage, _pattern(r"(\w+)@(\w+)", is_regex=True), r"\3 at \g<2>")

        assert passage.body == "host at me"

    def test_escaped_backslash_in_template(self):
        passage = Passage(id=1, body="path: X")

        replace_in_passage(passage, _pattern("X", case_sensitive=True), r"C:\\new")

        assert passage.body == r"path: C:\new"

    @pytest.mark.parametrize("replacement", [r"\d", r"\5", r"\g<missing>"])
    def test_invalid_template_raises_and_leaves_passage_untouched(self, replacement):
        passage = Passage(id=1, name="cat", body="cat")

        with pytest.raises(InvalidReplacementError) as excinfo:
            replace_in_passage(passage, _pattern("cat"), replacement, include_names=True)

        assert excinfo.value.reason == INVALID_REPLACEMENT
        assert passage.body == "cat"
        assert passage.name == "cat"

    def test_validate_replacement_ignores_empty_pattern(self):
        validate_replacement(_pattern(""), r"\d")

    def test_recount_after_replace_is_zero(self):
        passage = Passage(id=1, name="Cat", body="cat, CAT and cAt")
        pattern = _pattern("cat", include_names=True)

        replace_in_passage(passage, pattern, "dog")

        assert count_matches(passage, pattern) == 0

    def test_replace_in_text_returns_count(self):
        assert replace_in_text("a.b a.b", _pattern("a.b"), "x") == ("x x", 2)


class TestReplaceAll:
    """Collection-wide replacement with statistics."""

    def test_counts_body_and_name_matches(self, story_passages, cat_query):
        pattern = compile_query(cat_query)

        assert [count_matches(p, pattern) for p in story_passages] == [1, 1]

        summary = replace_all(story_passages, pattern, "dog")

        assert summary == ReplaceSummary(passages_matched=2, total_replacements=2)
        assert story_passages[0].body == "dog sat"
        assert story_passages[0].name == "Intro"
        assert story_passages[1].name == "dog"
        assert story_passages[1].body == "dog ran"

    def test_name_excluded_leaves_name_matches_alone(self, story_passages):
        pattern = _pattern("cat", include_names=False)

        summary = replace_all(story_passages, pattern, "dog")

        assert summary.passages_matched == 1
        assert summary.total_replacements == 1
        assert story_passages[1].name == "Cat"

    def test_skips_passages_without_matches(self):
        passages = [
            Passage(id="a", name="", body="x x"),
            Passage(id="b", name="", body="nothing"),
            Passage(id="c", name="", body="x"),
        ]

        summary = replace_all(passages, _pattern("x"), "y")

        assert summary.passages_matched == 2
        assert summary.total_replacements == 3
        assert passages[1].body == "nothing"

    def test_empty_pattern_returns_zero_summary(self, story_passages):
        summary = replace_all(story_passages, _pattern(""), "dog", include_names=True)

        assert summary == ReplaceSummary(passages_matched=0, total_replacements=0)
        assert story_passages[0].body == "cat sat"

    def test_order_does_not_change_totals(self):
        def build():
            return [Passage(id=i, name="", body=body) for i, body in enumerate(["ab", "b", "bbb"])]

        forward = replace_all(build(), _pattern("b"), "c")
        backward = replace_all(list(reversed(build())), _pattern("b"), "c")

        assert forward == backward == ReplaceSummary(passages_matched=3, total_replacements=5)

    def test_accepts_any_passage_like_object(self):
        class Row:
            def __init__(self, id, name, body):
                self.id = id
                self.name = name
                self.body = body

        row = Row("r", "title", "hello world")

        summary = replace_all([row], _pattern("world"), "there")

        assert summary.total_replacements == 1
        assert row.body == "hello there"

    def test_invalid_template_leaves_every_passage_untouched(self, story_passages, cat_query):
        with pytest.raises(InvalidReplacementError):
            replace_all(story_passages, compile_query(cat_query), r"dog\q")

        assert [(p.name, p.body) for p in story_passages] == [("Intro", "cat sat"), ("Cat", "dog ran")]

    def test_template_expands_in_names_and_bodies(self, story_passages, cat_query):
        summary = replace_all(story_passages, compile_query(cat_query), r"[\1]")

        assert summary.total_replacements == 2
        assert story_passages[0].body == "[cat] sat"
        assert story_passages[1].name == "[Cat]"
