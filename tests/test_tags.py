# tests/test_tags.py

from __future__ import annotations

import pytest

from focuslist.tasks.tags import extract_tags, tags_as_text


def test_extract_tags_order_and_dedupe() -> None:
    assert extract_tags("Call mom #family #phone and #family again") == ("family", "phone")


@pytest.mark.parametrize(
    "text",
    ["", "no tags here", "# spaced", "trailing #", "#-dash", "price #$5"],
)
def test_extract_tags_ignores_non_tags(text: str) -> None:
    assert extract_tags(text) == ()


def test_extract_tags_word_chars_only() -> None:
    # Token stops at the first non [A-Za-z0-9_] character.
    assert extract_tags("#work-stuff #deep_work2 (#x)") == ("work", "deep_work2", "x")


def test_extract_tags_is_case_sensitive() -> None:
    assert extract_tags("#Home #home") == ("Home", "home")


def test_extraction_is_idempotent() -> None:
    tags = ("a", "b_2", "C")
    assert extract_tags(tags_as_text(tags)) == tags
    assert extract_tags(tags_as_text(extract_tags(tags_as_text(tags)))) == tags
