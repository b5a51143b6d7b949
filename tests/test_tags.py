"""Tests for label normalization and hashtag escaping."""

from keepmd.models import NoteLabel
from keepmd.tags.hashtags import build_valid_tag_set, escape_invalid_hashtags, hashtag_form
from keepmd.tags.normalizer import (
    LABEL_PIPELINE,
    label_tags,
    normalize_label,
    split_hierarchy,
    substitute_slashes,
)


def test_normalize_hierarchy_and_slash():
    assert normalize_label("Reference - Linux/Tech") == "reference/linux-and-tech"
    assert normalize_label("Personal - Friends") == "personal/friends"


def test_normalize_with_root():
    assert normalize_label("Reference - Linux/Tech", "keep") == "keep/reference/linux-and-tech"
    assert normalize_label("Reference - Linux/Tech", "keep-", nested=False) == "keep-reference/linux-and-tech"


def test_normalize_ignores_case_and_whitespace():
    expected = normalize_label("Personal - Friends")
    assert normalize_label("  personal - FRIENDS  ") == expected
    assert normalize_label("PERSONAL - friends") == expected
    assert normalize_label("Personal   -  Friends") == expected
    assert normalize_label("Book  Club") == normalize_label("book club") == "book-club"


def test_slash_and_hierarchy_never_collide():
    assert normalize_label("Work/Life") == "work-and-life"
    assert normalize_label("Work - Life") == "work/life"


def test_slash_substitution_runs_before_hierarchy_split():
    assert LABEL_PIPELINE.index(substitute_slashes) < LABEL_PIPELINE.index(split_hierarchy)


def test_separator_only_names_normalize_to_empty():
    assert normalize_label(" - ") == ""
    assert normalize_label(" - ", "keep") == ""
    assert normalize_label("Projects -  - Home") == "projects/home"


def test_label_tags_skips_blank_names():
    labels = [NoteLabel(""), NoteLabel("   "), NoteLabel(" - "), NoteLabel("Ideas"), NoteLabel("Ideas")]
    assert label_tags(labels) == ["ideas", "ideas"]
    assert label_tags(["Ideas"], "keep") == ["keep/ideas"]


def test_hashtag_form():
    assert hashtag_form("Personal - Friends") == "personal-friends"
    assert hashtag_form("To-Do!!") == "to-do"
    assert hashtag_form("Work/Life") == "worklife"


def test_escape_with_empty_set_escapes_everything():
    assert escape_invalid_hashtags("Check #anything here", frozenset()) == "Check \\#anything here"


def test_escape_keeps_known_labels():
    valid = build_valid_tag_set(["Anything"])
    assert escape_invalid_hashtags("Check #anything here", valid) == "Check #anything here"
    assert escape_invalid_hashtags("Check #Anything here", valid) == "Check #Anything here"


def test_escape_mixed_tags():
    valid = build_valid_tag_set(["Personal - Friends", "Work/Life", "ideas"])
    text = "#ideas #personal-friends #work-and-life #random"
    assert escape_invalid_hashtags(text, valid) == "#ideas #personal-friends #work-and-life \\#random"


def test_escape_is_idempotent():
    once = escape_invalid_hashtags("#one and #two", frozenset())
    assert once == "\\#one and \\#two"
    assert escape_invalid_hashtags(once, frozenset()) == once


def test_escape_leaves_other_text_alone():
    text = "# Heading\n## Sub\nC# code and a lone # sign"
    assert escape_invalid_hashtags(text, frozenset()) == text


def test_escape_mid_word_hashtags():
    assert escape_invalid_hashtags("foo#bar", frozenset()) == "foo\\#bar"
    assert escape_invalid_hashtags("foo#bar", build_valid_tag_set(["Bar"])) == "foo#bar"
    assert escape_invalid_hashtags("see page#top", frozenset()) == "see page\\#top"


def test_build_valid_tag_set_skips_blank():
    assert build_valid_tag_set(["", "  "]) == frozenset()
    assert "personal/friends" in build_valid_tag_set(["Personal - Friends"])
