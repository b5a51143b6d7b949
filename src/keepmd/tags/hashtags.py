"""Escape literal hashtags that do not correspond to a known label."""

import re
from typing import Iterable

from .normalizer import normalize_label

# A "#" not already escaped, followed by the tag name.
HASHTAG_RE = re.compile(r"(?<!\\)#([\w-]+)")
ESCAPE_MARKER = "\\"


def hashtag_form(text: str) -> str:
    """Flat, lowercase form used to compare hashtags against labels.

    Unlike ``normalize_label`` this neither substitutes slashes nor splits
    hierarchy: hashtags written in content are flat.
    """
    text = re.sub(r"[^\w\s-]", "", text.strip().lower())
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-{2,}", "-", text)
    return text.strip("-")


def build_valid_tag_set(raw_labels: Iterable[str]) -> frozenset[str]:
    """Normalize raw label names into the set of tags that may stay live."""
    valid = set()
    for label in raw_labels:
        if not label or not label.strip():
            continue
        for form in (normalize_label(label), hashtag_form(label)):
            if form:
                valid.add(form)
    return frozenset(valid)


def escape_invalid_hashtags(text: str, valid_tags: frozenset[str] | set[str]) -> str:
    """Prefix every hashtag not in ``valid_tags`` with a backslash.

    With an empty ``valid_tags`` every hashtag is escaped. Escaped hashtags
    are not matched again, so running this twice changes nothing.
    """
    def replace(match: re.Match) -> str:
        if valid_tags and hashtag_form(match.group(1)) in valid_tags:
            return match.group(0)
        return ESCAPE_MARKER + match.group(0)

    return HASHTAG_RE.sub(replace, text)
