"""Turn free-form label names into canonical tag paths.

A label such as ``"Reference - Linux/Tech"`` becomes ``reference/linux-and-tech``:
a literal ``/`` is label text, while `` - `` marks hierarchy. The transforms in
``LABEL_PIPELINE`` run in order; swapping the first two would let slashes from
the label text pose as hierarchy separators.
"""

import re
from typing import Callable, Iterable

from ..models import NoteLabel

HIERARCHY_SEPARATOR = " - "
PATH_SEPARATOR = "/"
SLASH_SUBSTITUTE = " and "


def substitute_slashes(name: str) -> str:
    return name.replace("/", SLASH_SUBSTITUTE)


def split_hierarchy(name: str) -> str:
    return name.replace(HIERARCHY_SEPARATOR, PATH_SEPARATOR)


def hyphenate_whitespace(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip())


def lowercase(name: str) -> str:
    return name.lower()


def drop_empty_segments(path: str) -> str:
    """Remove segments left empty by leading, trailing or doubled separators."""
    segments = (segment.strip("-") for segment in path.split(PATH_SEPARATOR))
    return PATH_SEPARATOR.join(segment for segment in segments if segment)


LABEL_PIPELINE: tuple[Callable[[str], str], ...] = (
    substitute_slashes,
    split_hierarchy,
    hyphenate_whitespace,
    lowercase,
    drop_empty_segments,
)


def normalize_label(raw_name: str, namespace_root: str = "", nested: bool = True) -> str:
    """Normalize a label name into a tag path.

    Args:
        raw_name: Label name as typed by the user.
        namespace_root: Optional root prepended to the path.
        nested: Prepend the root as a path segment (``root/path``) rather than
            as a flat prefix (``rootpath``).

    Returns:
        The tag path, or an empty string when nothing but separators and
        whitespace was given.
    """
    path = raw_name
    for transform in LABEL_PIPELINE:
        path = transform(path)

    if not path or not namespace_root:
        return path
    if nested:
        return f"{namespace_root.rstrip(PATH_SEPARATOR)}{PATH_SEPARATOR}{path}"
    return f"{namespace_root}{path}"


def label_tags(labels: Iterable[NoteLabel | str], namespace_root: str = "", nested: bool = True) -> list[str]:
    """Tag paths for a note's labels, in label order. Blank names are skipped."""
    tags = []
    for label in labels:
        name = label.name if isinstance(label, NoteLabel) else label
        if not name or not name.strip():
            continue
        tag = normalize_label(name, namespace_root, nested)
        if tag:
            tags.append(tag)
    return tags
