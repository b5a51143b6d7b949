"""Markdown templates for converted notes."""

import re
from typing import Iterable

import yaml

from ..models import NoteRecord
from ..tags.hashtags import escape_invalid_hashtags
from ..tags.normalizer import label_tags

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "bmp", "svg", "webp")
IMAGE_RE = re.compile(rf"\.({'|'.join(IMAGE_EXTENSIONS)})$", re.IGNORECASE)
UNKNOWN_DATE = "Unknown Date"


def _yaml_scalar(value: str) -> str:
    """Plain scalar when YAML allows it, quoted otherwise (e.g. leading # or *)."""
    dumped = yaml.safe_dump([value], default_flow_style=False, allow_unicode=True, width=2**31 - 1)
    return dumped[2:].rstrip("\n")


def render_frontmatter(tags: Iterable[str]) -> str:
    """Render the YAML tag block."""
    lines = ["---", "tags:"]
    lines.extend(f"  - {_yaml_scalar(tag)}" for tag in tags)
    lines.append("---")
    return "\n".join(lines) + "\n"


def display_title(note: NoteRecord) -> str:
    """Date-prefixed title, or date and time for untitled notes."""
    created = note.created_at
    title = note.clean_title
    if created is None:
        return f"{UNKNOWN_DATE} - {title}" if title else UNKNOWN_DATE

    date = created.strftime("%Y-%m-%d")
    if title:
        return f"{date} - {title}"
    return f"{date}.{created.strftime('%H.%M')}"


def created_marker(note: NoteRecord) -> str | None:
    created = note.created_at
    if created is None:
        return None
    iso = created.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"<!-- Created: {iso} -->"


def render_attachment(file_name: str) -> str:
    if IMAGE_RE.search(file_name):
        return f"![]({file_name})"
    return f"[{file_name}]({file_name})"


def render_attachments(file_names: list[str]) -> str:
    parts = ["## Attachments"]
    parts.extend(render_attachment(name) for name in file_names)
    return "\n\n".join(parts)


def assemble_note(
    note: NoteRecord,
    rendered_body: str,
    attachment_names: list[str],
    namespace_root: str,
    valid_tags: frozenset[str],
    nest_labels: bool = False,
) -> str:
    """Compose the full Markdown document for a note.

    Sections, in order: tag front matter, title, body, attachments and the
    creation marker. The title goes through hashtag escaping since users may
    type ``#words`` into it.
    """
    tags = [namespace_root] if namespace_root else []
    tags.extend(label_tags(note.labels, namespace_root if nest_labels else "", nested=True))

    parts = [
        render_frontmatter(tags),
        f"# {escape_invalid_hashtags(display_title(note), valid_tags)}",
    ]

    body = rendered_body.strip()
    if body:
        parts.append(body)

    if attachment_names:
        parts.append(render_attachments(attachment_names))

    marker = created_marker(note)
    if marker:
        parts.append(marker)

    return "\n\n".join(part.strip() for part in parts)
