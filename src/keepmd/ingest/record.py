"""Locate and load exported note records."""

import json
from pathlib import Path

from ..models import NoteRecord


def find_note_files(input_dir: Path) -> list[Path]:
    """All note metadata files below ``input_dir``, in a stable order."""
    if not input_dir.exists():
        return []
    return [
        p for p in sorted(input_dir.rglob("*.json"))
        if p.is_file() and not p.name.startswith(".")
    ]


def load_note(json_path: Path) -> NoteRecord:
    """Parse a note's JSON metadata.

    Raises:
        ValueError: The file is not valid JSON or not a note object.
    """
    text = json_path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e}") from e
    return NoteRecord.from_dict(data, source_path=str(json_path))


def note_html_path(json_path: Path) -> Path:
    return json_path.with_suffix(".html")


def load_note_html(json_path: Path) -> str | None:
    """Raw HTML exported next to the note, or None when there is none."""
    html_path = note_html_path(json_path)
    if not html_path.is_file():
        return None
    return html_path.read_text(encoding="utf-8", errors="replace")
