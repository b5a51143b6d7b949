"""Write converted notes to the output directory."""

import re
from pathlib import Path

from ..models import NoteRecord

FALLBACK_NAME = "untitled-note"


def derive_filename(note: NoteRecord, max_length: int = 50) -> str:
    """File name for a note: slugified title, creation date, or a fallback."""
    name = ""
    title = note.clean_title
    if title:
        name = re.sub(r"[^\w\s-]", "", title)
        name = re.sub(r"\s+", "-", name.strip()).lower()

    if not name:
        created = note.created_at
        name = f"{created.strftime('%Y-%m-%d')}-note" if created else FALLBACK_NAME

    return f"{name[:max_length]}.md"


class NoteWriter:
    """Writes Markdown documents, keeping names unique within one run."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        self._used: set[str] = set()

    def write(self, file_name: str, content: str) -> Path:
        """Write ``content`` under ``file_name`` and return the path written.

        A name already written during this run gets a ``_1``, ``_2``, ...
        suffix; files left by earlier runs are overwritten.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        stem, suffix = Path(file_name).stem, Path(file_name).suffix
        candidate = file_name
        counter = 1
        while candidate in self._used:
            candidate = f"{stem}_{counter}{suffix}"
            counter += 1

        file_path = self.output_dir / candidate
        file_path.write_text(content.rstrip("\n") + "\n", encoding="utf-8")
        self._used.add(candidate)
        return file_path
