"""Convert a Keep export directory into Markdown notes."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from .config import DEFAULT_CONFIG
from .ingest.attachments import copy_attachments
from .ingest.html import HtmlRenderer
from .ingest.record import find_note_files, load_note, load_note_html
from .vault.templates import assemble_note
from .vault.writer import NoteWriter, derive_filename

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of a batch conversion."""
    found: int = 0
    converted: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)


class NoteConverter:
    """Converts notes one at a time into a single output directory."""

    def __init__(
        self,
        output_dir: str | Path,
        valid_tags: frozenset[str] = frozenset(),
        config: dict[str, Any] | None = None,
    ):
        self.config = {**DEFAULT_CONFIG, **(config or {})}
        self.output_dir = Path(output_dir)
        self.valid_tags = valid_tags
        self.renderer = HtmlRenderer(valid_tags)
        self.writer = NoteWriter(self.output_dir)

    def convert_note(self, json_path: Path) -> Path:
        """Convert one note and return the path of the Markdown file."""
        note = load_note(json_path)

        html = load_note_html(json_path)
        body = self.renderer.render(html) if html is not None else ""

        attachments = copy_attachments(note, json_path.parent, self.output_dir)

        markdown = assemble_note(
            note,
            body,
            attachments,
            namespace_root=self.config["namespace_root"],
            valid_tags=self.valid_tags,
            nest_labels=self.config["nest_labels"],
        )
        file_name = derive_filename(note, self.config["max_filename_length"])
        return self.writer.write(file_name, markdown)

    def convert_directory(
        self,
        input_dir: str | Path,
        on_converted: Callable[[Path, Path], None] | None = None,
    ) -> ConversionResult:
        """Convert every note below ``input_dir``.

        A note that fails is logged and skipped; the rest of the batch still
        runs. Only the output directory itself must be creatable.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        note_files = find_note_files(Path(input_dir))
        result = ConversionResult(found=len(note_files))
        logger.info(f"Found {len(note_files)} notes to convert")

        for json_path in note_files:
            try:
                out_path = self.convert_note(json_path)
            except Exception as e:
                logger.error(f"Error converting {json_path}: {e}")
                result.failed.append((json_path, str(e)))
                continue
            result.converted.append(out_path)
            if on_converted:
                on_converted(json_path, out_path)

        return result
