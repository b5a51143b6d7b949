"""Copy note attachments next to the converted notes."""

import logging
import shutil
from pathlib import Path

from ..models import NoteRecord

logger = logging.getLogger(__name__)


def copy_attachments(note: NoteRecord, base_dir: Path, output_dir: Path) -> list[str]:
    """Copy the note's attachments into ``output_dir``.

    Args:
        note: The note whose attachments to copy.
        base_dir: Directory the attachment paths are relative to.
        output_dir: Destination directory, created when needed.

    Returns:
        File names of the copied attachments, in note order. Attachments whose
        source file is missing are left out.
    """
    copied: list[str] = []
    if not note.attachments:
        return copied

    output_dir.mkdir(parents=True, exist_ok=True)
    for attachment in note.attachments:
        source = base_dir / attachment.file_path
        if not source.is_file():
            logger.debug(f"Attachment not found, skipping: {source}")
            continue
        name = Path(attachment.file_path).name
        shutil.copy2(source, output_dir / name)
        copied.append(name)
    return copied
