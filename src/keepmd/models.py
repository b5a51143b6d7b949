"""Data models used throughout keepmd."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class NoteLabel:
    """A label attached to a note."""
    name: str


@dataclass
class NoteAttachment:
    """A binary file referenced by a note, relative to the note's directory."""
    file_path: str
    mimetype: str | None = None


@dataclass
class NoteRecord:
    """Metadata of one exported note."""
    title: str | None = None
    created_timestamp_usec: int | None = None
    labels: list[NoteLabel] = field(default_factory=list)
    attachments: list[NoteAttachment] = field(default_factory=list)
    source_path: str = ""

    @classmethod
    def from_dict(cls, data: Any, source_path: str = "") -> "NoteRecord":
        """Build a record from a decoded Keep JSON payload.

        Raises ValueError when the payload is not an object or the creation
        timestamp is not numeric.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        timestamp = data.get("createdTimestampUsec")
        created = None
        if timestamp not in (None, ""):
            try:
                created = int(str(timestamp).strip())
            except ValueError:
                raise ValueError(f"invalid createdTimestampUsec: {timestamp!r}") from None

        labels = [
            NoteLabel(name=str(label.get("name") or ""))
            for label in data.get("labels") or []
            if isinstance(label, dict)
        ]
        attachments = [
            NoteAttachment(file_path=str(att["filePath"]), mimetype=att.get("mimetype"))
            for att in data.get("attachments") or []
            if isinstance(att, dict) and att.get("filePath")
        ]

        title = data.get("title")
        return cls(
            title=str(title) if title is not None else None,
            created_timestamp_usec=created,
            labels=labels,
            attachments=attachments,
            source_path=source_path,
        )

    @property
    def created_at(self) -> datetime | None:
        """Creation time as an aware UTC datetime, millisecond precision."""
        if self.created_timestamp_usec is None:
            return None
        millis = self.created_timestamp_usec // 1000
        return EPOCH + timedelta(milliseconds=millis)

    @property
    def clean_title(self) -> str:
        return (self.title or "").strip()
