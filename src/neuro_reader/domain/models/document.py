"""Document models: opened documents, loader results and reading stats."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

# A file-system path or URL (persisted) or an in-memory byte payload (not persisted)
DocumentSource = Union[str, bytes]

ACCEPTED_MIME_TYPE = "application/pdf"


class ReaderDocument(BaseModel):
    """One opened document.

    Attributes:
        id: Opaque, stable identifier.
        title: Display title (file stem until metadata is loaded).
        author: Author from the document metadata, if any.
        page_count: ``0`` until the loader reports it.
        current_page: 1-based page the reader is on.
        file: Path or URL string, or raw bytes. ``None`` after a restore
            when the bytes could not be persisted.
        last_opened: When the document was last uploaded or opened.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    author: Optional[str] = None
    page_count: int = Field(default=0, ge=0)
    current_page: int = Field(default=1, ge=1)
    file: Optional[DocumentSource] = None
    last_opened: Optional[datetime] = None

    @property
    def is_url(self) -> bool:
        return isinstance(self.file, str) and self.file.startswith(("http://", "https://"))

    @field_serializer("file")
    def _serialize_file(self, value: Optional[DocumentSource]) -> Optional[str]:
        # Byte payloads only live for the session
        if isinstance(value, bytes):
            return None
        return value

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class DocumentInfo(BaseModel):
    """What the document loader reports after a successful load."""

    page_count: int = Field(ge=0)
    title: Optional[str] = None
    author: Optional[str] = None


class PageView(BaseModel):
    """A rendered page as returned by the document loader."""

    page_number: int = Field(ge=1)
    width: float
    height: float
    text: str = ""


class ReaderStats(BaseModel):
    """Derived reading statistics for the active document."""

    words_per_minute: int = 0
    reading_time: float = Field(default=0.0, description="Estimated seconds spent reading.")
    completion_percentage: float = 0.0
    pages_read: int = 0

    @classmethod
    def from_progress(
        cls,
        current_page: int,
        page_count: int,
        pages_read: int,
        words_per_page: int,
        words_per_minute: int,
    ) -> "ReaderStats":
        """Recompute stats from a document's position.

        ``reading_time`` is an estimate: pages reached so far times the time
        an average page takes at ``words_per_minute``.
        """
        if page_count <= 0:
            return cls(pages_read=pages_read)
        seconds_per_page = words_per_page / words_per_minute * 60
        return cls(
            words_per_minute=words_per_minute,
            reading_time=current_page * seconds_per_page,
            completion_percentage=current_page / page_count * 100,
            pages_read=pages_read,
        )
