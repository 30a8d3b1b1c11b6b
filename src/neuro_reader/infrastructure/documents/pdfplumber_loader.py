"""PDF document loader — implements DocumentLoaderPort using pdfplumber.

Accepts a file-system path or raw bytes. URL sources are not fetched by
this adapter and fail with ``DocumentLoadError``.
"""

from __future__ import annotations

import io
from pathlib import Path

import pdfplumber

from neuro_reader.domain.errors import DocumentLoadError
from neuro_reader.domain.models.document import DocumentInfo, DocumentSource, PageView
from neuro_reader.domain.ports.document_loader import DocumentLoaderPort


def _metadata_text(metadata: dict, key: str) -> str | None:
    value = metadata.get(key)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class PdfplumberDocumentLoader(DocumentLoaderPort):
    """Open PDFs with pdfplumber to read page counts, metadata and text."""

    def load(self, resource: DocumentSource) -> DocumentInfo:
        with self._open(resource) as pdf:
            metadata = pdf.metadata or {}
            return DocumentInfo(
                page_count=len(pdf.pages),
                title=_metadata_text(metadata, "Title"),
                author=_metadata_text(metadata, "Author"),
            )

    def render(self, resource: DocumentSource, page_index: int) -> PageView:
        with self._open(resource) as pdf:
            if not 0 <= page_index < len(pdf.pages):
                raise DocumentLoadError(
                    f"Page {page_index + 1} is out of range (1-{len(pdf.pages)})."
                )
            page = pdf.pages[page_index]
            return PageView(
                page_number=page_index + 1,
                width=float(page.width),
                height=float(page.height),
                text=page.extract_text() or "",
            )

    # -- Internals -----------------------------------------------------------

    @staticmethod
    def _open(resource: DocumentSource) -> pdfplumber.PDF:
        if isinstance(resource, bytes):
            stream: io.BytesIO | str = io.BytesIO(resource)
        elif resource.startswith(("http://", "https://")):
            raise DocumentLoadError(f"Remote documents are not supported: {resource}")
        else:
            path = Path(resource)
            if not path.exists():
                raise DocumentLoadError(f"File not found: {path}")
            stream = str(path)

        try:
            return pdfplumber.open(stream)
        except Exception as exc:
            raise DocumentLoadError(f"Could not open PDF: {exc}") from exc
