"""Use Case: Manage Documents.

Upload, open, navigate and delete documents in the reader's library,
persisted via ``KeyValueStorePort``. Opening goes through the
``DocumentLoaderPort``; page turns give haptic feedback when enabled.
"""

from __future__ import annotations

import logging
import mimetypes
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from neuro_reader.application.settings_store import SettingsStore
from neuro_reader.domain.errors import (
    DocumentLoadError,
    DocumentNotFoundError,
    InvalidFileTypeError,
)
from neuro_reader.domain.models.document import (
    ACCEPTED_MIME_TYPE,
    DocumentSource,
    PageView,
    ReaderDocument,
    ReaderStats,
)
from neuro_reader.domain.models.library import DocumentLibrary
from neuro_reader.domain.ports.document_loader import DocumentLoaderPort
from neuro_reader.domain.ports.haptics_port import HapticsPort
from neuro_reader.domain.ports.storage_port import KeyValueStorePort

logger = logging.getLogger(__name__)


class ManageDocumentsUseCase:
    """Library CRUD, navigation and reading stats."""

    def __init__(
        self,
        loader: DocumentLoaderPort,
        *,
        storage: KeyValueStorePort | None = None,
        documents_key: str = "pdfDocuments",
        settings: SettingsStore | None = None,
        haptics: HapticsPort | None = None,
        page_turn_pattern: Sequence[int] = (100,),
        words_per_page: int = 250,
        words_per_minute: int = 200,
    ) -> None:
        self._loader = loader
        self._storage = storage
        self._documents_key = documents_key
        self._settings = settings
        self._haptics = haptics
        self._page_turn_pattern = list(page_turn_pattern)
        self._words_per_page = words_per_page
        self._words_per_minute = words_per_minute

        self._library = self._hydrate()
        self._pages_read = 0

    # -- Queries -------------------------------------------------------------

    @property
    def documents(self) -> list[ReaderDocument]:
        return self._library.documents

    @property
    def active(self) -> ReaderDocument | None:
        return self._library.active

    @property
    def stats(self) -> ReaderStats:
        doc = self._library.active
        if doc is None:
            return ReaderStats()
        return ReaderStats.from_progress(
            current_page=doc.current_page,
            page_count=doc.page_count,
            pages_read=self._pages_read,
            words_per_page=self._words_per_page,
            words_per_minute=self._words_per_minute,
        )

    # -- Library -------------------------------------------------------------

    def upload(
        self,
        source: DocumentSource,
        filename: str,
        mime_type: str | None = None,
    ) -> ReaderDocument:
        """Add a document to the library and make it active.

        Raises:
            InvalidFileTypeError: If the file is not a PDF. Nothing changes.
        """
        detected = mime_type or mimetypes.guess_type(filename)[0]
        if detected != ACCEPTED_MIME_TYPE:
            raise InvalidFileTypeError(detected, filename)

        doc = ReaderDocument(
            id=str(uuid.uuid4()),
            title=Path(filename).stem,
            file=source,
            last_opened=datetime.now(timezone.utc),
        )
        self._library.add(doc)
        self._pages_read = doc.current_page
        self._persist()
        return doc

    def open(self, document_id: str) -> ReaderDocument:
        """Select a document and load it to learn its page count.

        Raises:
            DocumentNotFoundError: Unknown id.
            DocumentLoadError: The loader could not open the file.
        """
        doc = self._library.select(document_id)
        if doc.file is None:
            raise DocumentLoadError(f"{doc.title!r} has no stored file; upload it again.")

        try:
            info = self._loader.load(doc.file)
        except DocumentLoadError:
            logger.warning("Failed to load document %s", doc.id)
            raise

        opened = doc.model_copy(
            update={
                "page_count": info.page_count,
                "title": info.title or doc.title,
                "author": info.author or doc.author,
                "current_page": min(doc.current_page, max(1, info.page_count)),
                "last_opened": datetime.now(timezone.utc),
            }
        )
        self._library.replace(opened)
        self._pages_read = opened.current_page
        self._persist()
        return opened

    def select(self, document_id: str) -> ReaderDocument:
        doc = self._library.select(document_id)
        self._pages_read = doc.current_page
        return doc

    def delete(self, document_id: str) -> None:
        """Remove a document; the first remaining one becomes active if needed."""
        was_active = self._library.active_id == document_id
        self._library.remove(document_id)
        if was_active:
            active = self._library.active
            self._pages_read = active.current_page if active else 0
        self._persist()

    # -- Navigation ----------------------------------------------------------

    def go_to_page(self, page_number: int) -> ReaderDocument:
        """Move the active document to *page_number*, bounded to its pages."""
        doc = self._require_active()
        last = max(1, doc.page_count)
        target = max(1, min(last, page_number))
        if target == doc.current_page:
            return doc

        moved = doc.model_copy(update={"current_page": target})
        self._library.replace(moved)
        self._pages_read = max(self._pages_read, target)
        self._page_turn_feedback()
        self._persist()
        return moved

    def next_page(self) -> ReaderDocument:
        return self.go_to_page(self._require_active().current_page + 1)

    def previous_page(self) -> ReaderDocument:
        return self.go_to_page(self._require_active().current_page - 1)

    def render_current_page(self) -> PageView:
        doc = self._require_active()
        if doc.file is None:
            raise DocumentLoadError(f"{doc.title!r} has no stored file; upload it again.")
        return self._loader.render(doc.file, doc.current_page - 1)

    # -- Internals -----------------------------------------------------------

    def _require_active(self) -> ReaderDocument:
        doc = self._library.active
        if doc is None:
            raise DocumentNotFoundError("No document is open.")
        return doc

    def _page_turn_feedback(self) -> None:
        if self._haptics is None or self._settings is None:
            return
        if self._settings.get().is_haptic_feedback_enabled:
            self._haptics.pulse(self._page_turn_pattern)

    def _persist(self) -> None:
        if self._storage is None:
            return
        records = [doc.to_record() for doc in self._library.documents]
        try:
            self._storage.save(self._documents_key, records)
        except Exception as exc:
            logger.warning("Could not persist document library: %s", exc)

    def _hydrate(self) -> DocumentLibrary:
        if self._storage is None:
            return DocumentLibrary()
        try:
            raw = self._storage.load(self._documents_key)
        except Exception as exc:
            logger.warning("Document storage unavailable, starting empty: %s", exc)
            return DocumentLibrary()

        library = DocumentLibrary()
        for record in raw or []:
            try:
                library.documents.append(ReaderDocument.model_validate(record))
            except ValidationError as exc:
                logger.warning("Skipping unreadable document record: %s", exc)
        return library
