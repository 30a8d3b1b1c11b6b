"""Document library — ordered collection with an active selection.

This module belongs to the Domain layer. It only depends on:
- Pydantic (pragmatic exception for validation)
- Domain document models and errors
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from neuro_reader.domain.errors import DocumentNotFoundError
from neuro_reader.domain.models.document import ReaderDocument


class DocumentLibrary(BaseModel):
    """Manages the documents a reader has opened.

    Provides:
    - Insertion-ordered storage (upload order)
    - A single active document, or none
    - Re-selection when the active document is deleted
    """

    documents: list[ReaderDocument] = Field(default_factory=list)
    active_id: Optional[str] = None

    # -- Lookup --------------------------------------------------------------

    def get(self, document_id: str) -> ReaderDocument:
        for doc in self.documents:
            if doc.id == document_id:
                return doc
        raise DocumentNotFoundError(f"No document with id {document_id!r}.")

    @property
    def active(self) -> ReaderDocument | None:
        if self.active_id is None:
            return None
        return self.get(self.active_id)

    def __len__(self) -> int:
        return len(self.documents)

    # -- CRUD ----------------------------------------------------------------

    def add(self, doc: ReaderDocument) -> None:
        """Append a document and make it the active one."""
        self.documents.append(doc)
        self.active_id = doc.id

    def replace(self, doc: ReaderDocument) -> None:
        """Swap in an updated copy of a document, keeping its position."""
        for i, existing in enumerate(self.documents):
            if existing.id == doc.id:
                self.documents[i] = doc
                return
        raise DocumentNotFoundError(f"No document with id {doc.id!r}.")

    def remove(self, document_id: str) -> None:
        """Remove a document by id.

        If it was active, the first remaining document becomes active
        (or none when the library is now empty).
        """
        self.get(document_id)
        self.documents = [d for d in self.documents if d.id != document_id]
        if self.active_id == document_id:
            self.active_id = self.documents[0].id if self.documents else None

    def select(self, document_id: str) -> ReaderDocument:
        doc = self.get(document_id)
        self.active_id = doc.id
        return doc
