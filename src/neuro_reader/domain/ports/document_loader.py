"""Port: Document loader — open documents and render pages.

This is a domain-level contract. Infrastructure adapters (pdfplumber)
implement this interface.
"""

from abc import ABC, abstractmethod

from neuro_reader.domain.models.document import DocumentInfo, DocumentSource, PageView


class DocumentLoaderPort(ABC):
    """Contract for the document-rendering collaborator."""

    @abstractmethod
    def load(self, resource: DocumentSource) -> DocumentInfo:
        """Open *resource* and report its page count and metadata.

        Raises:
            DocumentLoadError: If the document cannot be opened or parsed.
        """
        ...

    @abstractmethod
    def render(self, resource: DocumentSource, page_index: int) -> PageView:
        """Render the page at 0-based *page_index*.

        Raises:
            DocumentLoadError: If the document or page cannot be read.
        """
        ...
