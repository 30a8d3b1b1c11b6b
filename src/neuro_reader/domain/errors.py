"""Domain errors — custom exceptions for the adaptive reader.

These exceptions are raised by domain services and adapters and caught by the
application or presentation layers. They carry no infrastructure dependencies.
"""


class NeuroReaderError(Exception):
    """Base exception for all reader errors."""


class InvalidFileTypeError(NeuroReaderError):
    """Raised when an uploaded file is not an accepted document type."""

    def __init__(self, mime_type: str | None, filename: str | None = None) -> None:
        self.mime_type = mime_type
        self.filename = filename
        super().__init__(
            f"Unsupported file type {mime_type or 'unknown'!r}"
            + (f" for {filename!r}" if filename else "")
            + "; only application/pdf is accepted."
        )


class DocumentLoadError(NeuroReaderError):
    """Raised when the document loader cannot open or parse a document."""


class DocumentNotFoundError(NeuroReaderError):
    """Raised when a document id is not present in the library."""


class PersistenceUnavailableError(NeuroReaderError):
    """Raised by storage adapters when the backing store cannot be used."""


class CalibrationStateError(NeuroReaderError):
    """Raised when a calibration step is completed while no run is active."""
