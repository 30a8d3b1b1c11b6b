"""User-friendly messages for reader errors.

Belongs to the Application layer — translates domain exceptions into
localised, user-facing text.
"""

from __future__ import annotations

from neuro_reader.domain.errors import (
    CalibrationStateError,
    DocumentLoadError,
    DocumentNotFoundError,
    InvalidFileTypeError,
    NeuroReaderError,
    PersistenceUnavailableError,
)

# Maps exception type → message per language
_ERROR_MAP: dict[type[NeuroReaderError], dict[str, str]] = {
    InvalidFileTypeError: {
        "en": "Please select a valid PDF file.",
        "es": "Seleccione un archivo PDF válido.",
    },
    DocumentLoadError: {
        "en": "The document could not be opened. Try uploading it again.",
        "es": "No se pudo abrir el documento. Intente subirlo de nuevo.",
    },
    DocumentNotFoundError: {
        "en": "That document is not in your library.",
        "es": "Ese documento no está en su biblioteca.",
    },
    PersistenceUnavailableError: {
        "en": "Storage is unavailable; changes will only last for this session.",
        "es": "El almacenamiento no está disponible; los cambios solo durarán esta sesión.",
    },
    CalibrationStateError: {
        "en": "Start a calibration before completing a step.",
        "es": "Inicie una calibración antes de completar un paso.",
    },
}


def friendly_message(exc: Exception, lang: str = "en") -> str:
    """Return a user-friendly message for *exc*.

    Falls back to ``str(exc)`` for errors without a mapping.
    """
    for error_type in type(exc).__mro__:
        messages = _ERROR_MAP.get(error_type)  # type: ignore[arg-type]
        if messages:
            return messages.get(lang, messages["en"])
    return str(exc)
