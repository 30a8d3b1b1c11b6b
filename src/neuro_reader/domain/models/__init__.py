"""Domain models — public API.

Provides convenient imports for the most commonly used domain entities.
"""

from neuro_reader.domain.models.calibration import CalibrationResult
from neuro_reader.domain.models.document import (
    ACCEPTED_MIME_TYPE,
    DocumentInfo,
    PageView,
    ReaderDocument,
    ReaderStats,
)
from neuro_reader.domain.models.enums import CalibrationStep, ColorScheme, ReadingPreset
from neuro_reader.domain.models.library import DocumentLibrary
from neuro_reader.domain.models.settings import ReaderSettings

__all__ = [
    # Settings
    "ReaderSettings",
    "CalibrationResult",
    # Documents
    "ACCEPTED_MIME_TYPE",
    "DocumentInfo",
    "DocumentLibrary",
    "PageView",
    "ReaderDocument",
    "ReaderStats",
    # Enums
    "CalibrationStep",
    "ColorScheme",
    "ReadingPreset",
]
