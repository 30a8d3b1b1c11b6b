"""Enumerations for the adaptive reader domain."""

from enum import Enum


class CalibrationStep(str, Enum):
    """Calibration wizard steps, in the order they run."""

    FIXATION = "fixation"  # Auto-completes after sampling
    CROWDING = "crowding"  # Letter spacing slider
    SACCADE = "saccade"  # Preferred text block size


class ReadingPreset(str, Enum):
    """Canned accessibility presets (mutually exclusive)."""

    LOW_VISION = "low_vision"
    ACADEMIC = "academic"


class ColorScheme(str, Enum):
    """Foreground/background palette selected by ``is_dark_mode``."""

    DARK = "dark"
    LIGHT = "light"
