"""Accessibility presets — pure transforms from settings to partial updates.

Each preset enables its own flag and clears the other one, so at most one
preset is ever active.
"""

from __future__ import annotations

from typing import Any

from neuro_reader.domain.models.enums import ReadingPreset
from neuro_reader.domain.models.settings import ReaderSettings
from neuro_reader.domain.rules import constants as c


def apply_low_vision_profile(current: ReaderSettings) -> dict[str, Any]:
    """Return the low-vision overlay for *current*.

    Magnification is boosted relative to the current level. The current
    level is first brought back into its nominal domain, so applying the
    preset repeatedly saturates at ``1.5 * 1.7`` instead of compounding.
    """
    base = c.MAGNIFICATION_BOUNDS.clamp(current.magnification_level)
    return {
        "is_low_vision_profile_enabled": True,
        "is_academic_reading_mode_enabled": False,
        "magnification_level": round(base * c.LOW_VISION_MAGNIFICATION_FACTOR, 2),
        "line_window_size": c.LOW_VISION_LINE_WINDOW,
        "letter_spacing_percentage": c.LOW_VISION_LETTER_SPACING,
        "line_spacing_multiplier": c.LOW_VISION_LINE_SPACING,
        "peripheral_darkness_level": c.LOW_VISION_DARKNESS,
    }


def apply_academic_reading_mode(current: ReaderSettings) -> dict[str, Any]:
    """Return the dense academic-reading overlay."""
    return {
        "is_academic_reading_mode_enabled": True,
        "is_low_vision_profile_enabled": False,
        "line_window_size": c.ACADEMIC_LINE_WINDOW,
        "letter_spacing_percentage": c.ACADEMIC_LETTER_SPACING,
        "line_spacing_multiplier": c.ACADEMIC_LINE_SPACING,
        "scroll_animation_duration": c.ACADEMIC_SCROLL_DURATION_MS,
    }


PRESETS = {
    ReadingPreset.LOW_VISION: apply_low_vision_profile,
    ReadingPreset.ACADEMIC: apply_academic_reading_mode,
}


def preset_overrides(preset: ReadingPreset, current: ReaderSettings) -> dict[str, Any]:
    """Dispatch to the transform registered for *preset*."""
    return PRESETS[preset](current)
