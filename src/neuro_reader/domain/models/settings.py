"""Reader presentation settings model.

This module defines the ``ReaderSettings`` Pydantic model: the single
mutable configuration record of a reading session. Field domains are
documented here but *not* enforced by the model; every producer (presets,
calibration, adaptation) clamps its own output. See
``neuro_reader.domain.rules.constants`` for the bounds.

Persisted payloads use the camelCase field names (``lineWindowSize``...);
snake_case names are accepted on input as well.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from neuro_reader.domain.rules import constants as c


class ReaderSettings(BaseModel):
    """Root reader settings — persisted under the ``readerSettings`` key."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    # -- Dynamic line window --------------------------------------------------

    line_window_size: int = Field(
        default=c.DEFAULT_LINE_WINDOW_SIZE,
        description="Number of lines kept visually salient (3-7).",
    )

    # -- Peripheral darkness gradient -----------------------------------------

    peripheral_darkness_level: int = Field(
        default=c.DEFAULT_PERIPHERAL_DARKNESS,
        description="Edge opacity of the darkness mask, in percent (10-60).",
    )
    is_darkness_gradient_enabled: bool = True

    # -- Magnification --------------------------------------------------------

    magnification_level: float = Field(
        default=c.DEFAULT_MAGNIFICATION,
        description="Page scale factor (nominally 1.25-1.5).",
    )
    is_auto_magnification_enabled: bool = True

    # -- Spacing --------------------------------------------------------------

    letter_spacing_percentage: int = Field(
        default=c.DEFAULT_LETTER_SPACING,
        description="Letter spacing as a percentage of character width (25-35).",
    )
    line_spacing_multiplier: float = Field(
        default=c.DEFAULT_LINE_SPACING,
        description="Line height as a multiple of font height (1.5-2.0).",
    )

    # -- Contrast -------------------------------------------------------------

    is_high_contrast_enabled: bool = True
    is_dark_mode: bool = True

    # -- Scrolling ------------------------------------------------------------

    scroll_animation_duration: int = Field(
        default=c.DEFAULT_SCROLL_DURATION_MS,
        description="Page/scale transition time in milliseconds (200-500).",
    )
    is_stabilizer_bar_enabled: bool = True

    # -- Haptics --------------------------------------------------------------

    is_haptic_feedback_enabled: bool = True

    # -- Neural adaptation ----------------------------------------------------

    is_neural_adaptation_enabled: bool = False
    adaptation_start_date: Optional[datetime] = Field(
        default=None,
        description="Set on first enable of neural adaptation; never cleared automatically.",
    )

    # -- Presets (mutually exclusive) -----------------------------------------

    is_low_vision_profile_enabled: bool = False
    is_academic_reading_mode_enabled: bool = False

    # -- Serialisation --------------------------------------------------------

    def to_record(self) -> dict:
        """Return the JSON-safe persisted representation."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, data: dict) -> "ReaderSettings":
        return cls.model_validate(data)
