"""Calibration result model — one wizard run's measurements."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from neuro_reader.domain.rules import constants as c


class CalibrationResult(BaseModel):
    """Measurements collected by the three calibration steps.

    Attributes:
        fixation_stability: 0-100, higher means steadier fixation.
        crowding_threshold: Spacing threshold (slider range 10-50).
        preferred_saccade_amplitude: Chosen text block size; the wizard
            offers 10, 15 or 20 but any integer is accepted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    fixation_stability: int = Field(default=c.DEFAULT_FIXATION_STABILITY)
    crowding_threshold: float = Field(default=c.DEFAULT_CROWDING_THRESHOLD, gt=0)
    preferred_saccade_amplitude: int = Field(default=c.DEFAULT_SACCADE_AMPLITUDE)
