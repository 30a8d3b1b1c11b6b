"""Calibration rules: fixation scoring and settings derivation.

The derivation runs in two passes and the order matters:

1. Primary pass: magnification from the saccade amplitude and letter
   spacing from the crowding threshold, both clamped to their domains.
2. Conditional overrides, applied after the primary pass (last writer
   wins): low fixation stability, high crowding threshold and, when
   enabled, the saccade line-window rule.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from neuro_reader.domain.models.calibration import CalibrationResult
from neuro_reader.domain.rules import constants as c
from neuro_reader.domain.rules.numeric import round_half_away


def clamp_stability(value: float) -> int:
    """Round a stability reading to an integer in 0-100."""
    return int(c.FIXATION_STABILITY_BOUNDS.clamp(round_half_away(value)))


def fixation_stability(deviations: Iterable[float]) -> int:
    """Score a series of gaze deviations as a 0-100 stability value.

    ``100 - mean deviation``, rounded and clamped.
    """
    samples = list(deviations)
    if not samples:
        return c.DEFAULT_FIXATION_STABILITY
    return clamp_stability(100 - sum(samples) / len(samples))


def primary_overrides(result: CalibrationResult) -> dict[str, Any]:
    """Magnification and letter spacing derived from the raw result."""
    magnification = c.DEFAULT_MAGNIFICATION - (
        result.preferred_saccade_amplitude - c.DEFAULT_SACCADE_AMPLITUDE
    ) * c.MAGNIFICATION_PER_AMPLITUDE
    letter_spacing = c.DEFAULT_LETTER_SPACING - (
        result.crowding_threshold - c.DEFAULT_CROWDING_THRESHOLD
    ) * c.LETTER_SPACING_PER_CROWDING
    return {
        "magnification_level": round(c.MAGNIFICATION_BOUNDS.clamp(magnification), 2),
        "letter_spacing_percentage": round_half_away(c.LETTER_SPACING_BOUNDS.clamp(letter_spacing)),
    }


def conditional_overrides(
    result: CalibrationResult,
    *,
    line_window_rule: bool = False,
) -> dict[str, Any]:
    """Threshold-triggered overrides, in application order.

    The saccade line-window rule is expressed in amplitude units below the
    wizard's choices (10/15/20), so it stays off unless a caller with a
    finer-grained amplitude input opts in.
    """
    overrides: dict[str, Any] = {}

    if result.fixation_stability < c.LOW_STABILITY_THRESHOLD:
        overrides["scroll_animation_duration"] = c.LOW_STABILITY_SCROLL_DURATION_MS
        overrides["is_stabilizer_bar_enabled"] = True

    if result.crowding_threshold > c.HIGH_CROWDING_THRESHOLD:
        spacing = max(
            c.HIGH_CROWDING_MIN_LETTER_SPACING,
            result.crowding_threshold * c.HIGH_CROWDING_SPACING_FACTOR,
        )
        overrides["letter_spacing_percentage"] = round_half_away(spacing)
        overrides["line_spacing_multiplier"] = c.HIGH_CROWDING_LINE_SPACING

    if line_window_rule:
        if result.preferred_saccade_amplitude < c.SHORT_SACCADE_AMPLITUDE:
            overrides["line_window_size"] = int(c.LINE_WINDOW_BOUNDS.low)
        elif result.preferred_saccade_amplitude > c.LONG_SACCADE_AMPLITUDE:
            overrides["line_window_size"] = int(c.LINE_WINDOW_BOUNDS.high)

    return overrides


def derive_calibration_overrides(
    result: CalibrationResult,
    *,
    line_window_rule: bool = False,
) -> dict[str, Any]:
    """Merge both passes into one partial settings update."""
    overrides = primary_overrides(result)
    overrides.update(conditional_overrides(result, line_window_rule=line_window_rule))
    return overrides
