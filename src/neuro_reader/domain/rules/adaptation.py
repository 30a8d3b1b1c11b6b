"""Neural adaptation projection.

Over the adaptation period the line window widens while the peripheral
darkness and letter spacing relax. Each field is projected independently
from the progress fraction; nothing depends on previously written values,
so evaluating twice with the same ``now`` gives identical results.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from neuro_reader.domain.rules import constants as c
from neuro_reader.domain.rules.numeric import round_half_away

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class AdaptationProjection:
    """Progress report plus the three projected settings fields."""

    days_since_start: int
    progress: float  # 0-100
    days_remaining: int
    line_window_size: int
    peripheral_darkness_level: int
    letter_spacing_percentage: int

    def settings_update(self) -> dict[str, Any]:
        return {
            "line_window_size": self.line_window_size,
            "peripheral_darkness_level": self.peripheral_darkness_level,
            "letter_spacing_percentage": self.letter_spacing_percentage,
        }


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def days_since(start: datetime, now: datetime) -> int:
    """Whole days elapsed from *start* to *now*; a future start counts as 0."""
    elapsed = _as_utc(now) - _as_utc(start)
    return max(0, math.floor(elapsed / _ONE_DAY))


def project(
    start: datetime,
    now: datetime,
    period_days: int = c.ADAPTATION_PERIOD_DAYS,
) -> AdaptationProjection:
    """Project the adaptation fields for the moment *now*."""
    days = days_since(start, now)
    progress = min(100.0, max(0.0, days / period_days * 100))
    fraction = progress / 100

    window = c.ADAPTATION_LINE_WINDOW
    darkness = c.ADAPTATION_DARKNESS
    spacing = c.ADAPTATION_LETTER_SPACING
    return AdaptationProjection(
        days_since_start=days,
        progress=progress,
        days_remaining=max(0, period_days - days),
        line_window_size=round_half_away(window.low + (window.high - window.low) * fraction),
        peripheral_darkness_level=round_half_away(
            darkness.high - (darkness.high - darkness.low) * fraction
        ),
        letter_spacing_percentage=round_half_away(
            spacing.high - (spacing.high - spacing.low) * fraction
        ),
    )
