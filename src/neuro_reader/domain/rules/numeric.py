"""Rounding helpers shared by the settings producers."""

from __future__ import annotations

import math


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    ``round()`` uses banker's rounding (``round(27.5) == 28`` but
    ``round(38.5) == 38``); the presentation rules need ``38.5 -> 39``.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
