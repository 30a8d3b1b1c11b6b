"""Simulated gaze source for hosts without an eye tracker."""

from __future__ import annotations

import random

from neuro_reader.domain.ports.gaze_source import GazeSourcePort


class SimulatedGazeSource(GazeSourcePort):
    """Uniform random deviations in ``[0, max_deviation)``."""

    def __init__(self, max_deviation: float = 10.0, rng: random.Random | None = None) -> None:
        self._max_deviation = max_deviation
        self._rng = rng or random.Random()

    def deviation(self) -> float:
        return self._rng.random() * self._max_deviation
