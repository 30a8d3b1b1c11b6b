"""Port: Gaze source — eye (or pointer) position deviation samples."""

from abc import ABC, abstractmethod


class GazeSourcePort(ABC):
    """Contract for the fixation-stability sampler's input signal."""

    @abstractmethod
    def deviation(self) -> float:
        """Return the current deviation from the fixation target."""
        ...
