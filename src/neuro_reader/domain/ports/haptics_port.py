"""Port: Haptics — best-effort tactile feedback."""

from abc import ABC, abstractmethod
from typing import Sequence, Union

# A single duration in ms, or alternating on/off durations
HapticPattern = Union[int, Sequence[int]]


class HapticsPort(ABC):
    """Contract for the haptic output device."""

    @abstractmethod
    def pulse(self, pattern: HapticPattern) -> bool:
        """Play *pattern*; return ``False`` when haptics are unsupported."""
        ...
