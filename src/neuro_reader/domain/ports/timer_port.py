"""Port: Periodic timer — recurring callbacks on the host's event loop."""

from abc import ABC, abstractmethod
from typing import Callable


class TimerHandle(ABC):
    """A running periodic task."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the task and release its resources. Safe to call twice."""
        ...

    @property
    @abstractmethod
    def active(self) -> bool:
        ...


class PeriodicTimerPort(ABC):
    """Contract for scheduling recurring work."""

    @abstractmethod
    def start(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Call *callback* every *interval_ms* until the handle is cancelled."""
        ...
