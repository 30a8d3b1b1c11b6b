"""Periodic timer adapter backed by PySide6's ``QTimer``.

Callbacks run on the Qt event loop of the thread that started them, so
settings writes stay single-threaded. A ``QCoreApplication`` (or
``QApplication``) must exist before :meth:`QtPeriodicTimer.start`.
"""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer

from neuro_reader.domain.ports.timer_port import PeriodicTimerPort, TimerHandle


class QtTimerHandle(TimerHandle):
    """Owns one running ``QTimer``."""

    def __init__(self, timer: QTimer) -> None:
        self._timer: QTimer | None = timer

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()


class QtPeriodicTimer(PeriodicTimerPort):
    """Schedules recurring callbacks with ``QTimer``.

    Parameters
    ----------
    parent : QObject | None
        Optional owner; timers are destroyed with it.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def start(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = QTimer(self._parent)
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        return QtTimerHandle(timer)
