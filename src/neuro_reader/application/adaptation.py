"""Neural adaptation scheduler.

Owns the recurring task that re-asserts the projected settings while
neural adaptation is enabled. The task is started when adaptation becomes
enabled (immediately evaluating once) and cancelled when it is disabled
or when the scheduler is detached; it never ticks against a disabled flag.

Every evaluation writes all three projected fields, even when unchanged.
A manual edit to one of them survives only until the next tick.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from neuro_reader.application.settings_store import SettingsStore
from neuro_reader.domain.models.settings import ReaderSettings
from neuro_reader.domain.ports.timer_port import PeriodicTimerPort, TimerHandle
from neuro_reader.domain.rules import constants as c
from neuro_reader.domain.rules.adaptation import AdaptationProjection, project

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AdaptationScheduler:
    """Time-driven producer of adaptation settings.

    Parameters
    ----------
    store : SettingsStore
        Where projections are written and the enable flag is read.
    timer : PeriodicTimerPort | None
        Recurring task host. ``None`` evaluates only on demand.
    clock : Callable[[], datetime]
        Source of "now"; injectable for tests.
    interval_ms : int
        Re-evaluation cadence (hourly by default).
    period_days : int
        Length of the adaptation programme.
    """

    def __init__(
        self,
        store: SettingsStore,
        timer: PeriodicTimerPort | None = None,
        *,
        clock: Clock = utc_now,
        interval_ms: int = 60 * 60 * 1000,
        period_days: int = c.ADAPTATION_PERIOD_DAYS,
    ) -> None:
        self._store = store
        self._timer = timer
        self._clock = clock
        self._interval_ms = interval_ms
        self._period_days = period_days

        self._active = False
        self._handle: TimerHandle | None = None
        self._unsubscribe: Callable[[], None] | None = None

    # -- Lifecycle -----------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._active

    def attach(self) -> "AdaptationScheduler":
        """Follow the store's enable flag from now on.

        If adaptation is already enabled (restored session), the task starts
        right away.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_settings_changed)
        self._on_settings_changed(self._store.get())
        return self

    def detach(self) -> None:
        """Stop following the store and cancel the recurring task."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._deactivate()

    def __enter__(self) -> "AdaptationScheduler":
        return self.attach()

    def __exit__(self, *exc_info: object) -> None:
        self.detach()

    # -- Commands ------------------------------------------------------------

    def enable(self) -> AdaptationProjection | None:
        """Turn adaptation on; the first enable stamps the start date."""
        if not self._store.get().is_neural_adaptation_enabled:
            self._store.update(is_neural_adaptation_enabled=True)
        self._on_settings_changed(self._store.get())
        return self.status()

    def disable(self) -> None:
        if self._store.get().is_neural_adaptation_enabled:
            self._store.update(is_neural_adaptation_enabled=False)
        self._on_settings_changed(self._store.get())

    def reset_progress(self) -> AdaptationProjection | None:
        """Restart the programme from today."""
        self._store.update(adaptation_start_date=self._clock())
        return self.evaluate()

    # -- Evaluation ----------------------------------------------------------

    def status(self, now: datetime | None = None) -> AdaptationProjection | None:
        """Project without writing; ``None`` when adaptation is off or never started."""
        settings = self._store.get()
        if not settings.is_neural_adaptation_enabled or settings.adaptation_start_date is None:
            return None
        return project(settings.adaptation_start_date, now or self._clock(), self._period_days)

    def evaluate(self, now: datetime | None = None) -> AdaptationProjection | None:
        """Project and write the three adaptation fields."""
        projection = self.status(now)
        if projection is None:
            return None
        self._store.update(projection.settings_update())
        logger.debug(
            "Adaptation day %s (%.0f%%): window=%s darkness=%s spacing=%s",
            projection.days_since_start,
            projection.progress,
            projection.line_window_size,
            projection.peripheral_darkness_level,
            projection.letter_spacing_percentage,
        )
        return projection

    # -- Internals -----------------------------------------------------------

    def _on_settings_changed(self, settings: ReaderSettings) -> None:
        if settings.is_neural_adaptation_enabled and not self._active:
            self._activate(settings)
        elif not settings.is_neural_adaptation_enabled and self._active:
            self._deactivate()

    def _activate(self, settings: ReaderSettings) -> None:
        # Set before writing: the writes below notify this scheduler again
        self._active = True
        if settings.adaptation_start_date is None:
            self._store.update(adaptation_start_date=self._clock())
        self.evaluate()
        if self._timer is not None and self._handle is None:
            self._handle = self._timer.start(self._interval_ms, self._tick)
        logger.info("Neural adaptation active")

    def _deactivate(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._active:
            logger.info("Neural adaptation stopped")
        self._active = False

    def _tick(self) -> None:
        if not self._store.get().is_neural_adaptation_enabled:
            self._deactivate()
            return
        self.evaluate()
