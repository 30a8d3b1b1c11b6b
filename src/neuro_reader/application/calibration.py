"""Calibration wizard — three measurement steps, then one settings update.

Steps run in a fixed order (fixation -> crowding -> saccade). Completing
the saccade step finalizes the run: the derived overrides are written to
the settings store in a single update, the result is cached under the
calibration key, and the wizard stops.

The fixation step measures itself: while it is current, a periodic timer
samples the gaze source and the step auto-completes once enough samples
have been taken. The timer is always released when the step ends, the
wizard is closed or a new run starts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Optional

from pydantic import ValidationError

from neuro_reader.application.settings_store import SettingsStore
from neuro_reader.domain.errors import CalibrationStateError
from neuro_reader.domain.models.calibration import CalibrationResult
from neuro_reader.domain.models.enums import CalibrationStep
from neuro_reader.domain.ports.gaze_source import GazeSourcePort
from neuro_reader.domain.ports.haptics_port import HapticsPort
from neuro_reader.domain.ports.storage_port import KeyValueStorePort
from neuro_reader.domain.ports.timer_port import PeriodicTimerPort, TimerHandle
from neuro_reader.domain.rules.calibration import (
    clamp_stability,
    derive_calibration_overrides,
    fixation_stability,
)

logger = logging.getLogger(__name__)

_STEP_ORDER = (CalibrationStep.FIXATION, CalibrationStep.CROWDING, CalibrationStep.SACCADE)

_STEP_FIELDS = {
    CalibrationStep.FIXATION: "fixation_stability",
    CalibrationStep.CROWDING: "crowding_threshold",
    CalibrationStep.SACCADE: "preferred_saccade_amplitude",
}


class CalibrationProcedure:
    """Finite-step calibration wizard bound to a :class:`SettingsStore`."""

    def __init__(
        self,
        store: SettingsStore,
        *,
        storage: KeyValueStorePort | None = None,
        result_key: str = "calibrationResults",
        haptics: HapticsPort | None = None,
        feedback_pattern: Sequence[int] = (50, 50, 50, 50, 50),
        timer: PeriodicTimerPort | None = None,
        gaze: GazeSourcePort | None = None,
        sample_count: int = 20,
        sample_interval_ms: int = 200,
        on_complete: Optional[Callable[[CalibrationResult], None]] = None,
    ) -> None:
        self._store = store
        self._storage = storage
        self._result_key = result_key
        self._haptics = haptics
        self._feedback_pattern = list(feedback_pattern)
        self._timer = timer
        self._gaze = gaze
        self._sample_count = sample_count
        self._sample_interval_ms = sample_interval_ms
        self._on_complete = on_complete

        self._running = False
        self._step_index = 0
        self._result = CalibrationResult()
        self._deviations: list[float] = []
        self._sampler: TimerHandle | None = None

    # -- State ---------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def current_step(self) -> CalibrationStep | None:
        return _STEP_ORDER[self._step_index] if self._running else None

    @property
    def result(self) -> CalibrationResult:
        """Measurements collected so far in this run."""
        return self._result

    @property
    def samples_taken(self) -> int:
        return len(self._deviations)

    # -- Wizard --------------------------------------------------------------

    def start(self) -> None:
        """Begin a fresh run at the fixation step with default measurements."""
        self._stop_sampler()
        self._running = True
        self._step_index = 0
        self._result = CalibrationResult()
        self._deviations = []
        if self._timer is not None and self._gaze is not None:
            self._sampler = self._timer.start(self._sample_interval_ms, self._on_sample_tick)

    def complete_step(self, value: float) -> CalibrationResult | None:
        """Record *value* for the current step and advance.

        Returns the final result when this completed the last step,
        otherwise ``None``.
        """
        if not self._running:
            raise CalibrationStateError("Calibration is not running; call start() first.")

        step = _STEP_ORDER[self._step_index]
        if step is CalibrationStep.FIXATION:
            value = clamp_stability(value)
        self._result = CalibrationResult.model_validate(
            {**self._result.model_dump(), _STEP_FIELDS[step]: value}
        )
        if step is CalibrationStep.FIXATION:
            self._stop_sampler()
        self._feedback()

        if self._step_index < len(_STEP_ORDER) - 1:
            self._step_index += 1
            return None
        return self._finish()

    def record_sample(self, deviation: float) -> CalibrationResult | None:
        """Feed one fixation deviation sample.

        Ignored outside the fixation step. The step completes on its own
        once ``sample_count`` samples are in.
        """
        if self.current_step is not CalibrationStep.FIXATION:
            return None
        self._deviations.append(deviation)
        if len(self._deviations) >= self._sample_count:
            return self.complete_step(fixation_stability(self._deviations))
        return None

    def close(self) -> None:
        """Abandon the run and release the sampler."""
        self._stop_sampler()
        self._running = False

    def __enter__(self) -> "CalibrationProcedure":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- Cached result ---------------------------------------------------------

    def last_result(self) -> CalibrationResult | None:
        """Return the result of the last completed run, if one was cached."""
        if self._storage is None:
            return None
        try:
            raw = self._storage.load(self._result_key)
        except Exception as exc:
            logger.warning("Could not read cached calibration result: %s", exc)
            return None
        if raw is None:
            return None
        try:
            return CalibrationResult.model_validate(raw)
        except ValidationError:
            return None

    # -- Internals -----------------------------------------------------------

    def _finish(self) -> CalibrationResult:
        result = self._result
        self._running = False
        self._store.update(derive_calibration_overrides(result))
        logger.info(
            "Calibration complete: stability=%s crowding=%s amplitude=%s",
            result.fixation_stability,
            result.crowding_threshold,
            result.preferred_saccade_amplitude,
        )
        self._cache(result)
        if self._on_complete is not None:
            self._on_complete(result)
        return result

    def _cache(self, result: CalibrationResult) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save(self._result_key, result.model_dump(mode="json", by_alias=True))
        except Exception as exc:
            logger.warning("Could not cache calibration result: %s", exc)

    def _feedback(self) -> None:
        if self._haptics is not None and self._store.get().is_haptic_feedback_enabled:
            self._haptics.pulse(self._feedback_pattern)

    def _on_sample_tick(self) -> None:
        if self._gaze is None:
            return
        self.record_sample(self._gaze.deviation())

    def _stop_sampler(self) -> None:
        if self._sampler is not None:
            self._sampler.cancel()
            self._sampler = None
