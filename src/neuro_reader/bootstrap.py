"""Composition Root — Dependency Injection Container.

This module is the ONLY place where concrete infrastructure classes are
imported and wired together. All other layers refer to ports (interfaces).
"""

from __future__ import annotations

from pathlib import Path

from neuro_reader.application.adaptation import AdaptationScheduler
from neuro_reader.application.calibration import CalibrationProcedure
from neuro_reader.application.settings_store import SettingsStore
from neuro_reader.application.use_cases.apply_preset import ApplyPresetUseCase
from neuro_reader.application.use_cases.manage_documents import ManageDocumentsUseCase
from neuro_reader.config import AppConfig, load_config
from neuro_reader.domain.ports.document_loader import DocumentLoaderPort
from neuro_reader.domain.ports.gaze_source import GazeSourcePort
from neuro_reader.domain.ports.haptics_port import HapticsPort
from neuro_reader.domain.ports.storage_port import KeyValueStorePort
from neuro_reader.domain.ports.timer_port import PeriodicTimerPort
from neuro_reader.infrastructure.documents.pdfplumber_loader import PdfplumberDocumentLoader
from neuro_reader.infrastructure.gaze.simulated import SimulatedGazeSource
from neuro_reader.infrastructure.haptics.null_haptics import NullHaptics
from neuro_reader.infrastructure.persistence.json_store import JsonKeyValueStore


class Container:
    """Simple dependency injection container.

    Wires the infrastructure implementations to domain ports and provides
    pre-configured services. One container = one reading session: the
    settings store is shared by everything it builds.

    Usage::

        container = Container()
        container.apply_preset().low_vision()
        directives = compose(container.settings_store.get())
    """

    def __init__(
        self,
        config_path: str | Path | None = None,
        data_dir: str | Path | None = None,
        *,
        storage: KeyValueStorePort | None = None,
        loader: DocumentLoaderPort | None = None,
        haptics: HapticsPort | None = None,
    ) -> None:
        self._config: AppConfig = load_config(config_path)

        # -- Infrastructure singletons ---------------------------------------
        self._storage = storage or JsonKeyValueStore(
            Path(data_dir) if data_dir else None,
            app_name=self._config.storage.app_name,
        )
        self._loader = loader or PdfplumberDocumentLoader()
        self._haptics = haptics or NullHaptics()

        self._settings_store = SettingsStore(self._storage, key=self._config.storage.settings_key)
        self._documents: ManageDocumentsUseCase | None = None

    # -- Port accessors ------------------------------------------------------

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def storage(self) -> KeyValueStorePort:
        return self._storage

    @property
    def loader(self) -> DocumentLoaderPort:
        return self._loader

    @property
    def haptics(self) -> HapticsPort:
        return self._haptics

    @property
    def settings_store(self) -> SettingsStore:
        return self._settings_store

    # -- Service factories ---------------------------------------------------

    def apply_preset(self) -> ApplyPresetUseCase:
        """Create a use case for the accessibility presets."""
        return ApplyPresetUseCase(self._settings_store)

    def calibration(
        self,
        timer: PeriodicTimerPort | None = None,
        gaze: GazeSourcePort | None = None,
    ) -> CalibrationProcedure:
        """Create a calibration wizard.

        Without a timer the fixation step is completed by hand (or by
        feeding samples through ``record_sample``).
        """
        cfg = self._config.calibration
        if timer is not None and gaze is None:
            gaze = SimulatedGazeSource(cfg.max_simulated_deviation)
        return CalibrationProcedure(
            self._settings_store,
            storage=self._storage,
            result_key=self._config.storage.calibration_key,
            haptics=self._haptics,
            feedback_pattern=self._config.haptics.calibration_pattern,
            timer=timer,
            gaze=gaze,
            sample_count=cfg.sample_count,
            sample_interval_ms=cfg.sample_interval_ms,
        )

    def adaptation_scheduler(self, timer: PeriodicTimerPort | None = None) -> AdaptationScheduler:
        """Create the neural adaptation scheduler (on-demand without a timer)."""
        return AdaptationScheduler(
            self._settings_store,
            timer,
            interval_ms=self._config.adaptation.interval_ms,
            period_days=self._config.adaptation.period_days,
        )

    def documents(self) -> ManageDocumentsUseCase:
        """Return the session's document library use case."""
        if self._documents is None:
            self._documents = ManageDocumentsUseCase(
                self._loader,
                storage=self._storage,
                documents_key=self._config.storage.documents_key,
                settings=self._settings_store,
                haptics=self._haptics,
                page_turn_pattern=self._config.haptics.page_turn_pattern,
                words_per_page=self._config.reading.words_per_page,
                words_per_minute=self._config.reading.words_per_minute,
            )
        return self._documents
