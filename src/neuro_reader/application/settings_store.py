"""Settings store — the one owner of the session's ``ReaderSettings``.

Every producer (presets, calibration, adaptation, manual edits) writes
through :meth:`SettingsStore.update`. The store merges, persists and then
notifies subscribers synchronously, in the caller's turn. It does not clamp
values: producers are responsible for their own bounds.

Persistence is best effort. When the storage collaborator is missing or
fails, the in-memory record stays authoritative for the session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from neuro_reader.domain.models.settings import ReaderSettings
from neuro_reader.domain.ports.storage_port import KeyValueStorePort

logger = logging.getLogger(__name__)

SettingsListener = Callable[[ReaderSettings], None]

DEFAULT_SETTINGS_KEY = "readerSettings"


class SettingsStore:
    """Persisted state container for :class:`ReaderSettings`.

    Parameters
    ----------
    storage : KeyValueStorePort | None
        Key-value collaborator. ``None`` keeps settings in memory only.
    key : str
        Record name used for persistence.
    """

    def __init__(
        self,
        storage: KeyValueStorePort | None = None,
        key: str = DEFAULT_SETTINGS_KEY,
    ) -> None:
        self._storage = storage
        self._key = key
        self._listeners: list[SettingsListener] = []
        self._settings = self._hydrate()

    # -- Public API ----------------------------------------------------------

    def get(self) -> ReaderSettings:
        """Return the current snapshot."""
        return self._settings

    def update(self, partial: Mapping[str, Any] | None = None, **changes: Any) -> ReaderSettings:
        """Shallow-merge field changes into the current settings.

        Field names are the snake_case attribute names. Unknown names raise
        ``pydantic.ValidationError`` and leave the settings untouched.
        """
        merged = self._settings.model_dump()
        merged.update(partial or {})
        merged.update(changes)
        return self._commit(ReaderSettings.model_validate(merged))

    def reset(self) -> ReaderSettings:
        """Replace everything with the factory defaults."""
        return self._commit(ReaderSettings())

    def toggle_dark_mode(self) -> ReaderSettings:
        return self.update(is_dark_mode=not self._settings.is_dark_mode)

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- Internals -----------------------------------------------------------

    def _commit(self, settings: ReaderSettings) -> ReaderSettings:
        self._settings = settings
        self._persist(settings)
        for listener in list(self._listeners):
            listener(self._settings)
        return self._settings

    def _persist(self, settings: ReaderSettings) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save(self._key, settings.to_record())
        except Exception as exc:
            logger.warning("Could not persist settings, keeping them in memory: %s", exc)

    def _hydrate(self) -> ReaderSettings:
        if self._storage is None:
            return ReaderSettings()
        try:
            raw = self._storage.load(self._key)
        except Exception as exc:
            logger.warning("Settings storage unavailable, using defaults: %s", exc)
            return ReaderSettings()
        if raw is None:
            return ReaderSettings()
        try:
            return ReaderSettings.from_record(raw)
        except ValidationError as exc:
            logger.warning("Stored settings are invalid, using defaults: %s", exc)
            return ReaderSettings()
