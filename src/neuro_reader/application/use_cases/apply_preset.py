"""Use Case: Apply Preset.

Overlays one of the canned accessibility presets onto the current settings.
"""

from neuro_reader.application.settings_store import SettingsStore
from neuro_reader.domain.models.enums import ReadingPreset
from neuro_reader.domain.models.settings import ReaderSettings
from neuro_reader.domain.rules.presets import preset_overrides


class ApplyPresetUseCase:
    """Apply a preset through the settings store."""

    def __init__(self, store: SettingsStore) -> None:
        self._store = store

    def execute(self, preset: ReadingPreset) -> ReaderSettings:
        return self._store.update(preset_overrides(preset, self._store.get()))

    def low_vision(self) -> ReaderSettings:
        return self.execute(ReadingPreset.LOW_VISION)

    def academic(self) -> ReaderSettings:
        return self.execute(ReadingPreset.ACADEMIC)
