"""Tests for the reader settings model and the SettingsStore.

Covers:
- ReaderSettings defaults and record round-trip
- SettingsStore get / update / reset / toggle / subscribe
- Persistence side effects and non-fatal storage failures
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import BrokenStore, MemoryStore
from neuro_reader.application.settings_store import SettingsStore
from neuro_reader.domain.models.settings import ReaderSettings


# ── Model Tests ───────────────────────────────────────────────────────────


class TestReaderSettingsModel:
    """Tests for the ReaderSettings Pydantic model."""

    def test_defaults(self) -> None:
        s = ReaderSettings()
        assert s.line_window_size == 5
        assert s.peripheral_darkness_level == 20
        assert s.is_darkness_gradient_enabled is True
        assert s.magnification_level == 1.3
        assert s.is_auto_magnification_enabled is True
        assert s.letter_spacing_percentage == 30
        assert s.line_spacing_multiplier == 1.75
        assert s.is_high_contrast_enabled is True
        assert s.is_dark_mode is True
        assert s.scroll_animation_duration == 300
        assert s.is_stabilizer_bar_enabled is True
        assert s.is_haptic_feedback_enabled is True
        assert s.is_neural_adaptation_enabled is False
        assert s.adaptation_start_date is None
        assert s.is_low_vision_profile_enabled is False
        assert s.is_academic_reading_mode_enabled is False

    def test_record_uses_camel_case_names(self) -> None:
        record = ReaderSettings().to_record()
        assert record["lineWindowSize"] == 5
        assert record["isNeuralAdaptationEnabled"] is False
        assert "line_window_size" not in record

    def test_record_roundtrip_keeps_start_date(self) -> None:
        start = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        original = ReaderSettings(is_neural_adaptation_enabled=True, adaptation_start_date=start)
        restored = ReaderSettings.from_record(original.to_record())
        assert restored == original
        assert restored.adaptation_start_date == start

    def test_snake_case_input_accepted(self) -> None:
        s = ReaderSettings.model_validate({"line_window_size": 7})
        assert s.line_window_size == 7

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ReaderSettings.model_validate({"fontSize": 12})


# ── SettingsStore Tests ───────────────────────────────────────────────────


class TestSettingsStore:
    """Tests for SettingsStore merge, reset and notifications."""

    def test_starts_with_defaults(self, store: SettingsStore) -> None:
        assert store.get() == ReaderSettings()

    def test_update_merges_shallowly(self, store: SettingsStore) -> None:
        updated = store.update(line_window_size=7)
        assert updated.line_window_size == 7
        assert updated.magnification_level == 1.3
        assert store.get() is updated

    def test_update_accepts_mapping(self, store: SettingsStore) -> None:
        store.update({"is_dark_mode": False, "scroll_animation_duration": 450})
        assert store.get().is_dark_mode is False
        assert store.get().scroll_animation_duration == 450

    def test_update_does_not_clamp(self, store: SettingsStore) -> None:
        store.update(magnification_level=3.0)
        assert store.get().magnification_level == 3.0

    def test_unknown_name_leaves_settings_untouched(self, store: SettingsStore) -> None:
        before = store.get()
        with pytest.raises(ValidationError):
            store.update(font_size=12)
        assert store.get() is before

    def test_reset_restores_defaults(self, store: SettingsStore) -> None:
        store.update(line_window_size=3, is_low_vision_profile_enabled=True)
        assert store.reset() == ReaderSettings()

    def test_toggle_dark_mode(self, store: SettingsStore) -> None:
        assert store.toggle_dark_mode().is_dark_mode is False
        assert store.toggle_dark_mode().is_dark_mode is True

    def test_every_change_is_persisted(self, memory_store: MemoryStore) -> None:
        store = SettingsStore(memory_store, key="readerSettings")
        store.update(line_window_size=6)
        store.reset()
        assert memory_store.saves == ["readerSettings", "readerSettings"]
        assert memory_store.records["readerSettings"]["lineWindowSize"] == 5

    def test_hydrates_from_storage(self) -> None:
        saved = ReaderSettings(line_window_size=4, is_dark_mode=False).to_record()
        store = SettingsStore(MemoryStore({"readerSettings": saved}))
        assert store.get().line_window_size == 4
        assert store.get().is_dark_mode is False

    def test_invalid_stored_record_falls_back_to_defaults(self) -> None:
        store = SettingsStore(MemoryStore({"readerSettings": {"lineWindowSize": "wide"}}))
        assert store.get() == ReaderSettings()

    def test_listeners_notified_synchronously(self, store: SettingsStore) -> None:
        seen: list[int] = []
        store.subscribe(lambda s: seen.append(s.line_window_size))
        store.update(line_window_size=3)
        assert seen == [3]
        store.reset()
        assert seen == [3, 5]

    def test_unsubscribe(self, store: SettingsStore) -> None:
        seen: list[ReaderSettings] = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        store.update(line_window_size=4)
        assert seen == []


class TestPersistenceUnavailable:
    """Storage failures never break the session."""

    def test_broken_storage_load_gives_defaults(self) -> None:
        store = SettingsStore(BrokenStore())
        assert store.get() == ReaderSettings()

    def test_broken_storage_save_keeps_memory_state(self) -> None:
        store = SettingsStore(BrokenStore())
        store.update(line_window_size=7)
        assert store.get().line_window_size == 7

    def test_no_storage_at_all(self) -> None:
        store = SettingsStore(None)
        store.update(is_dark_mode=False)
        assert store.get().is_dark_mode is False
