"""Tests for the runtime configuration loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from neuro_reader.config import AppConfig, clear_cache, get_config, load_config


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_cache()
    yield
    clear_cache()


class TestDefaultConfig:
    def test_bundled_values(self) -> None:
        cfg = get_config()
        assert cfg.storage.settings_key == "readerSettings"
        assert cfg.storage.documents_key == "pdfDocuments"
        assert cfg.adaptation.period_days == 28
        assert cfg.adaptation.interval_ms == 3_600_000
        assert cfg.calibration.sample_count == 20
        assert cfg.calibration.sample_interval_ms == 200
        assert cfg.haptics.page_turn_pattern == [100]
        assert cfg.haptics.calibration_pattern == [50] * 5

    def test_bundled_file_matches_model_defaults(self) -> None:
        assert get_config() == AppConfig()

    def test_cached(self) -> None:
        assert get_config() is get_config()


class TestCustomConfig:
    def test_partial_file_fills_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "reader.json"
        path.write_text(json.dumps({"adaptation": {"interval_ms": 1000}}), encoding="utf-8")
        cfg = load_config(path)
        assert cfg.adaptation.interval_ms == 1000
        assert cfg.adaptation.period_days == 28
        assert cfg.storage.app_name == "neuro_reader"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.json")

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "reader.json"
        path.write_text(json.dumps({"calibration": {"sample_count": 0}}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_str_and_path_share_one_entry(self, tmp_path: Path) -> None:
        path = tmp_path / "reader.json"
        path.write_text(json.dumps({"reading": {"words_per_page": 300}}), encoding="utf-8")
        assert load_config(str(path)) is load_config(path)

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "reader.json"
        path.write_text("{storage:", encoding="utf-8")
        with pytest.raises(ValueError, match="not valid JSON"):
            load_config(path)

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "reader.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)

    def test_container_accepts_str_path(self, tmp_path: Path) -> None:
        from neuro_reader.bootstrap import Container

        path = tmp_path / "reader.json"
        path.write_text(json.dumps({"adaptation": {"period_days": 14}}), encoding="utf-8")
        container = Container(config_path=str(path), data_dir=tmp_path)
        assert container.config.adaptation.period_days == 14

    def test_clear_cache_rereads(self, tmp_path: Path) -> None:
        path = tmp_path / "reader.json"
        path.write_text(json.dumps({"reading": {"words_per_minute": 150}}), encoding="utf-8")
        assert load_config(path).reading.words_per_minute == 150

        path.write_text(json.dumps({"reading": {"words_per_minute": 300}}), encoding="utf-8")
        assert load_config(path).reading.words_per_minute == 150
        clear_cache()
        assert load_config(path).reading.words_per_minute == 300
