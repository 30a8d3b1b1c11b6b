"""Pydantic models for the reader's runtime configuration.

These models validate and type the JSON configuration file that drives the
operational knobs of the reader: storage keys, timer cadence, sampling and
haptic patterns. Presentation rules themselves are fixed domain constants.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """Where and under which keys records are persisted."""

    app_name: str = "neuro_reader"
    settings_key: str = "readerSettings"
    documents_key: str = "pdfDocuments"
    calibration_key: str = "calibrationResults"


class AdaptationConfig(BaseModel):
    """Neural adaptation schedule."""

    period_days: int = Field(default=28, gt=0)
    interval_ms: int = Field(default=60 * 60 * 1000, gt=0, description="Re-evaluation cadence.")


class CalibrationConfig(BaseModel):
    """Fixation-stability sampling."""

    sample_count: int = Field(default=20, gt=0)
    sample_interval_ms: int = Field(default=200, gt=0)
    max_simulated_deviation: float = Field(default=10.0, ge=0)


class HapticsConfig(BaseModel):
    """Vibration patterns, in milliseconds (on, off, on, ...)."""

    page_turn_pattern: list[int] = Field(default_factory=lambda: [100])
    calibration_pattern: list[int] = Field(default_factory=lambda: [50, 50, 50, 50, 50])


class ReadingConfig(BaseModel):
    """Estimates used for reading statistics."""

    words_per_page: int = Field(default=250, gt=0)
    words_per_minute: int = Field(default=200, gt=0)


class AppConfig(BaseModel):
    """Root configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    adaptation: AdaptationConfig = Field(default_factory=AdaptationConfig)
    calibration: CalibrationConfig = Field(default_factory=CalibrationConfig)
    haptics: HapticsConfig = Field(default_factory=HapticsConfig)
    reading: ReadingConfig = Field(default_factory=ReadingConfig)
