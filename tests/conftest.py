"""Shared fixtures: in-memory storage, fixed clock, offscreen Qt."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from neuro_reader.application.settings_store import SettingsStore  # noqa: E402
from neuro_reader.domain.errors import PersistenceUnavailableError  # noqa: E402
from neuro_reader.domain.ports.storage_port import KeyValueStorePort  # noqa: E402
from neuro_reader.domain.ports.timer_port import PeriodicTimerPort, TimerHandle  # noqa: E402

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class MemoryStore(KeyValueStorePort):
    """Dict-backed storage that records every save."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.records: dict[str, Any] = dict(initial or {})
        self.saves: list[str] = []

    def load(self, key: str) -> Any | None:
        return self.records.get(key)

    def save(self, key: str, value: Any) -> None:
        self.records[key] = value
        self.saves.append(key)


class BrokenStore(KeyValueStorePort):
    """Storage whose every call fails."""

    def load(self, key: str) -> Any | None:
        raise PersistenceUnavailableError("disk gone")

    def save(self, key: str, value: Any) -> None:
        raise PersistenceUnavailableError("disk gone")


class ManualHandle(TimerHandle):
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled


class ManualTimer(PeriodicTimerPort):
    """Timer driven by hand: ``fire()`` runs every live callback once."""

    def __init__(self) -> None:
        self.started: list[tuple[int, Any, ManualHandle]] = []

    def start(self, interval_ms, callback) -> TimerHandle:
        handle = ManualHandle()
        self.started.append((interval_ms, callback, handle))
        return handle

    @property
    def live(self) -> list[tuple[int, Any, ManualHandle]]:
        return [entry for entry in self.started if not entry[2].cancelled]

    def fire(self) -> None:
        for _, callback, handle in list(self.started):
            if not handle.cancelled:
                callback()


class FixedClock:
    """Callable clock that can be moved forward."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now = self.now + timedelta(**delta)


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def store(memory_store: MemoryStore) -> SettingsStore:
    return SettingsStore(memory_store)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def manual_timer() -> ManualTimer:
    return ManualTimer()
