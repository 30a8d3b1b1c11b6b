"""Port: Key-value storage — persist named JSON-safe records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStorePort(ABC):
    """Contract for loading / saving records by key.

    Implementations raise ``PersistenceUnavailableError`` when the backing
    store cannot be reached; callers treat that as non-fatal.
    """

    @abstractmethod
    def load(self, key: str) -> Any | None:
        """Return the record stored under *key*, or ``None`` if absent."""

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Persist *value* under *key*, replacing any previous record."""
