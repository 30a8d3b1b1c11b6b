"""JSON key-value store — implements KeyValueStorePort.

Each key is persisted as ``<key>.json`` in the OS-appropriate data
directory (``~/.local/share/neuro_reader`` on Linux) resolved via
``platformdirs``. Writes are atomic: write to a temp file, then rename.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

import platformdirs

from neuro_reader.domain.errors import PersistenceUnavailableError
from neuro_reader.domain.ports.storage_port import KeyValueStorePort

logger = logging.getLogger(__name__)

_APP_NAME = "neuro_reader"


class JsonKeyValueStore(KeyValueStorePort):
    """Concrete implementation of :class:`KeyValueStorePort`.

    Parameters
    ----------
    data_dir : Path | None
        Override the default data directory (useful for testing).
    """

    def __init__(self, data_dir: Path | None = None, app_name: str = _APP_NAME) -> None:
        self._data_dir = Path(data_dir) if data_dir else Path(platformdirs.user_data_dir(app_name))

    # -- Public API ----------------------------------------------------------

    def load(self, key: str) -> Any | None:
        """Return the record for *key*; missing or corrupted files give ``None``."""
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring corrupted record %s: %s", path, exc)
            return None
        except OSError as exc:
            raise PersistenceUnavailableError(f"Cannot read {path}: {exc}") from exc

    def save(self, key: str, value: Any) -> None:
        """Persist *value* atomically (write to temp, then rename)."""
        path = self.path_for(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            tmp_fd, tmp_path = tempfile.mkstemp(dir=self._data_dir, suffix=".tmp")
        except OSError as exc:
            raise PersistenceUnavailableError(f"Cannot write to {self._data_dir}: {exc}") from exc

        try:
            with open(tmp_fd, "w", encoding="utf-8") as fh:
                json.dump(value, fh, indent=2, ensure_ascii=False)
            Path(tmp_path).replace(path)
        except (OSError, TypeError, ValueError) as exc:
            Path(tmp_path).unlink(missing_ok=True)
            raise PersistenceUnavailableError(f"Cannot write {path}: {exc}") from exc

    def path_for(self, key: str) -> Path:
        """Absolute path of the JSON file backing *key*."""
        return self._data_dir / f"{key}.json"

    @property
    def data_dir(self) -> Path:
        return self._data_dir
