"""Runtime configuration loading.

The bundled ``reader_defaults.json`` is used unless a path is given (the
CLI's ``--config``). Files may be partial: missing sections and keys take
the ``AppConfig`` defaults. Each resolved path is parsed once per process.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from neuro_reader.config.models import AppConfig

ConfigPath = Union[str, Path]

_BUNDLED_CONFIG = Path(__file__).with_name("reader_defaults.json")

_loaded: dict[Path, AppConfig] = {}


def _read_json(path: Path) -> dict:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must hold a JSON object")
    return raw


def load_config(path: ConfigPath | None = None) -> AppConfig:
    """Load and validate the reader config.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the file is not a JSON object.
    pydantic.ValidationError
        If a value does not match the ``AppConfig`` schema.
    """
    resolved = Path(path).expanduser().resolve() if path else _BUNDLED_CONFIG.resolve()
    cached = _loaded.get(resolved)
    if cached is not None:
        return cached

    if not resolved.is_file():
        raise FileNotFoundError(f"Config file not found: {resolved}")

    config = AppConfig.model_validate(_read_json(resolved))
    _loaded[resolved] = config
    return config


def get_config() -> AppConfig:
    """The bundled configuration."""
    return load_config()


def clear_cache() -> None:
    """Forget every parsed file so the next load re-reads from disk."""
    _loaded.clear()
