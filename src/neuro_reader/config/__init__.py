"""Reader configuration package."""

from neuro_reader.config.loader import clear_cache, get_config, load_config
from neuro_reader.config.models import AppConfig

__all__ = ["AppConfig", "clear_cache", "get_config", "load_config"]
