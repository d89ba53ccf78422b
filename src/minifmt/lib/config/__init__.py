"""Configuration discovery and parsing helpers."""

from minifmt.lib.config._paths import resolve_root
from minifmt.lib.config.settings import FormatterConfig, load_config

__all__ = ["FormatterConfig", "load_config", "resolve_root"]
