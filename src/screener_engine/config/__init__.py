"""Tooling configuration management."""

from screener_engine.config.settings import (
    EngineSettings,
    load_settings,
    resolve_config_path,
)

__all__ = [
    "EngineSettings",
    "load_settings",
    "resolve_config_path",
]
