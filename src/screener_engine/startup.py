"""Centralized initialization for screener_engine entry points.

This module provides a single point of initialization for:
- Environment variables (.env loading)
- Project root resolution
- Tooling settings (screener.yaml)

The evaluation runtime never calls into this module; it is used by the
CLI only.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from screener_engine.config.settings import EngineSettings, load_settings, resolve_config_path

logger = logging.getLogger(__name__)


@dataclass
class StartupState:
    """State resolved on first initialization."""

    project_root: Path
    config_path: Path
    env_loaded: bool = False
    settings: EngineSettings = field(default_factory=EngineSettings)


# Module-level state
_state: Optional[StartupState] = None


def _find_project_root(start_path: Optional[Path] = None) -> Path:
    """Find project root by looking for screener.yaml, .env or pyproject.toml.

    Args:
        start_path: Starting path for search. Defaults to the working directory.

    Returns:
        Project root directory.
    """
    current = (start_path or Path.cwd()).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "screener.yaml").exists():
            return parent
        if (parent / ".env").exists():
            return parent
        if (parent / "pyproject.toml").exists():
            return parent
    return current


def _load_env(project_root: Path) -> bool:
    """Load .env file from project root without overriding the environment."""
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)
        logger.debug(f"Loaded .env from {env_path}")
        return True
    logger.debug(f".env not found at {env_path}")
    return False


def ensure_initialized(start_path: Optional[Path] = None) -> StartupState:
    """Ensure the tooling is initialized (idempotent).

    Loads .env and settings on first call. Subsequent calls return cached state.

    Raises:
        ValueError: If the settings file is invalid.
    """
    global _state

    if _state is not None:
        return _state

    project_root = _find_project_root(start_path)
    env_loaded = _load_env(project_root)
    config_path = resolve_config_path(project_root)
    _state = StartupState(
        project_root=project_root,
        config_path=config_path,
        env_loaded=env_loaded,
        settings=load_settings(config_path),
    )
    return _state


def reset() -> None:
    """Forget cached state so the next ensure_initialized() starts fresh."""
    global _state
    _state = None
