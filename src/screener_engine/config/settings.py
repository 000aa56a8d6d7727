"""Tooling configuration schema and loader.

Settings for the command-line tooling around the engine (linting policy,
log level). They are loaded from ``screener.yaml`` at the project root, or
from the file named by ``SCREENER_CONFIG``. The evaluation runtime itself
takes no configuration.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "screener.yaml"
CONFIG_PATH_ENV = "SCREENER_CONFIG"
LOG_LEVEL_ENV = "SCREENER_LOG_LEVEL"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class EngineSettings(BaseModel):
    """Settings schema for screener tooling.

    Attributes:
        lint_fail_on_warning: Treat lint warnings as failures.
        lint_allow_unknown_identifiers: Downgrade unknown identifiers in
            conditions from critical violations to warnings.
        log_level: Default log level for the CLI.
    """

    lint_fail_on_warning: bool = Field(
        default=False,
        description="Treat lint warnings as failures",
    )
    lint_allow_unknown_identifiers: bool = Field(
        default=False,
        description="Report unknown condition identifiers as warnings",
    )
    log_level: str = Field(
        default="INFO",
        description="Default log level for the CLI",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a standard logging level name."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{v}'. Valid levels: {sorted(VALID_LOG_LEVELS)}"
            )
        return level


def resolve_config_path(project_root: Optional[Path] = None) -> Path:
    """Config file location: ``SCREENER_CONFIG`` or ``{project_root}/screener.yaml``."""
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return (project_root or Path.cwd()) / DEFAULT_CONFIG_FILENAME


def load_settings(config_path: Optional[Path] = None) -> EngineSettings:
    """Load settings from YAML, applying environment overrides.

    Args:
        config_path: Optional explicit path to the YAML file.
            If not provided, uses resolve_config_path().

    Returns:
        EngineSettings; defaults when the file does not exist.

    Raises:
        ValueError: If the file exists but contains invalid configuration.
    """
    if config_path is None:
        config_path = resolve_config_path()

    data = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config {config_path}: {e}")
        if not isinstance(data, dict):
            raise ValueError(f"Config {config_path} must be a mapping")
        logger.debug(f"Loaded settings from {config_path}")
    else:
        logger.debug(f"No config found at {config_path}, using defaults")

    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        data = {**data, "log_level": env_level}

    try:
        return EngineSettings.model_validate(data)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}")

