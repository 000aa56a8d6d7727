"""Fixtures for CLI tests."""

import logging

import pytest
from typer.testing import CliRunner

from screener_engine import startup
from screener_engine.config.settings import CONFIG_PATH_ENV, LOG_LEVEL_ENV


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_project(tmp_path, monkeypatch):
    """Run each command from an empty project directory with fresh startup state."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    startup.reset()

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield tmp_path
    root.handlers[:] = handlers
    root.setLevel(level)
    startup.reset()
