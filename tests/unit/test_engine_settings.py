"""Tests for tooling settings and startup initialization."""

import os

import pytest

from screener_engine import startup
from screener_engine.config.settings import (
    CONFIG_PATH_ENV,
    LOG_LEVEL_ENV,
    EngineSettings,
    load_settings,
    resolve_config_path,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    startup.reset()
    yield
    startup.reset()


class TestEngineSettings:
    """Settings model."""

    def test_defaults(self):
        settings = EngineSettings()
        assert settings.lint_fail_on_warning is False
        assert settings.lint_allow_unknown_identifiers is False
        assert settings.log_level == "INFO"

    def test_log_level_is_normalized(self):
        assert EngineSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            EngineSettings(log_level="chatty")


class TestLoadSettings:
    """YAML loading and environment overrides."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / "screener.yaml") == EngineSettings()

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "screener.yaml"
        path.write_text("lint_fail_on_warning: true\nlog_level: warning\n", encoding="utf-8")
        settings = load_settings(path)
        assert settings.lint_fail_on_warning is True
        assert settings.log_level == "WARNING"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "screener.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == EngineSettings()

    def test_env_overrides_log_level(self, tmp_path, monkeypatch):
        path = tmp_path / "screener.yaml"
        path.write_text("log_level: ERROR\n", encoding="utf-8")
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        assert load_settings(path).log_level == "DEBUG"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "screener.yaml"
        path.write_text("log_level: [", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "screener.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_settings(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "screener.yaml"
        path.write_text("log_level: LOUD\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Failed to load config"):
            load_settings(path)

    def test_resolve_config_path(self, tmp_path, monkeypatch):
        assert resolve_config_path(tmp_path) == tmp_path / "screener.yaml"
        monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "custom.yaml"))
        assert resolve_config_path(tmp_path) == tmp_path / "custom.yaml"


class TestStartup:
    """ensure_initialized."""

    def test_finds_project_root_and_settings(self, tmp_path):
        (tmp_path / "screener.yaml").write_text("lint_fail_on_warning: true\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        state = startup.ensure_initialized(nested)

        assert state.project_root == tmp_path.resolve()
        assert state.config_path == tmp_path.resolve() / "screener.yaml"
        assert state.settings.lint_fail_on_warning is True
        assert state.env_loaded is False

    def test_loads_dotenv(self, tmp_path):
        (tmp_path / ".env").write_text(f"{LOG_LEVEL_ENV}=ERROR\n", encoding="utf-8")

        try:
            state = startup.ensure_initialized(tmp_path)
        finally:
            # load_dotenv writes into os.environ
            os.environ.pop(LOG_LEVEL_ENV, None)

        assert state.env_loaded is True
        assert state.settings.log_level == "ERROR"

    def test_environment_wins_over_dotenv(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text(f"{LOG_LEVEL_ENV}=ERROR\n", encoding="utf-8")
        monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
        assert startup.ensure_initialized(tmp_path).settings.log_level == "DEBUG"

    def test_state_is_cached_until_reset(self, tmp_path):
        first = startup.ensure_initialized(tmp_path)
        assert startup.ensure_initialized(tmp_path / "elsewhere") is first
        startup.reset()
        assert startup.ensure_initialized(tmp_path) is not first
