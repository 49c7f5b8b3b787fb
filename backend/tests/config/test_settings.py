"""
Tests for environment settings and logging setup
"""
import pytest
from loguru import logger

from vhsave.config import logging_config, settings as settings_module
from vhsave.config.logging_config import configure_logging
from vhsave.config.settings import Settings, get_settings

ENV_VARS = ("LOG_LEVEL", "LOG_FILTER", "LOG_TO_FILE", "VHSAVE_STRING_ENCODING", "VHSAVE_MAX_WORKERS")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module, "_settings", None)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings.from_env()
        assert settings == Settings()
        assert settings.log_level == "WARNING"
        assert settings.string_encoding == "utf-8"
        assert settings.max_workers == 4
        assert settings.log_to_file is False

    def test_from_env(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("LOG_FILTER", "vhsave.parsers")
        clean_env.setenv("LOG_TO_FILE", "yes")
        clean_env.setenv("VHSAVE_STRING_ENCODING", "latin-1")
        clean_env.setenv("VHSAVE_MAX_WORKERS", "8")

        settings = Settings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.log_filter == "vhsave.parsers"
        assert settings.log_to_file is True
        assert settings.string_encoding == "latin-1"
        assert settings.max_workers == 8

    def test_unknown_encoding(self, clean_env):
        clean_env.setenv("VHSAVE_STRING_ENCODING", "no-such-codec")
        with pytest.raises(ValueError):
            Settings.from_env()

    @pytest.mark.parametrize("value", ["0", "-2"])
    def test_max_workers_must_be_positive(self, clean_env, value):
        clean_env.setenv("VHSAVE_MAX_WORKERS", value)
        with pytest.raises(ValueError):
            Settings.from_env()

    @pytest.mark.parametrize("name, value", [
        ("VHSAVE_MAX_WORKERS", "many"),
        ("LOG_LEVEL", "loud"),
    ])
    def test_malformed_value_names_variable(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ValueError, match=name):
            Settings.from_env()

    def test_get_settings_is_cached(self, clean_env):
        first = get_settings()
        clean_env.setenv("VHSAVE_MAX_WORKERS", "2")
        assert get_settings() is first


class TestConfigureLogging:

    def test_log_file(self, tmp_path, monkeypatch):
        """Test file logging goes to the per-user logs directory"""
        monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
        try:
            configure_logging(Settings(log_to_file=True))
            logger.info("file sink check")
        finally:
            logger.remove()

        log_file = tmp_path / "vhsave" / "logs" / f"vhsave_{logging_config.SESSION_ID}.log"
        assert log_file.exists()
        assert "file sink check" in log_file.read_text()

    def test_level_override(self, capsys):
        try:
            configure_logging(Settings(log_level="ERROR"), level="debug")
            logger.debug("debug visible")
        finally:
            logger.remove()
        assert "debug visible" in capsys.readouterr().err

    def test_filter(self, capsys):
        try:
            configure_logging(Settings(log_level="DEBUG", log_filter="vhsave.parsers"))
            logger.debug("from the tests")
        finally:
            logger.remove()
        assert "from the tests" not in capsys.readouterr().err
