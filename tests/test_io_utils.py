"""Tests for settings loading and logging setup."""

import logging
from pathlib import Path

import pytest

from src.utils.io_utils import (
    DEFAULTS,
    get_settings_load_count,
    load_settings,
    reload_settings,
)
from src.utils.logging_utils import get_logger, setup_logging_from_settings
from src.utils.path_utils import get_config_path, get_project_root


@pytest.fixture(autouse=True)
def clear_settings_cache():
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


class TestLoadSettings:
    """Test YAML settings loading."""

    def test_user_values_merged_over_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("partition:\n  dropna: true\n")

        settings = load_settings(str(path))

        assert settings["partition"]["dropna"] is True
        assert settings["partition"]["row_id_column"] is None
        assert settings["logging"]["level"] == "INFO"

    def test_defaults_not_mutated(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("partition:\n  row_id_column: id\n")

        load_settings(str(path))

        assert DEFAULTS["partition"]["row_id_column"] is None

    def test_missing_file_uses_defaults(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING):
            settings = load_settings(str(tmp_path / "absent.yaml"))

        assert settings == DEFAULTS
        assert "Settings file not found" in caplog.text

    def test_invalid_yaml_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("partition: [unclosed\n")

        assert load_settings(str(path)) == DEFAULTS

    def test_cached_until_reload(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("partition:\n  dropna: false\n")

        count = get_settings_load_count()
        load_settings(str(path))
        load_settings(str(path))
        assert get_settings_load_count() == count + 1

        path.write_text("partition:\n  dropna: true\n")
        assert load_settings(str(path))["partition"]["dropna"] is False
        assert reload_settings(str(path))["partition"]["dropna"] is True

    def test_shipped_config(self) -> None:
        """Test that the repository settings file loads cleanly."""
        settings = load_settings(str(get_project_root() / "config" / "settings.yaml"))

        assert settings["partition"] == {"dropna": False, "row_id_column": None}


class TestPathsAndLogging:
    """Test config lookup and logger configuration."""

    def test_get_config_path(self) -> None:
        assert get_config_path().name == "settings.yaml"

    def test_get_logger(self) -> None:
        assert get_logger("src.partition").name == "src.partition"

    def test_setup_logging_from_settings(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        log_file = tmp_path / "partition.log"

        setup_logging_from_settings(
            {"logging": {"level": "debug", "file": str(log_file)}},
        )

        assert len(calls) == 1
        assert calls[0]["level"] == logging.DEBUG
        handlers = calls[0]["handlers"]
        assert isinstance(handlers[0], logging.StreamHandler)
        assert isinstance(handlers[1], logging.FileHandler)
        handlers[1].close()

    def test_setup_logging_without_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

        setup_logging_from_settings({})

        assert calls[0]["level"] == logging.INFO
        assert len(calls[0]["handlers"]) == 1
