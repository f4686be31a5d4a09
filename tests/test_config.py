"""Tests for settings loading, validation, and logger configuration."""

import logging
from pathlib import Path

import pytest
import yaml

from core.config_loader import load_config
from core.logger import _default_level, get_logger
from pipelines.sms_reply.config import (
    DEFAULT_SETTINGS,
    load_settings,
    validate_settings,
)

REPO_CONFIG = Path(__file__).parent.parent / "config" / "sms_reply.yaml"


# =============================================================================
# YAML LOADER
# =============================================================================

class TestLoadConfig:
    """Tests for core.config_loader.load_config."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == {}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("parser: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_config(path)

    def test_repo_config_is_valid(self):
        """The shipped settings file loads and validates."""
        settings = validate_settings(load_config(REPO_CONFIG)["parser"])

        assert settings["timezone"] == "America/New_York"
        assert settings["default_hour"] == 9


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidateSettings:
    """Tests for validate_settings."""

    def test_empty_gives_defaults(self):
        assert validate_settings({}) == DEFAULT_SETTINGS

    def test_partial_override(self):
        settings = validate_settings({"default_hour": 8})

        assert settings["default_hour"] == 8
        assert settings["snooze_max_hours"] == DEFAULT_SETTINGS["snooze_max_hours"]

    def test_does_not_mutate_defaults(self):
        validate_settings({"default_hour": 7})

        assert DEFAULT_SETTINGS["default_hour"] == 9

    @pytest.mark.parametrize("raw,message", [
        ({"colour": "blue"}, "Unknown parser settings"),
        ({"default_hour": "9"}, "must be an integer"),
        ({"default_hour": True}, "must be an integer"),
        ({"default_hour": 24}, "0-23"),
        ({"snooze_min_minutes": 0}, "at least 1"),
        ({"snooze_max_hours": 0}, "at least 1"),
        ({"snooze_min_minutes": 120, "snooze_max_hours": 1}, "exceeds"),
        ({"timezone": "Mars/Olympus"}, "Unknown timezone"),
        ({"timezone": 5}, "must be a string"),
        ({"timezone": ["America/New_York"]}, "must be a string"),
        ({1: 2, "colour": "blue"}, "Unknown parser settings"),
    ])
    def test_invalid(self, raw, message):
        with pytest.raises(ValueError, match=message):
            validate_settings(raw)


# =============================================================================
# LOADING
# =============================================================================

class TestLoadSettings:
    """Tests for load_settings path and environment resolution."""

    def test_missing_default_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_settings() == DEFAULT_SETTINGS

    def test_default_file_in_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "sms_reply.yaml").write_text("parser:\n  default_hour: 10\n")
        monkeypatch.chdir(tmp_path)

        assert load_settings()["default_hour"] == 10

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("parser:\n  timezone: Europe/London\n  snooze_max_hours: 12\n")

        settings = load_settings(path)

        assert settings["timezone"] == "Europe/London"
        assert settings["snooze_max_hours"] == 12

    def test_explicit_missing_path_is_an_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("parser:\n  default_hour: 11\n")
        monkeypatch.setenv("SMS_REPLY_CONFIG", str(path))

        assert load_settings()["default_hour"] == 11

    def test_file_without_parser_block(self, tmp_path):
        path = tmp_path / "other.yaml"
        path.write_text("unrelated: true\n")

        assert load_settings(path) == DEFAULT_SETTINGS

    def test_timezone_environment_override(self, tmp_path, monkeypatch):
        path = tmp_path / "tz.yaml"
        path.write_text("parser:\n  timezone: America/New_York\n")
        monkeypatch.setenv("SMS_REPLY_TIMEZONE", " America/Denver ")

        assert load_settings(path)["timezone"] == "America/Denver"

    @pytest.mark.parametrize("document", [
        "parser: [1, 2]\n",
        "parser: just a string\n",
        "parser: 7\n",
    ])
    def test_parser_block_must_be_mapping(self, tmp_path, document):
        path = tmp_path / "bad_block.yaml"
        path.write_text(document)

        with pytest.raises(ValueError, match="must be a mapping"):
            load_settings(path)

    def test_non_string_timezone_in_file(self, tmp_path):
        path = tmp_path / "tz_number.yaml"
        path.write_text("parser:\n  timezone: 5\n")

        with pytest.raises(ValueError, match="must be a string"):
            load_settings(path)

    def test_bad_environment_timezone(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SMS_REPLY_TIMEZONE", "Not/AZone")

        with pytest.raises(ValueError, match="Unknown timezone"):
            load_settings()


# =============================================================================
# LOGGER
# =============================================================================

class TestLogger:
    """Tests for core.logger."""

    def test_default_level_is_info(self):
        assert _default_level() == logging.INFO

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("SMS_REPLY_LOG_LEVEL", "debug")

        assert _default_level() == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("SMS_REPLY_LOG_LEVEL", "chatty")

        assert _default_level() == logging.INFO

    def test_loggers_are_cached(self):
        first = get_logger("tests.cached")
        second = get_logger("tests.cached", level=logging.ERROR)

        assert first is second
        assert first.level == logging.INFO
        assert len(first.handlers) == 1
        assert first.propagate is False
