"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from expense_tracker.config import ExpenseTrackerSettings, get_settings


class TestSettings:
    """Environment driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EXPENSE_TRACKER_DATA_DIR", raising=False)
        settings = ExpenseTrackerSettings(_env_file=None)
        assert settings.data_dir == Path.home() / "expense-tracker"
        assert settings.expense_file_path.name == "expense.json"
        assert settings.budget_file_path.name == "config.json"
        assert settings.log_level == "WARNING"
        assert settings.log_json is False

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EXPENSE_TRACKER_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("EXPENSE_TRACKER_EXPENSE_FILE_NAME", "spent.json")
        monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", "debug")
        monkeypatch.setenv("EXPENSE_TRACKER_LOG_JSON", "true")

        settings = ExpenseTrackerSettings(_env_file=None)

        assert settings.expense_file_path == tmp_path / "spent.json"
        assert settings.budget_file_path == tmp_path / "config.json"
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True

    def test_data_dir_expands_user(self):
        settings = ExpenseTrackerSettings(data_dir="~/ledger", _env_file=None)
        assert settings.data_dir == Path.home() / "ledger"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            ExpenseTrackerSettings(log_level="LOUD", _env_file=None)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
        first = get_settings()
        get_settings.cache_clear()
        assert get_settings() is not first
