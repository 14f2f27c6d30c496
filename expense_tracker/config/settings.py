"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here: where the JSON collections
live and how noisy the logs are.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ExpenseTrackerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from EXPENSE_TRACKER_* environment variables
    and a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage location
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / "expense-tracker",
        description="Directory holding the JSON collections"
    )
    expense_file_name: str = Field(
        default="expense.json",
        min_length=1,
        description="File name of the expense collection"
    )
    budget_file_name: str = Field(
        default="config.json",
        min_length=1,
        description="File name of the budget collection"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for log output"
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of console output"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept the standard logging level names."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @property
    def expense_file_path(self) -> Path:
        """Full path of the expense collection file."""
        return self.data_dir / self.expense_file_name

    @property
    def budget_file_path(self) -> Path:
        """Full path of the budget collection file."""
        return self.data_dir / self.budget_file_name


@lru_cache()
def get_settings() -> ExpenseTrackerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return ExpenseTrackerSettings()
