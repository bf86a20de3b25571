"""
Configuration Management for Expense Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
File locations and analysis thresholds live in one place and are
validated when first loaded.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local JSON storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the ledger's data files"
    )
    expenses_filename: str = Field(
        default="expenses.json",
        min_length=1,
        description="JSON array of expense records"
    )
    budget_filename: str = Field(
        default="monthly_budget.json",
        min_length=1,
        description="Scalar monthly budget value"
    )
    audit_filename: str = Field(
        default="audit_log.jsonl",
        min_length=1,
        description="Append-only audit event log (one JSON object per line)"
    )
    export_dir: Path = Field(
        default=Path("."),
        description="Directory where exports are written"
    )

    @property
    def expenses_path(self) -> Path:
        return self.data_dir / self.expenses_filename

    @property
    def budget_path(self) -> Path:
        return self.data_dir / self.budget_filename

    @property
    def audit_path(self) -> Path:
        return self.data_dir / self.audit_filename


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Trend analysis
    trailing_window_days: int = Field(
        default=7,
        ge=1,
        le=366,
        description="Days covered by the trailing spend window"
    )

    # Budget thresholds (percent of budget used)
    budget_warning_percent: float = Field(
        default=90.0,
        gt=0,
        description="Usage at or above this is 'approaching limit'"
    )
    budget_danger_percent: float = Field(
        default=100.0,
        gt=0,
        description="Usage at or above this is 'over budget'"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (console renderer otherwise)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode='after')
    def validate_thresholds(self) -> 'AppSettings':
        """Danger threshold cannot sit below the warning threshold."""
        if self.budget_danger_percent < self.budget_warning_percent:
            raise ValueError("budget_danger_percent must be >= budget_warning_percent")
        return self


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus an
    `<name>_error` entry for each failing group.
    """
    results: dict[str, object] = {}
    settings = get_settings()

    for name in ("storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
