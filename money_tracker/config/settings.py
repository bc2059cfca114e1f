"""
Configuration Management for Money Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Where the ledger is stored and how amounts are displayed are the only
knobs; both are validated at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Entry store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MONEY_TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Store backend: 'json' file or non-persistent 'memory'"
    )
    path: Path = Field(
        default=Path("data/money_tracker.json"),
        description="Path to the JSON key-value file (json backend only)"
    )
    key: str = Field(
        default="transactions",
        min_length=1,
        description="Key the entry collection is stored under"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MONEY_TRACKER_",
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
        description="Enable debug logging"
    )

    # Display formatting (Indonesian Rupiah by default)
    currency_symbol: str = Field(
        default="Rp",
        max_length=5,
        description="Symbol shown before formatted amounts"
    )
    thousands_separator: str = Field(
        default=".",
        min_length=1,
        max_length=1,
        description="Digit group separator"
    )
    decimal_separator: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Decimal point character"
    )
    decimal_places: int = Field(
        default=2,
        ge=0,
        le=4,
        description="Digits shown after the decimal separator"
    )

    @field_validator('decimal_separator')
    @classmethod
    def validate_separators_differ(cls, v: str, info: ValidationInfo) -> str:
        """Parsing is ambiguous if both separators are the same character."""
        if v == info.data.get('thousands_separator'):
            raise ValueError("Decimal and thousands separators must differ")
        return v


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


def validate_all_settings() -> dict[str, bool | str]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    """
    results: dict[str, bool | str] = {}

    settings = get_settings()

    for name in ("storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
