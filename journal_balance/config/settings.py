"""
Configuration Management for Journal Balance

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Engine functions take explicit arguments for anything that changes
results (classification, strict mode); settings only supply defaults.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Validation and arithmetic policy for the balance engine."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    strict_classification: bool = Field(
        default=False,
        description="Fail equation checks when a referenced account is unclassified"
    )
    self_reference_policy: str = Field(
        default="reject",
        pattern="^(reject|warn)$",
        description="What to do with entries that debit and credit the same account"
    )
    max_decimal_places: int = Field(
        default=6,
        ge=0,
        le=28,
        description="Most fractional digits an amount may carry"
    )
    decimal_precision: int = Field(
        default=60,
        ge=28,
        le=999,
        description="Significant digits available to exact sums"
    )


class DisplaySettings(BaseSettings):
    """How amounts are rendered in summaries."""

    model_config = SettingsConfigDict(
        env_prefix="DISPLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    currency_symbol: str = Field(
        default="Rp",
        description="Symbol placed before formatted amounts"
    )
    thousands_separator: str = Field(
        default=".",
        max_length=1,
    )
    decimal_separator: str = Field(
        default=",",
        min_length=1,
        max_length=1,
    )
    decimal_places: int = Field(
        default=0,
        ge=0,
        le=6,
        description="Fractional digits shown (display only)"
    )


class LoggingSettings(BaseSettings):
    """structlog output configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_format: bool = Field(
        default=True,
        description="Render JSON lines (False renders for the console)"
    )

    @field_validator('level')
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept any casing, reject unknown level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


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
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def display(self) -> DisplaySettings:
        return DisplaySettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings groups load from the current environment.

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry for each group that fails.
    """
    results = {}

    settings = get_settings()

    for name in ("ledger", "display", "logging"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
