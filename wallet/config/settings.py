"""
Configuration Management for Wallet

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Thresholds used by the analytics rules live next to the storage location
so the whole behaviour of the engine can be read off one file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Snapshot storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WALLET_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the JSON snapshot files"
    )
    storage_name: str = Field(
        default="finance-store",
        min_length=1,
        description="Key under which the whole domain state is persisted"
    )
    keep_audit_log: bool = Field(
        default=True,
        description="Append audit events to a JSON-lines file next to the snapshot"
    )

    @field_validator('storage_name')
    @classmethod
    def validate_storage_name(cls, v: str) -> str:
        """Storage names become file names, so no path separators."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Storage name must not contain path separators: {v}")
        return v


class AnalyticsSettings(BaseSettings):
    """Thresholds for insights and recommendations."""

    model_config = SettingsConfigDict(
        env_prefix="WALLET_ANALYTICS_",
        extra="ignore"
    )

    months_back: int = Field(
        default=6,
        ge=2,
        le=36,
        description="Length of the trailing monthly series"
    )
    near_budget_threshold: float = Field(
        default=80.0,
        ge=0.0,
        le=100.0,
        description="Budget usage (%) from which a category is 'near' its limit"
    )
    savings_rate_target: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        description="Savings rate (%) below which a tip is emitted"
    )
    expense_rise_alert: float = Field(
        default=20.0,
        ge=0.0,
        description="Month-over-month expense increase (%) that triggers a warning"
    )
    expense_drop_praise: float = Field(
        default=-10.0,
        le=0.0,
        description="Month-over-month expense change (%) below which spend is praised"
    )
    upcoming_horizon_days: int = Field(
        default=14,
        ge=0,
        le=62,
        description="How far ahead upcoming bills are listed"
    )
    milestone_proximity: float = Field(
        default=15.0,
        ge=0.0,
        le=100.0,
        description="Percentage points to the next milestone that count as 'approaching'"
    )
    deadline_proximity_days: int = Field(
        default=30,
        ge=0,
        description="Days to a goal deadline that count as 'approaching'"
    )


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

    # First start
    seed_sample_data: bool = Field(
        default=False,
        description="Seed sample transactions, goals and bills when no snapshot exists"
    )

    # Advisory validation thresholds
    max_transaction_amount: float = Field(
        default=1000000.0,
        gt=0,
        description="Amount above which an entry is flagged as suspicious"
    )
    future_date_tolerance_days: int = Field(
        default=31,
        ge=0,
        description="How many days in the future an entry can be dated without a warning"
    )


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
    def analytics(self) -> AnalyticsSettings:
        return AnalyticsSettings()

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


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus `<name>_error`
    entries for the ones that failed. Useful for startup checks.
    """
    results = {}
    settings = get_settings()

    for name in ("storage", "analytics", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
