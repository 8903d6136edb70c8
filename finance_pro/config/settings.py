"""
Configuration Management for Finance Pro

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Payroll constants belong to a specific tax year, so they live in settings
and reach the projection engine as plain parameters.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finance_pro.projection.net_pay import DeductionRates


class PayrollSettings(BaseSettings):
    """Deduction rates and payday rules for the current tax year."""

    model_config = SettingsConfigDict(
        env_prefix="PAYROLL_",
        extra="ignore"
    )

    health_rate: Decimal = Field(
        default=Decimal("0.045"),
        ge=0,
        le=1,
        description="Employee health insurance rate"
    )
    social_rate: Decimal = Field(
        default=Decimal("0.071"),
        ge=0,
        le=1,
        description="Employee social insurance rate"
    )
    income_tax_rate: Decimal = Field(
        default=Decimal("0.15"),
        ge=0,
        le=1,
        description="Flat income tax rate"
    )
    tax_credit: Decimal = Field(
        default=Decimal("2570"),
        ge=0,
        description="Monthly tax credit subtracted from income tax"
    )
    payday_day: int = Field(
        default=8,
        ge=1,
        le=28,
        description="Nominal day of month the salary arrives"
    )

    def deduction_rates(self) -> DeductionRates:
        """Get the rates in the shape the net pay calculator expects."""
        return DeductionRates(
            health=self.health_rate,
            social=self.social_rate,
            income_tax=self.income_tax_rate,
            tax_credit=self.tax_credit,
        )


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )

    # Sheet names within the spreadsheet
    expenses_sheet_name: str = Field(
        default="Expenses",
        description="Name of the sheet for recurring expenses"
    )
    income_sheet_name: str = Field(
        default="Income",
        description="Name of the sheet for income profiles"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v


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
        description="Enable debug mode (console log renderer)"
    )

    # Identity
    default_user_id: str = Field(
        default="default-user",
        min_length=1,
        description="User id used when nobody is signed in"
    )

    # Storage
    storage_backend: Literal["memory", "google_sheets"] = Field(
        default="memory",
        description="Which storage backend to use"
    )

    # Presentation helpers
    display_locale: Literal["en", "cs"] = Field(
        default="en",
        description="Language of month labels, the payday item and default expense names"
    )

    # Validation thresholds
    max_expense_amount: Decimal = Field(
        default=Decimal("1000000"),
        gt=0,
        description="Maximum reasonable monthly expense (for sanity checking)"
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

    # Note: These are loaded lazily to allow partial configuration

    @property
    def payroll(self) -> PayrollSettings:
        return PayrollSettings()

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

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

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("payroll", "google_sheets", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
