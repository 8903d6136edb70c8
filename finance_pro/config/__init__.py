"""Configuration package."""

from finance_pro.config.settings import (
    AppSettings,
    GoogleSheetsSettings,
    PayrollSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "GoogleSheetsSettings",
    "PayrollSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
