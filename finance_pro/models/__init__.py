"""
Data Models Package

This package contains all Pydantic models used in Finance Pro.
Stored records and derived view models alike are immutable snapshots.
"""

from finance_pro.models.budget import (
    DEFAULT_EXPENSES,
    DEFAULT_INCOME_PROFILE,
    PAYDAY_ITEM_ID,
    BudgetOverview,
    ExpenseId,
    ExpenseRecord,
    IncomeProfile,
    Timeline,
    TimelineItem,
    TimelineItemType,
    ValidationIssue,
    ValidationResult,
    default_expenses,
)

__all__ = [
    # Stored records
    "DEFAULT_EXPENSES",
    "DEFAULT_INCOME_PROFILE",
    "default_expenses",
    "ExpenseId",
    "ExpenseRecord",
    "IncomeProfile",
    # View models
    "PAYDAY_ITEM_ID",
    "BudgetOverview",
    "Timeline",
    "TimelineItem",
    "TimelineItemType",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
