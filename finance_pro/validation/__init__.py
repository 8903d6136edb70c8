"""Validation package."""

from finance_pro.validation.validator import (
    ExpenseDraft,
    ExpenseValidator,
    InvalidExpenseError,
)

__all__ = ["ExpenseDraft", "ExpenseValidator", "InvalidExpenseError"]
