"""
Storage Services Package

Provides abstract interfaces and concrete implementations for expense and
income storage. Google Sheets is the persistent backend; the in-memory
backend serves the signed-out demo and tests.
"""

from finance_pro.services.storage.interface import (
    ExpenseStorageInterface,
    IncomeStorageInterface,
    StorageConnectionError,
    StorageError,
    Unsubscribe,
)
from finance_pro.services.storage.memory import InMemoryBudgetStorage
from finance_pro.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsExpenseStorage,
    GoogleSheetsIncomeStorage,
)

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    "IncomeStorageInterface",
    "Unsubscribe",
    # Exceptions
    "StorageConnectionError",
    "StorageError",
    # Implementations
    "InMemoryBudgetStorage",
    "GoogleSheetsClient",
    "GoogleSheetsExpenseStorage",
    "GoogleSheetsIncomeStorage",
]
