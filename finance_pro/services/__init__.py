"""Services package."""

from finance_pro.services.identity import (
    Identity,
    IdentityProvider,
    LocalIdentityProvider,
)
from finance_pro.services.storage import (
    ExpenseStorageInterface,
    GoogleSheetsClient,
    GoogleSheetsExpenseStorage,
    GoogleSheetsIncomeStorage,
    IncomeStorageInterface,
    InMemoryBudgetStorage,
    StorageConnectionError,
    StorageError,
)

__all__ = [
    # Identity
    "Identity",
    "IdentityProvider",
    "LocalIdentityProvider",
    # Storage services
    "ExpenseStorageInterface",
    "GoogleSheetsClient",
    "GoogleSheetsExpenseStorage",
    "GoogleSheetsIncomeStorage",
    "IncomeStorageInterface",
    "InMemoryBudgetStorage",
    "StorageConnectionError",
    "StorageError",
]
