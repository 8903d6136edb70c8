"""
Abstract Storage Interface

DESIGN DECISION: The projection engine never talks to a database.
It is fed snapshots through these interfaces, which allows us to:
1. Swap Google Sheets for another document store later
2. Use in-memory storage for testing and the signed-out demo
3. Keep business logic decoupled from storage implementation

Reads are push-based: a subscriber gets the current snapshot right away
and a fresh one after every change. Writes replace records wholesale
(last write wins); merging partial edits happens before a write.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from finance_pro.models.budget import ExpenseId, ExpenseRecord, IncomeProfile


ExpensesListener = Callable[[list[ExpenseRecord]], None]
IncomeListener = Callable[[Optional[IncomeProfile]], None]
ErrorListener = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for recurring expense storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def list_expenses(self, user_id: str) -> list[ExpenseRecord]:
        """
        Current expenses of a user, ordered by day of month.

        Raises:
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def save_expense(self, user_id: str, expense: ExpenseRecord) -> bool:
        """
        Create or overwrite an expense, keyed by its id.

        Only name, amount and day are stored under the key.

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def delete_expense(self, user_id: str, expense_id: ExpenseId) -> bool:
        """
        Delete an expense by id.

        Returns:
            True if a record was deleted, False if none existed

        Raises:
            StorageError: If delete fails
        """
        pass

    @abstractmethod
    def subscribe_expenses(
        self,
        user_id: str,
        on_change: ExpensesListener,
        on_error: Optional[ErrorListener] = None,
    ) -> Unsubscribe:
        """
        Register for expense snapshots of one user.

        on_change is called immediately with the current snapshot and
        again after every insert, update or delete.

        Returns:
            A callable that removes the subscription
        """
        pass


class IncomeStorageInterface(ABC):
    """
    Abstract interface for the per-user income profile singleton.
    """

    @abstractmethod
    async def get_income(self, user_id: str) -> Optional[IncomeProfile]:
        """
        The stored profile, or None if the user has none yet.

        A missing profile is not an error.
        """
        pass

    @abstractmethod
    async def save_income(self, user_id: str, profile: IncomeProfile) -> bool:
        """
        Replace the user's profile in full.

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    def subscribe_income(
        self,
        user_id: str,
        on_change: IncomeListener,
        on_error: Optional[ErrorListener] = None,
    ) -> Unsubscribe:
        """
        Register for income snapshots of one user (None while missing).

        Returns:
            A callable that removes the subscription
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
