"""
In-Memory Storage Implementation

Keeps everything in per-user dictionaries. Used for the signed-out demo
user, local development and tests. Nothing survives the process.
"""

from collections import defaultdict
from typing import Optional

from finance_pro.models.budget import ExpenseId, ExpenseRecord, IncomeProfile
from finance_pro.services.storage.interface import (
    ErrorListener,
    ExpenseStorageInterface,
    ExpensesListener,
    IncomeListener,
    IncomeStorageInterface,
    Unsubscribe,
)


class InMemoryBudgetStorage(ExpenseStorageInterface, IncomeStorageInterface):
    """Both storage interfaces backed by plain dictionaries."""

    def __init__(self):
        # user_id -> {str(expense_id): record}
        self._expenses: dict[str, dict[str, ExpenseRecord]] = defaultdict(dict)
        self._income: dict[str, IncomeProfile] = {}
        self._expense_listeners: dict[str, list[ExpensesListener]] = defaultdict(list)
        self._income_listeners: dict[str, list[IncomeListener]] = defaultdict(list)

    def _snapshot(self, user_id: str) -> list[ExpenseRecord]:
        return sorted(self._expenses[user_id].values(), key=lambda e: e.day)

    def _notify_expenses(self, user_id: str) -> None:
        snapshot = self._snapshot(user_id)
        for listener in list(self._expense_listeners[user_id]):
            listener(list(snapshot))

    def _notify_income(self, user_id: str) -> None:
        profile = self._income.get(user_id)
        for listener in list(self._income_listeners[user_id]):
            listener(profile)

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    async def list_expenses(self, user_id: str) -> list[ExpenseRecord]:
        return self._snapshot(user_id)

    async def save_expense(self, user_id: str, expense: ExpenseRecord) -> bool:
        self._expenses[user_id][str(expense.id)] = expense
        self._notify_expenses(user_id)
        return True

    async def delete_expense(self, user_id: str, expense_id: ExpenseId) -> bool:
        removed = self._expenses[user_id].pop(str(expense_id), None)
        if removed is None:
            return False
        self._notify_expenses(user_id)
        return True

    def subscribe_expenses(
        self,
        user_id: str,
        on_change: ExpensesListener,
        on_error: Optional[ErrorListener] = None,
    ) -> Unsubscribe:
        listeners = self._expense_listeners[user_id]
        listeners.append(on_change)
        on_change(self._snapshot(user_id))

        def unsubscribe() -> None:
            if on_change in listeners:
                listeners.remove(on_change)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Income
    # -------------------------------------------------------------------------

    async def get_income(self, user_id: str) -> Optional[IncomeProfile]:
        return self._income.get(user_id)

    async def save_income(self, user_id: str, profile: IncomeProfile) -> bool:
        self._income[user_id] = profile
        self._notify_income(user_id)
        return True

    def subscribe_income(
        self,
        user_id: str,
        on_change: IncomeListener,
        on_error: Optional[ErrorListener] = None,
    ) -> Unsubscribe:
        listeners = self._income_listeners[user_id]
        listeners.append(on_change)
        on_change(self._income.get(user_id))

        def unsubscribe() -> None:
            if on_change in listeners:
                listeners.remove(on_change)

        return unsubscribe
