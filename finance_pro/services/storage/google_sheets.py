"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is used as the persistent backend because:
1. Users can look at their budget directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

TRADEOFFS:
- Sheets has no change feed, so subscribers are notified after writes
  made through this process and on an explicit refresh()
- No transactions (one row per record keeps writes independent)
- Filtering by user happens in Python

Layout: one "Expenses" worksheet with a row per (user, expense) and one
"Income" worksheet with a row per user.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Callable, Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from finance_pro.config import GoogleSheetsSettings, get_settings
from finance_pro.models.budget import ExpenseId, ExpenseRecord, IncomeProfile
from finance_pro.services.storage.interface import (
    ErrorListener,
    ExpenseStorageInterface,
    ExpensesListener,
    IncomeListener,
    IncomeStorageInterface,
    StorageConnectionError,
    StorageError,
    Unsubscribe,
)
from finance_pro.telemetry import get_logger


EXPENSE_COLUMNS = ["user_id", "id", "name", "amount", "day"]

INCOME_COLUMNS = ["user_id", "gross", "bonus", "premiumPct", "startMonth"]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise StorageConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise StorageConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise StorageConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def _get_or_create(self, title: str, columns: list[str]) -> gspread.Worksheet:
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=1000,
                cols=len(columns),
            )
            sheet.append_row(columns)
        return sheet

    def get_expenses_sheet(self) -> gspread.Worksheet:
        """Get or create the Expenses worksheet."""
        return self._get_or_create(self._settings.expenses_sheet_name, EXPENSE_COLUMNS)

    def get_income_sheet(self) -> gspread.Worksheet:
        """Get or create the Income worksheet."""
        return self._get_or_create(self._settings.income_sheet_name, INCOME_COLUMNS)


def _safe_get(row: list, index: int, default: str = "") -> str:
    try:
        return row[index] if row[index] else default
    except IndexError:
        return default


class _Subscriptions:
    """Listener registry shared by both Sheets storages."""

    def __init__(self, read: Callable[[str], object], name: str):
        self._read = read
        self._listeners: dict[str, list[tuple]] = defaultdict(list)
        self._logger = get_logger(__name__, storage=name)

    def add(self, user_id: str, on_change, on_error: Optional[ErrorListener]) -> Unsubscribe:
        entry = (on_change, on_error)
        self._listeners[user_id].append(entry)
        self._deliver(user_id, [entry])

        def unsubscribe() -> None:
            if entry in self._listeners[user_id]:
                self._listeners[user_id].remove(entry)

        return unsubscribe

    def notify(self, user_id: str) -> None:
        self._deliver(user_id, list(self._listeners[user_id]))

    def _deliver(self, user_id: str, entries: list[tuple]) -> None:
        if not entries:
            return
        try:
            snapshot = self._read(user_id)
        except StorageError as e:
            self._logger.error("storage_error", user_id=user_id, error=str(e))
            for _, on_error in entries:
                if on_error is not None:
                    on_error(e)
            return
        for on_change, _ in entries:
            on_change(snapshot)


class GoogleSheetsExpenseStorage(ExpenseStorageInterface):
    """
    Google Sheets implementation of expense storage.

    Expenses are stored as rows keyed by (user_id, id).
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()
        self._subscriptions = _Subscriptions(self._read_expenses, "expenses")

    def _expense_to_row(self, user_id: str, expense: ExpenseRecord) -> list:
        stored = expense.to_storage_dict()
        return [user_id, str(expense.id)] + [
            stored[column] for column in EXPENSE_COLUMNS[2:]
        ]

    def _row_to_expense(self, row: list) -> ExpenseRecord:
        return ExpenseRecord(
            id=_safe_get(row, 1),
            name=_safe_get(row, 2),
            amount=Decimal(_safe_get(row, 3)),
            day=int(_safe_get(row, 4)),
        )

    def _find_row(self, rows: list[list], user_id: str, expense_id: ExpenseId) -> Optional[int]:
        """1-based sheet row index of an expense (row 1 is the header)."""
        for idx, row in enumerate(rows[1:], start=2):
            if row and _safe_get(row, 0) == user_id and _safe_get(row, 1) == str(expense_id):
                return idx
        return None

    def _read_expenses(self, user_id: str) -> list[ExpenseRecord]:
        try:
            sheet = self._client.get_expenses_sheet()
            all_rows = sheet.get_all_values()[1:]  # Skip header
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to list expenses: {e}")

        expenses = []
        for row in all_rows:
            if not row or _safe_get(row, 0) != user_id:
                continue
            try:
                expenses.append(self._row_to_expense(row))
            except Exception:
                continue  # Skip malformed rows

        expenses.sort(key=lambda e: e.day)
        return expenses

    async def list_expenses(self, user_id: str) -> list[ExpenseRecord]:
        return self._read_expenses(user_id)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def save_expense(self, user_id: str, expense: ExpenseRecord) -> bool:
        """Upsert an expense row."""
        try:
            sheet = self._client.get_expenses_sheet()
            new_row = self._expense_to_row(user_id, expense)
            idx = self._find_row(sheet.get_all_values(), user_id, expense.id)
            if idx is None:
                sheet.append_row(new_row, value_input_option="RAW")
            else:
                for col_idx, value in enumerate(new_row, start=1):
                    sheet.update_cell(idx, col_idx, value)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save expense: {e}")

        self._subscriptions.notify(user_id)
        return True

    async def delete_expense(self, user_id: str, expense_id: ExpenseId) -> bool:
        try:
            sheet = self._client.get_expenses_sheet()
            idx = self._find_row(sheet.get_all_values(), user_id, expense_id)
            if idx is None:
                return False
            sheet.delete_rows(idx)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete expense: {e}")

        self._subscriptions.notify(user_id)
        return True

    def subscribe_expenses(
        self,
        user_id: str,
        on_change: ExpensesListener,
        on_error: Optional[ErrorListener] = None,
    ) -> Unsubscribe:
        return self._subscriptions.add(user_id, on_change, on_error)

    def refresh(self, user_id: str) -> None:
        """Re-read the sheet and push the snapshot to subscribers."""
        self._subscriptions.notify(user_id)


class GoogleSheetsIncomeStorage(IncomeStorageInterface):
    """
    Google Sheets implementation of the income profile singleton.

    One row per user; saving overwrites the whole row.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()
        self._subscriptions = _Subscriptions(self._read_income, "income")

    def _income_to_row(self, user_id: str, profile: IncomeProfile) -> list:
        stored = profile.to_storage_dict()
        return [user_id] + [stored[column] for column in INCOME_COLUMNS[1:]]

    def _row_to_income(self, row: list) -> IncomeProfile:
        # Columns carry the storage field names (premiumPct, startMonth)
        return IncomeProfile.model_validate({
            column: _safe_get(row, index, "0")
            for index, column in enumerate(INCOME_COLUMNS[1:], start=1)
        })

    def _read_income(self, user_id: str) -> Optional[IncomeProfile]:
        try:
            sheet = self._client.get_income_sheet()
            all_rows = sheet.get_all_values()[1:]
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read income: {e}")

        for row in all_rows:
            if row and _safe_get(row, 0) == user_id:
                try:
                    return self._row_to_income(row)
                except Exception as e:
                    raise StorageError(f"Malformed income row for {user_id}: {e}")
        return None

    async def get_income(self, user_id: str) -> Optional[IncomeProfile]:
        return self._read_income(user_id)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def save_income(self, user_id: str, profile: IncomeProfile) -> bool:
        try:
            sheet = self._client.get_income_sheet()
            new_row = self._income_to_row(user_id, profile)
            all_rows = sheet.get_all_values()
            for idx, row in enumerate(all_rows[1:], start=2):
                if row and _safe_get(row, 0) == user_id:
                    for col_idx, value in enumerate(new_row, start=1):
                        sheet.update_cell(idx, col_idx, value)
                    break
            else:
                sheet.append_row(new_row, value_input_option="RAW")
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save income: {e}")

        self._subscriptions.notify(user_id)
        return True

    def subscribe_income(
        self,
        user_id: str,
        on_change: IncomeListener,
        on_error: Optional[ErrorListener] = None,
    ) -> Unsubscribe:
        return self._subscriptions.add(user_id, on_change, on_error)

    def refresh(self, user_id: str) -> None:
        self._subscriptions.notify(user_id)
