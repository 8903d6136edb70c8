"""
Budget Session Orchestrator for Finance Pro

This module ties the pure projection engine to its collaborators:
1. Identity: who is signed in (or the default demo user)
2. Storage: live snapshots of expenses and the income profile
3. Writes: validated expense upserts/deletes and income replacement

DESIGN DECISION: All client-side state lives in one explicit object.
The engine functions receive that state as parameters; nothing reads
ambient globals. Every recompute starts from the latest snapshots, so
calling overview() repeatedly is idempotent.

Income replacement is two-phase. The new profile is held as a pending
override (visible to overview()) until storage confirms the write; on
failure the override is discarded unless the caller asks to keep it.
"""

from datetime import date, datetime
from typing import Optional, Union

from finance_pro.config import Settings, get_settings
from finance_pro.models.budget import (
    DEFAULT_INCOME_PROFILE,
    BudgetOverview,
    ExpenseId,
    ExpenseRecord,
    IncomeProfile,
    default_expenses,
)
from finance_pro.projection import build_overview
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
    StorageError,
)
from finance_pro.telemetry import configure_logging, create_correlation_id, get_logger
from finance_pro.validation import ExpenseDraft, ExpenseValidator, InvalidExpenseError


class BudgetSession:
    """
    Live budget state of the current user.

    Lifecycle:
    1. start() -> subscribe for the current identity, seed defaults if needed
    2. overview() -> derived view model, as often as the UI likes
    3. save_expense()/delete_expense()/update_income() -> writes
    4. close() -> drop subscriptions
    """

    def __init__(
        self,
        expense_storage: ExpenseStorageInterface,
        income_storage: IncomeStorageInterface,
        identity_provider: Optional[IdentityProvider] = None,
        validator: Optional[ExpenseValidator] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self._app_settings = settings.app
        self._payroll = settings.payroll
        self._rates = self._payroll.deduction_rates()

        self._expense_storage = expense_storage
        self._income_storage = income_storage
        self._identity_provider = identity_provider or LocalIdentityProvider()
        self._validator = validator or ExpenseValidator(
            self._app_settings.max_expense_amount
        )
        self._logger = get_logger(__name__)

        self._user_id: Optional[str] = None
        self._expenses: list[ExpenseRecord] = []
        self._income: IncomeProfile = DEFAULT_INCOME_PROFILE
        self._income_stored = False
        self._pending_income: Optional[IncomeProfile] = None
        self._income_draft: Optional[IncomeProfile] = None
        self._seeded_users: set[str] = set()

        self._unsubscribers: list = []
        self._identity_unsubscribe = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """Attach to the identity provider and load the current user's data."""
        if self._identity_unsubscribe is None:
            self._identity_unsubscribe = self._identity_provider.subscribe(
                self._on_identity_change
            )
        self._bind(self._identity_provider.current)
        await self.initialize_defaults_if_needed()

    def close(self) -> None:
        self._unbind()
        if self._identity_unsubscribe is not None:
            self._identity_unsubscribe()
            self._identity_unsubscribe = None

    async def sign_in(self) -> None:
        await self._identity_provider.sign_in()

    async def sign_out(self) -> None:
        await self._identity_provider.sign_out()

    async def _on_identity_change(self, identity: Optional[Identity]) -> None:
        self._bind(identity)
        await self.initialize_defaults_if_needed()

    def _resolve_user_id(self, identity: Optional[Identity]) -> str:
        return identity.uid if identity else self._app_settings.default_user_id

    def _bind(self, identity: Optional[Identity]) -> None:
        user_id = self._resolve_user_id(identity)
        if user_id == self._user_id and self._unsubscribers:
            return

        self._unbind()
        self._user_id = user_id
        self._expenses = []
        self._income = DEFAULT_INCOME_PROFILE
        self._income_stored = False
        self._pending_income = None
        self._income_draft = None
        self._logger = get_logger(__name__, user_id=user_id)

        self._unsubscribers = [
            self._expense_storage.subscribe_expenses(
                user_id, self._on_expenses, self._on_storage_error
            ),
            self._income_storage.subscribe_income(
                user_id, self._on_income, self._on_storage_error
            ),
        ]

    def _unbind(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # -------------------------------------------------------------------------
    # Snapshot listeners
    # -------------------------------------------------------------------------

    def _on_expenses(self, expenses: list[ExpenseRecord]) -> None:
        self._expenses = sorted(expenses, key=lambda e: e.day)

    def _on_income(self, profile: Optional[IncomeProfile]) -> None:
        if profile is None:
            # Not an error: the default stays in place until something is saved
            self._income_stored = False
            return
        self._income = profile
        self._income_stored = True

    def _on_storage_error(self, error: Exception) -> None:
        self._logger.error("storage_error", error=str(error))

    # -------------------------------------------------------------------------
    # Defaults
    # -------------------------------------------------------------------------

    async def initialize_defaults_if_needed(self) -> bool:
        """
        Seed a signed-in user's empty storage with the default budget.

        Runs at most once per user and session; a failed attempt is retried
        on the next call. The default demo user is never seeded, it simply
        sees the default income profile.
        """
        user_id = self._user_id
        if (
            user_id is None
            or user_id == self._app_settings.default_user_id
            or self._income_stored
            or user_id in self._seeded_users
        ):
            return False
        self._seeded_users.add(user_id)

        correlation_id = create_correlation_id()
        defaults = default_expenses(self._app_settings.display_locale)
        try:
            existing = {
                str(expense.id)
                for expense in await self._expense_storage.list_expenses(user_id)
            }
            # Expenses other than the defaults belong to the user
            if not existing <= {str(expense.id) for expense in defaults}:
                return False
            for expense in defaults:
                if str(expense.id) not in existing:
                    await self._expense_storage.save_expense(user_id, expense)
            await self._income_storage.save_income(user_id, DEFAULT_INCOME_PROFILE)
        except StorageError as e:
            # The defaults are a convenience; the session works without them
            self._seeded_users.discard(user_id)
            self._logger.error(
                "storage_error",
                operation="initialize_defaults",
                error=str(e),
                correlation_id=str(correlation_id),
            )
            return False

        self._logger.info(
            "defaults_initialized",
            expense_count=len(defaults),
            correlation_id=str(correlation_id),
        )
        return True

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity_provider.current

    @property
    def expenses(self) -> list[ExpenseRecord]:
        return list(self._expenses)

    @property
    def income(self) -> IncomeProfile:
        """Income as confirmed by storage (or the default)."""
        return self._income

    @property
    def pending_income(self) -> Optional[IncomeProfile]:
        return self._pending_income

    @property
    def effective_income(self) -> IncomeProfile:
        """Profile the projection uses: edit draft, then pending write, then confirmed."""
        if self._income_draft is not None:
            return self._income_draft
        if self._pending_income is not None:
            return self._pending_income
        return self._income

    def overview(self, today: Union[date, datetime, None] = None) -> BudgetOverview:
        return build_overview(
            self._expenses,
            self.effective_income,
            today or date.today(),
            rates=self._rates,
            locale=self._app_settings.display_locale,
            payday_day=self._payroll.payday_day,
        )

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    async def save_expense(self, draft: ExpenseDraft) -> Optional[ExpenseRecord]:
        """
        Validate and upsert an expense.

        Returns:
            The saved record, or None if the draft was refused

        Raises:
            StorageError: If the write fails
        """
        correlation_id = create_correlation_id()
        try:
            record = self._validator.to_record(draft)
        except InvalidExpenseError as e:
            self._logger.warning(
                "expense_rejected",
                issues=[issue.message for issue in e.result.issues],
                correlation_id=str(correlation_id),
            )
            return None

        try:
            await self._expense_storage.save_expense(self._user_id, record)
        except StorageError as e:
            self._logger.error(
                "storage_error",
                operation="save_expense",
                expense_id=str(record.id),
                error=str(e),
                correlation_id=str(correlation_id),
            )
            raise

        self._logger.info(
            "expense_saved",
            expense_id=str(record.id),
            amount=str(record.amount),
            day=record.day,
            correlation_id=str(correlation_id),
        )
        return record

    async def delete_expense(self, expense_id: ExpenseId) -> bool:
        correlation_id = create_correlation_id()
        try:
            deleted = await self._expense_storage.delete_expense(self._user_id, expense_id)
        except StorageError as e:
            self._logger.error(
                "storage_error",
                operation="delete_expense",
                expense_id=str(expense_id),
                error=str(e),
                correlation_id=str(correlation_id),
            )
            raise

        self._logger.info(
            "expense_deleted",
            expense_id=str(expense_id),
            deleted=deleted,
            correlation_id=str(correlation_id),
        )
        return deleted

    # -------------------------------------------------------------------------
    # Income
    # -------------------------------------------------------------------------

    async def update_income(
        self,
        profile: IncomeProfile,
        rollback_on_failure: bool = True,
    ) -> IncomeProfile:
        """
        Replace the income profile (optimistic).

        The profile is visible through overview() before storage answers.

        Raises:
            StorageError: If the write fails (after rolling back, by default)
        """
        correlation_id = create_correlation_id()
        self._pending_income = profile
        try:
            await self._income_storage.save_income(self._user_id, profile)
        except StorageError as e:
            if rollback_on_failure:
                self._pending_income = None
                self._logger.warning(
                    "income_rolled_back",
                    error=str(e),
                    correlation_id=str(correlation_id),
                )
            else:
                self._logger.error(
                    "storage_error",
                    operation="update_income",
                    error=str(e),
                    correlation_id=str(correlation_id),
                )
            raise

        self._income = profile
        self._income_stored = True
        self._pending_income = None
        self._logger.info(
            "income_replaced",
            gross=str(profile.gross),
            start_month=profile.start_month,
            correlation_id=str(correlation_id),
        )
        return profile

    def discard_pending_income(self) -> None:
        """Drop a pending override kept after a failed write."""
        self._pending_income = None

    @property
    def is_editing_income(self) -> bool:
        return self._income_draft is not None

    def begin_income_edit(self) -> IncomeProfile:
        """Start editing from the current profile; overview() follows the draft."""
        self._income_draft = self.effective_income
        return self._income_draft

    def edit_income(self, **changes) -> IncomeProfile:
        """Merge field changes into the draft (gross=..., premium_pct=...)."""
        if self._income_draft is None:
            self.begin_income_edit()
        merged = {**self._income_draft.model_dump(), **changes}
        self._income_draft = IncomeProfile.model_validate(merged)
        return self._income_draft

    def cancel_income_edit(self) -> None:
        self._income_draft = None

    async def commit_income_edit(self) -> IncomeProfile:
        """
        Write the draft as the new profile.

        The draft is closed only when the write succeeds.
        """
        if self._income_draft is None:
            raise RuntimeError("No income edit in progress")
        profile = await self.update_income(self._income_draft)
        self._income_draft = None
        return profile


def create_app_components(
    settings: Optional[Settings] = None,
    identity_provider: Optional[IdentityProvider] = None,
) -> BudgetSession:
    """
    Factory function to create a session from settings.

    Falls back to in-memory storage if Google Sheets is selected but
    not configured.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging(debug=app_settings.debug_mode)
    logger = get_logger(__name__)

    expense_storage = income_storage = None
    if app_settings.storage_backend == "google_sheets":
        try:
            sheets_client = GoogleSheetsClient(settings.google_sheets)
            expense_storage = GoogleSheetsExpenseStorage(sheets_client)
            income_storage = GoogleSheetsIncomeStorage(sheets_client)
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("storage_not_configured", error=str(e))

    if expense_storage is None or income_storage is None:
        memory = InMemoryBudgetStorage()
        expense_storage = income_storage = memory

    return BudgetSession(
        expense_storage=expense_storage,
        income_storage=income_storage,
        identity_provider=identity_provider,
        settings=settings,
    )
