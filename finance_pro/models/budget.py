"""
Core Data Models for Finance Pro

These models define the schemas for everything the projection engine reads
and produces:
1. Stored records (ExpenseRecord, IncomeProfile)
2. Derived, never persisted view data (TimelineItem, Timeline, BudgetOverview)

DESIGN DECISION: Records are frozen. The engine works on snapshots and a
write always replaces a record wholesale, so nothing ever mutates in place.

Field names on the storage side are {id, name, amount, day} and
{gross, bonus, premiumPct, startMonth}. IncomeProfile accepts both the
camelCase storage names and the Python attribute names.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


ExpenseId = Union[str, int]


# =============================================================================
# STORED RECORDS
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A recurring monthly expense.

    The day is capped at 28 so the expense exists in every month.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: ExpenseId = Field(
        ...,
        description="Stable identifier, unique per user"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display label"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Monthly amount in currency units"
    )
    day: int = Field(
        ...,
        ge=1,
        le=28,
        description="Day of month the expense recurs on"
    )

    def to_storage_dict(self) -> dict:
        """Fields written to storage. The id is the storage key, not a field."""
        return {
            "name": self.name,
            "amount": str(self.amount),
            "day": self.day,
        }


class IncomeProfile(BaseModel):
    """
    The salary model of one user.

    Exactly one exists per user. It is replaced in full on every save.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    gross: Decimal = Field(
        ...,
        ge=0,
        description="Base monthly gross salary"
    )
    bonus: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Fixed monthly bonus added to gross before tax"
    )
    premium_pct: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        alias="premiumPct",
        description="Percentage of gross paid extra in premium months"
    )
    start_month: int = Field(
        default=0,
        ge=0,
        le=11,
        alias="startMonth",
        description="Month index (0 = January) anchoring the premium cycle"
    )

    def to_storage_dict(self) -> dict:
        return {
            "gross": str(self.gross),
            "bonus": str(self.bonus),
            "premiumPct": str(self.premium_pct),
            "startMonth": self.start_month,
        }


DEFAULT_INCOME_PROFILE = IncomeProfile(
    gross=Decimal("45000"),
    bonus=Decimal("5000"),
    premium_pct=Decimal("15"),
    start_month=1,
)

# Seeded for a signed-in user whose storage is still empty
DEFAULT_EXPENSE_NAMES = {
    "en": ("Rent", "Electricity", "Internet"),
    "cs": ("Nájem", "Elektřina", "Internet"),
}

_DEFAULT_EXPENSE_TERMS = (
    ("1", Decimal("15000"), 1),
    ("2", Decimal("2800"), 15),
    ("3", Decimal("500"), 20),
)


def default_expenses(locale: str = "en") -> tuple[ExpenseRecord, ...]:
    """The default expenses, named in the given language."""
    return tuple(
        ExpenseRecord(id=expense_id, name=name, amount=amount, day=day)
        for (expense_id, amount, day), name in zip(
            _DEFAULT_EXPENSE_TERMS, DEFAULT_EXPENSE_NAMES[locale]
        )
    )


DEFAULT_EXPENSES = default_expenses()


# =============================================================================
# DERIVED VIEW MODELS
# =============================================================================

class TimelineItemType(str, Enum):
    """Direction of a cash flow on the timeline."""
    EXPENSE = "expense"
    INCOME = "income"


PAYDAY_ITEM_ID = "payday"


class TimelineItem(BaseModel):
    """One dated cash flow on the ledger until the next payday."""
    model_config = ConfigDict(frozen=True)

    id: ExpenseId
    name: str
    amount: Decimal
    date: date
    type: TimelineItemType
    is_premium: bool = Field(
        default=False,
        description="Income only: the payday falls in a premium month"
    )

    @property
    def is_income(self) -> bool:
        return self.type == TimelineItemType.INCOME

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the cash-flow sign applied."""
        return self.amount if self.is_income else -self.amount


class Timeline(BaseModel):
    """Ordered ledger items plus the balance left from the last payday."""
    model_config = ConfigDict(frozen=True)

    items: tuple[TimelineItem, ...]
    remaining: Decimal

    @property
    def income(self) -> TimelineItem:
        return self.items[-1]

    @property
    def expenses(self) -> tuple[TimelineItem, ...]:
        return self.items[:-1]


class BudgetOverview(BaseModel):
    """
    Everything the presentation layer needs for the dashboard.

    Recomputed from scratch whenever an input changes.
    """
    model_config = ConfigDict(frozen=True)

    today: date
    last_payday: date
    next_payday: date
    last_payday_net: Decimal
    next_payday_net: Decimal
    timeline: Timeline
    premium_month_label: str
    next_payday_is_premium: bool

    @property
    def remaining(self) -> Decimal:
        return self.timeline.remaining

    @property
    def remaining_pct(self) -> Decimal:
        """Remaining balance as a share of the last net pay, clamped to 0..100."""
        if self.last_payday_net <= 0:
            return Decimal("0")
        pct = self.timeline.remaining / self.last_payday_net * 100
        return max(Decimal("0"), min(Decimal("100"), pct))


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one expense form submission."""

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]
