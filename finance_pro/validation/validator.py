"""
Expense Form Validation

Expense edits arrive as raw form input: text fields that may be empty,
amounts typed by hand, a day picked from a list. This module decides
whether such input may become an ExpenseRecord.

STAGE 1 - SHAPE:
- Name present
- Amount present and numeric
- Day an integer

STAGE 2 - RANGES:
- Amount positive (error), suspiciously large (warning)
- Day within 1..28

IMPORTANT: Validation never fixes input. A refused draft is reported
back and nothing reaches storage.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from uuid import uuid4

from pydantic import BaseModel

from finance_pro.config import get_settings
from finance_pro.models.budget import (
    ExpenseId,
    ExpenseRecord,
    ValidationIssue,
    ValidationResult,
)

MIN_DAY = 1
MAX_DAY = 28


class ExpenseDraft(BaseModel):
    """Unvalidated expense form input. id is set when editing."""

    name: str = ""
    amount: Optional[Union[str, int, float, Decimal]] = None
    day: Union[int, str] = 1
    id: Optional[ExpenseId] = None


class InvalidExpenseError(Exception):
    """Draft refused at the write boundary."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Invalid expense: {messages}")


def _parse_amount(raw) -> Optional[Decimal]:
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _parse_day(raw) -> Optional[int]:
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


class ExpenseValidator:
    """Validates expense drafts before they are written."""

    def __init__(self, max_amount: Optional[Decimal] = None):
        """
        Args:
            max_amount: Amounts above this produce a warning.
                        Defaults to the configured max_expense_amount.
        """
        self._max_amount = (
            max_amount
            if max_amount is not None
            else get_settings().app.max_expense_amount
        )

    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        issues = []

        if not draft.name.strip():
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Name is required",
                severity="error",
            ))

        amount = _parse_amount(draft.amount)
        if draft.amount is None or not str(draft.amount).strip():
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            ))
        elif amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount '{draft.amount}' is not a number",
                severity="error",
            ))
        elif amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            ))
        elif amount > self._max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount:,}) seems unusually high",
                severity="warning",
            ))

        day = _parse_day(draft.day)
        if day is None:
            issues.append(ValidationIssue(
                field="day",
                issue_type="invalid_format",
                message=f"Day '{draft.day}' is not a whole number",
                severity="error",
            ))
        elif not MIN_DAY <= day <= MAX_DAY:
            issues.append(ValidationIssue(
                field="day",
                issue_type="invalid_value",
                message=f"Day must be between {MIN_DAY} and {MAX_DAY}",
                severity="error",
            ))

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def to_record(self, draft: ExpenseDraft) -> ExpenseRecord:
        """
        Turn a draft into a record.

        New drafts get a fresh id; edits keep theirs.

        Raises:
            InvalidExpenseError: If the draft has error-level issues
        """
        result = self.validate(draft)
        if not result.is_valid:
            raise InvalidExpenseError(result)

        return ExpenseRecord(
            id=draft.id if draft.id is not None else str(uuid4()),
            name=draft.name,
            amount=_parse_amount(draft.amount),
            day=_parse_day(draft.day),
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text for the expense form."""
        if result.is_valid and not result.warnings:
            return "✅ Looks good."

        lines = []
        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
