"""
Tests for Finance Pro models

Test strategy:
1. Unit tests for models, validators and the projection engine
2. Session flows against in-memory storage
3. No real API calls in tests (Google Sheets is faked)
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from finance_pro.models.budget import (
    DEFAULT_EXPENSES,
    DEFAULT_INCOME_PROFILE,
    ExpenseRecord,
    IncomeProfile,
    TimelineItem,
    TimelineItemType,
    ValidationIssue,
    ValidationResult,
    default_expenses,
)
from finance_pro.services.identity import Identity


class TestExpenseRecord:
    """Tests for the stored expense model."""

    def test_expense_creation(self):
        """Test ExpenseRecord model creation."""
        rent = ExpenseRecord(id="1", name="Rent", amount=Decimal("15000"), day=1)
        assert rent.name == "Rent"
        assert rent.amount == Decimal("15000")

    def test_integer_id_kept(self):
        """Test that integer ids are not coerced to strings."""
        rent = ExpenseRecord(id=1700000000000, name="Rent", amount=1, day=1)
        assert rent.id == 1700000000000

    def test_name_strips_whitespace(self):
        """Test that whitespace is stripped from the name."""
        rent = ExpenseRecord(id="1", name="  Rent  ", amount=1, day=1)
        assert rent.name == "Rent"

    @pytest.mark.parametrize("day", [0, 29, 31, -1])
    def test_day_outside_range_rejected(self, day):
        """Test that days outside 1..28 are rejected."""
        with pytest.raises(ValidationError):
            ExpenseRecord(id="1", name="Rent", amount=1, day=day)

    def test_non_positive_amount_rejected(self):
        """Test that zero amounts are rejected."""
        with pytest.raises(ValidationError):
            ExpenseRecord(id="1", name="Rent", amount=0, day=1)

    def test_empty_name_rejected(self):
        """Test that blank names are rejected."""
        with pytest.raises(ValidationError):
            ExpenseRecord(id="1", name="   ", amount=1, day=1)

    def test_records_are_frozen(self):
        """Test that records cannot be mutated in place."""
        rent = ExpenseRecord(id="1", name="Rent", amount=1, day=1)
        with pytest.raises(ValidationError):
            rent.amount = Decimal("2")

    def test_to_storage_dict(self):
        """Test the stored fields (the id is the key, not a field)."""
        rent = ExpenseRecord(id="1", name="Rent", amount=Decimal("15000"), day=1)
        assert rent.to_storage_dict() == {"name": "Rent", "amount": "15000", "day": 1}


class TestIncomeProfile:
    """Tests for the income profile singleton."""

    def test_default_profile(self):
        """Test the documented default profile."""
        assert DEFAULT_INCOME_PROFILE.gross == Decimal("45000")
        assert DEFAULT_INCOME_PROFILE.bonus == Decimal("5000")
        assert DEFAULT_INCOME_PROFILE.premium_pct == Decimal("15")
        assert DEFAULT_INCOME_PROFILE.start_month == 1

    def test_storage_field_names(self):
        """Test loading from the camelCase storage document."""
        profile = IncomeProfile.model_validate(
            {"gross": 45000, "bonus": 5000, "premiumPct": 15, "startMonth": 1}
        )
        assert profile == DEFAULT_INCOME_PROFILE

    def test_round_trip_storage_dict(self):
        """Test that the storage dict loads back into an equal profile."""
        stored = DEFAULT_INCOME_PROFILE.to_storage_dict()
        assert set(stored) == {"gross", "bonus", "premiumPct", "startMonth"}
        assert IncomeProfile.model_validate(stored) == DEFAULT_INCOME_PROFILE

    @pytest.mark.parametrize("start_month", [-1, 12])
    def test_start_month_range(self, start_month):
        """Test that start month must be 0..11."""
        with pytest.raises(ValidationError):
            IncomeProfile(gross=1, start_month=start_month)

    def test_negative_gross_rejected(self):
        """Test that gross cannot be negative."""
        with pytest.raises(ValidationError):
            IncomeProfile(gross=-1)


class TestDefaultExpenses:
    """Tests for the seeded sample expenses."""

    def test_english_defaults(self):
        """Test the default expenses and their terms."""
        assert default_expenses() == DEFAULT_EXPENSES
        assert [(e.name, e.amount, e.day) for e in DEFAULT_EXPENSES] == [
            ("Rent", Decimal("15000"), 1),
            ("Electricity", Decimal("2800"), 15),
            ("Internet", Decimal("500"), 20),
        ]

    def test_czech_names_same_terms(self):
        """Test that only the names change with the locale."""
        czech = default_expenses("cs")
        assert [e.name for e in czech] == ["Nájem", "Elektřina", "Internet"]
        assert [(e.id, e.amount, e.day) for e in czech] == [
            (e.id, e.amount, e.day) for e in DEFAULT_EXPENSES
        ]


class TestTimelineItem:
    """Tests for derived ledger items."""

    def test_signed_amount(self):
        """Test that expenses are negative cash flow and income positive."""
        bill = TimelineItem(
            id="1", name="Rent", amount=Decimal("100"),
            date=date(2026, 2, 1), type=TimelineItemType.EXPENSE,
        )
        pay = TimelineItem(
            id="payday", name="Next payday", amount=Decimal("200"),
            date=date(2026, 2, 9), type=TimelineItemType.INCOME,
        )
        assert bill.signed_amount == Decimal("-100")
        assert pay.signed_amount == Decimal("200")
        assert pay.is_income and not bill.is_income


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="name",
                    issue_type="missing",
                    message="Name is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="suspicious_value",
                    message="Amount seems unusually high",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.warnings == ["Amount seems unusually high"]


class TestIdentity:
    """Tests for the identity model."""

    def test_label_prefers_display_name(self):
        """Test the display name wins."""
        assert Identity(uid="u1", display_name="Jana", email="j@x.cz").label == "Jana"

    def test_label_falls_back_to_email(self):
        """Test the local part of the e-mail is used without a display name."""
        assert Identity(uid="u1", email="jana.novak@example.com").label == "jana.novak"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
