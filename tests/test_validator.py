"""Tests for expense form validation."""

import pytest
from decimal import Decimal

from finance_pro.validation import ExpenseDraft, ExpenseValidator, InvalidExpenseError


@pytest.fixture
def validator():
    return ExpenseValidator(max_amount=Decimal("100000"))


class TestExpenseValidator:
    """Tests for ExpenseValidator.validate."""

    def test_valid_form_input(self, validator):
        """Test typical form input with text fields."""
        result = validator.validate(ExpenseDraft(name="Rent", amount="15000", day="1"))
        assert result.is_valid is True
        assert result.issues == []

    def test_empty_name(self, validator):
        """Test that an empty name is an error."""
        result = validator.validate(ExpenseDraft(name="  ", amount="100", day=1))
        assert result.is_valid is False
        assert [i.field for i in result.issues] == ["name"]

    @pytest.mark.parametrize("amount", [None, "", "   "])
    def test_missing_amount(self, validator, amount):
        """Test that a missing amount is an error."""
        result = validator.validate(ExpenseDraft(name="Rent", amount=amount, day=1))
        assert result.is_valid is False
        assert result.issues[0].issue_type == "missing"

    @pytest.mark.parametrize("amount", ["abc", "NaN", "Infinity"])
    def test_non_numeric_amount(self, validator, amount):
        """Test that non-numeric amounts are errors."""
        result = validator.validate(ExpenseDraft(name="Rent", amount=amount, day=1))
        assert result.issues[0].issue_type == "invalid_format"

    @pytest.mark.parametrize("amount", ["0", "-5", -1])
    def test_non_positive_amount(self, validator, amount):
        """Test that zero and negative amounts are errors."""
        result = validator.validate(ExpenseDraft(name="Rent", amount=amount, day=1))
        assert result.issues[0].issue_type == "invalid_value"

    def test_large_amount_warns(self, validator):
        """Test that a large amount is only a warning."""
        result = validator.validate(ExpenseDraft(name="Car", amount="250000", day=3))
        assert result.is_valid is True
        assert len(result.warnings) == 1

    @pytest.mark.parametrize("day", [0, 29, "31"])
    def test_day_out_of_range(self, validator, day):
        """Test that days outside 1..28 are errors."""
        result = validator.validate(ExpenseDraft(name="Rent", amount="1", day=day))
        assert result.issues[0].field == "day"
        assert result.issues[0].issue_type == "invalid_value"

    def test_day_not_a_number(self, validator):
        """Test that a non-integer day is an error."""
        result = validator.validate(ExpenseDraft(name="Rent", amount="1", day="first"))
        assert result.issues[0].issue_type == "invalid_format"


class TestToRecord:
    """Tests for turning drafts into records."""

    def test_new_record_gets_id(self, validator):
        """Test that a new draft gets a generated id."""
        record = validator.to_record(ExpenseDraft(name=" Rent ", amount="15000.50", day="1"))
        assert record.id
        assert record.name == "Rent"
        assert record.amount == Decimal("15000.50")
        assert record.day == 1

    def test_edit_keeps_id(self, validator):
        """Test that editing keeps the original id."""
        record = validator.to_record(ExpenseDraft(id=42, name="Rent", amount=1, day=2))
        assert record.id == 42

    def test_ids_unique(self, validator):
        """Test that two new drafts get different ids."""
        draft = ExpenseDraft(name="Rent", amount=1, day=2)
        assert validator.to_record(draft).id != validator.to_record(draft).id

    def test_invalid_raises(self, validator):
        """Test that an invalid draft raises with the result attached."""
        with pytest.raises(InvalidExpenseError) as exc_info:
            validator.to_record(ExpenseDraft(name="", amount=None))
        assert exc_info.value.result.error_count == 2


class TestUserFriendlySummary:
    """Tests for the form summary text."""

    def test_all_good(self, validator):
        """Test the summary of a clean draft."""
        result = validator.validate(ExpenseDraft(name="Rent", amount="1", day=1))
        assert validator.get_user_friendly_summary(result) == "✅ Looks good."

    def test_errors_listed(self, validator):
        """Test that error messages appear in the summary."""
        result = validator.validate(ExpenseDraft(name="", amount="1", day=1))
        summary = validator.get_user_friendly_summary(result)
        assert "Name is required" in summary


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
