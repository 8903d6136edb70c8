"""
Net Pay Calculator

Turns a monthly gross total into take-home pay:

    net = gross - health - social - max(0, income_tax - tax_credit)

Each deduction is rounded UP to a whole currency unit, the way payroll
rounds employee contributions.

DESIGN DECISION: Rates are a value object passed in by the caller.
They change with the tax year; the formula does not.
"""

from decimal import ROUND_CEILING, Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict


Amount = Union[Decimal, int, float, str]

ZERO = Decimal("0")


class DeductionRates(BaseModel):
    """Employee-side deduction rates for one tax year."""
    model_config = ConfigDict(frozen=True)

    health: Decimal = Decimal("0.045")
    social: Decimal = Decimal("0.071")
    income_tax: Decimal = Decimal("0.15")
    tax_credit: Decimal = Decimal("2570")


DEFAULT_DEDUCTION_RATES = DeductionRates()


def to_decimal(value: Amount) -> Decimal:
    """Convert through the string form so 0.1 stays 0.1."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _ceil(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_CEILING)


def net_pay(
    gross_total: Amount,
    rates: DeductionRates = DEFAULT_DEDUCTION_RATES,
) -> Decimal:
    """
    Compute net pay from a monthly gross total.

    Non-positive input yields 0. The result is also floored at 0: for a
    gross of a few units the rounded-up contributions alone exceed it.
    """
    gross = to_decimal(gross_total)
    if gross <= 0:
        return ZERO

    health = _ceil(gross * rates.health)
    social = _ceil(gross * rates.social)
    tax = max(ZERO, _ceil(gross * rates.income_tax) - rates.tax_credit)

    return max(ZERO, gross - health - social - tax)
