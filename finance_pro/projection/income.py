"""Income Projector: net pay of an arbitrary month for an income profile."""

from decimal import Decimal

from finance_pro.models.budget import IncomeProfile
from finance_pro.projection.net_pay import (
    DEFAULT_DEDUCTION_RATES,
    ZERO,
    DeductionRates,
    net_pay,
)
from finance_pro.projection.premium import is_premium_month


def premium_amount(index: int, profile: IncomeProfile) -> Decimal:
    """Premium paid in the given 0-based month, 0 outside premium months."""
    if not is_premium_month(index, profile.start_month):
        return ZERO
    return profile.gross * (profile.premium_pct / 100)


def gross_for_month(index: int, profile: IncomeProfile) -> Decimal:
    return profile.gross + profile.bonus + premium_amount(index, profile)


def net_pay_for_month(
    index: int,
    profile: IncomeProfile,
    rates: DeductionRates = DEFAULT_DEDUCTION_RATES,
) -> Decimal:
    return net_pay(gross_for_month(index, profile), rates)
