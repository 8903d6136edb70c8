"""
Projection Engine Package

Pure functions over immutable snapshots:
net pay, payday dates, premium cycles, income per month and the
timeline/balance view. Nothing in here touches storage or globals.
"""

from finance_pro.projection.net_pay import (
    DEFAULT_DEDUCTION_RATES,
    DeductionRates,
    net_pay,
    to_decimal,
)
from finance_pro.projection.payday import (
    PAYDAY_DAY_OF_MONTH,
    add_months,
    last_payday,
    next_payday,
    normalize_today,
    payday_for,
)
from finance_pro.projection.premium import (
    PREMIUM_CYCLE_MONTHS,
    is_premium_month,
    month_index,
    month_label,
    next_premium_month_label,
    next_premium_payday,
)
from finance_pro.projection.income import (
    gross_for_month,
    net_pay_for_month,
    premium_amount,
)
from finance_pro.projection.timeline import (
    build_overview,
    build_timeline,
    monthly_total,
    project_occurrence,
)

__all__ = [
    # Net pay
    "DEFAULT_DEDUCTION_RATES",
    "DeductionRates",
    "net_pay",
    "to_decimal",
    # Paydays
    "PAYDAY_DAY_OF_MONTH",
    "add_months",
    "last_payday",
    "next_payday",
    "normalize_today",
    "payday_for",
    # Premium cycle
    "PREMIUM_CYCLE_MONTHS",
    "is_premium_month",
    "month_index",
    "month_label",
    "next_premium_month_label",
    "next_premium_payday",
    # Income
    "gross_for_month",
    "net_pay_for_month",
    "premium_amount",
    # Timeline
    "build_overview",
    "build_timeline",
    "monthly_total",
    "project_occurrence",
]
