"""
Timeline Aggregator

Builds the ledger shown until the next payday:
1. Each expense is projected to its next occurrence (today counts)
2. Occurrences before the next payday are kept, sorted by date
3. The next payday closes the ledger as a single income item

The remaining balance is deliberately NOT derived from the ledger.
It is last payday's net pay minus the FULL monthly expense total,
i.e. what is left of the pay we are living on once every bill is paid.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Union

from finance_pro.models.budget import (
    PAYDAY_ITEM_ID,
    BudgetOverview,
    ExpenseRecord,
    IncomeProfile,
    Timeline,
    TimelineItem,
    TimelineItemType,
)
from finance_pro.projection import payday
from finance_pro.projection.income import net_pay_for_month
from finance_pro.projection.net_pay import (
    DEFAULT_DEDUCTION_RATES,
    ZERO,
    DeductionRates,
)
from finance_pro.projection.payday import (
    PAYDAY_DAY_OF_MONTH,
    add_months,
    normalize_today,
)
from finance_pro.projection.premium import (
    is_premium_month,
    month_index,
    next_premium_month_label,
)

NEXT_PAYDAY_NAMES = {
    "en": "Next payday",
    "cs": "Příští výplata",
}


def project_occurrence(expense: ExpenseRecord, today: date) -> date:
    """Next date the expense is due, today included."""
    occurrence = date(today.year, today.month, expense.day)
    if occurrence < today:
        year, month = add_months(today.year, today.month, 1)
        occurrence = date(year, month, expense.day)
    return occurrence


def monthly_total(expenses: Iterable[ExpenseRecord]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


def build_timeline(
    expenses: Iterable[ExpenseRecord],
    today: Union[date, datetime],
    next_payday: date,
    last_payday_net: Decimal,
    next_payday_net: Decimal,
    income: IncomeProfile,
    locale: str = "en",
) -> Timeline:
    today = normalize_today(today)
    expenses = list(expenses)

    upcoming = []
    for expense in expenses:
        occurrence = project_occurrence(expense, today)
        if occurrence < next_payday:
            upcoming.append(
                TimelineItem(
                    id=expense.id,
                    name=expense.name,
                    amount=expense.amount,
                    date=occurrence,
                    type=TimelineItemType.EXPENSE,
                )
            )
    # Stable sort keeps day-of-month order for equal dates
    upcoming.sort(key=lambda item: item.date)

    payday_item = TimelineItem(
        id=PAYDAY_ITEM_ID,
        name=NEXT_PAYDAY_NAMES[locale],
        amount=next_payday_net,
        date=next_payday,
        type=TimelineItemType.INCOME,
        is_premium=is_premium_month(month_index(next_payday), income.start_month),
    )

    return Timeline(
        items=tuple(upcoming) + (payday_item,),
        remaining=last_payday_net - monthly_total(expenses),
    )


def build_overview(
    expenses: Iterable[ExpenseRecord],
    income: IncomeProfile,
    today: Union[date, datetime],
    rates: DeductionRates = DEFAULT_DEDUCTION_RATES,
    locale: str = "en",
    payday_day: int = PAYDAY_DAY_OF_MONTH,
) -> BudgetOverview:
    """Run the whole projection for one snapshot of expenses and income."""
    today = normalize_today(today)
    upcoming_payday = payday.next_payday(today, payday_day)
    previous_payday = payday.last_payday(today, payday_day)

    last_net = net_pay_for_month(month_index(previous_payday), income, rates)
    next_net = net_pay_for_month(month_index(upcoming_payday), income, rates)

    timeline = build_timeline(
        expenses,
        today,
        upcoming_payday,
        last_net,
        next_net,
        income,
        locale,
    )

    return BudgetOverview(
        today=today,
        last_payday=previous_payday,
        next_payday=upcoming_payday,
        last_payday_net=last_net,
        next_payday_net=next_net,
        timeline=timeline,
        premium_month_label=next_premium_month_label(
            today, income.start_month, upcoming_payday, locale, payday_day
        ),
        next_payday_is_premium=timeline.income.is_premium,
    )
