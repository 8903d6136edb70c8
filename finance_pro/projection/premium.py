"""
Premium Cycle Resolver

Every third month, counted from the profile's start month, the salary
carries an extra premium. Month indexes here are 0-based (0 = January),
matching IncomeProfile.start_month.
"""

from datetime import date, datetime
from typing import Optional, Union

from finance_pro.projection.payday import (
    PAYDAY_DAY_OF_MONTH,
    add_months,
    normalize_today,
    payday_for,
)

PREMIUM_CYCLE_MONTHS = 3
SCAN_MONTHS = 12

MONTH_LABELS = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    # Locative case, as in "v Lednu"
    "cs": (
        "Lednu", "Únoru", "Březnu", "Dubnu", "Květnu", "Červnu",
        "Červenci", "Srpnu", "Září", "Říjnu", "Listopadu", "Prosinci",
    ),
}

NOT_SET_LABELS = {
    "en": "Not set",
    "cs": "Nezadáno",
}


def month_index(value: date) -> int:
    """0-based month of a date."""
    return value.month - 1


def month_label(index: int, locale: str = "en") -> str:
    return MONTH_LABELS[locale][index]


def is_premium_month(index: int, start_month: int) -> bool:
    return (index - start_month + 12) % PREMIUM_CYCLE_MONTHS == 0


def next_premium_payday(
    today: Union[date, datetime],
    start_month: int,
    next_payday: date,
    day: int = PAYDAY_DAY_OF_MONTH,
) -> Optional[date]:
    """
    Payday of the first premium month whose payday is on or after next_payday.

    Scans twelve months starting with the current one. Returns None if
    nothing qualifies.
    """
    today = normalize_today(today)
    for offset in range(SCAN_MONTHS):
        year, month = add_months(today.year, today.month, offset)
        if not is_premium_month(month - 1, start_month):
            continue
        payday = payday_for(year, month, day)
        if payday >= next_payday:
            return payday
    return None


def next_premium_month_label(
    today: Union[date, datetime],
    start_month: int,
    next_payday: date,
    locale: str = "en",
    day: int = PAYDAY_DAY_OF_MONTH,
) -> str:
    payday = next_premium_payday(today, start_month, next_payday, day)
    if payday is None:
        return NOT_SET_LABELS[locale]
    return month_label(month_index(payday), locale)
