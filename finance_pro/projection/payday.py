"""
Payday Scheduler

Salary arrives on the 8th. When the 8th is a weekend day it moves forward
to the following Monday.

Months here are calendar months (1 = January), as in datetime.date.
"""

from datetime import date, datetime, timedelta
from typing import Union

PAYDAY_DAY_OF_MONTH = 8

SATURDAY = 5
SUNDAY = 6


def normalize_today(value: Union[date, datetime]) -> date:
    """Drop the time of day so comparisons happen at midnight."""
    if isinstance(value, datetime):
        return value.date()
    return value


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Shift a (year, month) pair by delta months, rolling the year over."""
    years, month_index = divmod(month - 1 + delta, 12)
    return year + years, month_index + 1


def payday_for(year: int, month: int, day: int = PAYDAY_DAY_OF_MONTH) -> date:
    """The effective payday of the given month."""
    nominal = date(year, month, day)
    weekday = nominal.weekday()
    if weekday == SATURDAY:
        return nominal + timedelta(days=2)
    if weekday == SUNDAY:
        return nominal + timedelta(days=1)
    return nominal


def next_payday(today: Union[date, datetime], day: int = PAYDAY_DAY_OF_MONTH) -> date:
    """
    The first payday strictly after today.

    On payday itself this is next month's payday.
    """
    today = normalize_today(today)
    payday = payday_for(today.year, today.month, day)
    if payday > today:
        return payday
    return payday_for(*add_months(today.year, today.month, 1), day)


def last_payday(today: Union[date, datetime], day: int = PAYDAY_DAY_OF_MONTH) -> date:
    """
    The most recent payday on or before today.

    On payday itself this is today.
    """
    today = normalize_today(today)
    payday = payday_for(today.year, today.month, day)
    if today >= payday:
        return payday
    return payday_for(*add_months(today.year, today.month, -1), day)
