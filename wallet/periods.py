"""
Calendar month helpers.

A month is a (year, month) pair. Month boundaries are inclusive calendar
dates: a transaction dated on the last day of a month belongs to it.
"""

import calendar
from datetime import date
from typing import Iterable, Tuple

from dateutil.relativedelta import relativedelta


YearMonth = Tuple[int, int]


def month_of(day: date) -> YearMonth:
    return day.year, day.month


def month_bounds(month: YearMonth) -> tuple[date, date]:
    """First and last calendar day of the month."""
    year, mon = month
    last_day = calendar.monthrange(year, mon)[1]
    return date(year, mon, 1), date(year, mon, last_day)


def in_month(day: date, month: YearMonth) -> bool:
    start, end = month_bounds(month)
    return start <= day <= end


def shift_month(month: YearMonth, months: int) -> YearMonth:
    """The month `months` away (negative for the past)."""
    shifted = date(month[0], month[1], 1) + relativedelta(months=months)
    return shifted.year, shifted.month


def trailing_months(current: YearMonth, count: int) -> list[YearMonth]:
    """`count` months ending with `current`, oldest first."""
    return [shift_month(current, -offset) for offset in range(count - 1, -1, -1)]


def month_label(month: YearMonth) -> str:
    """Short English month name, e.g. 'Mar'."""
    return calendar.month_abbr[month[1]]


def months_of_year(year: int) -> Iterable[YearMonth]:
    return ((year, mon) for mon in range(1, 13))
