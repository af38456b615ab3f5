"""Calendar helpers shared by the predicate and the stepper."""
import calendar
from datetime import date


def weekday_index(d: date) -> int:
    """Return the weekday of d with 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    return min(day, days_in_month(year, month))


def add_months(d: date, n: int, target_day: int | None = None) -> date:
    """
    Move d forward n months.

    The resulting day is target_day (d.day when not given) clamped to the
    length of the target month, so day 31 lands on the 30th, 29th or 28th.
    """
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, target_day or d.day)
    return date(year, month, day)


def add_years(d: date, n: int) -> date:
    """Same month/day n years later; Feb 29 falls back to Feb 28."""
    return add_months(d, 12 * n)
