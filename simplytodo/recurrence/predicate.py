"""Occurrence predicate: is a calendar date an occurrence of a rule?"""
from datetime import date

from simplytodo.recurrence.calendar_math import clamp_day_to_month, weekday_index
from simplytodo.recurrence.kinds import Daily, Monthly, Weekly
from simplytodo.recurrence.rule import RuleSpec


def monthly_target_day(rule: RuleSpec) -> int:
    """Day of month a Monthly rule aims for (start date's day when unset)."""
    recurrence = rule.recurrence
    if isinstance(recurrence, Monthly) and recurrence.day_of_month is not None:
        return recurrence.day_of_month
    return rule.start_date.day


def is_occurrence(rule: RuleSpec, candidate: date) -> bool:
    """
    Return True if candidate is an occurrence date of rule.

    Daily rules match every day; the interval lives in the stepper.
    Monthly rules match the target day, or the month's last day when the
    target does not exist in that month (31 -> Feb 28/29).
    """
    recurrence = rule.recurrence
    if isinstance(recurrence, Daily):
        return True
    if isinstance(recurrence, Weekly):
        if not recurrence.days_of_week:
            return True
        return weekday_index(candidate) in recurrence.days_of_week
    if isinstance(recurrence, Monthly):
        target = monthly_target_day(rule)
        return candidate.day == clamp_day_to_month(candidate.year, candidate.month, target)
    raise TypeError(f"Unsupported recurrence: {recurrence!r}")
