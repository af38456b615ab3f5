"""Cursor stepper: the next date to test after the current cursor."""
from datetime import date, timedelta
from typing import Optional

from simplytodo.recurrence.calendar_math import add_months, weekday_index
from simplytodo.recurrence.kinds import Daily, Monthly, Weekly
from simplytodo.recurrence.predicate import monthly_target_day
from simplytodo.recurrence.rule import RuleSpec


def _step(rule: RuleSpec, current: date) -> date:
    recurrence = rule.recurrence
    if isinstance(recurrence, Daily):
        return current + timedelta(days=recurrence.interval)

    if isinstance(recurrence, Weekly):
        if not recurrence.days_of_week:
            return current + timedelta(days=7 * recurrence.interval)
        # Next listed weekday; interval is ignored ("every 2 weeks on Mon" == every Mon)
        candidate = current + timedelta(days=1)
        for _ in range(6):
            if weekday_index(candidate) in recurrence.days_of_week:
                break
            candidate += timedelta(days=1)
        return candidate

    if isinstance(recurrence, Monthly):
        return add_months(current, recurrence.interval, monthly_target_day(rule))

    raise TypeError(f"Unsupported recurrence: {recurrence!r}")


def next_candidate(rule: RuleSpec, current: date) -> Optional[date]:
    """
    Advance the cursor by one step of the rule's kind.

    Returns None when the step would leave the representable calendar
    (past date.max); callers treat that like passing the end date.
    """
    try:
        return _step(rule, current)
    except (OverflowError, ValueError):
        return None
