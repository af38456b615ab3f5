"""Human readable rendering of a rule's recurrence."""
from simplytodo.recurrence.constants import WEEKDAY_ABBREVIATIONS
from simplytodo.recurrence.kinds import Daily, Monthly, Weekly
from simplytodo.recurrence.predicate import monthly_target_day
from simplytodo.recurrence.rule import RuleSpec, format_time_of_day


def _every(interval: int, unit: str) -> str:
    if interval == 1:
        return f"every {unit}"
    return f"every {interval} {unit}s"


def describe(rule: RuleSpec) -> str:
    recurrence = rule.recurrence
    if isinstance(recurrence, Daily):
        text = _every(recurrence.interval, "day")
    elif isinstance(recurrence, Weekly):
        if recurrence.days_of_week:
            days = ", ".join(WEEKDAY_ABBREVIATIONS[d] for d in sorted(recurrence.days_of_week))
            text = f"every week on {days}"
        else:
            text = _every(recurrence.interval, "week")
    elif isinstance(recurrence, Monthly):
        text = f"{_every(recurrence.interval, 'month')} on day {monthly_target_day(rule)}"
    else:
        raise TypeError(f"Unsupported recurrence: {recurrence!r}")

    time_of_day = format_time_of_day(rule.template.time_of_day)
    if time_of_day:
        text = f"{text} at {time_of_day}"
    return text
