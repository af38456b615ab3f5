"""
Recurrence engine.

Pure, synchronous computation over immutable rules: no I/O and no shared
state, safe to call from any thread.
"""

from simplytodo.recurrence.describe import describe
from simplytodo.recurrence.errors import (
    DateParseError,
    InvalidRuleError,
    InvalidTransitionError,
    RecurrenceError,
)
from simplytodo.recurrence.generator import generate, generate_dates, iter_occurrence_dates
from simplytodo.recurrence.kinds import Daily, Monthly, Recurrence, Weekly, recurrence_from_fields
from simplytodo.recurrence.lifecycle import DeletionMode, RuleLifecycle, RuleState
from simplytodo.recurrence.predicate import is_occurrence
from simplytodo.recurrence.resolver import next_occurrence
from simplytodo.recurrence.rule import (
    RuleSpec,
    TaskInstance,
    TaskTemplate,
    format_time_of_day,
    parse_date,
    parse_time_of_day,
)
from simplytodo.recurrence.stepper import next_candidate

__all__ = [
    "Daily",
    "DeletionMode",
    "DateParseError",
    "InvalidRuleError",
    "InvalidTransitionError",
    "Monthly",
    "Recurrence",
    "RecurrenceError",
    "RuleLifecycle",
    "RuleSpec",
    "RuleState",
    "TaskInstance",
    "TaskTemplate",
    "Weekly",
    "describe",
    "format_time_of_day",
    "generate",
    "generate_dates",
    "is_occurrence",
    "iter_occurrence_dates",
    "next_candidate",
    "next_occurrence",
    "parse_date",
    "parse_time_of_day",
    "recurrence_from_fields",
]
