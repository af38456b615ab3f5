"""Next occurrence resolver."""
import logging
from datetime import datetime
from typing import Optional

from simplytodo.recurrence.constants import NEXT_OCCURRENCE_ITERATION_CEILING
from simplytodo.recurrence.predicate import is_occurrence
from simplytodo.recurrence.rule import RuleSpec
from simplytodo.recurrence.stepper import next_candidate

logger = logging.getLogger(__name__)


def next_occurrence(rule: RuleSpec, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Return the first occurrence on or after today, or None.

    The scan works on whole dates: an occurrence dated today is returned
    even when its time of day is already past (at 21:00 a rule due at
    08:00 still resolves to today 08:00). The search is bounded by
    NEXT_OCCURRENCE_ITERATION_CEILING steps, not by the rule's end date.

    Args:
        rule: Rule to resolve
        now: Reference moment (defaults to datetime.now(), local wall clock)

    Returns:
        Due datetime of the next occurrence; None when the rule is inactive,
        already ended, or no occurrence is found within the iteration ceiling
    """
    if not rule.is_active:
        return None

    now = now or datetime.now()
    today = now.date()
    if today > rule.effective_end_date:
        return None

    cursor = max(today, rule.start_date)
    for _ in range(NEXT_OCCURRENCE_ITERATION_CEILING):
        if is_occurrence(rule, cursor):
            return rule.template.due_at(cursor)
        cursor = next_candidate(rule, cursor)
        if cursor is None:
            return None

    logger.debug(f"Rule {rule.id}: no occurrence within {NEXT_OCCURRENCE_ITERATION_CEILING} steps")
    return None
