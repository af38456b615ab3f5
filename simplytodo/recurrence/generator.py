"""
Instance generator.

Materializes the bounded, strictly increasing list of occurrences for a
rule. Output depends only on the rule, so repeated calls (live previews,
retries) return identical lists.
"""

import logging
from datetime import date
from typing import Iterator, List

from simplytodo.recurrence.predicate import is_occurrence
from simplytodo.recurrence.rule import RuleSpec, TaskInstance
from simplytodo.recurrence.stepper import next_candidate

logger = logging.getLogger(__name__)


def iter_occurrence_dates(rule: RuleSpec) -> Iterator[date]:
    """
    Yield occurrence dates from start_date up to the effective end date.

    Stops after max_instances dates; hitting the cap is a normal stop.
    """
    end = rule.effective_end_date
    cursor = rule.start_date
    count = 0
    while cursor is not None and cursor <= end and count < rule.max_instances:
        if is_occurrence(rule, cursor):
            yield cursor
            count += 1
        cursor = next_candidate(rule, cursor)

    if count >= rule.max_instances:
        logger.debug(f"Rule {rule.id} reached max_instances={rule.max_instances}")


def generate_dates(rule: RuleSpec) -> List[date]:
    return list(iter_occurrence_dates(rule))


def generate(rule: RuleSpec) -> List[TaskInstance]:
    """Generate every task instance of rule within its bounds."""
    template = rule.template
    return [
        TaskInstance(
            rule_id=rule.id,
            owner_id=rule.owner_id,
            due=template.due_at(day),
            text=template.text,
            importance=template.importance,
            category_id=template.category_id,
        )
        for day in iter_occurrence_dates(rule)
    ]
