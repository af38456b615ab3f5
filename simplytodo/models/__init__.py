"""SQLModel tables."""

from .recurring_rule import RecurringRule, RecurringRuleInstance
from .task import Task

__all__ = ["RecurringRule", "RecurringRuleInstance", "Task"]
