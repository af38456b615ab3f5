"""
Notification Service

Plans reminders for recurring rules: takes the next occurrence from the
recurrence engine and applies the user's quiet hours window.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Dict, Optional

from simplytodo.recurrence import RuleSpec, next_occurrence, parse_time_of_day
from simplytodo.recurrence.errors import DateParseError

logger = logging.getLogger(__name__)


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True)
class QuietHours:
    """Do-not-disturb window, e.g. 22:00-07:00 (may wrap midnight)."""

    start: time = time(22, 0)
    end: time = time(7, 0)
    enabled: bool = False

    @classmethod
    def from_strings(cls, start: str, end: str, enabled: bool = True) -> "QuietHours":
        start_time = parse_time_of_day(start)
        end_time = parse_time_of_day(end)
        if start_time is None or end_time is None:
            raise DateParseError("Quiet hours need both a start and an end time", details={"start": start, "end": end})
        return cls(start=start_time, end=end_time, enabled=enabled)

    def contains(self, moment: datetime) -> bool:
        """True if moment's wall-clock minute is inside the window (both ends included)."""
        if not self.enabled:
            return False

        current = _minutes(moment.time())
        start = _minutes(self.start)
        end = _minutes(self.end)

        # Window crossing midnight
        if start > end:
            return current >= start or current <= end
        return start <= current <= end

    def window_end_after(self, moment: datetime) -> datetime:
        """First minute after the window that contains moment."""
        end_at = datetime.combine(moment.date(), self.end)
        if end_at < moment.replace(second=0, microsecond=0):
            end_at += timedelta(days=1)
        return end_at + timedelta(minutes=1)


@dataclass(frozen=True)
class NotificationSettings:
    """Per-user notification preferences."""

    master_switch: bool = True
    quiet_hours: QuietHours = field(default_factory=QuietHours)
    disabled_categories: frozenset = frozenset()


@dataclass(frozen=True)
class ReminderPlan:
    """When a reminder for an occurrence should go out."""

    rule_id: Optional[int]
    occurrence: datetime
    fire_at: datetime
    deferred: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "rule_id": self.rule_id,
            "occurrence": self.occurrence.isoformat(),
            "fire_at": self.fire_at.isoformat(),
            "deferred": self.deferred,
        }


class NotificationScheduler:
    """Decides when (and whether) to remind about a rule's next occurrence."""

    def __init__(self, settings: NotificationSettings):
        self.settings = settings

    def is_enabled_for(self, rule: RuleSpec) -> bool:
        if not self.settings.master_switch:
            return False
        category = rule.template.category_id
        return category is None or category not in self.settings.disabled_categories

    def plan(self, rule: RuleSpec, now: Optional[datetime] = None) -> Optional[ReminderPlan]:
        """
        Plan the reminder for the rule's next occurrence.

        Args:
            rule: Rule to plan for
            now: Reference moment (defaults to datetime.now())

        Returns:
            ReminderPlan, or None when notifications are off for this rule or
            there is no upcoming occurrence
        """
        if not self.is_enabled_for(rule):
            logger.debug(f"Notifications disabled for rule {rule.id}")
            return None

        occurrence = next_occurrence(rule, now=now)
        if occurrence is None:
            return None

        quiet_hours = self.settings.quiet_hours
        if quiet_hours.contains(occurrence):
            fire_at = quiet_hours.window_end_after(occurrence)
            logger.debug(f"Rule {rule.id}: occurrence {occurrence.isoformat()} in quiet hours, deferred to {fire_at.isoformat()}")
            return ReminderPlan(rule_id=rule.id, occurrence=occurrence, fire_at=fire_at, deferred=True)

        return ReminderPlan(rule_id=rule.id, occurrence=occurrence, fire_at=occurrence, deferred=False)
