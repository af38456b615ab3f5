"""Immutable rule and instance shapes consumed and produced by the engine."""
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from simplytodo.recurrence.calendar_math import add_years
from simplytodo.recurrence.constants import (
    DATE_FORMAT,
    DEFAULT_IMPORTANCE,
    DEFAULT_MAX_INSTANCES,
    DEFAULT_TIME_OF_DAY,
    MAX_IMPORTANCE,
    MIN_IMPORTANCE,
    TIME_FORMAT,
)
from simplytodo.recurrence.errors import DateParseError, InvalidRuleError
from simplytodo.recurrence.kinds import Daily, Recurrence


def parse_date(value) -> date:
    """
    Parse a YYYY-MM-DD string (dates and datetimes pass through).

    Raises:
        DateParseError: If the value is empty or not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise DateParseError(f"Invalid date: {value!r}", details={"value": value})
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise DateParseError(f"Invalid date: {value!r}, expected YYYY-MM-DD", details={"value": value})


def parse_time_of_day(value) -> Optional[time]:
    """
    Parse "HH:MM"; None and "" mean no time-of-day.

    "HH:MM:SS" is accepted too, but times of day have minute precision:
    seconds are dropped.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        raise DateParseError(f"Invalid time of day: {value!r}", details={"value": value})
    if not value.strip():
        return None
    for fmt in (TIME_FORMAT, "%H:%M:%S"):
        try:
            return datetime.strptime(value.strip(), fmt).time().replace(second=0)
        except ValueError:
            continue
    raise DateParseError(f"Invalid time of day: {value!r}, expected HH:MM", details={"value": value})


def format_time_of_day(value: Optional[time]) -> Optional[str]:
    return value.strftime(TIME_FORMAT) if value is not None else None


@dataclass(frozen=True)
class TaskTemplate:
    """Fields copied onto every generated task."""

    text: str
    importance: int = DEFAULT_IMPORTANCE
    category_id: Optional[str] = None
    time_of_day: Optional[time] = None

    def __post_init__(self):
        if isinstance(self.importance, bool) or not isinstance(self.importance, int) or not (
            MIN_IMPORTANCE <= self.importance <= MAX_IMPORTANCE
        ):
            raise InvalidRuleError(
                f"Importance must be between {MIN_IMPORTANCE} and {MAX_IMPORTANCE}, got {self.importance!r}",
                details={"field": "importance"},
            )
        if self.time_of_day is not None:
            object.__setattr__(self, "time_of_day", self.time_of_day.replace(second=0, microsecond=0))

    def due_at(self, day: date) -> datetime:
        return datetime.combine(day, self.time_of_day or DEFAULT_TIME_OF_DAY)


@dataclass(frozen=True)
class RuleSpec:
    """
    A recurring rule as the engine sees it.

    `end_date` stays None when the caller gave none; the one year default
    is applied through `effective_end_date` by the generator and resolver.
    """

    owner_id: str
    name: str
    template: TaskTemplate
    start_date: date
    recurrence: Recurrence = field(default_factory=Daily)
    end_date: Optional[date] = None
    id: Optional[int] = None
    description: Optional[str] = None
    is_active: bool = True
    max_instances: int = DEFAULT_MAX_INSTANCES
    last_generated: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.start_date, datetime) or not isinstance(self.start_date, date):
            raise InvalidRuleError("Start date must be a calendar date", details={"field": "start_date"})
        if self.end_date is not None:
            if isinstance(self.end_date, datetime) or not isinstance(self.end_date, date):
                raise InvalidRuleError("End date must be a calendar date", details={"field": "end_date"})
            if self.end_date < self.start_date:
                raise InvalidRuleError(
                    f"End date {self.end_date.isoformat()} is before start date {self.start_date.isoformat()}",
                    details={"field": "end_date"},
                )
        if isinstance(self.max_instances, bool) or not isinstance(self.max_instances, int) or self.max_instances < 1:
            raise InvalidRuleError(
                f"max_instances must be a positive integer, got {self.max_instances!r}",
                details={"field": "max_instances"},
            )

    @property
    def effective_end_date(self) -> date:
        """end_date, or one year after start_date (capped at date.max)."""
        if self.end_date is not None:
            return self.end_date
        try:
            return add_years(self.start_date, 1)
        except ValueError:
            return date.max

    @property
    def kind(self) -> str:
        return self.recurrence.kind


@dataclass(frozen=True)
class TaskInstance:
    """One concrete occurrence, ready to hand to persistence."""

    rule_id: Optional[int]
    owner_id: str
    due: datetime
    text: str
    importance: int
    category_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "owner_id": self.owner_id,
            "due": self.due.isoformat(),
            "text": self.text,
            "importance": self.importance,
            "category_id": self.category_id,
        }
