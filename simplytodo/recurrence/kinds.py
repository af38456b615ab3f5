"""
Recurrence kinds.

A rule recurs Daily, Weekly or Monthly. Each kind is its own frozen
dataclass so weekday sets only exist on Weekly and day-of-month only on
Monthly; code dispatches with isinstance instead of checking a string tag
next to nullable fields.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Union

from simplytodo.recurrence.constants import DAILY, MONTHLY, RECURRENCE_KINDS, WEEKLY
from simplytodo.recurrence.errors import InvalidRuleError


def _check_interval(interval: int) -> None:
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        raise InvalidRuleError(
            f"Interval must be a positive integer, got {interval!r}",
            details={"field": "interval"},
        )


@dataclass(frozen=True)
class Daily:
    """Every `interval` days."""

    interval: int = 1

    def __post_init__(self):
        _check_interval(self.interval)

    @property
    def kind(self) -> str:
        return DAILY


@dataclass(frozen=True)
class Weekly:
    """
    Weekly recurrence.

    With an empty `days_of_week` every calendar day qualifies and the cursor
    jumps 7 * interval days. With a weekday set the cursor walks day by day
    to the next listed weekday and the interval is not applied.
    """

    interval: int = 1
    days_of_week: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        _check_interval(self.interval)
        days = frozenset(self.days_of_week or ())
        for day in days:
            if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
                raise InvalidRuleError(
                    f"Weekday index must be between 0 (Sunday) and 6 (Saturday), got {day!r}",
                    details={"field": "days_of_week"},
                )
        # normalise lists/sets handed in by callers
        object.__setattr__(self, "days_of_week", days)

    @property
    def kind(self) -> str:
        return WEEKLY


@dataclass(frozen=True)
class Monthly:
    """Every `interval` months on `day_of_month` (start date's day when None)."""

    interval: int = 1
    day_of_month: Optional[int] = None

    def __post_init__(self):
        _check_interval(self.interval)
        dom = self.day_of_month
        if dom is not None and (isinstance(dom, bool) or not isinstance(dom, int) or not 1 <= dom <= 31):
            raise InvalidRuleError(
                f"Day of month must be between 1 and 31, got {dom!r}",
                details={"field": "day_of_month"},
            )

    @property
    def kind(self) -> str:
        return MONTHLY


Recurrence = Union[Daily, Weekly, Monthly]


def recurrence_from_fields(
    kind: str,
    interval: int = 1,
    days_of_week: Optional[Iterable[int]] = None,
    day_of_month: Optional[int] = None,
) -> Recurrence:
    """
    Build a recurrence from the flat representation used by storage and the API.

    Fields that belong to another kind are dropped.
    """
    kind = (kind or "").lower()
    if kind == DAILY:
        return Daily(interval=interval)
    if kind == WEEKLY:
        return Weekly(interval=interval, days_of_week=frozenset(days_of_week or ()))
    if kind == MONTHLY:
        return Monthly(interval=interval, day_of_month=day_of_month)
    raise InvalidRuleError(
        f"Recurrence type must be one of: {', '.join(RECURRENCE_KINDS)}",
        details={"field": "recurring_type", "value": kind},
    )
