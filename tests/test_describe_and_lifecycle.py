from datetime import date, time

import pytest

from simplytodo.recurrence import (
    Daily,
    DeletionMode,
    InvalidTransitionError,
    Monthly,
    RuleLifecycle,
    RuleState,
    Weekly,
    describe,
)


@pytest.mark.parametrize(
    "recurrence, expected",
    [
        (Daily(), "every day"),
        (Daily(interval=3), "every 3 days"),
        (Weekly(), "every week"),
        (Weekly(interval=2), "every 2 weeks"),
        (Weekly(days_of_week={5, 1, 3}), "every week on Mon, Wed, Fri"),
        (Monthly(day_of_month=31), "every month on day 31"),
        (Monthly(interval=3), "every 3 months on day 1"),
    ],
)
def test_describe(make_rule, recurrence, expected) -> None:
    assert describe(make_rule(recurrence, start=date(2026, 3, 1))) == expected


def test_describe_with_time_of_day(make_rule) -> None:
    rule = make_rule(Weekly(days_of_week={0, 6}), time_of_day=time(8, 5))
    assert describe(rule) == "every week on Sun, Sat at 08:05"


def test_lifecycle_rule_only() -> None:
    lifecycle = RuleLifecycle(1)
    assert lifecycle.begin(DeletionMode.RULE_ONLY) == RuleState.RULE_ONLY
    assert lifecycle.finish() == RuleState.REMOVED
    assert lifecycle.is_removed


def test_lifecycle_cascade_can_degrade() -> None:
    lifecycle = RuleLifecycle(2)
    lifecycle.begin(DeletionMode.RULE_AND_INSTANCES)
    assert lifecycle.degrade_to_rule_only() == RuleState.RULE_ONLY
    assert lifecycle.mode == DeletionMode.RULE_ONLY
    assert lifecycle.finish() == RuleState.REMOVED


def test_lifecycle_rejects_illegal_moves() -> None:
    lifecycle = RuleLifecycle(3)
    with pytest.raises(InvalidTransitionError):
        lifecycle.finish()
    with pytest.raises(InvalidTransitionError):
        lifecycle.degrade_to_rule_only()

    lifecycle.begin(DeletionMode.RULE_ONLY)
    lifecycle.finish()
    with pytest.raises(InvalidTransitionError):
        lifecycle.begin(DeletionMode.RULE_AND_INSTANCES)
