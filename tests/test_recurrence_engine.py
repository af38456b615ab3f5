from datetime import date, datetime, time, timedelta

import pytest

from simplytodo.recurrence import (
    Daily,
    InvalidRuleError,
    Monthly,
    TaskTemplate,
    Weekly,
    generate,
    generate_dates,
    is_occurrence,
    next_candidate,
)
from simplytodo.recurrence.calendar_math import add_months, add_years, weekday_index


def test_weekday_index_starts_on_sunday() -> None:
    assert weekday_index(date(2026, 3, 1)) == 0  # Sunday
    assert weekday_index(date(2026, 3, 2)) == 1
    assert weekday_index(date(2026, 3, 7)) == 6


def test_add_months_clamps_to_month_end() -> None:
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2026, 2, 28), 1, target_day=31) == date(2026, 3, 31)
    assert add_months(date(2026, 11, 15), 3) == date(2027, 2, 15)
    assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)


def test_daily_spacing(make_rule) -> None:
    rule = make_rule(Daily(interval=2), start=date(2026, 3, 1), max_instances=5)
    assert generate_dates(rule) == [
        date(2026, 3, 1),
        date(2026, 3, 3),
        date(2026, 3, 5),
        date(2026, 3, 7),
        date(2026, 3, 9),
    ]


def test_due_uses_default_time_of_day(make_rule) -> None:
    rule = make_rule(Daily(), max_instances=1)
    assert generate(rule)[0].due == datetime(2026, 3, 1, 9, 0)


def test_due_uses_rule_time_of_day(make_rule) -> None:
    rule = make_rule(Daily(), max_instances=1, time_of_day=time(7, 30))
    assert generate(rule)[0].due == datetime(2026, 3, 1, 7, 30)


def test_time_of_day_has_minute_precision(make_rule) -> None:
    rule = make_rule(Daily(), max_instances=1, time_of_day=time(7, 0, 30))
    assert rule.template.time_of_day == time(7, 0)
    assert generate(rule)[0].due == datetime(2026, 3, 1, 7, 0)


def test_instances_copy_template(make_rule) -> None:
    template = TaskTemplate(text="Stretch", importance=5, category_id="health")
    rule = make_rule(Daily(), template=template, max_instances=2, id=7)
    instances = generate(rule)
    assert [(i.rule_id, i.owner_id, i.text, i.importance, i.category_id) for i in instances] == [
        (7, "user-1", "Stretch", 5, "health"),
        (7, "user-1", "Stretch", 5, "health"),
    ]


@pytest.mark.parametrize("year, expected_day", [(2026, 28), (2024, 29)])
def test_monthly_clamp_in_february(make_rule, year, expected_day) -> None:
    rule = make_rule(Monthly(day_of_month=31), start=date(year, 1, 15))
    dates = generate_dates(rule)
    february = [d for d in dates if d.month == 2 and d.year == year]
    assert february == [date(year, 2, expected_day)]
    assert dates[:4] == [
        date(year, 2, expected_day),
        date(year, 3, 31),
        date(year, 4, 30),
        date(year, 5, 31),
    ]


def test_monthly_without_day_uses_start_day(make_rule) -> None:
    rule = make_rule(Monthly(interval=2), start=date(2026, 1, 10), max_instances=3)
    assert generate_dates(rule) == [date(2026, 1, 10), date(2026, 3, 10), date(2026, 5, 10)]


def test_monthly_first_occurrence_is_a_step_after_start(make_rule) -> None:
    # The start date is tested first; when it misses, the next candidate is a
    # whole interval later, so January 20 is not produced.
    rule = make_rule(Monthly(day_of_month=20), start=date(2026, 1, 15), max_instances=2)
    assert generate_dates(rule) == [date(2026, 2, 20), date(2026, 3, 20)]


def test_weekly_membership(make_rule) -> None:
    rule = make_rule(Weekly(days_of_week={1, 3, 5}), start=date(2026, 3, 1))
    dates = generate_dates(rule)
    assert dates[:6] == [
        date(2026, 3, 2),
        date(2026, 3, 4),
        date(2026, 3, 6),
        date(2026, 3, 9),
        date(2026, 3, 11),
        date(2026, 3, 13),
    ]
    assert all(weekday_index(d) in {1, 3, 5} for d in dates)
    assert all(a < b for a, b in zip(dates, dates[1:]))
    assert len(set(dates)) == len(dates)


def test_weekly_without_days_jumps_whole_weeks(make_rule) -> None:
    rule = make_rule(Weekly(interval=2), start=date(2026, 3, 4), max_instances=3)
    assert generate_dates(rule) == [date(2026, 3, 4), date(2026, 3, 18), date(2026, 4, 1)]


def test_weekly_days_do_not_compound_interval(make_rule) -> None:
    every_week = make_rule(Weekly(days_of_week={1}), max_instances=4)
    every_other = make_rule(Weekly(interval=2, days_of_week={1}), max_instances=4)
    assert generate_dates(every_other) == generate_dates(every_week)
    assert generate_dates(every_week)[1] - generate_dates(every_week)[0] == timedelta(days=7)


def test_cap_enforcement(make_rule) -> None:
    rule = make_rule(Daily(), start=date(2026, 1, 1), max_instances=10)
    dates = generate_dates(rule)
    assert len(dates) == 10
    assert dates[-1] == date(2026, 1, 10)


def test_end_date_defaults_to_one_year(make_rule) -> None:
    rule = make_rule(Daily(), start=date(2026, 1, 1), max_instances=1000)
    assert rule.end_date is None
    assert rule.effective_end_date == date(2027, 1, 1)
    dates = generate_dates(rule)
    assert len(dates) == 366
    assert dates[-1] == date(2027, 1, 1)


def test_explicit_end_date_is_inclusive(make_rule) -> None:
    rule = make_rule(Daily(interval=3), start=date(2026, 3, 1), end=date(2026, 3, 7))
    assert generate_dates(rule) == [date(2026, 3, 1), date(2026, 3, 4), date(2026, 3, 7)]


def test_end_before_start_is_rejected(make_rule) -> None:
    with pytest.raises(InvalidRuleError) as exc:
        make_rule(Daily(), start=date(2026, 3, 10), end=date(2026, 3, 1))
    assert exc.value.details["field"] == "end_date"


def test_single_day_window(make_rule) -> None:
    rule = make_rule(Daily(), start=date(2026, 3, 1), end=date(2026, 3, 1))
    assert generate_dates(rule) == [date(2026, 3, 1)]


def test_generation_stops_at_end_of_calendar(make_rule) -> None:
    monthly = make_rule(Monthly(day_of_month=15), start=date(9999, 12, 15), end=date(9999, 12, 31))
    assert generate_dates(monthly) == [date(9999, 12, 15)]
    assert next_candidate(monthly, date(9999, 12, 15)) is None

    daily = make_rule(Daily(), start=date(9999, 6, 1), max_instances=1000)
    assert daily.effective_end_date == date.max
    dates = generate_dates(daily)
    assert len(dates) == 214
    assert dates[-1] == date.max
    assert next_candidate(daily, date.max) is None


def test_termination_far_future_monthly(make_rule) -> None:
    rule = make_rule(
        Monthly(day_of_month=31),
        start=date(2026, 1, 31),
        end=date(2126, 1, 31),
        max_instances=100000,
    )
    dates = generate_dates(rule)
    assert len(dates) == 1201
    assert dates[-1] == date(2126, 1, 31)
    assert all(a < b for a, b in zip(dates, dates[1:]))


def test_every_instance_satisfies_predicate(make_rule) -> None:
    rules = [
        make_rule(Daily(interval=3)),
        make_rule(Weekly(days_of_week={0, 6})),
        make_rule(Monthly(day_of_month=30), start=date(2026, 1, 30)),
    ]
    for rule in rules:
        for d in generate_dates(rule):
            assert is_occurrence(rule, d)


def test_generate_is_idempotent(make_rule) -> None:
    rule = make_rule(Weekly(days_of_week={2, 4}), time_of_day=time(18, 15))
    assert generate(rule) == generate(rule)
    assert [i.to_dict() for i in generate(rule)] == [i.to_dict() for i in generate(rule)]


def test_predicate_per_kind(make_rule) -> None:
    assert is_occurrence(make_rule(Daily(interval=5)), date(2026, 3, 2))
    weekly = make_rule(Weekly(days_of_week={3}))
    assert is_occurrence(weekly, date(2026, 3, 4))
    assert not is_occurrence(weekly, date(2026, 3, 5))
    assert is_occurrence(make_rule(Weekly()), date(2026, 3, 5))
    monthly = make_rule(Monthly(day_of_month=15))
    assert is_occurrence(monthly, date(2026, 4, 15))
    assert not is_occurrence(monthly, date(2026, 4, 16))


def test_stepper_per_kind(make_rule) -> None:
    assert next_candidate(make_rule(Daily(interval=4)), date(2026, 3, 1)) == date(2026, 3, 5)
    assert next_candidate(make_rule(Weekly(interval=3)), date(2026, 3, 1)) == date(2026, 3, 22)
    # Friday -> Monday
    assert next_candidate(make_rule(Weekly(days_of_week={1, 5})), date(2026, 3, 6)) == date(2026, 3, 9)
    # Only Sunday listed: a full week ahead
    assert next_candidate(make_rule(Weekly(days_of_week={0})), date(2026, 3, 1)) == date(2026, 3, 8)
    monthly = make_rule(Monthly(interval=1, day_of_month=31))
    assert next_candidate(monthly, date(2026, 1, 31)) == date(2026, 2, 28)
    assert next_candidate(monthly, date(2026, 2, 28)) == date(2026, 3, 31)


@pytest.mark.parametrize(
    "factory",
    [
        lambda: Daily(interval=0),
        lambda: Weekly(interval=-1),
        lambda: Weekly(days_of_week={7}),
        lambda: Monthly(day_of_month=0),
        lambda: Monthly(day_of_month=32),
    ],
)
def test_invalid_recurrence_fields(factory) -> None:
    with pytest.raises(InvalidRuleError):
        factory()


def test_invalid_importance_and_cap(make_rule) -> None:
    with pytest.raises(InvalidRuleError):
        TaskTemplate(text="x", importance=6)
    with pytest.raises(InvalidRuleError):
        make_rule(Daily(), max_instances=0)
