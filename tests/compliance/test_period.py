from datetime import date, datetime, timezone

import pytest

from src.gym_attendance.gym_attendance.compliance.period import (
    EvaluationPeriod,
    period_for,
    previous_period,
    resolve_period,
)
from src.gym_attendance.gym_attendance.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "year, month, last_day, weeks",
    [
        (2025, 2, 28, 4),
        (2024, 2, 29, 5),
        (2025, 4, 30, 5),
        (2025, 1, 31, 5),
        (1900, 2, 28, 4),
        (2000, 2, 29, 5),
    ],
)
def test_resolve_period_bounds_and_week_count(year, month, last_day, weeks):
    period = resolve_period(year, month)

    assert period.start == datetime(year, month, 1, 0, 0, 0)
    assert period.end == datetime(year, month, last_day, 23, 59, 59, 999999)
    assert period.week_count == weeks


def test_resolve_period_rejects_invalid_month():
    with pytest.raises(ValidationError):
        resolve_period(2025, 13)
    with pytest.raises(ValidationError):
        resolve_period(2025, 0)


def test_period_for_contains_now():
    now = datetime(2025, 6, 15, 10, 0)
    period = period_for(now)

    assert period.label == "2025-06"
    assert period.contains(now)


def test_previous_period_is_month_before():
    assert previous_period(datetime(2025, 3, 1, 0, 0)).label == "2025-02"
    assert previous_period(datetime(2025, 3, 1, 0, 0)).week_count == 4


def test_previous_period_crosses_year_boundary():
    period = previous_period(datetime(2025, 1, 1, 3, 0))

    assert period.start == datetime(2024, 12, 1)
    assert period.end.date() == date(2024, 12, 31)


def test_contains_is_inclusive_on_both_ends():
    period = resolve_period(2025, 6)

    assert period.contains(period.start)
    assert period.contains(period.end)
    assert not period.contains(datetime(2025, 7, 1))
    assert not period.contains(datetime(2025, 5, 31, 23, 59, 59, 999999))


def test_from_bounds_partial_month_week_count():
    period = EvaluationPeriod.from_bounds(datetime(2025, 6, 1), datetime(2025, 6, 14, 23, 59))

    assert period.week_count == 2


def test_from_bounds_full_month_matches_resolver():
    resolved = resolve_period(2024, 2)

    assert EvaluationPeriod.from_bounds(resolved.start, resolved.end) == resolved


def test_from_bounds_rejects_end_before_start():
    with pytest.raises(ValidationError):
        EvaluationPeriod.from_bounds(datetime(2025, 6, 10), datetime(2025, 6, 1))


def test_from_bounds_rejects_span_over_two_months():
    with pytest.raises(ValidationError):
        EvaluationPeriod.from_bounds(datetime(2025, 6, 20), datetime(2025, 7, 5))


def test_from_bounds_rejects_mixed_naive_and_aware():
    with pytest.raises(ValidationError):
        EvaluationPeriod.from_bounds(datetime(2025, 6, 1), datetime(2025, 6, 30, tzinfo=timezone.utc))


def test_from_bounds_rejects_non_datetime():
    with pytest.raises(ValidationError):
        EvaluationPeriod.from_bounds("2025-06-01", datetime(2025, 6, 30))
