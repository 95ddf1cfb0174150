from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import datetime, time

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class EvaluationPeriod:
    """Calendar-month window attendance is measured over (computed, not persisted)."""

    start: datetime
    end: datetime
    week_count: int

    @classmethod
    def from_bounds(cls, start: datetime, end: datetime) -> "EvaluationPeriod":
        if not isinstance(start, datetime) or not isinstance(end, datetime):
            raise ValidationError("Period bounds must be datetimes")
        if (start.tzinfo is None) != (end.tzinfo is None):
            raise ValidationError("Period bounds must both be naive or both be timezone-aware")
        if end < start:
            raise ValidationError("Period end is before period start")

        # Day-of-month arithmetic: bounds are expected to lie in one month.
        days = end.day - start.day + 1
        if days < 1 or (start.year, start.month) != (end.year, end.month):
            raise ValidationError("Period must fall within a single calendar month")
        return cls(start=start, end=end, week_count=math.ceil(days / 7))

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end

    @property
    def label(self) -> str:
        return self.start.strftime("%Y-%m")


def resolve_period(year: int, month: int) -> EvaluationPeriod:
    """Period for a calendar month: day 1 00:00 through the last day 23:59:59.999999."""
    if not 1 <= int(month) <= 12:
        raise ValidationError("Month must be between 1 and 12")
    days_in_month = calendar.monthrange(int(year), int(month))[1]
    start = datetime(int(year), int(month), 1)
    end = datetime.combine(start.replace(day=days_in_month).date(), time.max)
    return EvaluationPeriod(start=start, end=end, week_count=math.ceil(days_in_month / 7))


def period_for(now: datetime) -> EvaluationPeriod:
    return resolve_period(now.year, now.month)


def previous_period(now: datetime) -> EvaluationPeriod:
    """The month before the one containing ``now`` (the just-completed period)."""
    if now.month == 1:
        return resolve_period(now.year - 1, 12)
    return resolve_period(now.year, now.month - 1)
