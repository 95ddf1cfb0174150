"""Attendance compliance evaluator.

Pure functions: given a member's expected weekly visits and their visit
timestamps, compute the attendance percentage and compliance tier for one
period. Nothing here reads or writes persisted member state, so every caller
(status views, the monthly job, notifications, reports) shares one formula.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..core.constants import COMPLIANT_THRESHOLD, WARNING_THRESHOLD
from ..core.enums import ComplianceTier
from ..core.exceptions import ValidationError
from .period import EvaluationPeriod


@dataclass(frozen=True)
class ComplianceResult:
    actual_visits: int
    expected_visits: int
    percentage: float
    tier: ComplianceTier

    def to_dict(self) -> dict:
        return {
            "actual_visits": self.actual_visits,
            "expected_visits": self.expected_visits,
            "percentage": self.percentage,
            "tier": self.tier.value,
        }


def tier_for(percentage: float) -> ComplianceTier:
    if percentage >= COMPLIANT_THRESHOLD:
        return ComplianceTier.COMPLIANT
    if percentage >= WARNING_THRESHOLD:
        return ComplianceTier.WARNING
    return ComplianceTier.BLOCKED


def round_percentage(percentage: float) -> int:
    """Round half up for display (``round`` would round 72.5 to 72)."""
    return int(math.floor(percentage + 0.5))


def count_visits(timestamps: Iterable[datetime], period: EvaluationPeriod) -> int:
    """Count timestamps inside the period, both ends inclusive. Duplicates all count."""
    count = 0
    for ts in timestamps:
        if not isinstance(ts, datetime):
            raise ValidationError(f"Invalid visit timestamp: {ts!r}")
        if (ts.tzinfo is None) != (period.start.tzinfo is None):
            raise ValidationError("Visit timestamps and period bounds mix naive and timezone-aware values")
        if period.contains(ts):
            count += 1
    return count


def _validate_expected(expected_weekly_visits: Optional[int]) -> int:
    if expected_weekly_visits is None:
        return 0
    if isinstance(expected_weekly_visits, bool) or not isinstance(expected_weekly_visits, int):
        raise ValidationError("Expected weekly visits must be an integer")
    if expected_weekly_visits < 0:
        raise ValidationError("Expected weekly visits cannot be negative")
    return expected_weekly_visits


def evaluate_period(
    expected_weekly_visits: Optional[int],
    visit_timestamps: Iterable[datetime],
    period: EvaluationPeriod,
) -> ComplianceResult:
    weekly = _validate_expected(expected_weekly_visits)
    actual = count_visits(visit_timestamps, period)
    expected = weekly * period.week_count
    # exact at the 80/70 boundaries (12/15, 14/20)
    percentage = actual * 100 / expected if expected > 0 else 0.0
    return ComplianceResult(
        actual_visits=actual,
        expected_visits=expected,
        percentage=percentage,
        tier=tier_for(percentage),
    )


def evaluate(
    expected_weekly_visits: Optional[int],
    visit_timestamps: Iterable[datetime],
    period_start: datetime,
    period_end: datetime,
) -> ComplianceResult:
    return evaluate_period(
        expected_weekly_visits,
        visit_timestamps,
        EvaluationPeriod.from_bounds(period_start, period_end),
    )
