from __future__ import annotations

from ..compliance.evaluator import ComplianceResult, round_percentage
from ..core.constants import WARNING_THRESHOLD
from ..core.enums import ComplianceTier
from .model import PushMessage


def low_attendance_warning(member_id: int, result: ComplianceResult) -> PushMessage:
    pct = round_percentage(result.percentage)
    return PushMessage(
        member_id=member_id,
        title="Attention: low attendance",
        body=(
            f"Your attendance is at {pct}%. You need at least {WARNING_THRESHOLD:.0f}% "
            "to avoid being blocked. Keep showing up!"
        ),
        data={"type": "low_attendance", "url": "/attendance"},
    )


def blocking_risk(member_id: int, result: ComplianceResult) -> PushMessage:
    pct = round_percentage(result.percentage)
    return PushMessage(
        member_id=member_id,
        title="Risk of being blocked!",
        body=(
            f"URGENT: your attendance is only {pct}%. "
            "You will be blocked on the 1st of next month unless it improves!"
        ),
        data={"type": "blocking_risk", "url": "/attendance"},
    )


def workout_created(member_id: int, workout_title: str) -> PushMessage:
    return PushMessage(
        member_id=member_id,
        title="New workout plan",
        body=f"A new workout plan is available: {workout_title}",
        data={"type": "workout_created", "url": "/workouts"},
    )


TIER_TEMPLATES = {
    ComplianceTier.WARNING: low_attendance_warning,
    ComplianceTier.BLOCKED: blocking_risk,
}
