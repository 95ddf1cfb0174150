from datetime import datetime

from src.gym_attendance.gym_attendance.common.datetime_utils import add_months
from src.gym_attendance.gym_attendance.compliance.transitions import decide_transition, manual_unblock
from src.gym_attendance.gym_attendance.core.enums import ComplianceStatus, ComplianceTier


def test_blocked_tier_blocks_for_one_calendar_month():
    decision = decide_transition(ComplianceTier.BLOCKED, now=datetime(2025, 6, 1, 3, 0))

    assert decision.is_block
    assert decision.status == ComplianceStatus.BLOCKED
    assert decision.blocked_until == datetime(2025, 7, 1, 3, 0)


def test_warning_and_compliant_tiers_activate():
    for tier in (ComplianceTier.WARNING, ComplianceTier.COMPLIANT):
        decision = decide_transition(tier, now=datetime(2025, 6, 1))
        assert decision.status == ComplianceStatus.ACTIVE
        assert decision.blocked_until is None
        assert not decision.is_block


def test_block_end_is_clamped_to_month_length():
    assert decide_transition(ComplianceTier.BLOCKED, now=datetime(2025, 1, 31)).blocked_until == datetime(2025, 2, 28)
    assert decide_transition(ComplianceTier.BLOCKED, now=datetime(2024, 1, 31)).blocked_until == datetime(2024, 2, 29)


def test_add_months_rolls_over_year():
    assert add_months(datetime(2025, 12, 15, 8, 30), 1) == datetime(2026, 1, 15, 8, 30)
    assert add_months(datetime(2025, 3, 31), -1) == datetime(2025, 2, 28)


def test_manual_unblock_is_idempotent():
    assert manual_unblock() == manual_unblock()
    assert manual_unblock().status == ComplianceStatus.ACTIVE
    assert manual_unblock().blocked_until is None
