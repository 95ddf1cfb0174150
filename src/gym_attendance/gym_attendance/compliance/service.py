from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..attendance.repository import VisitRepository
from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..members.model import Member
from ..members.repository import MemberRepository
from .evaluator import ComplianceResult, evaluate_period, round_percentage
from .period import EvaluationPeriod, period_for, previous_period
from .transitions import decide_transition

logger = logging.getLogger(__name__)


@dataclass
class JobResult:
    period: str
    checked: int = 0
    blocked: int = 0
    unblocked: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "checked": self.checked,
            "blocked": self.blocked,
            "unblocked": self.unblocked,
            "errors": list(self.errors),
        }


class ComplianceService:
    """Applies the evaluator to persisted members.

    The evaluator stays pure; this service owns every read of visits and every
    write of ``compliance_status`` / ``blocked_until``.
    """

    def __init__(self, members: MemberRepository, visits: VisitRepository):
        self._members = members
        self._visits = visits

    def evaluate_member(self, member: Member, period: EvaluationPeriod) -> ComplianceResult:
        visits = self._visits.get_for_member_between(member.member_id, period.start, period.end)
        return evaluate_period(member.expected_weekly_visits, [v.timestamp for v in visits], period)

    def member_status(self, member_id: int, *, now: datetime | None = None) -> dict:
        now = now or now_local()
        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Member not found")

        period = period_for(now)
        result = self.evaluate_member(member, period)
        return self._status_row(member, result, period=period, now=now)

    def overview(self, *, current_role: Role, now: datetime | None = None) -> list[dict]:
        """Current-period standing of every member, for the admin blocking page."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        now = now or now_local()
        period = period_for(now)
        rows = []
        for member in self._members.list_all():
            result = self.evaluate_member(member, period)
            rows.append(self._status_row(member, result, period=period, now=now))
        rows.sort(key=lambda r: (r["compliance_status"] != "blocked", r["full_name"]))
        return rows

    @staticmethod
    def _status_row(member: Member, result: ComplianceResult, *, period: EvaluationPeriod, now: datetime) -> dict:
        return {
            "member_id": member.member_id,
            "full_name": member.full_name,
            "period": period.label,
            "expected_weekly_visits": member.expected_weekly_visits,
            "total_lifetime_visits": member.total_lifetime_visits,
            "compliance_status": member.compliance_status.value,
            "blocked_until": member.blocked_until.isoformat() if member.blocked_until else None,
            "block_in_effect": member.is_block_in_effect(now),
            "display_percentage": round_percentage(result.percentage),
            **result.to_dict(),
        }

    def run_monthly_check(self, *, now: datetime | None = None, period: Optional[EvaluationPeriod] = None) -> JobResult:
        """Evaluate the just-completed month and persist block/unblock transitions.

        Members are processed one at a time; a failure is recorded in
        ``errors`` and the run moves on. A member whose visits cannot be
        fetched is skipped rather than blocked on a zero count.
        """
        now = now or now_local()
        period = period or previous_period(now)
        results = JobResult(period=period.label)

        logger.info("Starting attendance check for %s", period.label)
        members = self._members.list_all()
        logger.info("Found %d members to check", len(members))

        for member in members:
            results.checked += 1
            try:
                result = self.evaluate_member(member, period)
            except Exception as e:
                logger.exception("Error evaluating member %s", member.member_id)
                results.errors.append(f"Error for {member.full_name}: {e}")
                continue

            logger.info(
                "Member %s: %d/%d (%.1f%%) -> %s",
                member.full_name,
                result.actual_visits,
                result.expected_visits,
                result.percentage,
                result.tier.value,
            )

            decision = decide_transition(result.tier, now=now)
            try:
                ok = self._members.set_compliance(
                    member.member_id,
                    status=decision.status,
                    blocked_until=decision.blocked_until,
                )
            except Exception as e:
                logger.exception("Error updating member %s", member.member_id)
                results.errors.append(f"Error updating {member.full_name}: {e}")
                continue

            if not ok:
                results.errors.append(f"Error updating {member.full_name}: member no longer exists")
                continue

            if decision.is_block:
                logger.info("Blocked member %s until %s", member.full_name, decision.blocked_until.isoformat())
                results.blocked += 1
            else:
                results.unblocked += 1

        logger.info(
            "Attendance check completed: checked=%d blocked=%d unblocked=%d errors=%d",
            results.checked,
            results.blocked,
            results.unblocked,
            len(results.errors),
        )
        return results

