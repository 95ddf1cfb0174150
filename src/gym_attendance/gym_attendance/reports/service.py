from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..attendance.repository import VisitRepository
from ..common.datetime_utils import end_of_day, now_local, start_of_day
from ..compliance.evaluator import round_percentage
from ..compliance.period import period_for
from ..compliance.service import ComplianceService
from ..core.constants import CRITICAL_THRESHOLD, TOP_FREQUENT_LIMIT
from ..core.enums import ComplianceStatus, ComplianceTier
from ..members.repository import MemberRepository


@dataclass(frozen=True)
class ReportData:
    title: str
    fieldnames: list[str]
    rows: list[dict]
    summary: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"title": self.title, "rows": self.rows, "summary": self.summary}


class ReportService:
    """Builds the admin reports. Every percentage comes from the compliance evaluator."""

    def __init__(self, members: MemberRepository, visits: VisitRepository, compliance: ComplianceService):
        self._members = members
        self._visits = visits
        self._compliance = compliance

    def attendance_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        search: Optional[str] = None,
    ) -> ReportData:
        query_rows = self._visits.get_report_rows(
            start=start_of_day(start) if start else None,
            end=end_of_day(end) if end else None,
            search=(search or "").strip() or None,
        )

        by_month: Counter[str] = Counter()
        rows = []
        for r in query_rows:
            by_month[r.timestamp.strftime("%Y-%m")] += 1
            rows.append(
                {
                    "visited_at": r.timestamp.strftime("%Y-%m-%d %H:%M"),
                    "full_name": r.full_name,
                    "document": r.document,
                    "email": r.email or "N/A",
                    "course": r.course or "N/A",
                    "link_type": r.link_type,
                    "status": r.compliance_status,
                }
            )

        return ReportData(
            title="Attendance report",
            fieldnames=["visited_at", "full_name", "document", "email", "course", "link_type", "status"],
            rows=rows,
            summary={"total": len(rows), "by_month": dict(sorted(by_month.items()))},
        )

    def members_report(self) -> ReportData:
        members = list(self._members.list_all())
        total = len(members)
        active = sum(1 for m in members if m.compliance_status == ComplianceStatus.ACTIVE)
        avg_visits = sum(m.total_lifetime_visits for m in members) / total if total else 0.0
        by_link = Counter(m.link_type.value for m in members)

        rows = [
            {
                "full_name": m.full_name,
                "document": m.document,
                "link_type": m.link_type.value,
                "total_lifetime_visits": m.total_lifetime_visits,
                "status": m.compliance_status.value,
            }
            for m in members
        ]
        return ReportData(
            title="Members report",
            fieldnames=["full_name", "document", "link_type", "total_lifetime_visits", "status"],
            rows=rows,
            summary={
                "total": total,
                "active": active,
                "average_lifetime_visits": round(avg_visits, 1),
                "by_link_type": dict(by_link),
            },
        )

    def monthly_report(self, *, now: datetime | None = None, limit: int = TOP_FREQUENT_LIMIT) -> ReportData:
        """Visit totals for the current month and the most frequent members."""
        now = now or now_local()
        period = period_for(now)
        total_members = len(self._members.list_all())
        visits = self._visits.get_report_rows(start=period.start, end=period.end)

        counts: Counter[int] = Counter()
        names: dict[int, str] = {}
        for v in visits:
            counts[v.member_id] += 1
            names[v.member_id] = v.full_name

        ranked = sorted(counts.items(), key=lambda kv: (-kv[1], names[kv[0]]))[: int(limit)]
        rows = [
            {"position": i + 1, "full_name": names[member_id], "visits": n}
            for i, (member_id, n) in enumerate(ranked)
        ]
        return ReportData(
            title="Monthly report",
            fieldnames=["position", "full_name", "visits"],
            rows=rows,
            summary={
                "period": period.label,
                "total_members": total_members,
                "visits": len(visits),
                "average_per_member": round(len(visits) / total_members, 1) if total_members else 0.0,
            },
        )

    def low_frequency_report(self, *, now: datetime | None = None) -> ReportData:
        """Members in the blocked tier for the current month, lowest percentage first."""
        now = now or now_local()
        period = period_for(now)
        members = list(self._members.list_all())

        at_risk = []
        for m in members:
            result = self._compliance.evaluate_member(m, period)
            if result.tier == ComplianceTier.BLOCKED:
                at_risk.append((m, result))
        at_risk.sort(key=lambda mr: (mr[1].percentage, mr[0].full_name))

        rows = [
            {
                "full_name": m.full_name,
                "document": m.document,
                "expected_visits": r.expected_visits,
                "actual_visits": r.actual_visits,
                "percentage": f"{round_percentage(r.percentage)}%",
                "severity": "CRITICAL" if r.percentage < CRITICAL_THRESHOLD else "ATTENTION",
            }
            for m, r in at_risk
        ]
        share = len(rows) / len(members) * 100 if members else 0.0
        return ReportData(
            title="Low frequency report",
            fieldnames=["full_name", "document", "expected_visits", "actual_visits", "percentage", "severity"],
            rows=rows,
            summary={"period": period.label, "at_risk": len(rows), "share_of_members": round(share, 1)},
        )
