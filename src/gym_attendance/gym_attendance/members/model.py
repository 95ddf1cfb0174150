from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ComplianceStatus, LinkType


@dataclass(frozen=True)
class Member:
    """Domain entity: a gym member tracked against an expected weekly visit count.

    Plain data object, no DB access.
    """

    member_id: int
    full_name: str
    document: str
    expected_weekly_visits: int
    link_type: LinkType = LinkType.STUDENT
    email: Optional[str] = None
    course: Optional[str] = None
    total_lifetime_visits: int = 0
    compliance_status: ComplianceStatus = ComplianceStatus.ACTIVE
    blocked_until: Optional[datetime] = None

    def is_block_in_effect(self, now: datetime) -> bool:
        return self.blocked_until is not None and self.blocked_until > now

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "full_name": self.full_name,
            "document": self.document,
            "email": self.email,
            "course": self.course,
            "link_type": self.link_type.value,
            "expected_weekly_visits": self.expected_weekly_visits,
            "total_lifetime_visits": self.total_lifetime_visits,
            "compliance_status": self.compliance_status.value,
            "blocked_until": self.blocked_until.isoformat() if self.blocked_until else None,
        }
