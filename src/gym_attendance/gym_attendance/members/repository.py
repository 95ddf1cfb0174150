from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ComplianceStatus, LinkType
from .model import Member


class MemberRepository(Protocol):
    """Repository interface for Member.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def get_by_document(self, document: str) -> Optional[Member]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[ComplianceStatus] = None) -> Sequence[Member]:
        raise NotImplementedError

    def create(
        self,
        *,
        full_name: str,
        document: str,
        email: Optional[str],
        course: Optional[str],
        link_type: LinkType,
        expected_weekly_visits: int,
    ) -> int:
        raise NotImplementedError

    def update_expected_weekly_visits(self, member_id: int, expected_weekly_visits: int) -> bool:
        raise NotImplementedError

    def set_compliance(
        self,
        member_id: int,
        *,
        status: ComplianceStatus,
        blocked_until: Optional[datetime],
    ) -> bool:
        raise NotImplementedError
