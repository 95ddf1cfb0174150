from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_int_in_range, require_non_empty
from ..compliance.transitions import manual_unblock
from ..core.constants import MAX_WEEKLY_VISITS, MIN_WEEKLY_VISITS
from ..core.enums import ComplianceStatus, LinkType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class MemberService:
    """Use cases: enroll and manage members (admin)."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def enroll(
        self,
        *,
        full_name: str,
        document: str,
        expected_weekly_visits,
        link_type: str = LinkType.STUDENT.value,
        email: Optional[str] = None,
        course: Optional[str] = None,
    ) -> int:
        full_name = require_non_empty(full_name, "Full name")
        document = require_non_empty(document, "Document")
        weekly = require_int_in_range(expected_weekly_visits, "Expected weekly visits", MIN_WEEKLY_VISITS, MAX_WEEKLY_VISITS)

        try:
            link = LinkType(link_type)
        except ValueError:
            raise ValidationError(f"Unknown link type: {link_type}")

        if self._members.get_by_document(document):
            raise ValidationError("A member with this document is already enrolled")

        member_id = self._members.create(
            full_name=full_name,
            document=document,
            email=(email or "").strip() or None,
            course=(course or "").strip() or None,
            link_type=link,
            expected_weekly_visits=weekly,
        )
        logger.info("Enrolled member %s (%s) expecting %s visits/week", member_id, full_name, weekly)
        return member_id

    def get(self, member_id: int) -> Member:
        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Member not found")
        return member

    def list_members(self, *, status: Optional[ComplianceStatus] = None):
        return self._members.list_all(status=status)

    def update_expected_frequency(self, *, current_role: Role, member_id: int, expected_weekly_visits) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")
        weekly = require_int_in_range(expected_weekly_visits, "Expected weekly visits", MIN_WEEKLY_VISITS, MAX_WEEKLY_VISITS)
        self.get(member_id)
        if not self._members.update_expected_weekly_visits(int(member_id), weekly):
            raise ValidationError("Updating expected frequency failed")

    def unblock(self, *, current_role: Role, member_id: int) -> None:
        """Manual override: reactivate a member immediately. Idempotent."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        member = self.get(member_id)
        decision = manual_unblock()
        if not self._members.set_compliance(
            member.member_id,
            status=decision.status,
            blocked_until=decision.blocked_until,
        ):
            raise ValidationError("Unblocking member failed")
        logger.info("Member %s (%s) unblocked manually", member.member_id, member.full_name)
