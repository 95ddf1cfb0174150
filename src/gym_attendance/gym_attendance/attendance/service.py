from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import BinaryIO, Optional

from ..common.datetime_utils import end_of_day, now_local, start_of_day
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_QR_ROTATION_SECONDS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InvalidQRCodeError, NotFoundError, ValidationError
from ..members.repository import MemberRepository
from .qr import decode_qr_image, generate_code
from .repository import QRCodeRepository, VisitRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedCode:
    qr_code_id: int
    code: str
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "qr_code_id": self.qr_code_id,
            "code": self.code,
            "expires_at": self.expires_at.isoformat(),
        }


class AttendanceService:
    def __init__(
        self,
        qr_codes: QRCodeRepository,
        visits: VisitRepository,
        members: MemberRepository,
        *,
        rotation_seconds: int = DEFAULT_QR_ROTATION_SECONDS,
    ):
        self._qr_codes = qr_codes
        self._visits = visits
        self._members = members
        self._rotation_seconds = int(rotation_seconds)

    def rotate_qr_code(self, *, current_role: Role, now: datetime | None = None) -> IssuedCode:
        """Deactivate every active code and issue a fresh one."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        now = now or now_local()
        self._qr_codes.deactivate_all()
        code = generate_code(now)
        qr_code_id = self._qr_codes.create(code=code, created_at=now)
        logger.debug("Issued QR code %s", code)
        return IssuedCode(
            qr_code_id=qr_code_id,
            code=code,
            expires_at=now + timedelta(seconds=self._rotation_seconds),
        )

    def check_in(self, member_id: int, code: str, *, now: datetime | None = None) -> int:
        now = now or now_local()
        code = (code or "").strip()
        if not code:
            raise ValidationError("QR code is required")

        qr_code = self._qr_codes.get_active_by_code(code)
        if not qr_code:
            raise InvalidQRCodeError("QR code is invalid or expired")

        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Member not found")

        visit_id = self._visits.record_visit(member_id=member.member_id, timestamp=now, qr_code_id=qr_code.qr_code_id)
        logger.info("Check-in recorded for member %s (%s)", member.member_id, member.full_name)
        return visit_id

    def register_manual_visit(self, *, current_role: Role, member_id: int, now: datetime | None = None) -> int:
        """Admin records a visit for a member at the front desk.

        The visit is linked to the code currently on screen, if any.
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        now = now or now_local()
        try:
            mid = int(member_id)
        except (TypeError, ValueError):
            raise ValidationError("Member is required")
        member = self._members.get_by_id(mid)
        if not member:
            raise NotFoundError("Member not found")

        active = self._qr_codes.get_active()
        visit_id = self._visits.record_visit(
            member_id=member.member_id,
            timestamp=now,
            qr_code_id=active.qr_code_id if active else None,
        )
        logger.info("Manual visit recorded for member %s (%s)", member.member_id, member.full_name)
        return visit_id

    def check_in_from_image(self, member_id: int, stream: BinaryIO, *, now: datetime | None = None) -> int:
        return self.check_in(member_id, decode_qr_image(stream), now=now)

    def history(self, member_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT):
        return self._visits.get_recent_for_member(int(member_id), int(limit))

    def visits_between(self, member_id: int, start: datetime, end: datetime):
        return self._visits.get_for_member_between(int(member_id), start, end)

    def list_records(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        search: Optional[str] = None,
    ):
        if start and end and end < start:
            raise ValidationError("End date is before start date")
        return self._visits.get_report_rows(
            start=start_of_day(start) if start else None,
            end=end_of_day(end) if end else None,
            search=(search or "").strip() or None,
        )

    def _to_ui(self, v) -> dict:
        return {
            "visit_id": v.visit_id,
            "date": v.timestamp.strftime("%Y-%m-%d"),
            "time": v.timestamp.strftime("%H:%M"),
        }

    def get_history_ui(self, member_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        return [self._to_ui(v) for v in self.history(member_id, limit=limit)]
