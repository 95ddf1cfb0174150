from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import QRCode, VisitRecord, VisitReportRow


class QRCodeRepository(Protocol):
    def deactivate_all(self) -> int:
        raise NotImplementedError

    def create(self, *, code: str, created_at: datetime) -> int:
        raise NotImplementedError

    def get_active_by_code(self, code: str) -> Optional[QRCode]:
        raise NotImplementedError

    def get_active(self) -> Optional[QRCode]:
        """Most recently issued code that is still active."""

        raise NotImplementedError


class VisitRepository(Protocol):
    def record_visit(self, *, member_id: int, timestamp: datetime, qr_code_id: Optional[int]) -> int:
        """Insert a visit and bump the member's ``total_lifetime_visits`` in one transaction."""

        raise NotImplementedError

    def get_recent_for_member(self, member_id: int, limit: int) -> Sequence[VisitRecord]:
        raise NotImplementedError

    def get_for_member_between(self, member_id: int, start: datetime, end: datetime) -> Sequence[VisitRecord]:
        """Visits with ``start <= timestamp <= end``."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> Sequence[VisitReportRow]:
        raise NotImplementedError
