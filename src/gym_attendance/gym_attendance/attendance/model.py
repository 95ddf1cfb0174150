from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class QRCode:
    """Domain entity: a check-in code shown on the gym screen."""

    qr_code_id: int
    code: str
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class VisitRecord:
    """Domain entity: one check-in. Immutable once created."""

    visit_id: int
    member_id: int
    timestamp: datetime
    qr_code_id: Optional[int] = None


@dataclass(frozen=True)
class VisitReportRow:
    """Read-model for the admin records view and exports."""

    visit_id: int
    member_id: int
    full_name: str
    document: str
    email: Optional[str]
    course: Optional[str]
    link_type: str
    compliance_status: str
    timestamp: datetime
