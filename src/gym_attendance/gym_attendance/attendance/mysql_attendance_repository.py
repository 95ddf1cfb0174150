from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import QRCode, VisitRecord, VisitReportRow
from .repository import QRCodeRepository, VisitRepository


def _to_qr_code(r: dict) -> QRCode:
    return QRCode(
        qr_code_id=int(r["qr_code_id"]),
        code=r["code"],
        is_active=bool(r["is_active"]),
        created_at=r["created_at"],
    )


class MySQLQRCodeRepository(QRCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def deactivate_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE qr_codes SET is_active=0 WHERE is_active=1")
            return int(cur.rowcount)

    def create(self, *, code: str, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO qr_codes(code, is_active, created_at) VALUES(%s, 1, %s)",
                (code, created_at),
            )
            return int(cur.lastrowid)

    def get_active_by_code(self, code: str) -> Optional[QRCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT qr_code_id, code, is_active, created_at
                FROM qr_codes
                WHERE code=%s AND is_active=1
                """,
                (code,),
            )
            r = fetchone(cur)
            return _to_qr_code(r) if r else None

    def get_active(self) -> Optional[QRCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT qr_code_id, code, is_active, created_at
                FROM qr_codes
                WHERE is_active=1
                ORDER BY created_at DESC, qr_code_id DESC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            return _to_qr_code(r) if r else None


class MySQLVisitRepository(VisitRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_visit(r: dict) -> VisitRecord:
        return VisitRecord(
            visit_id=int(r["visit_id"]),
            member_id=int(r["member_id"]),
            timestamp=r["visited_at"],
            qr_code_id=r.get("qr_code_id"),
        )

    def record_visit(self, *, member_id: int, timestamp: datetime, qr_code_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO visits(member_id, visited_at, qr_code_id) VALUES(%s,%s,%s)",
                (int(member_id), timestamp, qr_code_id),
            )
            visit_id = int(cur.lastrowid)
            cur.execute(
                "UPDATE members SET total_lifetime_visits = total_lifetime_visits + 1 WHERE member_id=%s",
                (int(member_id),),
            )
            return visit_id

    def get_recent_for_member(self, member_id: int, limit: int) -> Sequence[VisitRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT visit_id, member_id, visited_at, qr_code_id
                FROM visits
                WHERE member_id=%s
                ORDER BY visited_at DESC
                LIMIT %s
                """,
                (int(member_id), int(limit)),
            )
            return [self._to_visit(r) for r in fetchall(cur)]

    def get_for_member_between(self, member_id: int, start: datetime, end: datetime) -> Sequence[VisitRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT visit_id, member_id, visited_at, qr_code_id
                FROM visits
                WHERE member_id=%s AND visited_at BETWEEN %s AND %s
                ORDER BY visited_at ASC
                """,
                (int(member_id), start, end),
            )
            return [self._to_visit(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> Sequence[VisitReportRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if start is not None:
            clauses.append("v.visited_at >= %s")
            params.append(start)
        if end is not None:
            clauses.append("v.visited_at <= %s")
            params.append(end)
        if search:
            clauses.append("(LOWER(m.full_name) LIKE %s OR m.document LIKE %s)")
            params.append(f"%{search.lower()}%")
            params.append(f"%{search}%")

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    v.visit_id, v.member_id, v.visited_at,
                    m.full_name, m.document, m.email, m.course, m.link_type, m.compliance_status
                FROM visits v
                JOIN members m ON m.member_id = v.member_id
                WHERE {where}
                ORDER BY v.visited_at DESC
                """,
                tuple(params),
            )
            return [
                VisitReportRow(
                    visit_id=int(r["visit_id"]),
                    member_id=int(r["member_id"]),
                    full_name=r["full_name"],
                    document=r["document"],
                    email=r.get("email"),
                    course=r.get("course"),
                    link_type=r["link_type"],
                    compliance_status=r["compliance_status"],
                    timestamp=r["visited_at"],
                )
                for r in fetchall(cur)
            ]
