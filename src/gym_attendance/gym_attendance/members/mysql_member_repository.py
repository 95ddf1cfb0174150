from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ComplianceStatus, LinkType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Member
from .repository import MemberRepository

_COLUMNS = """
    member_id, full_name, document, email, course, link_type,
    expected_weekly_visits, total_lifetime_visits, compliance_status, blocked_until
"""


def _to_member(r: dict) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        full_name=r["full_name"],
        document=r["document"],
        email=r.get("email"),
        course=r.get("course"),
        link_type=LinkType(r["link_type"]),
        expected_weekly_visits=int(r["expected_weekly_visits"]),
        total_lifetime_visits=int(r.get("total_lifetime_visits") or 0),
        compliance_status=ComplianceStatus(r["compliance_status"]),
        blocked_until=r.get("blocked_until"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (int(member_id),))
            row = fetchone(cur)
            return _to_member(row) if row else None

    def get_by_document(self, document: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE document=%s", (document,))
            row = fetchone(cur)
            return _to_member(row) if row else None

    def list_all(self, *, status: Optional[ComplianceStatus] = None) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            if status is None:
                cur.execute(f"SELECT {_COLUMNS} FROM members ORDER BY full_name ASC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM members WHERE compliance_status=%s ORDER BY full_name ASC",
                    (status.value,),
                )
            return [_to_member(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members(full_name, document, email, course, link_type, expected_weekly_visits, compliance_status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    full_name,
                    document,
                    email,
                    course,
                    link_type.value,
                    int(expected_weekly_visits),
                    ComplianceStatus.ACTIVE.value,
                ),
            )
            return int(cur.lastrowid)

    def update_expected_weekly_visits(self, member_id: int, expected_weekly_visits: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET expected_weekly_visits=%s WHERE member_id=%s",
                (int(expected_weekly_visits), int(member_id)),
            )
            return cur.rowcount > 0

    def set_compliance(
        self,
        member_id: int,
        *,
        status: ComplianceStatus,
        blocked_until: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET compliance_status=%s, blocked_until=%s WHERE member_id=%s",
                (status.value, blocked_until, int(member_id)),
            )
            return cur.rowcount > 0
