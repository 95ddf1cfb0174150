from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLQRCodeRepository, MySQLVisitRepository
from .attendance.repository import QRCodeRepository, VisitRepository
from .attendance.service import AttendanceService
from .compliance.service import ComplianceService
from .core.constants import DEFAULT_QR_ROTATION_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .notifications.sender import LoggingPushSender, PushSender
from .notifications.service import NotificationDispatcher
from .reports.service import ReportService
from .workouts.mysql_workout_repository import MySQLWorkoutRepository
from .workouts.repository import WorkoutRepository
from .workouts.service import WorkoutService


@dataclass(frozen=True)
class Container:
    members_repo: MemberRepository
    qr_codes_repo: QRCodeRepository
    visits_repo: VisitRepository
    workouts_repo: WorkoutRepository

    member_service: MemberService
    attendance_service: AttendanceService
    compliance_service: ComplianceService
    notification_dispatcher: NotificationDispatcher
    workout_service: WorkoutService
    report_service: ReportService


def wire_services(
    *,
    members_repo: MemberRepository,
    qr_codes_repo: QRCodeRepository,
    visits_repo: VisitRepository,
    workouts_repo: WorkoutRepository,
    push_sender: Optional[PushSender] = None,
    qr_rotation_seconds: int = DEFAULT_QR_ROTATION_SECONDS,
) -> Container:
    """Build the service graph over any repository implementation."""
    compliance_service = ComplianceService(members_repo, visits_repo)
    notification_dispatcher = NotificationDispatcher(members_repo, compliance_service, push_sender or LoggingPushSender())

    return Container(
        members_repo=members_repo,
        qr_codes_repo=qr_codes_repo,
        visits_repo=visits_repo,
        workouts_repo=workouts_repo,
        member_service=MemberService(members_repo),
        attendance_service=AttendanceService(
            qr_codes_repo,
            visits_repo,
            members_repo,
            rotation_seconds=qr_rotation_seconds,
        ),
        compliance_service=compliance_service,
        notification_dispatcher=notification_dispatcher,
        workout_service=WorkoutService(workouts_repo, members_repo, notification_dispatcher),
        report_service=ReportService(members_repo, visits_repo, compliance_service),
    )


def build_container(*, db_config: dict, qr_rotation_seconds: int = DEFAULT_QR_ROTATION_SECONDS) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_services(
        members_repo=MySQLMemberRepository(conn),
        qr_codes_repo=MySQLQRCodeRepository(conn),
        visits_repo=MySQLVisitRepository(conn),
        workouts_repo=MySQLWorkoutRepository(conn),
        qr_rotation_seconds=qr_rotation_seconds,
    )
