from datetime import datetime, timedelta

from src.gym_attendance.gym_attendance.compliance.evaluator import ComplianceResult
from src.gym_attendance.gym_attendance.compliance.service import ComplianceService
from src.gym_attendance.gym_attendance.core.enums import ComplianceStatus, ComplianceTier
from src.gym_attendance.gym_attendance.notifications.sender import LoggingPushSender
from src.gym_attendance.gym_attendance.notifications.service import NotificationDispatcher
from src.gym_attendance.gym_attendance.notifications.templates import blocking_risk, low_attendance_warning
from tests.fakes import InMemoryMembers, InMemoryVisits, RecordingPushSender


def _june(n):
    return [datetime(2025, 6, 1, 7, 0) + timedelta(days=i) for i in range(n)]


def _setup(sender):
    members = InMemoryMembers()
    visits = InMemoryVisits(members)
    ana = members.add("Ana", 3)
    bruno = members.add("Bruno", 2)
    carla = members.add("Carla", 2)
    dani = members.add("Dani", 1)
    edu = members.add("Edu", 3, compliance_status=ComplianceStatus.BLOCKED, blocked_until=datetime(2025, 7, 1))
    visits.add(ana.member_id, *_june(11))  # 11/15 -> warning
    visits.add(bruno.member_id, *_june(3))  # 3/10 -> blocked
    visits.add(dani.member_id, *_june(5))  # 5/5 -> compliant
    visits.add(edu.member_id, *_june(1))
    dispatcher = NotificationDispatcher(members, ComplianceService(members, visits), sender)
    return dispatcher, {"ana": ana, "bruno": bruno, "carla": carla, "dani": dani, "edu": edu}


def test_low_attendance_messages_by_tier(now):
    sender = RecordingPushSender()
    dispatcher, m = _setup(sender)

    summary = dispatcher.notify_low_attendance(now=now)

    assert summary.notified == ["Ana", "Bruno"]
    assert summary.failed == []
    by_member = {msg.member_id: msg for msg in sender.sent}
    assert by_member[m["ana"].member_id].data["type"] == "low_attendance"
    assert "73%" in by_member[m["ana"].member_id].body
    assert by_member[m["bruno"].member_id].data["type"] == "blocking_risk"
    assert "30%" in by_member[m["bruno"].member_id].body


def test_members_without_visits_or_already_blocked_are_not_messaged(now):
    sender = RecordingPushSender()
    dispatcher, m = _setup(sender)

    dispatcher.notify_low_attendance(now=now)

    recipients = {msg.member_id for msg in sender.sent}
    assert m["carla"].member_id not in recipients
    assert m["dani"].member_id not in recipients
    assert m["edu"].member_id not in recipients


def test_push_failure_for_one_member_does_not_stop_the_rest(now):
    sender = RecordingPushSender(fail_for={2})
    dispatcher, _ = _setup(sender)

    summary = dispatcher.notify_low_attendance(now=now)

    assert summary.notified == ["Ana"]
    assert summary.failed == ["Bruno"]
    assert summary.to_dict() == {"notified": 1, "members": ["Ana"], "failed": ["Bruno"]}


def test_workout_created_message(now):
    sender = RecordingPushSender()
    dispatcher, m = _setup(sender)

    dispatcher.notify_workout_created(m["ana"].member_id, "Leg day")

    assert sender.sent[0].title == "New workout plan"
    assert sender.sent[0].data == {"type": "workout_created", "url": "/workouts"}


def test_workout_notification_failure_is_swallowed(now):
    sender = RecordingPushSender(fail_for={1})
    dispatcher, _ = _setup(sender)

    dispatcher.notify_workout_created(1, "Leg day")

    assert sender.sent == []


def test_templates_round_half_up():
    warning = low_attendance_warning(1, ComplianceResult(29, 40, 72.5, ComplianceTier.WARNING))
    risk = blocking_risk(1, ComplianceResult(5, 10, 50.0, ComplianceTier.BLOCKED))

    assert "73%" in warning.body
    assert warning.title != risk.title
    assert "50%" in risk.body


def test_logging_sender_logs_payload(caplog):
    with caplog.at_level("INFO"):
        LoggingPushSender().send(low_attendance_warning(7, ComplianceResult(11, 15, 73.3, ComplianceTier.WARNING)))

    assert "member 7" in caplog.text
