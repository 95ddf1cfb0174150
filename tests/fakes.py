from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from src.gym_attendance.gym_attendance.attendance.model import QRCode, VisitRecord, VisitReportRow
from src.gym_attendance.gym_attendance.container import Container, wire_services
from src.gym_attendance.gym_attendance.core.enums import ComplianceStatus, LinkType
from src.gym_attendance.gym_attendance.members.model import Member
from src.gym_attendance.gym_attendance.workouts.model import Exercise, Workout


class InMemoryMembers:
    def __init__(self, members: Optional[list[Member]] = None):
        self.by_id: dict[int, Member] = {m.member_id: m for m in (members or [])}
        self._id = max(self.by_id, default=0)

    def add(self, full_name: str, expected_weekly_visits: int = 3, **kwargs) -> Member:
        self._id += 1
        member = Member(
            member_id=self._id,
            full_name=full_name,
            document=kwargs.pop("document", f"000.000.000-{self._id:02d}"),
            expected_weekly_visits=expected_weekly_visits,
            **kwargs,
        )
        self.by_id[member.member_id] = member
        return member

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self.by_id.get(member_id)

    def get_by_document(self, document: str) -> Optional[Member]:
        return next((m for m in self.by_id.values() if m.document == document), None)

    def list_all(self, *, status: Optional[ComplianceStatus] = None):
        items = [m for m in self.by_id.values() if status is None or m.compliance_status == status]
        return sorted(items, key=lambda m: m.full_name)

    def create(self, *, full_name, document, email, course, link_type: LinkType, expected_weekly_visits) -> int:
        return self.add(
            full_name,
            expected_weekly_visits,
            document=document,
            email=email,
            course=course,
            link_type=link_type,
        ).member_id

    def update_expected_weekly_visits(self, member_id: int, expected_weekly_visits: int) -> bool:
        if member_id not in self.by_id:
            return False
        self.by_id[member_id] = replace(self.by_id[member_id], expected_weekly_visits=expected_weekly_visits)
        return True

    def set_compliance(self, member_id: int, *, status: ComplianceStatus, blocked_until: Optional[datetime]) -> bool:
        if member_id not in self.by_id:
            return False
        self.by_id[member_id] = replace(self.by_id[member_id], compliance_status=status, blocked_until=blocked_until)
        return True

    def increment_lifetime_visits(self, member_id: int) -> bool:
        if member_id not in self.by_id:
            return False
        m = self.by_id[member_id]
        self.by_id[member_id] = replace(m, total_lifetime_visits=m.total_lifetime_visits + 1)
        return True


class InMemoryQRCodes:
    def __init__(self):
        self.codes: dict[int, QRCode] = {}
        self._id = 0

    def deactivate_all(self) -> int:
        active = [c for c in self.codes.values() if c.is_active]
        for c in active:
            self.codes[c.qr_code_id] = replace(c, is_active=False)
        return len(active)

    def create(self, *, code: str, created_at: datetime) -> int:
        self._id += 1
        self.codes[self._id] = QRCode(qr_code_id=self._id, code=code, is_active=True, created_at=created_at)
        return self._id

    def get_active_by_code(self, code: str) -> Optional[QRCode]:
        return next((c for c in self.codes.values() if c.code == code and c.is_active), None)

    def get_active(self) -> Optional[QRCode]:
        active = [c for c in self.codes.values() if c.is_active]
        return max(active, key=lambda c: c.qr_code_id, default=None)


class InMemoryVisits:
    def __init__(self, members: InMemoryMembers):
        self._members = members
        self.visits: list[VisitRecord] = []

    def add(self, member_id: int, *timestamps: datetime) -> None:
        for ts in timestamps:
            self._store(member_id, ts, None)

    def _store(self, member_id: int, timestamp: datetime, qr_code_id: Optional[int]) -> int:
        visit_id = len(self.visits) + 1
        self.visits.append(VisitRecord(visit_id=visit_id, member_id=member_id, timestamp=timestamp, qr_code_id=qr_code_id))
        return visit_id

    def record_visit(self, *, member_id: int, timestamp: datetime, qr_code_id: Optional[int]) -> int:
        # counter first: a failed increment leaves no visit behind, like the rolled-back transaction
        self._members.increment_lifetime_visits(member_id)
        return self._store(member_id, timestamp, qr_code_id)

    def get_recent_for_member(self, member_id: int, limit: int):
        items = [v for v in self.visits if v.member_id == member_id]
        items.sort(key=lambda v: v.timestamp, reverse=True)
        return items[:limit]

    def get_for_member_between(self, member_id: int, start: datetime, end: datetime):
        items = [v for v in self.visits if v.member_id == member_id and start <= v.timestamp <= end]
        return sorted(items, key=lambda v: v.timestamp)

    def get_report_rows(self, *, start=None, end=None, search=None):
        rows = []
        for v in self.visits:
            if start and v.timestamp < start:
                continue
            if end and v.timestamp > end:
                continue
            m = self._members.get_by_id(v.member_id)
            if search and search.lower() not in m.full_name.lower() and search not in m.document:
                continue
            rows.append(
                VisitReportRow(
                    visit_id=v.visit_id,
                    member_id=m.member_id,
                    full_name=m.full_name,
                    document=m.document,
                    email=m.email,
                    course=m.course,
                    link_type=m.link_type.value,
                    compliance_status=m.compliance_status.value,
                    timestamp=v.timestamp,
                )
            )
        rows.sort(key=lambda r: r.timestamp, reverse=True)
        return rows


class InMemoryWorkouts:
    def __init__(self):
        self.workouts: dict[int, Workout] = {}
        self.exercises: dict[int, Exercise] = {}
        self._wid = 0
        self._eid = 0

    def _with_exercises(self, w: Workout) -> Workout:
        items = tuple(e for e in sorted(self.exercises.values(), key=lambda e: e.exercise_id) if e.workout_id == w.workout_id)
        return replace(w, exercises=items)

    def create(self, *, member_id, author_id, title, goal, created_at) -> int:
        self._wid += 1
        self.workouts[self._wid] = Workout(
            workout_id=self._wid,
            member_id=member_id,
            author_id=author_id,
            title=title,
            goal=goal,
            created_at=created_at,
        )
        return self._wid

    def update(self, *, workout_id, member_id, title, goal) -> bool:
        if workout_id not in self.workouts:
            return False
        self.workouts[workout_id] = replace(self.workouts[workout_id], member_id=member_id, title=title, goal=goal)
        return True

    def delete(self, workout_id: int) -> bool:
        if self.workouts.pop(workout_id, None) is None:
            return False
        self.exercises = {k: e for k, e in self.exercises.items() if e.workout_id != workout_id}
        return True

    def get_by_id(self, workout_id: int) -> Optional[Workout]:
        w = self.workouts.get(workout_id)
        return self._with_exercises(w) if w else None

    def list_all(self):
        return [self._with_exercises(w) for w in sorted(self.workouts.values(), key=lambda w: w.created_at, reverse=True)]

    def list_for_member(self, member_id: int):
        return [w for w in self.list_all() if w.member_id == member_id]

    def add_exercise(self, *, workout_id, name, sets, reps, rest_seconds, notes) -> int:
        self._eid += 1
        self.exercises[self._eid] = Exercise(
            exercise_id=self._eid,
            workout_id=workout_id,
            name=name,
            sets=sets,
            reps=reps,
            rest_seconds=rest_seconds,
            notes=notes,
        )
        return self._eid

    def update_exercise(self, *, exercise_id, name, sets, reps, rest_seconds, notes) -> bool:
        if exercise_id not in self.exercises:
            return False
        self.exercises[exercise_id] = replace(
            self.exercises[exercise_id], name=name, sets=sets, reps=reps, rest_seconds=rest_seconds, notes=notes
        )
        return True

    def delete_exercise(self, exercise_id: int) -> bool:
        return self.exercises.pop(exercise_id, None) is not None

    def get_exercise(self, exercise_id: int) -> Optional[Exercise]:
        return self.exercises.get(exercise_id)


class RecordingPushSender:
    def __init__(self, fail_for: Optional[set[int]] = None):
        self.sent = []
        self._fail_for = fail_for or set()

    def send(self, message) -> None:
        if message.member_id in self._fail_for:
            raise RuntimeError("push endpoint gone")
        self.sent.append(message)


def in_memory_container(push_sender: Optional[RecordingPushSender] = None) -> Container:
    members = InMemoryMembers()
    return wire_services(
        members_repo=members,
        qr_codes_repo=InMemoryQRCodes(),
        visits_repo=InMemoryVisits(members),
        workouts_repo=InMemoryWorkouts(),
        push_sender=push_sender or RecordingPushSender(),
    )
