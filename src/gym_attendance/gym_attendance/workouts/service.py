from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import optional_non_negative_int, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..members.repository import MemberRepository
from ..notifications.service import NotificationDispatcher
from .model import Workout
from .repository import WorkoutRepository

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


class WorkoutService:
    """Use cases: admins write workout plans, members read their own."""

    def __init__(
        self,
        workouts: WorkoutRepository,
        members: MemberRepository,
        notifications: Optional[NotificationDispatcher] = None,
    ):
        self._workouts = workouts
        self._members = members
        self._notifications = notifications

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

    def _require_member(self, member_id) -> int:
        try:
            mid = int(member_id)
        except (TypeError, ValueError):
            raise ValidationError("Member is required")
        if not self._members.get_by_id(mid):
            raise NotFoundError("Member not found")
        return mid

    def get(self, workout_id: int) -> Workout:
        workout = self._workouts.get_by_id(int(workout_id))
        if not workout:
            raise NotFoundError("Workout not found")
        return workout

    def create_workout(
        self,
        *,
        current_role: Role,
        author_id: Optional[int],
        member_id,
        title: str,
        goal: Optional[str] = None,
        now: datetime | None = None,
    ) -> int:
        self._require_admin(current_role)
        title = require_non_empty(title, "Title")
        mid = self._require_member(member_id)

        workout_id = self._workouts.create(
            member_id=mid,
            author_id=author_id,
            title=title,
            goal=_clean(goal),
            created_at=now or now_local(),
        )
        logger.info("Workout %s created for member %s", workout_id, mid)
        if self._notifications:
            self._notifications.notify_workout_created(mid, title)
        return workout_id

    def update_workout(self, *, current_role: Role, workout_id: int, member_id, title: str, goal: Optional[str] = None) -> None:
        self._require_admin(current_role)
        title = require_non_empty(title, "Title")
        mid = self._require_member(member_id)
        self.get(workout_id)

        if not self._workouts.update(workout_id=int(workout_id), member_id=mid, title=title, goal=_clean(goal)):
            raise ValidationError("Updating workout failed")

    def delete_workout(self, *, current_role: Role, workout_id: int) -> None:
        self._require_admin(current_role)
        if not self._workouts.delete(int(workout_id)):
            raise NotFoundError("Workout not found")

    def add_exercise(
        self,
        *,
        current_role: Role,
        workout_id: int,
        name: str,
        sets=None,
        reps: Optional[str] = None,
        rest_seconds=None,
        notes: Optional[str] = None,
    ) -> int:
        self._require_admin(current_role)
        self.get(workout_id)
        return self._workouts.add_exercise(
            workout_id=int(workout_id),
            name=require_non_empty(name, "Exercise name"),
            sets=optional_non_negative_int(sets, "Sets"),
            reps=_clean(reps),
            rest_seconds=optional_non_negative_int(rest_seconds, "Rest seconds"),
            notes=_clean(notes),
        )

    def update_exercise(
        self,
        *,
        current_role: Role,
        exercise_id: int,
        name: str,
        sets=None,
        reps: Optional[str] = None,
        rest_seconds=None,
        notes: Optional[str] = None,
    ) -> None:
        self._require_admin(current_role)
        if not self._workouts.get_exercise(int(exercise_id)):
            raise NotFoundError("Exercise not found")

        ok = self._workouts.update_exercise(
            exercise_id=int(exercise_id),
            name=require_non_empty(name, "Exercise name"),
            sets=optional_non_negative_int(sets, "Sets"),
            reps=_clean(reps),
            rest_seconds=optional_non_negative_int(rest_seconds, "Rest seconds"),
            notes=_clean(notes),
        )
        if not ok:
            raise ValidationError("Updating exercise failed")

    def delete_exercise(self, *, current_role: Role, exercise_id: int) -> None:
        self._require_admin(current_role)
        if not self._workouts.delete_exercise(int(exercise_id)):
            raise NotFoundError("Exercise not found")

    def list_all(self, *, current_role: Role):
        self._require_admin(current_role)
        return self._workouts.list_all()

    def list_for_member(self, member_id: int):
        return self._workouts.list_for_member(int(member_id))
