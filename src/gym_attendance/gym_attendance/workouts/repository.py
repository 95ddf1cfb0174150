from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Exercise, Workout


class WorkoutRepository(Protocol):
    def create(self, *, member_id: int, author_id: Optional[int], title: str, goal: Optional[str], created_at: datetime) -> int:
        raise NotImplementedError

    def update(self, *, workout_id: int, member_id: int, title: str, goal: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, workout_id: int) -> bool:
        """Delete a workout together with its exercises."""

        raise NotImplementedError

    def get_by_id(self, workout_id: int) -> Optional[Workout]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Workout]:
        raise NotImplementedError

    def list_for_member(self, member_id: int) -> Sequence[Workout]:
        raise NotImplementedError

    def add_exercise(
        self,
        *,
        workout_id: int,
        name: str,
        sets: Optional[int],
        reps: Optional[str],
        rest_seconds: Optional[int],
        notes: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update_exercise(
        self,
        *,
        exercise_id: int,
        name: str,
        sets: Optional[int],
        reps: Optional[str],
        rest_seconds: Optional[int],
        notes: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_exercise(self, exercise_id: int) -> bool:
        raise NotImplementedError

    def get_exercise(self, exercise_id: int) -> Optional[Exercise]:
        raise NotImplementedError
