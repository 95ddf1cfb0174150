from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Exercise:
    exercise_id: int
    workout_id: int
    name: str
    sets: Optional[int] = None
    reps: Optional[str] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Workout:
    """Domain entity: a workout plan assigned to one member."""

    workout_id: int
    member_id: int
    author_id: Optional[int]
    title: str
    goal: Optional[str]
    created_at: datetime
    exercises: tuple[Exercise, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "workout_id": self.workout_id,
            "member_id": self.member_id,
            "author_id": self.author_id,
            "title": self.title,
            "goal": self.goal,
            "created_at": self.created_at.isoformat(),
            "exercises": [
                {
                    "exercise_id": e.exercise_id,
                    "name": e.name,
                    "sets": e.sets,
                    "reps": e.reps,
                    "rest_seconds": e.rest_seconds,
                    "notes": e.notes,
                }
                for e in self.exercises
            ],
        }
