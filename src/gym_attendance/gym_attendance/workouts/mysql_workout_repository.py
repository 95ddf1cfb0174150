from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Exercise, Workout
from .repository import WorkoutRepository


def _to_exercise(r: dict) -> Exercise:
    return Exercise(
        exercise_id=int(r["exercise_id"]),
        workout_id=int(r["workout_id"]),
        name=r["name"],
        sets=r.get("sets"),
        reps=r.get("reps"),
        rest_seconds=r.get("rest_seconds"),
        notes=r.get("notes"),
    )


class MySQLWorkoutRepository(WorkoutRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, where: str, params: tuple) -> list[Workout]:
        cur.execute(
            f"""
            SELECT workout_id, member_id, author_id, title, goal, created_at
            FROM workouts
            WHERE {where}
            ORDER BY created_at DESC
            """,
            params,
        )
        rows = fetchall(cur)
        if not rows:
            return []

        ids = [int(r["workout_id"]) for r in rows]
        placeholders = ",".join(["%s"] * len(ids))
        cur.execute(
            f"""
            SELECT exercise_id, workout_id, name, sets, reps, rest_seconds, notes
            FROM exercises
            WHERE workout_id IN ({placeholders})
            ORDER BY exercise_id ASC
            """,
            tuple(ids),
        )
        by_workout: dict[int, list[Exercise]] = {}
        for r in fetchall(cur):
            ex = _to_exercise(r)
            by_workout.setdefault(ex.workout_id, []).append(ex)

        return [
            Workout(
                workout_id=int(r["workout_id"]),
                member_id=int(r["member_id"]),
                author_id=r.get("author_id"),
                title=r["title"],
                goal=r.get("goal"),
                created_at=r["created_at"],
                exercises=tuple(by_workout.get(int(r["workout_id"]), [])),
            )
            for r in rows
        ]

    def create(self, *, member_id: int, author_id: Optional[int], title: str, goal: Optional[str], created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO workouts(member_id, author_id, title, goal, created_at) VALUES(%s,%s,%s,%s,%s)",
                (int(member_id), author_id, title, goal, created_at),
            )
            return int(cur.lastrowid)

    def update(self, *, workout_id: int, member_id: int, title: str, goal: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE workouts SET member_id=%s, title=%s, goal=%s WHERE workout_id=%s",
                (int(member_id), title, goal, int(workout_id)),
            )
            return cur.rowcount > 0

    def delete(self, workout_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM exercises WHERE workout_id=%s", (int(workout_id),))
            cur.execute("DELETE FROM workouts WHERE workout_id=%s", (int(workout_id),))
            return cur.rowcount > 0

    def get_by_id(self, workout_id: int) -> Optional[Workout]:
        with db_cursor(self._conn_factory) as (_, cur):
            items = self._load(cur, "workout_id=%s", (int(workout_id),))
            return items[0] if items else None

    def list_all(self) -> Sequence[Workout]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, "1=1", ())

    def list_for_member(self, member_id: int) -> Sequence[Workout]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, "member_id=%s", (int(member_id),))

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO exercises(workout_id, name, sets, reps, rest_seconds, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(workout_id), name, sets, reps, rest_seconds, notes),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE exercises
                SET name=%s, sets=%s, reps=%s, rest_seconds=%s, notes=%s
                WHERE exercise_id=%s
                """,
                (name, sets, reps, rest_seconds, notes, int(exercise_id)),
            )
            return cur.rowcount > 0

    def delete_exercise(self, exercise_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM exercises WHERE exercise_id=%s", (int(exercise_id),))
            return cur.rowcount > 0

    def get_exercise(self, exercise_id: int) -> Optional[Exercise]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT exercise_id, workout_id, name, sets, reps, rest_seconds, notes
                FROM exercises
                WHERE exercise_id=%s
                """,
                (int(exercise_id),),
            )
            r = fetchone(cur)
            return _to_exercise(r) if r else None
