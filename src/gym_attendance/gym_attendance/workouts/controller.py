from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_role, current_user_id, json_body, json_errors, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.workout_service

    @app.route("/api/admin/workouts", methods=["GET"], endpoint="admin_workouts")
    @admin_required
    @json_errors
    def admin_workouts():
        workouts = svc.list_all(current_role=current_role())
        return jsonify({"success": True, "workouts": [w.to_dict() for w in workouts]})

    @app.route("/api/admin/workouts", methods=["POST"], endpoint="admin_create_workout")
    @admin_required
    @json_errors
    def admin_create_workout():
        data = json_body()
        workout_id = svc.create_workout(
            current_role=current_role(),
            author_id=current_user_id(),
            member_id=data.get("member_id"),
            title=data.get("title", ""),
            goal=data.get("goal"),
        )
        return jsonify({"success": True, "workout_id": workout_id}), 201

    @app.route("/api/admin/workouts/<int:workout_id>", methods=["PUT"], endpoint="admin_update_workout")
    @admin_required
    @json_errors
    def admin_update_workout(workout_id: int):
        data = json_body()
        svc.update_workout(
            current_role=current_role(),
            workout_id=workout_id,
            member_id=data.get("member_id"),
            title=data.get("title", ""),
            goal=data.get("goal"),
        )
        return jsonify({"success": True})

    @app.route("/api/admin/workouts/<int:workout_id>", methods=["DELETE"], endpoint="admin_delete_workout")
    @admin_required
    @json_errors
    def admin_delete_workout(workout_id: int):
        svc.delete_workout(current_role=current_role(), workout_id=workout_id)
        return jsonify({"success": True})

    @app.route("/api/admin/workouts/<int:workout_id>/exercises", methods=["POST"], endpoint="admin_add_exercise")
    @admin_required
    @json_errors
    def admin_add_exercise(workout_id: int):
        data = json_body()
        exercise_id = svc.add_exercise(
            current_role=current_role(),
            workout_id=workout_id,
            name=data.get("name", ""),
            sets=data.get("sets"),
            reps=data.get("reps"),
            rest_seconds=data.get("rest_seconds"),
            notes=data.get("notes"),
        )
        return jsonify({"success": True, "exercise_id": exercise_id}), 201

    @app.route("/api/admin/exercises/<int:exercise_id>", methods=["PUT"], endpoint="admin_update_exercise")
    @admin_required
    @json_errors
    def admin_update_exercise(exercise_id: int):
        data = json_body()
        svc.update_exercise(
            current_role=current_role(),
            exercise_id=exercise_id,
            name=data.get("name", ""),
            sets=data.get("sets"),
            reps=data.get("reps"),
            rest_seconds=data.get("rest_seconds"),
            notes=data.get("notes"),
        )
        return jsonify({"success": True})

    @app.route("/api/admin/exercises/<int:exercise_id>", methods=["DELETE"], endpoint="admin_delete_exercise")
    @admin_required
    @json_errors
    def admin_delete_exercise(exercise_id: int):
        svc.delete_exercise(current_role=current_role(), exercise_id=exercise_id)
        return jsonify({"success": True})

    @app.route("/api/me/workouts", endpoint="me_workouts")
    @login_required
    @json_errors
    def me_workouts():
        workouts = svc.list_for_member(current_user_id())
        return jsonify({"success": True, "workouts": [w.to_dict() for w in workouts]})
