from __future__ import annotations

from flask import Flask, request

from ..common.http import arg_int, body, json_endpoint, json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @json_endpoint
    def list_students():
        category_id = arg_int("category_id")
        if category_id is None:
            return json_ok(list(container.students_repo.list_all()))

        category = container.category_service.get(category_id)
        only_active = request.args.get("all") not in {"1", "true"}
        roster = container.student_service.roster(category, only_active=only_active, search=request.args.get("q", ""))
        return json_ok(roster)

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    @json_endpoint
    def get_student(student_id: int):
        return json_ok(container.student_service.get(student_id))

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @json_endpoint
    def create_student():
        data = body()
        student_id = container.student_service.create(
            name=data.get("name", ""),
            email=data.get("email"),
            phone=data.get("phone"),
            category_id=data.get("category_id"),
        )
        return json_ok(container.student_service.get(student_id), status=201)

    @app.route("/api/students/<int:student_id>", methods=["PATCH"], endpoint="update_student")
    @json_endpoint
    def update_student(student_id: int):
        data = body()
        if "is_active" in data:
            container.student_service.set_active(student_id, is_active=bool(data["is_active"]))
        student = container.student_service.update(
            student_id,
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            category_id=data.get("category_id"),
        )
        return json_ok(student)

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @json_endpoint
    def delete_student(student_id: int):
        container.student_service.delete(student_id)
        return json_ok(message="Alumno eliminado")
