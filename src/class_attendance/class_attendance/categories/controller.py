from __future__ import annotations

from flask import Flask

from ..common.http import body, json_endpoint, json_ok, year_month_args
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/categories", methods=["GET"], endpoint="list_categories")
    @json_endpoint
    def list_categories():
        return json_ok(container.category_service.list_ordered())

    @app.route("/api/categories", methods=["POST"], endpoint="create_category")
    @json_endpoint
    def create_category():
        data = body()
        category_id = container.category_service.create(
            data.get("name", ""),
            icon=data.get("icon"),
            order_index=data.get("order_index"),
        )
        return json_ok(container.category_service.get(category_id), status=201)

    @app.route("/api/categories/<int:category_id>", methods=["PATCH"], endpoint="update_category")
    @json_endpoint
    def update_category(category_id: int):
        data = body()
        category = container.category_service.get(category_id)
        if "name" in data:
            category = container.category_service.rename(category_id, data["name"])
        if data.get("weekday") is not None:
            category = container.category_service.set_weekday(category_id, data["weekday"])
        return json_ok(category)

    @app.route("/api/categories/<int:category_id>", methods=["DELETE"], endpoint="delete_category")
    @json_endpoint
    def delete_category(category_id: int):
        container.category_service.delete(category_id)
        return json_ok(message="Categoría eliminada")

    @app.route("/api/categories/<int:category_id>/sessions", methods=["GET"], endpoint="category_sessions")
    @json_endpoint
    def category_sessions(category_id: int):
        year, month = year_month_args()
        return json_ok(container.attendance_service.session_dates(category_id, year, month), year=year, month=month)

    @app.route("/api/categories/migrate-weekdays", methods=["POST"], endpoint="migrate_category_weekdays")
    @json_endpoint
    def migrate_category_weekdays():
        unresolved = container.category_service.migrate_weekdays()
        return json_ok(unresolved=[c.name for c in unresolved])
