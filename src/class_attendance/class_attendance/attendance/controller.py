from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import month_name, now_local
from ..common.http import arg_int, body, date_value, json_endpoint, json_ok, required_int, year_month_args
from ..container import Container
from ..sessions.generator import month_grid


def _record_json(record):
    return {
        "student_id": record.student_id,
        "category_id": record.category_id,
        "class_date": record.class_date,
        "attended": record.attended,
        "justified": record.justified,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/categories/<int:category_id>/sheet", methods=["GET"], endpoint="attendance_sheet")
    @json_endpoint
    def attendance_sheet(category_id: int):
        year, month = year_month_args()
        raw_date = request.args.get("date")
        if raw_date:
            class_date = date_value(raw_date)
        else:
            class_date = service.default_date(category_id, year, month, now_local().date())
            if class_date is None:
                # No sessions this month (unknown weekday): nothing to mark.
                return json_ok({"rows": [], "session_dates": []}, year=year, month=month)

        sheet = service.session_sheet(
            category_id,
            year,
            month,
            class_date,
            only_active=request.args.get("all") not in {"1", "true"},
            search=request.args.get("q", ""),
        )
        return json_ok(
            {
                "category": sheet.category,
                "class_date": sheet.class_date,
                "session_dates": sheet.session_dates,
                "missing_count": sheet.missing_count,
                "rows": [
                    {
                        "student_id": r.student_id,
                        "name": r.name,
                        "attended": r.attended,
                        "justified": r.justified,
                        "missing": r.missing,
                    }
                    for r in sheet.rows
                ],
            },
            year=year,
            month=month,
            month_name=month_name(month),
        )

    @app.route("/api/attendance/toggle", methods=["POST"], endpoint="attendance_toggle")
    @json_endpoint
    def attendance_toggle():
        data = body()
        record = service.toggle(
            required_int(data, "student_id"),
            required_int(data, "category_id"),
            date_value(data.get("date")),
        )
        return json_ok(_record_json(record))

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @json_endpoint
    def attendance_mark():
        data = body()
        student_id, category_id = required_int(data, "student_id"), required_int(data, "category_id")
        class_date = date_value(data.get("date"))
        if bool(data.get("attended")):
            record = service.mark_present(student_id, category_id, class_date)
        else:
            record = service.mark_absent(student_id, category_id, class_date)
        return json_ok(_record_json(record))

    @app.route("/api/attendance/justify", methods=["POST"], endpoint="attendance_justify")
    @json_endpoint
    def attendance_justify():
        data = body()
        record = service.set_justified(
            required_int(data, "student_id"),
            required_int(data, "category_id"),
            date_value(data.get("date")),
            bool(data.get("justified", True)),
        )
        return json_ok(_record_json(record))

    @app.route("/api/students/<int:student_id>/attendance", methods=["GET"], endpoint="student_month_detail")
    @json_endpoint
    def student_month_detail(student_id: int):
        year, month = year_month_args()
        category_id = arg_int("category_id")
        if category_id is None:
            category_id = container.student_service.get(student_id).category_id
        if category_id is None:
            return json_ok(message="El alumno no tiene categoría")

        detail = service.student_month_detail(student_id, category_id, year, month)
        return json_ok(
            {
                "student": detail.student,
                "category": detail.category,
                "year": detail.year,
                "month": detail.month,
                "month_name": month_name(detail.month),
                "attended_count": detail.summary.attended_count,
                "absent_count": detail.summary.absent_count,
                "records": [_record_json(r) for r in detail.records],
                "session_dates": service.session_dates(category_id, year, month),
                "calendar": month_grid(year, month),
                "total_paid": round(detail.total_paid, 2),
                "classes_covered": detail.classes_covered,
            }
        )
