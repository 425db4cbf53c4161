from __future__ import annotations

from flask import Flask, request

from ..common.http import body, json_endpoint, json_error, json_ok, required_int, year_month_args
from ..container import Container
from ..core.constants import ALL_CATEGORIES
from ..core.enums import PaymentSourceFilter
from ..core.exceptions import ValidationError
from .export import payments_to_csv, payments_to_xlsx

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    service = container.payment_service

    def _filtered():
        year, month = year_month_args()
        category = request.args.get("category") or ALL_CATEGORIES
        try:
            source = PaymentSourceFilter(request.args.get("source") or PaymentSourceFilter.ALL.value)
        except ValueError:
            raise ValidationError("Origen de pago no válido") from None
        return year, month, service.history(month=month, year=year, category=category, source=source)

    def _attachment(content: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            content,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/payments", methods=["GET"], endpoint="payment_history")
    @json_endpoint
    def payment_history():
        year, month, payments = _filtered()
        totals = service.summary(payments)
        return json_ok(
            service.history_rows(payments),
            year=year,
            month=month,
            totals={"card": totals.card, "cash": totals.cash, "combined": totals.combined},
        )

    @app.route("/api/payments.csv", methods=["GET"], endpoint="payment_history_csv")
    @json_endpoint
    def payment_history_csv():
        year, month, payments = _filtered()
        return _attachment(
            payments_to_csv(service.history_rows(payments)),
            mimetype="text/csv",
            filename=f"pagos_{year}{month:02d}.csv",
        )

    @app.route("/api/payments.xlsx", methods=["GET"], endpoint="payment_history_xlsx")
    @json_endpoint
    def payment_history_xlsx():
        year, month, payments = _filtered()
        return _attachment(
            payments_to_xlsx(service.history_rows(payments)),
            mimetype=XLSX_MIMETYPE,
            filename=f"pagos_{year}{month:02d}.xlsx",
        )

    @app.route("/api/payments/overview", methods=["GET"], endpoint="payment_overview")
    @json_endpoint
    def payment_overview():
        year, month = year_month_args()
        totals = service.summary(service.history(month=month, year=year))
        return json_ok(
            service.category_overview(month=month, year=year),
            year=year,
            month=month,
            totals={"card": totals.card, "cash": totals.cash, "combined": totals.combined},
        )

    @app.route("/api/payments/cash", methods=["POST"], endpoint="register_cash_payment")
    @json_endpoint
    def register_cash_payment():
        data = body()
        payment = service.record_cash_payment(
            required_int(data, "student_id"),
            str(data.get("amount", "")),
            data.get("concept", ""),
        )
        return json_ok(payment, status=201, message="Pago registrado")

    @app.route("/api/payments/card", methods=["POST"], endpoint="request_card_payment")
    @json_endpoint
    def request_card_payment():
        if container.payment_gateway is None:
            return json_error("Pasarela de pago no configurada", 503)
        data = body()
        url, payment = service.request_card_payment(
            required_int(data, "student_id"),
            concept=data.get("concept", ""),
            amount=str(data.get("amount", "")),
            gateway=container.payment_gateway,
        )
        return json_ok(payment, status=201, url=url)

    @app.route("/api/students/<int:student_id>/balance", methods=["GET"], endpoint="student_balance")
    @json_endpoint
    def student_balance(student_id: int):
        year, month = year_month_args()
        return json_ok(service.student_balance(student_id, year=year, month=month))

    @app.route("/api/payment-concepts", methods=["GET"], endpoint="list_payment_concepts")
    @json_endpoint
    def list_payment_concepts():
        return json_ok(container.concept_catalog.list())

    @app.route("/api/payment-concepts", methods=["POST"], endpoint="add_payment_concept")
    @json_endpoint
    def add_payment_concept():
        added = container.concept_catalog.add(body().get("name", ""))
        return json_ok(container.concept_catalog.list(), added=added)

    @app.route("/api/payment-concepts/<path:name>", methods=["DELETE"], endpoint="remove_payment_concept")
    @json_endpoint
    def remove_payment_concept(name: str):
        removed = container.concept_catalog.remove(name)
        return json_ok(container.concept_catalog.list(), removed=removed)
