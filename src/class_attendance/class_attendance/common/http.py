"""JSON helpers shared by the controllers."""
from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from .datetime_utils import now_local, parse_iso_date

logger = logging.getLogger(__name__)


def to_json(value):
    """Dataclasses, dates and enums to plain JSON values."""

    if is_dataclass(value) and not isinstance(value, type):
        return to_json(asdict(value))
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat(timespec="minutes")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def json_ok(data=None, *, status: int = 200, **extra):
    body = {"success": True}
    if data is not None:
        body["data"] = to_json(data)
    body.update({k: to_json(v) for k, v in extra.items()})
    return jsonify(body), status


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_endpoint(view):
    """Map domain errors to JSON responses (404/400/503, anything else 500)."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except ValidationError as e:
            return json_error(str(e), 400)
        except PersistenceError as e:
            logger.warning("Persistence error in %s: %s", request.path, e)
            return json_error(str(e), 503)
        except Exception:
            logger.exception("Unexpected error in %s", request.path)
            return json_error("Error interno del servidor", 500)

    return wrapper


def body() -> dict:
    return request.get_json(silent=True) or {}


def arg_int(name: str, default: int | None = None) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Parámetro no válido: {name}") from None


def year_month_args() -> tuple[int, int]:
    today = now_local()
    return arg_int("year", today.year), arg_int("month", today.month)


def date_value(raw, field_name: str = "date") -> date:
    if not raw:
        raise ValidationError(f"Falta el parámetro {field_name}")
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"Fecha no válida: {raw}") from None


def required_int(data: dict, key: str) -> int:
    try:
        return int(data[key])
    except (KeyError, TypeError, ValueError):
        raise ValidationError(f"Falta o no es válido: {key}") from None
