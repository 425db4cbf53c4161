import pytest

from src.class_attendance.class_attendance.core.enums import Weekday
from src.class_attendance.class_attendance.sessions.weekday_rule import weekday_for


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Salsa Lunes", Weekday.MONDAY),
        ("MARTES avanzado", Weekday.TUESDAY),
        ("Bachata miércoles", Weekday.WEDNESDAY),
        ("Bachata Miercoles", Weekday.WEDNESDAY),
        ("jueves", Weekday.THURSDAY),
        ("Rueda de casino - Viernes 20h", Weekday.FRIDAY),
        ("Taller Sábado", Weekday.SATURDAY),
        ("taller sabado", Weekday.SATURDAY),
        ("Domingo social", Weekday.SUNDAY),
    ],
)
def test_weekday_word_anywhere_in_name(name, expected):
    assert weekday_for(name) == expected


def test_no_weekday_word_is_unknown():
    assert weekday_for("Salsa Avanzado") == Weekday.UNKNOWN
    assert weekday_for("") == Weekday.UNKNOWN
    assert int(weekday_for("Privadas")) == 0


def test_non_text_is_unknown():
    assert weekday_for(None) == Weekday.UNKNOWN


def test_first_day_in_priority_order_wins():
    assert weekday_for("Lunes y Jueves") == Weekday.MONDAY
    assert weekday_for("Jueves y Lunes") == Weekday.MONDAY


def test_unknown_lookup_does_not_warn(caplog):
    with caplog.at_level("WARNING"):
        for _ in range(3):
            weekday_for("Privadas")

    assert caplog.records == []
