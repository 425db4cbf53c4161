from datetime import date

import pytest

from src.class_attendance.class_attendance.categories.model import Category
from src.class_attendance.class_attendance.core.enums import Weekday
from src.class_attendance.class_attendance.core.exceptions import InvalidCalendarInput, ValidationError
from src.class_attendance.class_attendance.sessions.generator import (
    ClassDateGenerator,
    default_session_date,
    is_session_date,
    month_grid,
)
from src.class_attendance.class_attendance.sessions.policies import (
    DefaultDayPolicy,
    EmptySessionsPolicy,
    UnknownWeekdayPolicyFactory,
)


def _category(name, weekday=None):
    return Category(category_id=1, name=name, weekday=weekday)


def test_mondays_of_march_2025():
    dates = ClassDateGenerator().generate(2025, 3, _category("Salsa Lunes"))
    assert dates == [date(2025, 3, d) for d in (3, 10, 17, 24, 31)]


@pytest.mark.parametrize("year", [1999, 2023, 2024, 2025])
@pytest.mark.parametrize("month", range(1, 13))
def test_dates_same_month_same_weekday_ascending(year, month):
    dates = ClassDateGenerator().generate(year, month, _category("Bachata Miércoles"))

    assert 4 <= len(dates) <= 5
    assert all(d.year == year and d.month == month for d in dates)
    assert {d.isoweekday() for d in dates} == {3}
    assert dates == sorted(set(dates))


def test_leap_year_february():
    generator = ClassDateGenerator()

    # 2024-02-29 was a Thursday.
    assert date(2024, 2, 29) in generator.generate(2024, 2, _category("Jueves"))
    assert generator.generate(2024, 2, _category("Sábado"))[-1] == date(2024, 2, 24)
    assert all(d.day <= 28 for d in generator.generate(2023, 2, _category("Sábado")))
    assert all(d.day <= 28 for d in generator.generate(2023, 2, _category("Martes")))


def test_stored_weekday_takes_precedence_over_name():
    dates = ClassDateGenerator().generate(2025, 3, _category("Salsa Lunes", weekday=Weekday.FRIDAY))
    assert {d.isoweekday() for d in dates} == {5}


def test_unknown_weekday_is_empty_by_default():
    assert ClassDateGenerator().generate(2025, 3, _category("Privadas")) == []


def test_unknown_weekday_with_default_day_policy():
    generator = ClassDateGenerator(unknown_weekday_policy=DefaultDayPolicy(Weekday.SUNDAY))
    dates = generator.generate(2025, 3, _category("Privadas"))
    assert dates == [date(2025, 3, d) for d in (2, 9, 16, 23, 30)]


@pytest.mark.parametrize("year, month", [(2025, 0), (2025, 13), (0, 1), (10000, 1), ("2025", 3), (2025, 3.0), (True, 1)])
def test_invalid_calendar_input(year, month):
    with pytest.raises(InvalidCalendarInput):
        ClassDateGenerator().generate(year, month, _category("Lunes"))


def test_generate_is_recomputed_per_call():
    generator = ClassDateGenerator()
    first = generator.generate(2025, 3, _category("Lunes"))
    first.clear()
    assert len(generator.generate(2025, 3, _category("Lunes"))) == 5


def test_policy_factory():
    assert isinstance(UnknownWeekdayPolicyFactory.from_setting("empty"), EmptySessionsPolicy)
    assert isinstance(UnknownWeekdayPolicyFactory.from_setting(None), EmptySessionsPolicy)
    assert UnknownWeekdayPolicyFactory.from_setting("defaultDay(7)") == DefaultDayPolicy(Weekday.SUNDAY)
    assert UnknownWeekdayPolicyFactory.from_setting(" defaultday( 1 ) ") == DefaultDayPolicy(Weekday.MONDAY)

    for bad in ("sunday", "defaultDay(0)", "defaultDay(8)"):
        with pytest.raises(ValidationError):
            UnknownWeekdayPolicyFactory.from_setting(bad)


def test_session_date_helpers():
    dates = [date(2025, 3, d) for d in (3, 10, 17, 24, 31)]

    assert is_session_date(dates, date(2025, 3, 10))
    assert not is_session_date(dates, date(2025, 3, 11))
    assert default_session_date(dates, date(2025, 3, 11)) == date(2025, 3, 17)
    assert default_session_date(dates, date(2025, 4, 1)) == date(2025, 3, 31)
    assert default_session_date([], date(2025, 4, 1)) is None


def test_month_grid_is_monday_first():
    grid = month_grid(2025, 3)
    # March 2025 starts on a Saturday.
    assert grid[0] == [None, None, None, None, None, 1, 2]
    assert grid[-1][0] == 31
