import pytest

from src.class_attendance.class_attendance.categories.model import Category
from src.class_attendance.class_attendance.core.exceptions import NotFoundError, ValidationError
from src.class_attendance.class_attendance.students.model import Student
from src.class_attendance.class_attendance.students.service import StudentService


class FakeStudentsRepo:
    def __init__(self, students=None):
        self._items = {s.student_id: s for s in students or []}
        self._next_id = max(self._items, default=0) + 1

    def get_by_id(self, student_id):
        return self._items.get(student_id)

    def list_all(self):
        return list(self._items.values())

    def create(self, *, name, email, phone, category_name, category_id):
        sid = self._next_id
        self._next_id += 1
        self._items[sid] = Student(
            student_id=sid, name=name, email=email, phone=phone, category_name=category_name, category_id=category_id
        )
        return sid

    def update(self, student):
        self._items[student.student_id] = student
        return True

    def delete_by_id(self, student_id):
        return self._items.pop(student_id, None) is not None

    def set_active(self, student_id, *, is_active):
        s = self._items.get(student_id)
        if not s:
            return False
        self._items[student_id] = Student(**{**s.__dict__, "is_active": is_active})
        return True


class FakeCategoriesRepo:
    def __init__(self, categories):
        self._items = {c.category_id: c for c in categories}

    def get_by_id(self, category_id):
        return self._items.get(category_id)


LUNES = Category(category_id=1, name="Salsa Lunes")
JUEVES = Category(category_id=2, name="Bachata Jueves")


def _service(students=None):
    return StudentService(FakeStudentsRepo(students), FakeCategoriesRepo([LUNES, JUEVES]))


def test_create_links_category():
    service = _service()
    sid = service.create(name=" Ana ", email="", phone="600 000 000", category_id=1)

    student = service.get(sid)
    assert student.name == "Ana"
    assert student.email is None
    assert (student.category_id, student.category_name) == (1, "Salsa Lunes")


def test_create_validation():
    service = _service()
    with pytest.raises(ValidationError):
        service.create(name="  ")
    with pytest.raises(ValidationError):
        service.create(name="Ana", category_id=99)


def test_update_moves_category():
    service = _service([Student(student_id=1, name="Ana", category_id=1, category_name="Salsa Lunes")])
    updated = service.update(1, category_id=2)
    assert (updated.category_id, updated.category_name, updated.name) == (2, "Bachata Jueves", "Ana")


def test_roster_filters_and_sorts():
    service = _service(
        [
            Student(student_id=1, name="luis", category_id=1),
            Student(student_id=2, name="Ana", category_id=1),
            Student(student_id=3, name="Eva", category_id=1, is_active=False),
            Student(student_id=4, name="Marta", category_id=2),
            # Legacy row: category by name only.
            Student(student_id=5, name="Bea", category_name="Salsa Lunes"),
        ]
    )

    assert [s.name for s in service.roster(LUNES)] == ["Ana", "Bea", "luis"]
    assert [s.name for s in service.roster(LUNES, only_active=False)] == ["Ana", "Bea", "Eva", "luis"]
    assert [s.name for s in service.roster(LUNES, search="LU")] == ["luis"]
    assert service.roster(LUNES, search="zzz") == []


def test_set_active_and_delete():
    service = _service([Student(student_id=1, name="Ana", category_id=1)])

    service.set_active(1, is_active=False)
    assert service.get(1).is_active is False
    assert service.roster(LUNES) == []

    service.delete(1)
    with pytest.raises(NotFoundError):
        service.get(1)
    with pytest.raises(NotFoundError):
        service.set_active(1, is_active=True)
