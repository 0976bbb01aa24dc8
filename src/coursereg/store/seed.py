"""Default course catalog used to seed an empty store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from coursereg.store.models import CourseType

if TYPE_CHECKING:
    from coursereg.store.store import RecordStore

_THEORY = CourseType.THEORY.value
_LAB = CourseType.LAB.value

DEFAULT_CATALOG: tuple[dict[str, Any], ...] = (
    # Theory courses
    {"code": "CS101", "name": "Data Structures and Algorithms", "credits": 4, "type": _THEORY, "semester": 3},
    {"code": "CS102", "name": "Object-Oriented Programming", "credits": 3, "type": _THEORY, "semester": 2},
    {"code": "CS103", "name": "Database Management Systems", "credits": 3, "type": _THEORY, "semester": 4},
    {"code": "CS104", "name": "Computer Networks", "credits": 3, "type": _THEORY, "semester": 5},
    {"code": "CS105", "name": "Software Engineering", "credits": 3, "type": _THEORY, "semester": 6},
    {"code": "EE201", "name": "Digital Electronics", "credits": 4, "type": _THEORY, "semester": 3},
    {"code": "EE202", "name": "Signals and Systems", "credits": 4, "type": _THEORY, "semester": 4},
    {"code": "ME301", "name": "Thermodynamics", "credits": 3, "type": _THEORY, "semester": 5},
    {"code": "ME302", "name": "Engineering Mechanics", "credits": 4, "type": _THEORY, "semester": 2},
    {"code": "CE401", "name": "Structural Analysis", "credits": 3, "type": _THEORY, "semester": 6},
    # Lab courses
    {"code": "CS151", "name": "Programming Lab", "credits": 2, "type": _LAB, "semester": 2},
    {"code": "CS152", "name": "Database Lab", "credits": 2, "type": _LAB, "semester": 4},
    {"code": "CS153", "name": "Networks Lab", "credits": 2, "type": _LAB, "semester": 5},
    {"code": "EE251", "name": "Electronics Lab", "credits": 2, "type": _LAB, "semester": 3},
    {"code": "ME351", "name": "Mechanical Workshop", "credits": 2, "type": _LAB, "semester": 5},
)  # fmt: skip


def init_courses(store: RecordStore) -> int:
    """Seed the default catalog. No-op if any course exists.

    Returns:
        Number of courses inserted.
    """
    return store.seed_courses(DEFAULT_CATALOG)
