"""Record store - Persistent storage for courses, students and login sessions."""

from coursereg.store.exceptions import (
    ConcurrentUpdateError,
    CourseNotFoundError,
    EmailInUseError,
    StoreError,
    StudentExistsError,
    StudentNotFoundError,
    StudentNumberInUseError,
)
from coursereg.store.models import (
    Course,
    CourseType,
    LoginSession,
    Registration,
    Student,
    StudentRecord,
)
from coursereg.store.seed import DEFAULT_CATALOG, init_courses
from coursereg.store.store import RecordStore

__all__ = [
    "DEFAULT_CATALOG",
    "ConcurrentUpdateError",
    "Course",
    "CourseNotFoundError",
    "CourseType",
    "EmailInUseError",
    "LoginSession",
    "RecordStore",
    "Registration",
    "StoreError",
    "Student",
    "StudentExistsError",
    "StudentNotFoundError",
    "StudentNumberInUseError",
    "StudentRecord",
    "init_courses",
]
