"""Decision and view models for the enrollment module.

Business-rule outcomes are values, not exceptions. Every decision exposes
``ok`` and a human-readable ``message``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence


class CreditBearing(Protocol):
    """Anything with an id and a credit weight (a catalog course)."""

    id: str
    credits: int


class Enrollee(Protocol):
    """A student snapshot as seen by the policy."""

    semester: int
    registered_course_ids: Sequence[str]


@dataclass(frozen=True)
class RegistrationApproved:
    """The candidate course fits under the semester's credit limit."""

    ok: ClassVar[bool] = True

    course_id: str
    new_total: int
    credit_limit: int

    @property
    def message(self) -> str:
        return "Course registered successfully"


@dataclass(frozen=True)
class AlreadyRegistered:
    """The candidate course is already in the registration set."""

    ok: ClassVar[bool] = False

    course_id: str

    @property
    def message(self) -> str:
        return "Already registered for this course"


@dataclass(frozen=True)
class CreditLimitExceeded:
    """Adding the candidate course would exceed the semester's credit limit."""

    ok: ClassVar[bool] = False

    limit: int
    current_total: int
    attempted_credits: int
    semester: int

    @property
    def message(self) -> str:
        return (
            f"Credit limit exceeded! Maximum {self.limit} credits allowed for "
            f"Semester {self.semester}. Current: {self.current_total}, "
            f"Adding: {self.attempted_credits}"
        )


@dataclass(frozen=True)
class InvalidSemester:
    """Requested semester is not an integer in [1, 8]."""

    ok: ClassVar[bool] = False

    value: Any

    @property
    def message(self) -> str:
        return "Invalid semester value"


@dataclass(frozen=True)
class SemesterChanged:
    """Semester change accepted. remaining_credits may be negative."""

    ok: ClassVar[bool] = True

    old_semester: int
    semester: int
    credit_limit: int
    total_credits: int
    remaining_credits: int

    @property
    def message(self) -> str:
        return f"Semester updated from {self.old_semester} to {self.semester}"


@dataclass(frozen=True)
class CourseUnregistered:
    """Course removed from the registration set (or was never in it)."""

    ok: ClassVar[bool] = True

    course_id: str
    registered_course_ids: tuple[str, ...]

    @property
    def message(self) -> str:
        return "Course unregistered successfully"


RegistrationDecision = RegistrationApproved | AlreadyRegistered | CreditLimitExceeded
SemesterDecision = SemesterChanged | InvalidSemester


@dataclass
class CoursesOverview:
    """Everything the course page shows for one student."""

    user_name: str
    semester: int
    credit_limit: int
    total_credits: int
    remaining_credits: int
    registered_courses: list[Any]
    available_courses: list[Any]
