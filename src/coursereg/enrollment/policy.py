"""Credit-limit enrollment policy.

Pure functions over snapshots: nothing here performs I/O or mutates its
inputs, so callers persist a result only when the decision is ``ok``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from coursereg.enrollment.models import (
    AlreadyRegistered,
    CreditLimitExceeded,
    InvalidSemester,
    RegistrationApproved,
    SemesterChanged,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from coursereg.enrollment.models import (
        CreditBearing,
        Enrollee,
        RegistrationDecision,
        SemesterDecision,
    )

MIN_SEMESTER = 1
MAX_SEMESTER = 8
DEFAULT_CREDIT_LIMIT = 20

CREDIT_LIMITS: Mapping[int, int] = MappingProxyType(
    {1: 20, 2: 20, 3: 22, 4: 22, 5: 24, 6: 24, 7: 18, 8: 18}
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def credit_limit_for(semester: Any) -> int:
    """Maximum credits for a semester; DEFAULT_CREDIT_LIMIT for anything unlisted."""
    if not _is_int(semester):
        return DEFAULT_CREDIT_LIMIT
    return CREDIT_LIMITS.get(semester, DEFAULT_CREDIT_LIMIT)


def total_credits(courses: Iterable[CreditBearing]) -> int:
    """Sum of credits over courses."""
    return sum(course.credits for course in courses)


def parse_semester(value: Any) -> int | None:
    """Coerce a requested semester to an int in range, or None if invalid.

    Integral numbers and numeric strings ("3", "3.0") are accepted.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if not _is_int(value):
        return None
    if not MIN_SEMESTER <= value <= MAX_SEMESTER:
        return None
    return int(value)


def clamp_semester(value: Any) -> int:
    """Normalize a sign-up semester: unparseable or zero becomes 1, then clamp to [1, 8]."""
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        number = 0
    if number == 0:
        number = MIN_SEMESTER
    return min(MAX_SEMESTER, max(MIN_SEMESTER, number))


def can_register(
    student: Enrollee,
    candidate: CreditBearing,
    registered_courses: Iterable[CreditBearing],
) -> RegistrationDecision:
    """Decide whether a student may add a course.

    Args:
        student: Snapshot with semester and registered_course_ids.
        candidate: The course being added.
        registered_courses: The student's registered courses, resolved from ids.

    Returns:
        RegistrationApproved, AlreadyRegistered or CreditLimitExceeded.
    """
    if candidate.id in student.registered_course_ids:
        return AlreadyRegistered(course_id=candidate.id)

    limit = credit_limit_for(student.semester)
    current_total = total_credits(registered_courses)
    new_total = current_total + candidate.credits

    if new_total > limit:
        return CreditLimitExceeded(
            limit=limit,
            current_total=current_total,
            attempted_credits=candidate.credits,
            semester=student.semester,
        )
    return RegistrationApproved(course_id=candidate.id, new_total=new_total, credit_limit=limit)


def unregister(student: Enrollee, course_id: str) -> tuple[str, ...]:
    """Registration set without course_id. Absent ids leave the set unchanged."""
    return tuple(cid for cid in student.registered_course_ids if cid != course_id)


def change_semester(
    student: Enrollee,
    new_semester: Any,
    registered_courses: Iterable[CreditBearing] = (),
) -> SemesterDecision:
    """Validate a semester change and report the resulting credit position.

    Existing registrations are not re-checked against the new limit, so
    remaining_credits can come back negative.
    """
    semester = parse_semester(new_semester)
    if semester is None:
        return InvalidSemester(value=new_semester)

    limit = credit_limit_for(semester)
    total = total_credits(registered_courses)
    return SemesterChanged(
        old_semester=student.semester,
        semester=semester,
        credit_limit=limit,
        total_credits=total,
        remaining_credits=limit - total,
    )
