"""Enrollment package - credit-limit policy and the service applying it."""

from coursereg.enrollment.exceptions import EnrollmentError, EnrollmentUnavailableError
from coursereg.enrollment.models import (
    AlreadyRegistered,
    CoursesOverview,
    CourseUnregistered,
    CreditLimitExceeded,
    InvalidSemester,
    RegistrationApproved,
    RegistrationDecision,
    SemesterChanged,
    SemesterDecision,
)
from coursereg.enrollment.policy import (
    CREDIT_LIMITS,
    DEFAULT_CREDIT_LIMIT,
    can_register,
    change_semester,
    clamp_semester,
    credit_limit_for,
    total_credits,
    unregister,
)
from coursereg.enrollment.service import EnrollmentService

__all__ = [
    "CREDIT_LIMITS",
    "DEFAULT_CREDIT_LIMIT",
    "AlreadyRegistered",
    "CourseUnregistered",
    "CoursesOverview",
    "CreditLimitExceeded",
    "EnrollmentError",
    "EnrollmentService",
    "EnrollmentUnavailableError",
    "InvalidSemester",
    "RegistrationApproved",
    "RegistrationDecision",
    "SemesterChanged",
    "SemesterDecision",
    "can_register",
    "change_semester",
    "clamp_semester",
    "credit_limit_for",
    "total_credits",
    "unregister",
]
