"""EnrollmentService - applies the credit policy to stored student records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from coursereg.enrollment import policy
from coursereg.enrollment.exceptions import EnrollmentUnavailableError
from coursereg.enrollment.models import (
    CoursesOverview,
    CourseUnregistered,
    RegistrationDecision,
    SemesterChanged,
    SemesterDecision,
)
from coursereg.store import ConcurrentUpdateError

if TYPE_CHECKING:
    from collections.abc import Callable

    from coursereg.auth import AuthContext
    from coursereg.store import RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EnrollmentService:
    """Coordinates the RecordStore and the enrollment policy.

    Each write is decided on a snapshot and persisted with a compare-and-swap
    on the student's version. A lost race re-reads and re-decides, up to
    ``max_retries`` extra attempts.
    """

    def __init__(self, store: RecordStore, max_retries: int = 3) -> None:
        """Initialize the EnrollmentService.

        Args:
            store: RecordStore holding courses and students.
            max_retries: Re-decide attempts after a concurrent update.
        """
        self.store = store
        self.max_retries = max_retries

    def overview(self, auth: AuthContext) -> CoursesOverview:
        """Build the course page for the authenticated student.

        Raises:
            StudentNotFoundError: If the student no longer exists.
        """
        record = self.store.get_student_record(auth.student_id)
        registered_ids = set(record.registered_course_ids)

        all_courses = self.store.list_courses()
        by_id = {course.id: course for course in all_courses}
        registered = [by_id[cid] for cid in record.registered_course_ids if cid in by_id]
        available = [course for course in all_courses if course.id not in registered_ids]

        limit = policy.credit_limit_for(record.semester)
        total = policy.total_credits(registered)
        return CoursesOverview(
            user_name=record.name,
            semester=record.semester,
            credit_limit=limit,
            total_credits=total,
            remaining_credits=limit - total,
            registered_courses=registered,
            available_courses=available,
        )

    def register_course(self, auth: AuthContext, course_id: str) -> RegistrationDecision:
        """Add a course to the student's registration set if the policy allows.

        Raises:
            StudentNotFoundError: If the student no longer exists.
            CourseNotFoundError: If the course does not exist.
            EnrollmentUnavailableError: If concurrent updates kept winning.
        """
        course = self.store.get_course(course_id)

        def attempt() -> RegistrationDecision:
            record = self.store.get_student_record(auth.student_id)
            registered = self.store.list_registered_courses(auth.student_id)
            decision = policy.can_register(record, course, registered)
            if decision.ok:
                self.store.replace_registrations(
                    record.id,
                    (*record.registered_course_ids, course.id),
                    expected_version=record.version,
                )
            return decision

        decision = self._with_retries("register", auth, attempt)
        if decision.ok:
            logger.info(
                "Student %s registered for %s (%d credits)",
                auth.student_id,
                course.code,
                course.credits,
            )
        else:
            logger.info(
                "Student %s registration for %s rejected: %s",
                auth.student_id,
                course.code,
                decision.message,
            )
        return decision

    def unregister_course(self, auth: AuthContext, course_id: str) -> CourseUnregistered:
        """Drop a course. Dropping a course that is not registered is a no-op.

        Raises:
            StudentNotFoundError: If the student no longer exists.
            EnrollmentUnavailableError: If concurrent updates kept winning.
        """

        def attempt() -> CourseUnregistered:
            record = self.store.get_student_record(auth.student_id)
            remaining = policy.unregister(record, course_id)
            if remaining != record.registered_course_ids:
                record = self.store.replace_registrations(
                    record.id, remaining, expected_version=record.version
                )
            return CourseUnregistered(
                course_id=course_id, registered_course_ids=record.registered_course_ids
            )

        result = self._with_retries("unregister", auth, attempt)
        logger.info("Student %s unregistered from course %s", auth.student_id, course_id)
        return result

    def change_semester(self, auth: AuthContext, semester: Any) -> SemesterDecision:
        """Move the student to another semester.

        Registrations are kept even if they exceed the new semester's limit.

        Raises:
            StudentNotFoundError: If the student no longer exists.
            EnrollmentUnavailableError: If concurrent updates kept winning.
        """

        def attempt() -> SemesterDecision:
            record = self.store.get_student_record(auth.student_id)
            registered = self.store.list_registered_courses(auth.student_id)
            decision = policy.change_semester(record, semester, registered)
            if isinstance(decision, SemesterChanged):
                self.store.update_semester(
                    record.id, decision.semester, expected_version=record.version
                )
            return decision

        decision = self._with_retries("update-semester", auth, attempt)
        if not isinstance(decision, SemesterChanged):
            logger.info("Student %s sent invalid semester %r", auth.student_id, semester)
            return decision

        logger.info("Student %s: %s", auth.student_id, decision.message)
        if decision.remaining_credits < 0:
            logger.warning(
                "Student %s is %d credits over the semester %d limit",
                auth.student_id,
                -decision.remaining_credits,
                decision.semester,
            )
        return decision

    def _with_retries(self, action: str, auth: AuthContext, attempt: Callable[[], T]) -> T:
        for attempt_number in range(self.max_retries + 1):
            try:
                return attempt()
            except ConcurrentUpdateError:
                logger.warning(
                    "Concurrent update on student %s during %s (attempt %d/%d)",
                    auth.student_id,
                    action,
                    attempt_number + 1,
                    self.max_retries + 1,
                )
        raise EnrollmentUnavailableError(
            f"Could not {action} for student {auth.student_id}: record kept changing"
        )

