"""RecordStore - Main API for course, student and session persistence."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from coursereg.store.database import Database
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
    LoginSession,
    Registration,
    Student,
    StudentRecord,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time as naive UTC, the form SQLite hands back."""
    return datetime.now(UTC).replace(tzinfo=None)


class RecordStore:
    """Main API for store operations.

    Provides CRUD operations for Courses, Students, registrations and login
    sessions. Writes to a student's semester or registration set are guarded
    by the student's ``version`` column.
    """

    def __init__(self, db_path: str = "coursereg.db") -> None:
        """Initialize the store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Course Operations ---

    def count_courses(self) -> int:
        """Return the number of courses in the catalog."""
        session = self._db.get_session()
        try:
            return session.execute(select(func.count(Course.id))).scalar_one()
        finally:
            session.close()

    def list_courses(self) -> list[Course]:
        """List all courses, ordered by credits descending then code."""
        session = self._db.get_session()
        try:
            stmt = select(Course).order_by(Course.credits.desc(), Course.code)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def get_course(self, course_id: str) -> Course:
        """Get course by ID.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = session.get(Course, course_id)
            if course is None:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")
            return course
        finally:
            session.close()

    def seed_courses(self, catalog: Iterable[Mapping[str, Any]]) -> int:
        """Insert the catalog unless any course already exists.

        Args:
            catalog: Course field mappings (code, name, credits, type, semester)

        Returns:
            Number of courses inserted (0 when the catalog was already seeded)
        """
        try:
            if self.count_courses() > 0:
                return 0
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to seed courses: {e}") from e

        session = self._db.get_session()
        try:
            courses = [Course(**entry) for entry in catalog]
            session.add_all(courses)
            session.commit()
            logger.info("Seeded %d courses", len(courses))
            return len(courses)
        except IntegrityError:
            # Another caller seeded between the count and the insert
            session.rollback()
            logger.info("Course catalog already seeded by a concurrent request")
            return 0
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Failed to seed courses: {e}") from e
        finally:
            session.close()

    # --- Student Operations ---

    def create_student(
        self,
        name: str,
        email: str,
        password_hash: str,
        student_number: str,
        semester: int = 1,
    ) -> Student:
        """Create a new student.

        Args:
            name: Display name
            email: Login email, stored lower-case
            password_hash: bcrypt hash of the password
            student_number: Institution-issued student ID
            semester: Current semester (1-8)

        Returns:
            Created Student object with generated ID

        Raises:
            EmailInUseError: If the email is already registered
            StudentNumberInUseError: If the student number is already registered
        """
        email = email.lower()
        session = self._db.get_session()
        try:
            if session.execute(select(Student.id).where(Student.email == email)).first():
                raise EmailInUseError(f"Email '{email}' already in use")
            if session.execute(
                select(Student.id).where(Student.student_number == student_number)
            ).first():
                raise StudentNumberInUseError(f"Student number '{student_number}' already in use")

            student = Student(
                name=name,
                email=email,
                password_hash=password_hash,
                student_number=student_number,
                semester=semester,
            )
            session.add(student)
            session.commit()
            session.refresh(student)
            return student
        except IntegrityError as e:
            session.rollback()
            if "students.email" in str(e):
                raise EmailInUseError(f"Email '{email}' already in use") from e
            if "students.student_number" in str(e):
                raise StudentNumberInUseError(
                    f"Student number '{student_number}' already in use"
                ) from e
            raise StudentExistsError(str(e)) from e
        finally:
            session.close()

    def get_student(self, student_id: str) -> Student:
        """Get student by ID.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            student = session.get(Student, student_id)
            if student is None:
                raise StudentNotFoundError(f"Student with id '{student_id}' not found")
            return student
        finally:
            session.close()

    def get_student_by_email(self, email: str) -> Student:
        """Get student by email (case-insensitive).

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            stmt = select(Student).where(Student.email == email.lower())
            student = session.execute(stmt).scalar_one_or_none()
            if student is None:
                raise StudentNotFoundError(f"Student with email '{email}' not found")
            return student
        finally:
            session.close()

    def list_students(self) -> list[Student]:
        """List all students, ordered by name."""
        session = self._db.get_session()
        try:
            stmt = select(Student).order_by(Student.name)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def count_registrations(self, student_id: str) -> int:
        """Return how many courses a student is registered for."""
        session = self._db.get_session()
        try:
            stmt = (
                select(func.count())
                .select_from(Registration)
                .where(Registration.student_id == student_id)
            )
            return session.execute(stmt).scalar_one()
        finally:
            session.close()

    def get_student_record(self, student_id: str) -> StudentRecord:
        """Get a snapshot of a student's semester and registration set.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            return self._load_record(session, student_id)
        finally:
            session.close()

    def list_registered_courses(self, student_id: str) -> list[Course]:
        """List a student's registered courses in registration order."""
        session = self._db.get_session()
        try:
            stmt = (
                select(Course)
                .join(Registration, Registration.course_id == Course.id)
                .where(Registration.student_id == student_id)
                .order_by(Registration.position)
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def replace_registrations(
        self,
        student_id: str,
        course_ids: Iterable[str],
        expected_version: int,
    ) -> StudentRecord:
        """Replace a student's registration set if it is unchanged since read.

        Args:
            student_id: The student's unique ID
            course_ids: The new registration set, in display order
            expected_version: Version of the snapshot the change was decided on

        Returns:
            The updated StudentRecord

        Raises:
            StudentNotFoundError: If student doesn't exist
            ConcurrentUpdateError: If the student changed since expected_version
        """
        session = self._db.get_session()
        try:
            self._claim_version(session, student_id, expected_version)
            session.execute(delete(Registration).where(Registration.student_id == student_id))
            session.add_all(
                Registration(student_id=student_id, course_id=course_id, position=position)
                for position, course_id in enumerate(course_ids)
            )
            session.commit()
            return self._load_record(session, student_id)
        except IntegrityError as e:
            session.rollback()
            raise CourseNotFoundError(f"Unknown course in registration set: {e}") from e
        finally:
            session.close()

    def update_semester(
        self,
        student_id: str,
        semester: int,
        expected_version: int,
    ) -> StudentRecord:
        """Set a student's semester if the record is unchanged since read.

        Raises:
            StudentNotFoundError: If student doesn't exist
            ConcurrentUpdateError: If the student changed since expected_version
        """
        session = self._db.get_session()
        try:
            self._claim_version(session, student_id, expected_version, semester=semester)
            session.commit()
            return self._load_record(session, student_id)
        finally:
            session.close()

    def _claim_version(
        self,
        session: Session,
        student_id: str,
        expected_version: int,
        **values: Any,
    ) -> None:
        """Bump the student's version, failing if it moved since read."""
        stmt = (
            update(Student)
            .where(Student.id == student_id, Student.version == expected_version)
            .values(version=Student.version + 1, **values)
        )
        result = session.execute(stmt)
        if result.rowcount == 1:  # type: ignore[attr-defined]
            return

        session.rollback()
        if session.get(Student, student_id) is None:
            raise StudentNotFoundError(f"Student with id '{student_id}' not found")
        raise ConcurrentUpdateError(
            f"Student '{student_id}' changed since version {expected_version}"
        )

    def _load_record(self, session: Session, student_id: str) -> StudentRecord:
        student = session.execute(
            select(Student).where(Student.id == student_id).execution_options(
                populate_existing=True
            )
        ).scalar_one_or_none()
        if student is None:
            raise StudentNotFoundError(f"Student with id '{student_id}' not found")

        stmt = (
            select(Registration.course_id)
            .where(Registration.student_id == student_id)
            .order_by(Registration.position)
        )
        course_ids = tuple(session.execute(stmt).scalars().all())
        return StudentRecord(
            id=student.id,
            name=student.name,
            semester=student.semester,
            version=student.version,
            registered_course_ids=course_ids,
        )

    # --- Login Session Operations ---

    def create_login_session(self, student_id: str, ttl: timedelta) -> LoginSession:
        """Create a login session with a fresh random token.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            if session.get(Student, student_id) is None:
                raise StudentNotFoundError(f"Student with id '{student_id}' not found")

            now = utcnow()
            login_session = LoginSession(
                token=secrets.token_urlsafe(32),
                student_id=student_id,
                created_at=now,
                expires_at=now + ttl,
            )
            session.add(login_session)
            session.commit()
            session.refresh(login_session)
            return login_session
        finally:
            session.close()

    def get_active_login_session(self, token: str) -> LoginSession | None:
        """Return the session for a token if it is neither expired nor invalidated."""
        session = self._db.get_session()
        try:
            stmt = select(LoginSession).where(
                LoginSession.token == token,
                LoginSession.invalidated_at.is_(None),
                LoginSession.expires_at > utcnow(),
            )
            return session.execute(stmt).scalar_one_or_none()
        finally:
            session.close()

    def invalidate_login_session(self, token: str) -> bool:
        """Invalidate a session token.

        Returns:
            True if an active session was invalidated
        """
        session = self._db.get_session()
        try:
            stmt = (
                update(LoginSession)
                .where(LoginSession.token == token, LoginSession.invalidated_at.is_(None))
                .values(invalidated_at=utcnow())
            )
            result = session.execute(stmt)
            session.commit()
            return bool(result.rowcount)  # type: ignore[attr-defined]
        finally:
            session.close()
