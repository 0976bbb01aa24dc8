"""AuthService - student sign-up, login sessions and request authentication."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from coursereg.auth.exceptions import InvalidCredentialsError, NotAuthenticatedError
from coursereg.auth.models import AuthContext, LoginResult
from coursereg.auth.passwords import PasswordHasher
from coursereg.enrollment.policy import clamp_semester
from coursereg.store import StudentNotFoundError

if TYPE_CHECKING:
    from coursereg.store import RecordStore, Student

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AuthService:
    """Handles student authentication.

    Coordinates the RecordStore for students and login sessions with a
    PasswordHasher for credential checks.
    """

    def __init__(
        self,
        store: RecordStore,
        hasher: PasswordHasher | None = None,
        session_ttl: timedelta = timedelta(hours=24),
    ) -> None:
        """Initialize the auth service.

        Args:
            store: RecordStore for students and sessions.
            hasher: Password hasher. Defaults to bcrypt with 12 rounds.
            session_ttl: Lifetime of a login session.
        """
        self.store = store
        self.hasher = hasher or PasswordHasher()
        self.session_ttl = session_ttl

    def register_student(
        self,
        name: str,
        email: str,
        password: str,
        student_number: str,
        semester: Any = 1,
    ) -> LoginResult:
        """Create a student account and log it in.

        Raises:
            EmailInUseError: If the email is already registered.
            StudentNumberInUseError: If the student number is already registered.
        """
        student = self.store.create_student(
            name=name,
            email=email,
            password_hash=self.hasher.hash(password),
            student_number=student_number,
            semester=clamp_semester(semester),
        )
        logger.info("Registered student %s (semester %d)", student.id, student.semester)
        return self._start_session(student)

    def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and open a session.

        Raises:
            InvalidCredentialsError: On unknown email or wrong password.
        """
        try:
            student = self.store.get_student_by_email(email)
        except StudentNotFoundError as e:
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE) from e

        if not self.hasher.verify(password, student.password_hash):
            logger.info("Login failed for student %s: wrong password", student.id)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("Student %s logged in", student.id)
        return self._start_session(student)

    def logout(self, token: str) -> bool:
        """Invalidate a session token. Returns False if it was not active."""
        return self.store.invalidate_login_session(token)

    def authenticate(self, token: str | None) -> AuthContext:
        """Resolve a session token to the calling student.

        Raises:
            NotAuthenticatedError: If the token is missing, expired or invalidated,
                or its student no longer exists.
        """
        if not token:
            raise NotAuthenticatedError("No session token")

        login_session = self.store.get_active_login_session(token)
        if login_session is None:
            raise NotAuthenticatedError("Session is not active")

        try:
            student = self.store.get_student(login_session.student_id)
        except StudentNotFoundError as e:
            raise NotAuthenticatedError("Session student no longer exists") from e

        return AuthContext(student_id=student.id, name=student.name, token=token)

    def _start_session(self, student: Student) -> LoginResult:
        login_session = self.store.create_login_session(student.id, self.session_ttl)
        return LoginResult(
            token=login_session.token,
            student_id=student.id,
            name=student.name,
            max_age_seconds=int(self.session_ttl.total_seconds()),
        )
