"""SQLAlchemy models for the record store."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class CourseType(StrEnum):
    """Course type enum."""

    THEORY = "Theory"
    LAB = "Lab"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Course(Base):
    """Course model - one entry of the course catalog."""

    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("credits > 0", name="ck_courses_credits_positive"),
        CheckConstraint("semester BETWEEN 1 AND 8", name="ck_courses_semester_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    semester: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __init__(
        self,
        code: str,
        name: str,
        credits: int,
        semester: int,
        type: str = CourseType.THEORY.value,
        id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.code = code
        self.name = name
        self.credits = credits
        self.type = type
        self.semester = semester

    @property
    def course_type(self) -> CourseType:
        """Get type as CourseType enum."""
        return CourseType(self.type)

    def __repr__(self) -> str:
        return f"<Course(id={self.id!r}, code={self.code!r}, credits={self.credits!r})>"


class Student(Base):
    """Student model - identity, current semester and registration set.

    ``version`` is bumped on every change to the semester or the registration
    set and is the compare-and-swap token for those writes.
    """

    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("semester BETWEEN 1 AND 8", name="ck_students_semester_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    student_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    semester: Mapped[int] = mapped_column(Integer, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    registrations: Mapped[list[Registration]] = relationship(
        "Registration",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="Registration.position",
    )
    login_sessions: Mapped[list[LoginSession]] = relationship(
        "LoginSession", back_populates="student", cascade="all, delete-orphan"
    )

    def __init__(
        self,
        name: str,
        email: str,
        password_hash: str,
        student_number: str,
        semester: int = 1,
        id: str | None = None,
        version: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.student_number = student_number
        self.semester = semester
        self.version = version

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, email={self.email!r}, semester={self.semester!r})>"


class Registration(Base):
    """Registration model - one course in a student's registration set."""

    __tablename__ = "registrations"

    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), primary_key=True
    )
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # Relationships
    student: Mapped[Student] = relationship("Student", back_populates="registrations")
    course: Mapped[Course] = relationship("Course")

    def __init__(self, student_id: str, course_id: str, position: int, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.student_id = student_id
        self.course_id = course_id
        self.position = position

    def __repr__(self) -> str:
        return (
            f"<Registration(student_id={self.student_id!r}, course_id={self.course_id!r}, "
            f"position={self.position!r})>"
        )


class LoginSession(Base):
    """Login session model - an authenticated session token for a student."""

    __tablename__ = "login_sessions"

    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    invalidated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Relationships
    student: Mapped[Student] = relationship("Student", back_populates="login_sessions")

    def __init__(
        self,
        token: str,
        student_id: str,
        created_at: datetime,
        expires_at: datetime,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.token = token
        self.student_id = student_id
        self.created_at = created_at
        self.expires_at = expires_at
        self.invalidated_at = None

    def __repr__(self) -> str:
        return f"<LoginSession(student_id={self.student_id!r}, expires_at={self.expires_at!r})>"


@dataclass(frozen=True)
class StudentRecord:
    """Point-in-time snapshot of a student's enrollment state.

    Attributes:
        id: The student's unique ID.
        name: Display name.
        semester: Current semester (1-8).
        version: Compare-and-swap token for writes based on this snapshot.
        registered_course_ids: Registration set in registration order.
    """

    id: str
    name: str
    semester: int
    version: int
    registered_course_ids: tuple[str, ...] = ()
