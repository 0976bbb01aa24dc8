"""Pydantic models for REST API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from coursereg.auth import MAX_PASSWORD_BYTES, password_too_long

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard read response wrapper."""

    data: T | None = None
    error: str | None = None


class ActionResponse(BaseModel, Generic[T]):
    """Response wrapper for state-changing requests."""

    success: bool
    message: str
    data: T | None = None


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Auth models


def _check_password_bytes(value: str) -> str:
    if password_too_long(value):
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class StudentRegister(CamelModel):
    """Request model for creating a student account."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1, max_length=72)
    student_id: str = Field(..., min_length=1, max_length=50)
    semester: Any = 1

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class LoginRequest(BaseModel):
    """Request model for logging in."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class StudentResponse(CamelModel):
    """Response model for a student."""

    id: str
    name: str
    email: str
    student_id: str = Field(
        validation_alias="student_number", serialization_alias="studentId"
    )
    semester: int


def student_to_response(student: Any) -> StudentResponse:
    """Convert a Student model to StudentResponse."""
    return StudentResponse.model_validate(student)


# Course models


class CourseResponse(CamelModel):
    """Response model for a course."""

    id: str
    code: str
    name: str
    credits: int
    type: str
    semester: int


def course_to_response(course: Any) -> CourseResponse:
    """Convert a Course model to CourseResponse."""
    return CourseResponse.model_validate(course)


class CoursesOverviewResponse(CamelModel):
    """Response model for the course page."""

    user_name: str
    semester: int
    credit_limit: int
    total_credits: int
    remaining_credits: int
    registered_courses: list[CourseResponse]
    available_courses: list[CourseResponse]


def overview_to_response(overview: Any) -> CoursesOverviewResponse:
    """Convert a CoursesOverview to CoursesOverviewResponse."""
    return CoursesOverviewResponse.model_validate(overview)


class SeedResult(CamelModel):
    """Response data for catalog seeding."""

    inserted: int
    total: int


# Enrollment models


class SemesterUpdate(BaseModel):
    """Request model for changing semester. Validated by the enrollment policy."""

    semester: Any = None


class SemesterChangeData(CamelModel):
    """Response data for a semester change."""

    semester: int
    credit_limit: int
    total_credits: int
    remaining_credits: int


def semester_change_to_response(change: Any) -> SemesterChangeData:
    """Convert a SemesterChanged decision to SemesterChangeData."""
    return SemesterChangeData.model_validate(change)
