"""Data models for the auth module."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthContext:
    """Authenticated caller, passed explicitly into each operation.

    Attributes:
        student_id: The authenticated student's unique ID.
        name: Display name at login time.
        token: The session token the request presented.
    """

    student_id: str
    name: str
    token: str = field(default="", repr=False)


@dataclass(frozen=True)
class LoginResult:
    """Result of a successful sign-up or login."""

    token: str
    student_id: str
    name: str
    max_age_seconds: int
