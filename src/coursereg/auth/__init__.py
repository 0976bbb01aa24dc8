"""Auth package - password hashing, login sessions and request authentication."""

from coursereg.auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    NotAuthenticatedError,
)
from coursereg.auth.models import AuthContext, LoginResult
from coursereg.auth.passwords import MAX_PASSWORD_BYTES, PasswordHasher, password_too_long
from coursereg.auth.service import AuthService

__all__ = [
    "AuthContext",
    "AuthError",
    "AuthService",
    "InvalidCredentialsError",
    "LoginResult",
    "MAX_PASSWORD_BYTES",
    "NotAuthenticatedError",
    "PasswordHasher",
    "password_too_long",
]
