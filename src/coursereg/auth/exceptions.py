"""Exceptions for the auth module."""


class AuthError(Exception):
    """Base exception for auth errors."""


class InvalidCredentialsError(AuthError):
    """Email/password pair did not match a student.

    The message never says which of the two was wrong.
    """


class NotAuthenticatedError(AuthError):
    """Request carries no active session."""
