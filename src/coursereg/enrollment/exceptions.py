"""Exceptions for the enrollment module."""


class EnrollmentError(Exception):
    """Base exception for enrollment errors."""

    pass


class EnrollmentUnavailableError(EnrollmentError):
    """Enrollment change could not be persisted; the caller may retry."""

    pass
