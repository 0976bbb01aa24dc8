"""Custom exceptions for the record store."""


class StoreError(Exception):
    """Base exception for store errors."""


class CourseNotFoundError(StoreError):
    """Course with given ID does not exist."""


class StudentNotFoundError(StoreError):
    """Student with given ID does not exist."""


class StudentExistsError(StoreError):
    """A student with a conflicting unique field already exists."""


class EmailInUseError(StudentExistsError):
    """Email address is already registered."""


class StudentNumberInUseError(StudentExistsError):
    """Student number is already registered."""


class ConcurrentUpdateError(StoreError):
    """Student record changed since it was read."""
