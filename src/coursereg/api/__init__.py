"""REST API for coursereg."""

from coursereg.api.app import app, create_app
from coursereg.api.models import (
    ActionResponse,
    APIResponse,
    CourseResponse,
    CoursesOverviewResponse,
    StudentResponse,
)

__all__ = [
    "APIResponse",
    "ActionResponse",
    "CourseResponse",
    "CoursesOverviewResponse",
    "StudentResponse",
    "app",
    "create_app",
]
