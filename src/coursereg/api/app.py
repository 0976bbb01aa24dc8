"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from coursereg import __version__
from coursereg.api.dependencies import (
    close_services,
    close_store,
    init_services,
    init_settings,
    init_store,
)
from coursereg.api.models import ActionResponse
from coursereg.api.routes import auth, courses, enrollment
from coursereg.auth import NotAuthenticatedError
from coursereg.config import Settings, load_settings
from coursereg.enrollment import EnrollmentUnavailableError
from coursereg.logging import sanitize_for_log
from coursereg.store import CourseNotFoundError, StoreError, StudentNotFoundError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

RETRY_MESSAGE = "Something went wrong. Please try again."

# Routes whose body problems get a fixed message
INVALID_BODY_MESSAGES = {"/update-semester": "Invalid semester value"}


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ActionResponse[None](success=False, message=message).model_dump(),
    )


def _validation_message(path: str, exc: RequestValidationError) -> str:
    if path in INVALID_BODY_MESSAGES:
        return INVALID_BODY_MESSAGES[path]

    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = first.get("loc", ())[-1:] or ("body",)
    if field[0] == "body":
        return "Invalid request body"
    message = str(first.get("msg", "")).removeprefix("Value error, ")
    return f"Invalid {field[0]}: {message}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    init_settings(settings)
    store = init_store(settings.database_path)
    init_services(store, settings)
    logger.info("coursereg %s started (db=%s)", __version__, settings.database_path)

    yield
    # Shutdown
    close_services()
    close_store()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="coursereg API",
        description="Student course registration with per-semester credit limits",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings if settings is not None else load_settings()

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _failure(status.HTTP_400_BAD_REQUEST, _validation_message(request.url.path, exc))

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(
        _request: Request, _exc: NotAuthenticatedError
    ) -> JSONResponse:
        return _failure(status.HTTP_401_UNAUTHORIZED, "Unauthorized")

    @app.exception_handler(StudentNotFoundError)
    async def student_not_found_handler(
        _request: Request, _exc: StudentNotFoundError
    ) -> JSONResponse:
        return _failure(status.HTTP_401_UNAUTHORIZED, "Unauthorized")

    @app.exception_handler(CourseNotFoundError)
    async def course_not_found_handler(
        _request: Request, _exc: CourseNotFoundError
    ) -> JSONResponse:
        return _failure(status.HTTP_404_NOT_FOUND, "Course not found")

    @app.exception_handler(EnrollmentUnavailableError)
    async def enrollment_unavailable_handler(
        request: Request, exc: EnrollmentUnavailableError
    ) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return _failure(status.HTTP_503_SERVICE_UNAVAILABLE, RETRY_MESSAGE)

    @app.exception_handler(StoreError)
    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            sanitize_for_log(str(exc)),
            exc_info=exc,
        )
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, RETRY_MESSAGE)

    # Include routers
    app.include_router(auth.router)
    app.include_router(courses.router)
    app.include_router(enrollment.router)

    return app


# Default app instance
app = create_app()
