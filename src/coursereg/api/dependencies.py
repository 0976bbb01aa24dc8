"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request

from coursereg.auth import AuthContext, AuthService, PasswordHasher
from coursereg.config import Settings
from coursereg.enrollment import EnrollmentService
from coursereg.store import RecordStore

BEARER_PREFIX = "Bearer "

# Global Settings instance (initialized on app startup)
_settings: Settings | None = None


def init_settings(settings: Settings) -> Settings:
    """Initialize the global Settings instance."""
    global _settings  # noqa: PLW0603
    _settings = settings
    return _settings


def get_settings() -> Settings:
    """Dependency that provides the Settings instance."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_settings() first.")
    return _settings


SettingsDep = Annotated[Settings, Depends(get_settings)]

# Global RecordStore instance (initialized on app startup)
_store: RecordStore | None = None


def init_store(db_path: str = "coursereg.db") -> RecordStore:
    """Initialize the global RecordStore instance."""
    global _store  # noqa: PLW0603
    _store = RecordStore(db_path)
    return _store


def close_store() -> None:
    """Close the global RecordStore instance."""
    global _store  # noqa: PLW0603
    if _store is not None:
        _store.close()
        _store = None


def get_store() -> Generator[RecordStore, None, None]:
    """Dependency that provides the RecordStore instance."""
    if _store is None:
        raise RuntimeError("RecordStore not initialized. Call init_store() first.")
    yield _store


StoreDep = Annotated[RecordStore, Depends(get_store)]

# Global services (initialized on app startup)
_auth_service: AuthService | None = None
_enrollment_service: EnrollmentService | None = None


def init_services(store: RecordStore, settings: Settings) -> None:
    """Initialize the global AuthService and EnrollmentService instances."""
    global _auth_service, _enrollment_service  # noqa: PLW0603
    _auth_service = AuthService(
        store,
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        session_ttl=timedelta(hours=settings.session_ttl_hours),
    )
    _enrollment_service = EnrollmentService(store, max_retries=settings.max_update_retries)


def close_services() -> None:
    """Drop the global service instances."""
    global _auth_service, _enrollment_service  # noqa: PLW0603
    _auth_service = None
    _enrollment_service = None


def get_auth_service() -> Generator[AuthService, None, None]:
    """Dependency that provides the AuthService instance."""
    if _auth_service is None:
        raise RuntimeError("AuthService not initialized. Call init_services() first.")
    yield _auth_service


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_enrollment_service() -> Generator[EnrollmentService, None, None]:
    """Dependency that provides the EnrollmentService instance."""
    if _enrollment_service is None:
        raise RuntimeError("EnrollmentService not initialized. Call init_services() first.")
    yield _enrollment_service


EnrollmentServiceDep = Annotated[EnrollmentService, Depends(get_enrollment_service)]


def get_session_token(request: Request, settings: SettingsDep) -> str | None:
    """Session token from the session cookie or an Authorization bearer header."""
    header = request.headers.get("Authorization", "")
    if header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX) :].strip() or None
    return request.cookies.get(settings.session_cookie)


SessionTokenDep = Annotated[str | None, Depends(get_session_token)]


def get_auth_context(token: SessionTokenDep, auth_service: AuthServiceDep) -> AuthContext:
    """Dependency that resolves the caller. Raises NotAuthenticatedError if anonymous."""
    return auth_service.authenticate(token)


AuthContextDep = Annotated[AuthContext, Depends(get_auth_context)]
