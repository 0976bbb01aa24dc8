"""Student sign-up, login and logout endpoints."""

from fastapi import APIRouter, Response, status

from coursereg.api.dependencies import (
    AuthContextDep,
    AuthServiceDep,
    SessionTokenDep,
    SettingsDep,
    StoreDep,
)
from coursereg.api.models import (
    ActionResponse,
    APIResponse,
    LoginRequest,
    StudentRegister,
    StudentResponse,
    student_to_response,
)
from coursereg.auth import InvalidCredentialsError, LoginResult
from coursereg.config import Settings
from coursereg.store import EmailInUseError, StudentNumberInUseError

router = APIRouter(tags=["auth"])


def _set_session_cookie(response: Response, settings: Settings, login: LoginResult) -> None:
    response.set_cookie(
        key=settings.session_cookie,
        value=login.token,
        max_age=login.max_age_seconds,
        httponly=True,
        samesite="lax",
    )


@router.post(
    "/register",
    response_model=ActionResponse[None],
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: StudentRegister,
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> ActionResponse[None]:
    """Create a student account and start a session."""
    try:
        login = auth_service.register_student(
            name=body.name,
            email=body.email,
            password=body.password,
            student_number=body.student_id,
            semester=body.semester,
        )
    except EmailInUseError:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return ActionResponse(success=False, message="Email already in use")
    except StudentNumberInUseError:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return ActionResponse(success=False, message="Student ID already in use")

    _set_session_cookie(response, settings, login)
    return ActionResponse(success=True, message="Registration successful")


@router.post("/login", response_model=ActionResponse[None])
def login(
    body: LoginRequest,
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> ActionResponse[None]:
    """Log in with email and password."""
    try:
        result = auth_service.login(body.email, body.password)
    except InvalidCredentialsError as e:
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return ActionResponse(success=False, message=str(e))

    _set_session_cookie(response, settings, result)
    return ActionResponse(success=True, message="Logged in")


@router.get("/logout", response_model=ActionResponse[None])
def logout(
    token: SessionTokenDep,
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> ActionResponse[None]:
    """End the current session. Logging out without a session is not an error."""
    if token:
        auth_service.logout(token)
    response.delete_cookie(settings.session_cookie)
    return ActionResponse(success=True, message="Logged out")


@router.get("/me", response_model=APIResponse[StudentResponse])
def me(auth: AuthContextDep, store: StoreDep) -> APIResponse[StudentResponse]:
    """Get the logged-in student."""
    student = store.get_student(auth.student_id)
    return APIResponse(data=student_to_response(student))
