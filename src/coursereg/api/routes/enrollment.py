"""Course registration and semester endpoints."""

from fastapi import APIRouter, Response, status

from coursereg.api.dependencies import AuthContextDep, EnrollmentServiceDep
from coursereg.api.models import (
    ActionResponse,
    SemesterChangeData,
    SemesterUpdate,
    semester_change_to_response,
)
from coursereg.enrollment import SemesterChanged

router = APIRouter(tags=["enrollment"])


@router.post("/register-course/{course_id}", response_model=ActionResponse[None])
def register_course(
    course_id: str,
    response: Response,
    auth: AuthContextDep,
    enrollment: EnrollmentServiceDep,
) -> ActionResponse[None]:
    """Register for a course, subject to the semester's credit limit."""
    decision = enrollment.register_course(auth, course_id)
    if not decision.ok:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return ActionResponse(success=decision.ok, message=decision.message)


@router.post("/unregister-course/{course_id}", response_model=ActionResponse[None])
def unregister_course(
    course_id: str,
    auth: AuthContextDep,
    enrollment: EnrollmentServiceDep,
) -> ActionResponse[None]:
    """Drop a course. Dropping an unregistered course succeeds."""
    result = enrollment.unregister_course(auth, course_id)
    return ActionResponse(success=True, message=result.message)


@router.post("/update-semester", response_model=ActionResponse[SemesterChangeData])
def update_semester(
    body: SemesterUpdate,
    response: Response,
    auth: AuthContextDep,
    enrollment: EnrollmentServiceDep,
) -> ActionResponse[SemesterChangeData]:
    """Change the student's semester. Existing registrations are kept."""
    decision = enrollment.change_semester(auth, body.semester)
    if not isinstance(decision, SemesterChanged):
        response.status_code = status.HTTP_400_BAD_REQUEST
        return ActionResponse(success=False, message=decision.message)
    return ActionResponse(
        success=True,
        message=decision.message,
        data=semester_change_to_response(decision),
    )
