"""Course page and catalog seeding endpoints."""

from fastapi import APIRouter

from coursereg.api.dependencies import AuthContextDep, EnrollmentServiceDep, StoreDep
from coursereg.api.models import (
    ActionResponse,
    APIResponse,
    CoursesOverviewResponse,
    SeedResult,
    overview_to_response,
)
from coursereg.store import init_courses as seed_default_catalog

router = APIRouter(tags=["courses"])


@router.get("/courses", response_model=APIResponse[CoursesOverviewResponse])
def list_courses(
    auth: AuthContextDep, enrollment: EnrollmentServiceDep
) -> APIResponse[CoursesOverviewResponse]:
    """Registered and available courses with the student's credit position."""
    overview = enrollment.overview(auth)
    return APIResponse(data=overview_to_response(overview))


@router.get("/init-courses", response_model=ActionResponse[SeedResult])
def init_courses(store: StoreDep) -> ActionResponse[SeedResult]:
    """Seed the default catalog. Does nothing if any course exists."""
    inserted = seed_default_catalog(store)
    result = SeedResult(inserted=inserted, total=store.count_courses())
    if inserted == 0:
        return ActionResponse(success=True, message="Courses already initialized.", data=result)
    return ActionResponse(success=True, message="Courses initialized successfully.", data=result)
