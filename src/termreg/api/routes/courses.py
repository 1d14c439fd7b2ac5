"""Course catalog endpoints."""

from fastapi import APIRouter, status

from termreg.api.dependencies import StateStoreDep
from termreg.api.models import (
    APIResponse,
    CourseCreate,
    CourseResponse,
    course_to_response,
)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=APIResponse[list[CourseResponse]])
def list_courses(store: StateStoreDep) -> APIResponse[list[CourseResponse]]:
    """List all courses."""
    return APIResponse(data=[course_to_response(c) for c in store.list_courses()])


@router.post(
    "",
    response_model=APIResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_course(course: CourseCreate, store: StateStoreDep) -> APIResponse[CourseResponse]:
    """Create a new course."""
    created = store.create_course(
        id=course.id,
        name=course.name,
        units=course.units,
        prerequisite_ids=course.prerequisite_ids,
    )
    return APIResponse(data=course_to_response(created))


@router.get("/{course_id}", response_model=APIResponse[CourseResponse])
def get_course(course_id: str, store: StateStoreDep) -> APIResponse[CourseResponse]:
    """Get a course by ID."""
    return APIResponse(data=course_to_response(store.get_course(course_id)))
