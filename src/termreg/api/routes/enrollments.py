"""Enrollment endpoints."""

from fastapi import APIRouter, status

from termreg.api.dependencies import ControllerDep, StateStoreDep
from termreg.api.models import (
    APIResponse,
    EnrollmentCheckResponse,
    EnrollmentRequest,
    StudentResponse,
    student_to_response,
    violation_to_response,
)
from termreg.catalog import Offering
from termreg.enrollment import render_report
from termreg.state_store import StateStore

router = APIRouter(prefix="/students/{student_id}/enrollments", tags=["enrollments"])


def _build_offerings(request: EnrollmentRequest, store: StateStore) -> list[Offering]:
    courses = store.get_courses([o.course_id for o in request.offerings])
    return [Offering(courses[o.course_id], o.section, o.exam_time) for o in request.offerings]


@router.post(
    "",
    response_model=APIResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
def enroll(
    student_id: str,
    request: EnrollmentRequest,
    store: StateStoreDep,
    controller: ControllerDep,
) -> APIResponse[StudentResponse]:
    """Enroll the student in every requested offering, or in none."""
    offerings = _build_offerings(request, store)
    student = store.enroll(student_id, offerings, controller)
    return APIResponse(data=student_to_response(student))


@router.post("/check", response_model=APIResponse[EnrollmentCheckResponse])
def check_enrollment(
    student_id: str,
    request: EnrollmentRequest,
    store: StateStoreDep,
    controller: ControllerDep,
) -> APIResponse[EnrollmentCheckResponse]:
    """Validate an enrollment request without committing it."""
    student = store.get_student(student_id)
    violations = controller.check(student, _build_offerings(request, store))
    return APIResponse(
        data=EnrollmentCheckResponse(
            valid=not violations,
            violations=[violation_to_response(v) for v in violations],
            report=render_report(violations),
        )
    )
