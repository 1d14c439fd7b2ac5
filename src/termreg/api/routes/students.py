"""Student and transcript endpoints."""

from fastapi import APIRouter, status

from termreg.api.dependencies import StateStoreDep
from termreg.api.models import (
    APIResponse,
    GpaResponse,
    GradeCreate,
    StudentCreate,
    StudentResponse,
    student_to_response,
)

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=APIResponse[list[StudentResponse]])
def list_students(store: StateStoreDep) -> APIResponse[list[StudentResponse]]:
    """List all students."""
    return APIResponse(data=[student_to_response(s) for s in store.list_students()])


@router.post(
    "",
    response_model=APIResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_student(student: StudentCreate, store: StateStoreDep) -> APIResponse[StudentResponse]:
    """Create a new student."""
    created = store.create_student(id=student.id, name=student.name)
    return APIResponse(data=student_to_response(created))


@router.get("/{student_id}", response_model=APIResponse[StudentResponse])
def get_student(student_id: str, store: StateStoreDep) -> APIResponse[StudentResponse]:
    """Get a student with transcript and current term."""
    return APIResponse(data=student_to_response(store.get_student(student_id)))


@router.post(
    "/{student_id}/transcript",
    response_model=APIResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_transcript_record(
    student_id: str, record: GradeCreate, store: StateStoreDep
) -> APIResponse[StudentResponse]:
    """Record a grade on the student's transcript."""
    student = store.add_transcript_record(
        student_id=student_id,
        course_id=record.course_id,
        term_id=record.term,
        grade=record.grade,
    )
    return APIResponse(data=student_to_response(student))


@router.get("/{student_id}/gpa", response_model=APIResponse[GpaResponse])
def get_gpa(student_id: str, store: StateStoreDep) -> APIResponse[GpaResponse]:
    """Get the student's GPA (null before any grade is recorded)."""
    student = store.get_student(student_id)
    return APIResponse(
        data=GpaResponse(
            student_id=student.id,
            gpa=student.calculate_gpa(),
            units=student.transcript.units_sum(),
        )
    )
