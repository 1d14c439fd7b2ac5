"""Pydantic models for REST API."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from termreg.catalog import Course
from termreg.config import MAX_GRADE
from termreg.enrollment import Violation
from termreg.student import Student

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Course models


class CourseCreate(BaseModel):
    """Request model for creating a course."""

    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    units: int = Field(..., ge=1)
    prerequisite_ids: list[str] = Field(default_factory=list)


class CourseResponse(BaseModel):
    """Response model for a course."""

    id: str
    name: str
    units: int
    prerequisite_ids: list[str]


def course_to_response(course: Course) -> CourseResponse:
    """Convert a Course to CourseResponse."""
    return CourseResponse(
        id=course.id,
        name=course.name,
        units=course.units,
        prerequisite_ids=[p.id for p in course.prerequisites],
    )


# Student models


class StudentCreate(BaseModel):
    """Request model for creating a student."""

    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)


class GradeCreate(BaseModel):
    """Request model for recording a transcript grade."""

    course_id: str = Field(..., min_length=1)
    term: str = Field(..., min_length=1, max_length=50)
    grade: float = Field(..., ge=0.0, le=MAX_GRADE)


class GradeResponse(BaseModel):
    """A single transcript record."""

    term: str
    course_id: str
    grade: float


class CurrentTermItem(BaseModel):
    """An offering committed for the current term."""

    course_id: str
    course_name: str
    section: int


class StudentResponse(BaseModel):
    """Response model for a student."""

    id: str
    name: str
    gpa: float | None
    transcript: list[GradeResponse]
    current_term: list[CurrentTermItem]


class GpaResponse(BaseModel):
    """Response model for a student's GPA."""

    student_id: str
    gpa: float | None
    units: int


def student_to_response(student: Student) -> StudentResponse:
    """Convert a Student to StudentResponse."""
    transcript = [
        GradeResponse(term=term.id, course_id=course.id, grade=grade)
        for term, term_transcript in student.transcript
        for course, grade in term_transcript.records()
    ]
    current_term = [
        CurrentTermItem(course_id=o.course.id, course_name=o.course.name, section=o.section)
        for o in student.current_term_offerings
    ]
    return StudentResponse(
        id=student.id,
        name=student.name,
        gpa=student.calculate_gpa(),
        transcript=transcript,
        current_term=current_term,
    )


# Enrollment models


class OfferingRequest(BaseModel):
    """A requested course section and its exam time."""

    course_id: str = Field(..., min_length=1)
    section: int = Field(..., ge=0)
    exam_time: str = Field(..., min_length=1)


class EnrollmentRequest(BaseModel):
    """Request model for enrolling a student."""

    offerings: list[OfferingRequest]


class ViolationResponse(BaseModel):
    """A single broken rule."""

    kind: str
    message: str


class EnrollmentCheckResponse(BaseModel):
    """Result of validating an enrollment request without committing it."""

    valid: bool
    violations: list[ViolationResponse]
    report: str


def violation_to_response(violation: Violation) -> ViolationResponse:
    """Convert a Violation to ViolationResponse."""
    return ViolationResponse.model_validate(violation.to_dict())
