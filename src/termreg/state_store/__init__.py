"""State Store - Persistent storage for courses, students and enrollments."""

from termreg.state_store.exceptions import (
    CourseExistsError,
    CourseNotFoundError,
    StateStoreError,
    StudentExistsError,
    StudentNotFoundError,
)
from termreg.state_store.models import (
    CourseRecord,
    EnrollmentRecord,
    GradeRecord,
    PrerequisiteLink,
    StudentRecord,
)
from termreg.state_store.store import StateStore

__all__ = [
    "CourseExistsError",
    "CourseNotFoundError",
    "CourseRecord",
    "EnrollmentRecord",
    "GradeRecord",
    "PrerequisiteLink",
    "StateStore",
    "StateStoreError",
    "StudentExistsError",
    "StudentNotFoundError",
    "StudentRecord",
]
