"""REST API for termreg."""

from termreg.api.app import app, create_app
from termreg.api.models import (
    APIResponse,
    CourseCreate,
    CourseResponse,
    EnrollmentCheckResponse,
    EnrollmentRequest,
    StudentCreate,
    StudentResponse,
)

__all__ = [
    "APIResponse",
    "CourseCreate",
    "CourseResponse",
    "EnrollmentCheckResponse",
    "EnrollmentRequest",
    "StudentCreate",
    "StudentResponse",
    "app",
    "create_app",
]
