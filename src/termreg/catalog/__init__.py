"""Catalog - Courses, terms and the offerings students request."""

from termreg.catalog.exceptions import PrerequisiteCycleError
from termreg.catalog.models import Course, CourseSection, Offering, Term

__all__ = [
    "Course",
    "CourseSection",
    "Offering",
    "PrerequisiteCycleError",
    "Term",
]
