"""termreg - Term enrollment validation against academic rules."""

from termreg.catalog import Course, CourseSection, Offering, PrerequisiteCycleError, Term
from termreg.config import ConfigError, RulesConfig, UnitsTier, load_config
from termreg.enrollment import (
    EnrollmentController,
    EnrollmentError,
    EnrollmentRulesViolation,
    Violation,
    ViolationKind,
)
from termreg.student import Student
from termreg.transcript import TermTranscript, Transcript

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__


__all__ = [
    "ConfigError",
    "Course",
    "CourseSection",
    "EnrollmentController",
    "EnrollmentError",
    "EnrollmentRulesViolation",
    "Offering",
    "PrerequisiteCycleError",
    "RulesConfig",
    "Student",
    "Term",
    "TermTranscript",
    "Transcript",
    "UnitsTier",
    "Violation",
    "ViolationKind",
    "__version__",
    "get_version",
    "load_config",
]
