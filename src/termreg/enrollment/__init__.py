"""Enrollment - Rule checks and atomic commit of a term's offerings."""

from termreg.enrollment.controller import EnrollmentController
from termreg.enrollment.exceptions import EnrollmentError, EnrollmentRulesViolation
from termreg.enrollment.models import Violation, ViolationKind, render_report
from termreg.enrollment.rules import DEFAULT_RULES, Rule

__all__ = [
    "DEFAULT_RULES",
    "EnrollmentController",
    "EnrollmentError",
    "EnrollmentRulesViolation",
    "Rule",
    "Violation",
    "ViolationKind",
    "render_report",
]
