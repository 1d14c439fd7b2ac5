"""Exceptions for the Enrollment module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from termreg.enrollment.models import render_report

if TYPE_CHECKING:
    from termreg.enrollment.models import Violation


class EnrollmentError(Exception):
    """Base exception for enrollment errors."""


class EnrollmentRulesViolation(EnrollmentError):
    """Requested offerings break one or more enrollment rules.

    Attributes:
        violations: Every violation found, in report order.
        report: One newline-terminated line per violation.
    """

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = list(violations)
        self.report = render_report(self.violations)
        super().__init__(self.report)
