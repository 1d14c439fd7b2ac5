"""Unit tests for enrollment models."""

import pytest

from termreg.catalog import Course
from termreg.enrollment import EnrollmentRulesViolation, Violation, ViolationKind, render_report
from termreg.enrollment.models import format_gpa


@pytest.mark.unit
class TestFormatGpa:
    """Tests for format_gpa."""

    @pytest.mark.parametrize(
        ("gpa", "expected"),
        [(10.0, "10.000000"), (15.333333333, "15.333333"), (None, "N/A")],
    )
    def test_format(self, gpa: float | None, expected: str) -> None:
        assert format_gpa(gpa) == expected


@pytest.mark.unit
class TestViolation:
    """Tests for Violation."""

    def test_to_dict_strips_newline(self, math1: Course) -> None:
        violation = Violation(ViolationKind.DUPLICATE, course=math1)

        assert violation.to_dict() == {
            "kind": "duplicate",
            "message": "Math1 is requested to be taken twice",
        }

    def test_render_report_concatenates(self, math1: Course, math2: Course) -> None:
        violations = [
            Violation(ViolationKind.ALREADY_PASSED, course=math1),
            Violation(ViolationKind.PREREQUISITE, course=math2, prerequisite=math1),
        ]

        assert render_report(violations) == (
            "The student has already passed Math1\n"
            "The student has not passed Math1 as a prerequisite of Math2\n"
        )

    def test_render_empty(self) -> None:
        assert render_report([]) == ""

    def test_exception_keeps_violations(self, math1: Course) -> None:
        violations = [Violation(ViolationKind.UNITS_CAP, units=22, gpa=None)]

        error = EnrollmentRulesViolation(violations)

        assert error.violations == violations
        assert error.report == "Number of units (22) requested does not match GPA of N/A\n"
