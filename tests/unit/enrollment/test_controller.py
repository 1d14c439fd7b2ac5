"""Unit tests for EnrollmentController."""

import logging

import pytest

from termreg.catalog import Course, CourseSection, Offering, Term
from termreg.config import RulesConfig, UnitsTier
from termreg.enrollment import (
    EnrollmentController,
    EnrollmentError,
    EnrollmentRulesViolation,
    Violation,
    ViolationKind,
)
from termreg.student import Student


@pytest.fixture
def controller() -> EnrollmentController:
    return EnrollmentController()


def _three_unit_courses(count: int) -> list[Course]:
    return [Course(id=f"c{i}", name=f"Course{i}", units=3) for i in range(count)]


def _snapshot(student: Student) -> tuple[list, list]:
    offerings = [(o.course, o.section) for o in student.current_term_offerings]
    records = [(term, tt.records()) for term, tt in student.transcript]
    return offerings, records


@pytest.mark.unit
class TestScenarios:
    """End-to-end enrollment scenarios."""

    def test_happy_path(
        self,
        controller: EnrollmentController,
        student: Student,
        math1: Course,
        phys1: Course,
    ) -> None:
        """Valid request commits every offering in order."""
        controller.enroll(student, [Offering(math1, 1, "10am"), Offering(phys1, 1, "2pm")])

        assert [(o.course, o.section) for o in student.current_term_offerings] == [
            (math1, 1),
            (phys1, 1),
        ]

    def test_committed_sections_have_no_exam_time(
        self, controller: EnrollmentController, student: Student, math1: Course
    ) -> None:
        controller.enroll(student, [Offering(math1, 1, "10am")])

        assert student.current_term_offerings == [CourseSection(math1, 1)]

    def test_already_passed(
        self,
        controller: EnrollmentController,
        student: Student,
        math1: Course,
        term2023: Term,
    ) -> None:
        student.add_transcript_record(math1, term2023, 14.0)

        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, [Offering(math1, 1, "10am")])

        assert exc_info.value.report == "The student has already passed Math1\n"

    def test_prerequisites(
        self, controller: EnrollmentController, student: Student, math2: Course
    ) -> None:
        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, [Offering(math2, 1, "10am")])

        assert exc_info.value.report == (
            "The student has not passed Math1 as a prerequisite of Math2\n"
        )

    def test_exam_collision_and_duplicate(
        self, controller: EnrollmentController, student: Student, math1: Course
    ) -> None:
        """Both pair rules report each pair twice, grouped by rule."""
        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, [Offering(math1, 1, "9am"), Offering(math1, 2, "9am")])

        assert exc_info.value.report == (
            "Two offerings Math1 and Math1 have the same exam time\n"
            "Two offerings Math1 and Math1 have the same exam time\n"
            "Math1 is requested to be taken twice\n"
            "Math1 is requested to be taken twice\n"
        )

    def test_units_cap_low_gpa(
        self,
        controller: EnrollmentController,
        student: Student,
        math1: Course,
        term2023: Term,
    ) -> None:
        student.add_transcript_record(math1, term2023, 10.0)
        offerings = [Offering(c, 1, f"slot-{i}") for i, c in enumerate(_three_unit_courses(5))]

        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, offerings)

        assert exc_info.value.report == (
            "Number of units (15) requested does not match GPA of 10.000000\n"
        )

    def test_units_cap_absolute(
        self,
        controller: EnrollmentController,
        student: Student,
        math1: Course,
        term2023: Term,
    ) -> None:
        """Even a GPA of 18 cannot take more than 20 units."""
        student.add_transcript_record(math1, term2023, 18.0)
        offerings = [Offering(c, 1, f"slot-{i}") for i, c in enumerate(_three_unit_courses(7))]

        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, offerings)

        assert exc_info.value.report == (
            "Number of units (21) requested does not match GPA of 18.000000\n"
        )

    def test_units_at_absolute_cap_succeeds(
        self,
        controller: EnrollmentController,
        student: Student,
        math1: Course,
        term2023: Term,
    ) -> None:
        student.add_transcript_record(math1, term2023, 18.0)
        courses = [Course(id=f"f{i}", name=f"Four{i}", units=4) for i in range(5)]

        controller.enroll(student, [Offering(c, 1, f"slot-{i}") for i, c in enumerate(courses)])

        assert len(student.current_term_offerings) == 5


@pytest.mark.unit
class TestReport:
    """Tests for report contents and ordering."""

    def test_rules_reported_in_fixed_order(
        self,
        controller: EnrollmentController,
        student: Student,
        math1: Course,
        phys1: Course,
        term2023: Term,
    ) -> None:
        """Every rule runs; messages are grouped by rule."""
        student.add_transcript_record(math1, term2023, 14.0)
        big = Course(id="big", name="Big", units=15, prerequisites=(phys1,))

        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, [Offering(math1, 1, "9am"), Offering(big, 1, "9am")])

        assert exc_info.value.report == (
            "The student has already passed Math1\n"
            "The student has not passed Phys1 as a prerequisite of Big\n"
            "Two offerings Math1 and Big have the same exam time\n"
            "Two offerings Big and Math1 have the same exam time\n"
            "Number of units (18) requested does not match GPA of 14.000000\n"
        )
        assert [v.kind for v in exc_info.value.violations] == [
            ViolationKind.ALREADY_PASSED,
            ViolationKind.PREREQUISITE,
            ViolationKind.EXAM_COLLISION,
            ViolationKind.EXAM_COLLISION,
            ViolationKind.UNITS_CAP,
        ]

    def test_one_line_per_violation(
        self, controller: EnrollmentController, student: Student, math1: Course
    ) -> None:
        offerings = [Offering(math1, s, "9am") for s in range(3)]

        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, offerings)

        # 6 ordered collision pairs + 6 ordered duplicate pairs
        error = exc_info.value
        assert len(error.violations) == 12
        assert error.report.count("\n") == 12
        assert error.report.endswith("\n")

    def test_report_is_deterministic(
        self, controller: EnrollmentController, student: Student, math1: Course, math2: Course
    ) -> None:
        offerings = [Offering(math2, 1, "9am"), Offering(math2, 2, "9am")]

        reports = []
        for _ in range(3):
            with pytest.raises(EnrollmentRulesViolation) as exc_info:
                controller.enroll(student, offerings)
            reports.append(exc_info.value.report)

        assert len(set(reports)) == 1

    def test_str_of_error_is_report(
        self, controller: EnrollmentController, student: Student, math2: Course
    ) -> None:
        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, [Offering(math2, 1, "9am")])

        assert str(exc_info.value) == exc_info.value.report
        assert isinstance(exc_info.value, EnrollmentError)


@pytest.mark.unit
class TestAtomicity:
    """A rejected request leaves the student untouched."""

    def test_failed_enroll_changes_nothing(
        self,
        controller: EnrollmentController,
        student: Student,
        math1: Course,
        phys1: Course,
        math2: Course,
        term2023: Term,
    ) -> None:
        student.add_transcript_record(phys1, term2023, 12.0)
        controller.enroll(student, [Offering(Course(id="x", name="X", units=2), 1, "8am")])
        before = _snapshot(student)

        with pytest.raises(EnrollmentRulesViolation):
            controller.enroll(student, [Offering(math1, 1, "10am"), Offering(math2, 1, "2pm")])

        assert _snapshot(student) == before

    def test_check_does_not_commit(
        self, controller: EnrollmentController, student: Student, math1: Course
    ) -> None:
        violations = controller.check(student, [Offering(math1, 1, "10am")])

        assert violations == []
        assert student.current_term_offerings == []

    def test_reenroll_before_grading_is_allowed(
        self, controller: EnrollmentController, student: Student, math1: Course
    ) -> None:
        """Earlier commits are not grades; only grading makes a course passed."""
        controller.enroll(student, [Offering(math1, 1, "10am")])
        controller.enroll(student, [Offering(math1, 1, "10am")])

        assert len(student.current_term_offerings) == 2

    def test_empty_request_succeeds(
        self, controller: EnrollmentController, student: Student
    ) -> None:
        controller.enroll(student, [])

        assert student.current_term_offerings == []


@pytest.mark.unit
class TestConfiguration:
    """Tests for controller configuration."""

    def test_defaults(self, controller: EnrollmentController) -> None:
        assert controller.config == RulesConfig()
        assert len(controller.rules) == 5

    def test_custom_config_applies(self, student: Student, term2023: Term) -> None:
        strict = EnrollmentController(
            RulesConfig(max_units=6, units_tiers=[UnitsTier(gpa_below=20, max_units=3)])
        )
        courses = _three_unit_courses(3)

        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            strict.enroll(student, [Offering(c, 1, f"s{i}") for i, c in enumerate(courses)])

        assert exc_info.value.violations[0].kind is ViolationKind.UNITS_CAP

    def test_custom_rule_catalog(self, student: Student, math1: Course) -> None:
        """Extra rules plug in without touching existing ones."""

        def no_mornings(offerings, _student, _config):
            return [
                Violation(ViolationKind.EXAM_COLLISION, first=o, second=o)
                for o in offerings
                if o.exam_time == "8am"
            ]

        controller = EnrollmentController(rules=[no_mornings])

        with pytest.raises(EnrollmentRulesViolation) as exc_info:
            controller.enroll(student, [Offering(math1, 1, "8am")])

        assert len(exc_info.value.violations) == 1


@pytest.mark.unit
class TestLogging:
    """Tests for controller log output."""

    def test_rejection_logged_as_warning(
        self,
        controller: EnrollmentController,
        student: Student,
        math2: Course,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="termreg"):
            with pytest.raises(EnrollmentRulesViolation):
                controller.enroll(student, [Offering(math2, 1, "9am")])

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "prerequisite of Math2" in warnings[0].getMessage()

    def test_commit_logged(
        self,
        controller: EnrollmentController,
        student: Student,
        math1: Course,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="termreg"):
            controller.enroll(student, [Offering(math1, 1, "9am")])

        assert any("Enrolled student 810100000" in r.getMessage() for r in caplog.records)
