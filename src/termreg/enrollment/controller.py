"""EnrollmentController - Validates requested offerings and commits them."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from termreg.config import RulesConfig
from termreg.enrollment.exceptions import EnrollmentRulesViolation
from termreg.enrollment.rules import DEFAULT_RULES
from termreg.logging import truncate_report

if TYPE_CHECKING:
    from termreg.catalog import Offering
    from termreg.enrollment.models import Violation
    from termreg.enrollment.rules import Rule
    from termreg.student import Student

logger = logging.getLogger(__name__)


class EnrollmentController:
    """Runs every enrollment rule and commits the request only if none fail.

    Rules are independent: all of them run on every request so the student
    sees every problem at once. Nothing is written to the student until the
    whole request has been validated.
    """

    def __init__(
        self,
        config: RulesConfig | None = None,
        rules: Sequence[Rule] | None = None,
    ) -> None:
        """Initialize the EnrollmentController.

        Args:
            config: Rule thresholds. Defaults to RulesConfig().
            rules: Rules to run, in report order. Defaults to DEFAULT_RULES.
        """
        self.config = config if config is not None else RulesConfig()
        self.rules: tuple[Rule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES

    def check(self, student: Student, offerings: Sequence[Offering]) -> list[Violation]:
        """Validate a request without committing it.

        Args:
            student: The student asking to enroll.
            offerings: Requested offerings, in request order.

        Returns:
            Every violation found, in report order. Empty if the request is valid.
        """
        offerings = list(offerings)
        violations: list[Violation] = []
        for rule in self.rules:
            found = rule(offerings, student, self.config)
            logger.debug(
                "Rule %s found %d violation(s)", getattr(rule, "__name__", rule), len(found)
            )
            violations.extend(found)
        return violations

    def enroll(self, student: Student, offerings: Sequence[Offering]) -> None:
        """Enroll a student in the requested offerings, all or nothing.

        Args:
            student: The student asking to enroll.
            offerings: Requested offerings, committed in this order.

        Raises:
            EnrollmentRulesViolation: If any rule is broken. The student is untouched.
        """
        offerings = list(offerings)
        logger.info(
            "Enrollment requested by student %s for %d offering(s)", student.id, len(offerings)
        )

        violations = self.check(student, offerings)
        if violations:
            error = EnrollmentRulesViolation(violations)
            logger.warning(
                "Enrollment rejected for student %s with %d violation(s):\n%s",
                student.id,
                len(violations),
                truncate_report(error.report),
            )
            raise error

        for o in offerings:
            student.take_course(o.course, o.section)
        logger.info("Enrolled student %s in %d offering(s)", student.id, len(offerings))
