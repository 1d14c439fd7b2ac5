"""Enrollment rules.

Each rule is a pure function over the requested offerings and the student
returning every violation it finds, in a fixed order. Rules never raise for
an infraction and never look at each other's results.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from termreg.catalog.models import total_units
from termreg.enrollment.models import Violation, ViolationKind

if TYPE_CHECKING:
    from termreg.catalog import Offering
    from termreg.config import RulesConfig
    from termreg.student import Student

Rule = Callable[[Sequence["Offering"], "Student", "RulesConfig"], list[Violation]]


def check_already_passed(
    offerings: Sequence[Offering], student: Student, config: RulesConfig
) -> list[Violation]:
    """One violation per offering whose course the student already passed."""
    return [
        Violation(ViolationKind.ALREADY_PASSED, course=o.course)
        for o in offerings
        if student.has_passed(o.course, config.passing_grade)
    ]


def check_prerequisites(
    offerings: Sequence[Offering], student: Student, config: RulesConfig
) -> list[Violation]:
    """One violation per unpassed prerequisite of each requested course."""
    violations = []
    for o in offerings:
        for prerequisite in o.course.prerequisites:
            if not student.has_passed(prerequisite, config.passing_grade):
                violations.append(
                    Violation(
                        ViolationKind.PREREQUISITE,
                        course=o.course,
                        prerequisite=prerequisite,
                    )
                )
    return violations


def check_exam_time_collision(
    offerings: Sequence[Offering], student: Student, config: RulesConfig
) -> list[Violation]:
    """One violation per ordered pair of distinct offerings sharing an exam time.

    Each colliding pair is reported from both sides.
    """
    violations = []
    for first in offerings:
        for second in offerings:
            if first is second:
                continue
            if first.has_exam_time_collision(second):
                violations.append(
                    Violation(ViolationKind.EXAM_COLLISION, first=first, second=second)
                )
    return violations


def check_duplicate_request(
    offerings: Sequence[Offering], student: Student, config: RulesConfig
) -> list[Violation]:
    """One violation per ordered pair of distinct offerings of the same course."""
    violations = []
    for first in offerings:
        for second in offerings:
            if first is second:
                continue
            if first.course == second.course:
                violations.append(Violation(ViolationKind.DUPLICATE, course=first.course))
    return violations


def check_units_limitation(
    offerings: Sequence[Offering], student: Student, config: RulesConfig
) -> list[Violation]:
    """At most one violation when requested units exceed what the GPA allows.

    An empty transcript has no GPA; only the absolute cap applies to it.
    """
    units = total_units(offerings)
    gpa = student.calculate_gpa()

    exceeded = units > config.max_units
    if gpa is not None:
        exceeded = exceeded or any(
            gpa < tier.gpa_below and units > tier.max_units for tier in config.units_tiers
        )

    if not exceeded:
        return []
    return [Violation(ViolationKind.UNITS_CAP, units=units, gpa=gpa)]


DEFAULT_RULES: tuple[Rule, ...] = (
    check_already_passed,
    check_prerequisites,
    check_exam_time_collision,
    check_duplicate_request,
    check_units_limitation,
)
