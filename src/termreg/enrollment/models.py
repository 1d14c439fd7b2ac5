"""Data models for the Enrollment module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from termreg.catalog import Course, Offering


class ViolationKind(StrEnum):
    """Kinds of rule violation, in report order."""

    ALREADY_PASSED = "already_passed"
    PREREQUISITE = "prerequisite"
    EXAM_COLLISION = "exam_collision"
    DUPLICATE = "duplicate"
    UNITS_CAP = "units_cap"


def format_gpa(gpa: float | None) -> str:
    """Render a GPA the way reports show it (six decimals, N/A when undefined)."""
    if gpa is None:
        return "N/A"
    return f"{gpa:f}"


@dataclass(frozen=True)
class Violation:
    """A single rule infraction.

    Only the fields relevant to ``kind`` are set.

    Attributes:
        kind: Which rule was broken.
        course: Course of the offending offering (passed, prerequisite, duplicate).
        prerequisite: Missing prerequisite (prerequisite).
        first: First offering of a colliding pair (exam collision).
        second: Second offering of a colliding pair (exam collision).
        units: Units requested (units cap).
        gpa: Student GPA, None for an empty transcript (units cap).
    """

    kind: ViolationKind
    course: Course | None = None
    prerequisite: Course | None = None
    first: Offering | None = None
    second: Offering | None = None
    units: int | None = None
    gpa: float | None = None

    @property
    def message(self) -> str:
        """Report line for this violation, newline-terminated."""
        match self.kind:
            case ViolationKind.ALREADY_PASSED:
                text = f"The student has already passed {self.course.name}"
            case ViolationKind.PREREQUISITE:
                text = (
                    f"The student has not passed {self.prerequisite.name} "
                    f"as a prerequisite of {self.course.name}"
                )
            case ViolationKind.EXAM_COLLISION:
                text = f"Two offerings {self.first} and {self.second} have the same exam time"
            case ViolationKind.DUPLICATE:
                text = f"{self.course.name} is requested to be taken twice"
            case ViolationKind.UNITS_CAP:
                text = (
                    f"Number of units ({self.units}) requested does not match "
                    f"GPA of {format_gpa(self.gpa)}"
                )
        return text + "\n"

    def to_dict(self) -> dict[str, object]:
        """Plain representation for API responses."""
        return {"kind": self.kind.value, "message": self.message.rstrip("\n")}


def render_report(violations: list[Violation]) -> str:
    """Concatenate violation messages into the textual report."""
    return "".join(v.message for v in violations)
