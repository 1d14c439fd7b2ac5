"""Data models for the Catalog module."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field

from termreg.catalog.exceptions import PrerequisiteCycleError


@dataclass(frozen=True, eq=False)
class Course:
    """A course students can take.

    Two courses are equal iff their ids are equal.

    Attributes:
        id: Unique course identifier.
        name: Display name used in enrollment reports.
        units: Positive unit weight used for GPA and load limits.
        prerequisites: Courses that must be passed first, in checking order.
    """

    id: str
    name: str
    units: int
    prerequisites: tuple[Course, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if isinstance(self.units, bool) or not isinstance(self.units, int) or self.units <= 0:
            raise ValueError(f"Course '{self.id}' must have a positive integer unit count")
        object.__setattr__(self, "prerequisites", tuple(self.prerequisites))
        self._check_acyclic()

    def _check_acyclic(self) -> None:
        stack: list[Course] = list(self.prerequisites)
        seen: set[str] = set()
        while stack:
            course = stack.pop()
            if course.id == self.id:
                raise PrerequisiteCycleError(
                    f"Course '{self.id}' cannot be a prerequisite of itself"
                )
            if course.id in seen:
                continue
            seen.add(course.id)
            stack.extend(course.prerequisites)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Course):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<Course(id={self.id!r}, name={self.name!r}, units={self.units})>"


@dataclass(frozen=True)
class Term:
    """Opaque academic term identifier (e.g. "2023-fall")."""

    id: str

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class CourseSection:
    """A course section a student is taking this term.

    Committed enrollments keep only the course and section; the exam time
    matters while a request is being validated.
    """

    course: Course
    section: int

    def __post_init__(self) -> None:
        if self.section < 0:
            raise ValueError(f"Section must be non-negative, got {self.section}")

    def __str__(self) -> str:
        return self.course.name


@dataclass(eq=False)
class Offering:
    """A section of a course offered this term, with its exam time.

    Offerings compare by identity: two offerings of the same course and
    section are still distinct requests.

    Attributes:
        course: The offered course.
        section: Section number.
        exam_time: Any hashable exam slot identifier.
    """

    course: Course
    section: int
    exam_time: Hashable

    def __post_init__(self) -> None:
        if self.section < 0:
            raise ValueError(f"Section must be non-negative, got {self.section}")
        if self.exam_time is None:
            raise ValueError(f"Offering of '{self.course.id}' needs an exam time")

    def has_exam_time_collision(self, other: Offering) -> bool:
        """Return True if both offerings share the same exam time."""
        return self.exam_time == other.exam_time

    def __str__(self) -> str:
        return self.course.name

    def __repr__(self) -> str:
        return (
            f"<Offering(course={self.course.id!r}, section={self.section}, "
            f"exam_time={self.exam_time!r})>"
        )


def total_units(offerings: Iterable[Offering]) -> int:
    """Sum the units of the courses behind the given offerings."""
    return sum(o.course.units for o in offerings)
