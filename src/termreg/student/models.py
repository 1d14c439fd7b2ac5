"""Data models for the Student module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from termreg.catalog import CourseSection
from termreg.config import DEFAULT_PASSING_GRADE
from termreg.transcript import Transcript

if TYPE_CHECKING:
    from termreg.catalog import Course, Term


class Student:
    """A student with a transcript and the course sections taken this term.

    The current-term list only grows through a successful enrollment;
    callers read it via ``current_term_offerings``.
    """

    def __init__(self, id: str, name: str, transcript: Transcript | None = None) -> None:
        self.id = id
        self.name = name
        self.transcript = transcript if transcript is not None else Transcript()
        self._current_term_offerings: list[CourseSection] = []

    @property
    def current_term_offerings(self) -> list[CourseSection]:
        """Snapshot of the sections committed for the current term."""
        return list(self._current_term_offerings)

    def take_course(self, course: Course, section: int) -> None:
        """Append (course, section) to the current term. Used by the enrollment commit."""
        self._current_term_offerings.append(CourseSection(course, section))

    def add_transcript_record(self, course: Course, term: Term, grade: float) -> None:
        self.transcript.add_record(course, term, grade)

    def has_passed(self, course: Course, passing_grade: float = DEFAULT_PASSING_GRADE) -> bool:
        return self.transcript.has_passed(course, passing_grade)

    def calculate_gpa(self) -> float | None:
        return self.transcript.calculate_gpa()

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, name={self.name!r})>"
