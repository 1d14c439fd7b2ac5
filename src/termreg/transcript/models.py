"""Data models for the Transcript module."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from termreg.config import DEFAULT_PASSING_GRADE, MAX_GRADE

if TYPE_CHECKING:
    from termreg.catalog import Course, Term


class TermTranscript:
    """Grades earned during a single term.

    A course appears at most once per term; recording it again overwrites
    the earlier grade.
    """

    def __init__(self, term: Term) -> None:
        self.term = term
        self._records: dict[Course, float] = {}

    def put(self, course: Course, grade: float) -> None:
        """Record a grade for a course, replacing any previous one this term.

        Raises:
            ValueError: If the grade is outside the 0-20 scale.
        """
        if not 0.0 <= grade <= MAX_GRADE:
            raise ValueError(f"Grade must be within [0, {MAX_GRADE}], got {grade}")
        self._records[course] = float(grade)

    def grade_of(self, course: Course) -> float | None:
        return self._records.get(course)

    def records(self) -> list[tuple[Course, float]]:
        return list(self._records.items())

    def has_passed(self, course: Course, passing_grade: float = DEFAULT_PASSING_GRADE) -> bool:
        grade = self._records.get(course)
        return grade is not None and grade >= passing_grade

    def units_sum(self) -> int:
        return sum(course.units for course in self._records)

    def grade_sum(self) -> float:
        """Sum of grade x units over every record."""
        return sum(grade * course.units for course, grade in self._records.items())

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"<TermTranscript(term={self.term.id!r}, records={len(self._records)})>"


class Transcript:
    """All term transcripts of one student, keyed by term."""

    def __init__(self) -> None:
        self._terms: dict[Term, TermTranscript] = {}

    def add_record(self, course: Course, term: Term, grade: float) -> None:
        """Record a grade, creating the term's transcript on first use."""
        if term not in self._terms:
            self._terms[term] = TermTranscript(term)
        self._terms[term].put(course, grade)

    def terms(self) -> list[Term]:
        return list(self._terms)

    def term_transcript(self, term: Term) -> TermTranscript | None:
        return self._terms.get(term)

    def has_passed(self, course: Course, passing_grade: float = DEFAULT_PASSING_GRADE) -> bool:
        """True if any term recorded a passing grade for the course."""
        return any(t.has_passed(course, passing_grade) for t in self._terms.values())

    def units_sum(self) -> int:
        return sum(t.units_sum() for t in self._terms.values())

    def grade_sum(self) -> float:
        return sum(t.grade_sum() for t in self._terms.values())

    def calculate_gpa(self) -> float | None:
        """Units-weighted mean of all recorded grades.

        Returns:
            The GPA, or None when nothing has been recorded yet.
        """
        units = self.units_sum()
        if units == 0:
            return None
        return self.grade_sum() / units

    def is_empty(self) -> bool:
        return self.units_sum() == 0

    def __iter__(self) -> Iterator[tuple[Term, TermTranscript]]:
        return iter(list(self._terms.items()))

    def __repr__(self) -> str:
        return f"<Transcript(terms={len(self._terms)})>"
