"""StateStore - Main API for State Store operations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from termreg.catalog import Course, Term
from termreg.config import MAX_GRADE
from termreg.logging import get_logger
from termreg.state_store.database import Database
from termreg.state_store.exceptions import (
    CourseExistsError,
    CourseNotFoundError,
    StudentExistsError,
    StudentNotFoundError,
)
from termreg.state_store.models import (
    CourseRecord,
    EnrollmentRecord,
    GradeRecord,
    PrerequisiteLink,
    StudentRecord,
)
from termreg.student import Student

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from termreg.catalog import Offering
    from termreg.enrollment import EnrollmentController

logger = get_logger("state_store")


class StateStore:
    """Main API for State Store operations.

    Persists the catalog, students, their transcripts and current-term
    enrollments, and hands back domain objects.
    """

    def __init__(self, db_path: str = "termreg.db") -> None:
        """Initialize State Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Course Operations ---

    def create_course(
        self,
        id: str,
        name: str,
        units: int,
        prerequisite_ids: Sequence[str] = (),
    ) -> Course:
        """Create a new course.

        Args:
            id: Unique course ID
            name: Display name
            units: Positive unit weight
            prerequisite_ids: IDs of existing courses, in checking order

        Returns:
            The created Course

        Raises:
            CourseExistsError: If a course with the same ID already exists
            CourseNotFoundError: If a prerequisite doesn't exist
            ValueError: If units is not positive
        """
        # Validate before touching the database
        Course(id=id, name=name, units=units)

        try:
            with self._db.session() as session:
                if session.get(CourseRecord, id) is not None:
                    raise CourseExistsError(f"Course with id '{id}' already exists")
                for prerequisite_id in prerequisite_ids:
                    if session.get(CourseRecord, prerequisite_id) is None:
                        raise CourseNotFoundError(
                            f"Prerequisite course with id '{prerequisite_id}' not found"
                        )

                record = CourseRecord(id=id, name=name, units=units)
                record.prerequisite_links = [
                    PrerequisiteLink(course_id=id, prerequisite_id=p, position=i)
                    for i, p in enumerate(dict.fromkeys(prerequisite_ids))
                ]
                session.add(record)
        except IntegrityError as e:
            raise CourseExistsError(f"Course with id '{id}' already exists") from e

        logger.info("Created course %s (%s, %d units)", id, name, units)
        return self.get_course(id)

    def get_course(self, course_id: str) -> Course:
        """Get course by ID, with its prerequisites resolved.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        with self._db.session() as session:
            courses = self._load_courses(session)
        if course_id not in courses:
            raise CourseNotFoundError(f"Course with id '{course_id}' not found")
        return courses[course_id]

    def get_courses(self, course_ids: Sequence[str]) -> dict[str, Course]:
        """Get several courses by ID.

        Raises:
            CourseNotFoundError: If any course doesn't exist
        """
        with self._db.session() as session:
            courses = self._load_courses(session)
        for course_id in course_ids:
            if course_id not in courses:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")
        return {course_id: courses[course_id] for course_id in course_ids}

    def list_courses(self) -> list[Course]:
        """List all courses, ordered by ID."""
        with self._db.session() as session:
            courses = self._load_courses(session)
        return [courses[course_id] for course_id in sorted(courses)]

    # --- Student Operations ---

    def create_student(self, id: str, name: str) -> Student:
        """Create a new student with an empty transcript.

        Raises:
            StudentExistsError: If a student with the same ID already exists
        """
        try:
            with self._db.session() as session:
                if session.get(StudentRecord, id) is not None:
                    raise StudentExistsError(f"Student with id '{id}' already exists")
                session.add(StudentRecord(id=id, name=name))
        except IntegrityError as e:
            raise StudentExistsError(f"Student with id '{id}' already exists") from e

        logger.info("Created student %s", id)
        return Student(id=id, name=name)

    def get_student(self, student_id: str) -> Student:
        """Get student by ID with transcript and current-term offerings loaded.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        with self._db.session() as session:
            record = session.get(StudentRecord, student_id)
            if record is None:
                raise StudentNotFoundError(f"Student with id '{student_id}' not found")
            return self._to_student(record, self._load_courses(session))

    def list_students(self) -> list[Student]:
        """List all students, ordered by name."""
        with self._db.session() as session:
            courses = self._load_courses(session)
            records = session.execute(select(StudentRecord).order_by(StudentRecord.name))
            return [self._to_student(r, courses) for r in records.scalars().all()]

    def add_transcript_record(
        self, student_id: str, course_id: str, term_id: str, grade: float
    ) -> Student:
        """Record a grade, overwriting an earlier grade for the same term and course.

        Returns:
            The updated Student

        Raises:
            StudentNotFoundError: If student doesn't exist
            CourseNotFoundError: If course doesn't exist
            ValueError: If grade is outside the 0-20 scale
        """
        if not 0.0 <= grade <= MAX_GRADE:
            raise ValueError(f"Grade must be within [0, {MAX_GRADE}], got {grade}")

        with self._db.session() as session:
            self._require_student(session, student_id)
            if session.get(CourseRecord, course_id) is None:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")

            stmt = select(GradeRecord).where(
                GradeRecord.student_id == student_id,
                GradeRecord.term_id == term_id,
                GradeRecord.course_id == course_id,
            )
            existing = session.execute(stmt).scalar_one_or_none()
            if existing is not None:
                existing.grade = grade
            else:
                session.add(
                    GradeRecord(
                        student_id=student_id, term_id=term_id, course_id=course_id, grade=grade
                    )
                )

        logger.info("Recorded %s=%.2f for student %s in %s", course_id, grade, student_id, term_id)
        return self.get_student(student_id)

    # --- Enrollment Operations ---

    def save_current_term(self, student_id: str, offerings: Sequence[Offering]) -> None:
        """Append offerings to the student's current term in one transaction.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        with self._db.session() as session:
            self._require_student(session, student_id)
            count_stmt = select(func.count(EnrollmentRecord.id)).where(
                EnrollmentRecord.student_id == student_id
            )
            start = session.execute(count_stmt).scalar_one()
            for i, o in enumerate(offerings):
                session.add(
                    EnrollmentRecord(
                        student_id=student_id,
                        course_id=o.course.id,
                        section=o.section,
                        position=start + i,
                    )
                )

    def enroll(
        self,
        student_id: str,
        offerings: Sequence[Offering],
        controller: EnrollmentController,
    ) -> Student:
        """Validate and commit an enrollment for a stored student.

        Nothing is persisted unless every rule passes.

        Returns:
            The student with the new offerings in its current term

        Raises:
            StudentNotFoundError: If student doesn't exist
            EnrollmentRulesViolation: If any rule is broken
        """
        student = self.get_student(student_id)
        controller.enroll(student, offerings)
        self.save_current_term(student_id, offerings)
        return student

    # --- Helpers ---

    @staticmethod
    def _require_student(session: Session, student_id: str) -> StudentRecord:
        record = session.get(StudentRecord, student_id)
        if record is None:
            raise StudentNotFoundError(f"Student with id '{student_id}' not found")
        return record

    @staticmethod
    def _load_courses(session: Session) -> dict[str, Course]:
        """Build every stored course, prerequisites first."""
        records = {r.id: r for r in session.execute(select(CourseRecord)).scalars().all()}
        built: dict[str, Course] = {}

        def build(course_id: str) -> Course:
            if course_id not in built:
                record = records[course_id]
                prerequisites = [build(link.prerequisite_id) for link in record.prerequisite_links]
                built[course_id] = Course(
                    id=record.id,
                    name=record.name,
                    units=record.units,
                    prerequisites=tuple(prerequisites),
                )
            return built[course_id]

        for course_id in records:
            build(course_id)
        return built

    @staticmethod
    def _to_student(record: StudentRecord, courses: dict[str, Course]) -> Student:
        student = Student(id=record.id, name=record.name)
        for grade in record.grades:
            term = Term(grade.term_id)
            student.add_transcript_record(courses[grade.course_id], term, grade.grade)
        for enrollment in record.enrollments:
            student.take_course(courses[enrollment.course_id], enrollment.section)
        return student
