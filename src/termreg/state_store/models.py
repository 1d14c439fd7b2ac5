"""SQLAlchemy models for State Store."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class CourseRecord(Base):
    """Course model - stores catalog courses."""

    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    units: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # Relationships
    prerequisite_links: Mapped[list[PrerequisiteLink]] = relationship(
        "PrerequisiteLink",
        foreign_keys="PrerequisiteLink.course_id",
        order_by="PrerequisiteLink.position",
        cascade="all, delete-orphan",
    )

    def __init__(self, id: str, name: str, units: int, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.id = id
        self.name = name
        self.units = units

    def __repr__(self) -> str:
        return f"<CourseRecord(id={self.id!r}, name={self.name!r}, units={self.units})>"


class PrerequisiteLink(Base):
    """Prerequisite model - ordered prerequisite edges between courses."""

    __tablename__ = "course_prerequisites"

    course_id: Mapped[str] = mapped_column(String(50), ForeignKey("courses.id"), primary_key=True)
    prerequisite_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("courses.id"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    def __init__(self, course_id: str, prerequisite_id: str, position: int, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.course_id = course_id
        self.prerequisite_id = prerequisite_id
        self.position = position

    def __repr__(self) -> str:
        return (
            f"<PrerequisiteLink(course_id={self.course_id!r}, "
            f"prerequisite_id={self.prerequisite_id!r})>"
        )


class StudentRecord(Base):
    """Student model - stores student identity."""

    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # Relationships
    grades: Mapped[list[GradeRecord]] = relationship(
        "GradeRecord", back_populates="student", cascade="all, delete-orphan"
    )
    enrollments: Mapped[list[EnrollmentRecord]] = relationship(
        "EnrollmentRecord",
        back_populates="student",
        order_by="EnrollmentRecord.position",
        cascade="all, delete-orphan",
    )

    def __init__(self, id: str, name: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.id = id
        self.name = name

    def __repr__(self) -> str:
        return f"<StudentRecord(id={self.id!r}, name={self.name!r})>"


class GradeRecord(Base):
    """Transcript model - one grade per student, term and course."""

    __tablename__ = "transcript_records"
    __table_args__ = (UniqueConstraint("student_id", "term_id", "course_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[str] = mapped_column(String(50), ForeignKey("students.id"), nullable=False)
    term_id: Mapped[str] = mapped_column(String(50), nullable=False)
    course_id: Mapped[str] = mapped_column(String(50), ForeignKey("courses.id"), nullable=False)
    grade: Mapped[float] = mapped_column(Float, nullable=False)

    # Relationships
    student: Mapped[StudentRecord] = relationship("StudentRecord", back_populates="grades")

    def __init__(
        self, student_id: str, term_id: str, course_id: str, grade: float, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.student_id = student_id
        self.term_id = term_id
        self.course_id = course_id
        self.grade = grade

    def __repr__(self) -> str:
        return (
            f"<GradeRecord(student_id={self.student_id!r}, term_id={self.term_id!r}, "
            f"course_id={self.course_id!r}, grade={self.grade})>"
        )


class EnrollmentRecord(Base):
    """Enrollment model - offerings committed for the current term, in order."""

    __tablename__ = "current_term_enrollments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[str] = mapped_column(String(50), ForeignKey("students.id"), nullable=False)
    course_id: Mapped[str] = mapped_column(String(50), ForeignKey("courses.id"), nullable=False)
    section: Mapped[int] = mapped_column(Integer, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # Relationships
    student: Mapped[StudentRecord] = relationship("StudentRecord", back_populates="enrollments")

    def __init__(
        self, student_id: str, course_id: str, section: int, position: int, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.student_id = student_id
        self.course_id = course_id
        self.section = section
        self.position = position

    def __repr__(self) -> str:
        return (
            f"<EnrollmentRecord(student_id={self.student_id!r}, course_id={self.course_id!r}, "
            f"section={self.section})>"
        )
