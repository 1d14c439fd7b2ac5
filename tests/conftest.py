"""Shared pytest fixtures and configuration."""

import pytest

from termreg.catalog import Course, Term
from termreg.student import Student


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def math1() -> Course:
    return Course(id="m1", name="Math1", units=3)


@pytest.fixture
def phys1() -> Course:
    return Course(id="p1", name="Phys1", units=3)


@pytest.fixture
def math2(math1: Course) -> Course:
    return Course(id="m2", name="Math2", units=3, prerequisites=(math1,))


@pytest.fixture
def term2023() -> Term:
    return Term("2023-fall")


@pytest.fixture
def student() -> Student:
    """A first-term student with an empty transcript."""
    return Student(id="810100000", name="Ali")
