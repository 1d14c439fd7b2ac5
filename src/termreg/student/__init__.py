"""Student - Identity, transcript and the current term's offerings."""

from termreg.student.models import Student

__all__ = [
    "Student",
]
