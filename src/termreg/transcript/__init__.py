"""Transcript - A student's graded history, term by term."""

from termreg.transcript.models import TermTranscript, Transcript

__all__ = [
    "TermTranscript",
    "Transcript",
]
