"""
Top-level package for the course advisor.

This package turns a free-text learner question (Dutch or English) plus
an optional learner profile into a classified intent, ranked course
suggestions or an ordered learning path, and a ready-to-render answer.
Everything runs in-process over a read-only catalog; there are no
side-effects on import beyond creating the log directory, and each
module can be executed as a script for ad-hoc debugging.
"""

from .engine import QueryEngine
from .intent import Intent, classify_intent, detect_language
from .models import Course, DifficultyLevel, QueryResult, UserContext

__all__ = [
    "Course",
    "DifficultyLevel",
    "Intent",
    "QueryEngine",
    "QueryResult",
    "UserContext",
    "classify_intent",
    "detect_language",
]
