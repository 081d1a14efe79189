"""
IELTS Toolkit Core Package

Shared data models, schema validation and serialization for documents,
answer lists and grading reports.
"""

from .models import DocumentNode, NodeKind, AnswerSpan, ExtractedAnswer, GradingReport, QuestionResult
from .schemas import ValidationError

__all__ = [
    "DocumentNode",
    "NodeKind",
    "AnswerSpan",
    "ExtractedAnswer",
    "GradingReport",
    "QuestionResult",
    "ValidationError",
]
