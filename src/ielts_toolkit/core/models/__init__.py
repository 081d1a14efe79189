"""
Core Models Package

Immutable data models shared by extraction and grading.

All models are frozen dataclasses: a transformation pass never mutates the
authoring tree, it builds new nodes and new answer records.
"""

from .nodes import DocumentNode, NodeKind, QUESTION_KINDS
from .answers import AnswerSpan, ExtractedAnswer
from .grading import GradingReport, QuestionResult

__all__ = [
    "DocumentNode",
    "NodeKind",
    "QUESTION_KINDS",
    "AnswerSpan",
    "ExtractedAnswer",
    "GradingReport",
    "QuestionResult",
]
