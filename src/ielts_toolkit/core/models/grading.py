"""
Module: grading

Purpose:
    Provides QuestionResult and GradingReport - the outcome of comparing a
    student's submission against an answer list.

Key Functions:
    - GradingReport.percentage: Calculated, never stored
    - GradingReport.incorrect: Results that did not match
    - GradingReport.to_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - functools (std)

Used By:
    - grading.comparator
    - grading.report_pdf
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Tuple


@dataclass(frozen=True, slots=True)
class QuestionResult:
    """Correctness of one question."""

    question_number: int
    correct: bool
    submitted: str
    expected: str

    def to_dict(self) -> dict:
        return {
            "questionNumber": self.question_number,
            "correct": self.correct,
            "submitted": self.submitted,
            "expected": self.expected,
        }


@dataclass(frozen=True)
class GradingReport:
    """
    Aggregate grading outcome for one submission.

    Attributes:
        total_questions: Number of keyed questions graded
        correct_count: Number of matches after normalization
        per_question: Results ordered by question number

    Invariants:
        - 0 <= correct_count <= total_questions
        - correct_count equals the number of correct per_question entries

    Example:
        >>> report.correct_count, report.total_questions
        (1, 2)
        >>> report.percentage
        50
    """

    total_questions: int
    correct_count: int
    per_question: Tuple[QuestionResult, ...] = ()

    def __post_init__(self) -> None:
        """Validate report on construction."""
        if not 0 <= self.correct_count <= self.total_questions:
            raise ValueError(
                f"correct_count {self.correct_count} outside 0..{self.total_questions}"
            )
        matched = sum(1 for r in self.per_question if r.correct)
        if matched != self.correct_count:
            raise ValueError(
                f"correct_count {self.correct_count} disagrees with results ({matched})"
            )

    @classmethod
    def empty(cls) -> GradingReport:
        return cls(total_questions=0, correct_count=0)

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def percentage(self) -> int:
        """Score as a rounded percentage (0 when nothing was graded)."""
        if self.total_questions == 0:
            return 0
        return round(self.correct_count / self.total_questions * 100)

    @cached_property
    def incorrect(self) -> Tuple[QuestionResult, ...]:
        return tuple(r for r in self.per_question if not r.correct)

    def result_for(self, question_number: int) -> QuestionResult | None:
        for result in self.per_question:
            if result.question_number == question_number:
                return result
        return None

    def to_dict(self) -> dict:
        return {
            "totalQuestions": self.total_questions,
            "correctCount": self.correct_count,
            "percentage": self.percentage,
            "perQuestion": [r.to_dict() for r in self.per_question],
        }

    def __repr__(self) -> str:
        return f"GradingReport({self.correct_count}/{self.total_questions})"
