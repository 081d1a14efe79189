"""
Module: grading.comparator

Purpose:
    Grades a student's submission against the extracted answers. Both
    sides are normalized (case-folded, trimmed, inner whitespace collapsed)
    and compared for exact equality.

Key Functions:
    - normalize_answer(): Canonical comparison form of an answer
    - answers_match(): Compare one submitted value with one expected value
    - validate_answers(): Submission + answers -> GradingReport

Dependencies:
    - re (std)
    - core.models: ExtractedAnswer, GradingReport, QuestionResult
    - core.schemas: validate_submission

Used By:
    - cli: grade command
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping, Optional

from ..core.models.answers import ExtractedAnswer
from ..core.models.grading import GradingReport, QuestionResult
from ..core.schemas.validator import validate_submission

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_answer(answer: Any) -> str:
    """
    Normalize an answer for comparison.

    Args:
        answer: Submitted or expected value; None counts as ""

    Returns:
        Case-folded, trimmed string with whitespace runs collapsed

    Example:
        >>> normalize_answer("  New   YORK ")
        'new york'
    """
    if answer is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(answer).casefold().strip())


def answers_match(submitted: Any, expected: Any) -> bool:
    return normalize_answer(submitted) == normalize_answer(expected)


def validate_answers(
    submission: Optional[Mapping[Any, Any]],
    answers: Iterable[ExtractedAnswer],
) -> GradingReport:
    """
    Grade a submission against the answer list.

    Missing submissions count as "" (and so as wrong), not as errors.
    Results are ordered by question number.

    Args:
        submission: Submitted values keyed by question number (str or int);
            None grades every question as unanswered
        answers: Extracted answers (the authoritative key)

    Returns:
        GradingReport with per-question results and totals

    Raises:
        ValidationError: If submission is not a question-number keyed mapping

    Example:
        >>> report = validate_answers({"1": "paris "}, answers)
        >>> report.correct_count
        1
    """
    if submission is None:
        submission = {}
    validate_submission(submission)
    by_number = {str(k): v for k, v in submission.items()}

    results = []
    for answer in sorted(answers, key=lambda a: a.question_number):
        raw = by_number.get(str(answer.question_number))
        submitted = "" if raw is None else str(raw)
        results.append(
            QuestionResult(
                question_number=answer.question_number,
                correct=answers_match(submitted, answer.value),
                submitted=submitted,
                expected=answer.value,
            )
        )

    correct = sum(1 for r in results if r.correct)
    extra = set(by_number) - {str(r.question_number) for r in results}
    if extra:
        logger.debug(f"Ignoring submitted values with no key entry: {sorted(extra)}")

    report = GradingReport(
        total_questions=len(results),
        correct_count=correct,
        per_question=tuple(results),
    )
    logger.info(f"Graded submission: {correct}/{len(results)} correct")
    return report
