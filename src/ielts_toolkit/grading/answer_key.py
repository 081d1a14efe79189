"""
Module: grading.answer_key

Purpose:
    Build the flat answer key stored against a test. Every answer is
    reachable both by its kind-tagged id ("mcq_5") and by its bare
    question number ("5").

Key Functions:
    - create_answer_mapping(): Answer list -> {key: value}
    - lookup_answer(): Read a value by question number
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from ..core.models.answers import ExtractedAnswer

logger = logging.getLogger(__name__)


def create_answer_mapping(answers: Iterable[ExtractedAnswer]) -> dict[str, str]:
    """
    Build the answer key for a list of extracted answers.

    Each answer adds two entries, its id and str(question_number), both
    mapping to its value. Answer lists from one transformation pass never
    collide; for hand-built lists a later answer overwrites an earlier one
    with the same key (last write wins) and a warning is logged.

    Args:
        answers: Extracted answers, usually TransformResult.answers

    Returns:
        Flat string -> string mapping

    Example:
        >>> create_answer_mapping([ExtractedAnswer.for_node(5, "mcq", "B")])
        {'mcq_5': 'B', '5': 'B'}
    """
    mapping: dict[str, str] = {}
    for answer in answers:
        for key in (answer.id, str(answer.question_number)):
            previous = mapping.get(key)
            if previous is not None and previous != answer.value:
                logger.warning(
                    f"Answer key collision on {key!r}: {previous!r} replaced by {answer.value!r}"
                )
            mapping[key] = answer.value
    return mapping


def lookup_answer(mapping: Mapping[str, str], question_number: int) -> Optional[str]:
    """Correct value for a question number, or None if it has no key entry."""
    return mapping.get(str(question_number))
