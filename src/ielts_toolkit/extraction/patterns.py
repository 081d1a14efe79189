"""
Module: extraction.patterns

Purpose:
    Bracket answer extraction for a single text run. Finds "[answer]"
    spans, records each answer with its position in the original text and
    rewrites the span to a numbered placeholder such as "[    3    ]".

Key Functions:
    - extract_text_answers(): Rewrite one text run, return its answers
    - is_placeholder(): Check whether a bracket span is already numbered

Dependencies:
    - re (std)
    - core.models.answers: ExtractedAnswer, AnswerSpan

Used By:
    - extraction.transformer: Called for every text-run node
    - extraction.rich_text: Shares ANSWER_PATTERN
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.models.answers import AnswerSpan, ExtractedAnswer
from .config import ExtractionConfig

logger = logging.getLogger(__name__)

# Innermost "[...]" pair; the inner text never contains another bracket.
ANSWER_PATTERN = re.compile(r"\[([^\[\]]*)\]")


@dataclass(frozen=True)
class TextRunResult:
    """
    Outcome of rewriting one text run.

    Attributes:
        text: Rewritten body with numbered placeholders
        answers: Answers found, in order of appearance
        next_number: First question number not used by this run
    """
    text: str
    answers: Tuple[ExtractedAnswer, ...]
    next_number: int


def is_placeholder(token: str, config: Optional[ExtractionConfig] = None) -> bool:
    """
    Check whether a bracket span is a placeholder this module produced.

    Args:
        token: Full matched span including brackets
        config: Extraction settings (placeholder width)

    Returns:
        True if the span is exactly "[<pad>N<pad>]"
    """
    config = config or ExtractionConfig()
    pad = config.placeholder_padding
    return re.fullmatch(rf"\[ {{{pad}}}\d+ {{{pad}}}\]", token) is not None


def extract_text_answers(
    text: str,
    start_number: int,
    config: Optional[ExtractionConfig] = None,
) -> TextRunResult:
    """
    Replace every bracket answer in a text run with a numbered placeholder.

    Numbers are handed out left to right starting at `start_number`. The
    scan is a single substitution pass over the original string, so each
    recorded span refers to the original (pre-rewrite) text and no offset
    bookkeeping is needed for later matches.

    Spans whose inner text is blank, and spans that already are
    placeholders, are left as they are and consume no number.

    Args:
        text: Text-run body
        start_number: Next free question number (>= 1)
        config: Extraction settings

    Returns:
        TextRunResult with rewritten text, answers and next free number

    Example:
        >>> r = extract_text_answers("The capital is [Paris].", 3)
        >>> r.text
        'The capital is [    3    ].'
        >>> r.answers[0].value, r.next_number
        ('Paris', 4)
    """
    if start_number < 1:
        raise ValueError(f"start_number must be >= 1: {start_number}")
    config = config or ExtractionConfig()

    answers: list[ExtractedAnswer] = []
    number = start_number

    def _replace(match: re.Match) -> str:
        nonlocal number
        token = match.group(0)
        value = match.group(1).strip()
        if not value or is_placeholder(token, config):
            return token

        answers.append(
            ExtractedAnswer.for_text(number, value, AnswerSpan(match.start(), match.end()))
        )
        replacement = config.placeholder(number)
        number += 1
        return replacement

    rewritten = ANSWER_PATTERN.sub(_replace, text)

    if answers:
        logger.debug(
            f"Text run: {len(answers)} answer(s), "
            f"questions {start_number}-{number - 1}"
        )

    return TextRunResult(text=rewritten, answers=tuple(answers), next_number=number)
