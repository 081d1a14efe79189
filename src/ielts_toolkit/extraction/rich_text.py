"""
Module: extraction.rich_text

Purpose:
    Bracket answer extraction for documents authored as one markup string
    instead of a node tree. Every "[answer]" becomes an inert input
    fragment carrying its question number; numbering restarts at 1 on
    every call.

Key Functions:
    - parse_rich_text(): Markup -> (student markup, answers)
    - build_admin_preview(): Original markup, answers and numbered preview
    - render_student_html(): Numbered placeholders -> input elements

Dependencies:
    - html (std): Escaping submitted values
    - extraction.patterns: ANSWER_PATTERN, extract_text_answers

Used By:
    - cli: rich-text command
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from ..core.models.answers import AnswerSpan, ExtractedAnswer
from .config import ExtractionConfig
from .patterns import ANSWER_PATTERN, extract_text_answers

logger = logging.getLogger(__name__)

# Numbered blank in student text: "[    3    ]", "[ 3 ]", "[3]"
NUMBERED_BLANK_PATTERN = re.compile(r"\[\s*(\d+)\s*\]")

INPUT_FRAGMENT = (
    '<span class="question-input" data-question="{n}">'
    '<input type="text" class="inline-input" placeholder="{n}" '
    'data-question-id="{n}" /></span>'
)

STUDENT_INPUT = (
    '<input type="text" id="input-{n}" data-input-number="{n}" '
    'value="{value}" class="inline-input" placeholder="{n}" />'
)

READONLY_VALUE = '<span class="inline-answer" data-input-number="{n}">{value}</span>'


@dataclass(frozen=True)
class RichTextResult:
    """Student markup and the answers removed from it."""
    html: str
    answers: Tuple[ExtractedAnswer, ...]

    @property
    def total_questions(self) -> int:
        return len(self.answers)


@dataclass(frozen=True)
class AdminPreview:
    """What the author sees next to the editor."""
    content: str
    answers: Tuple[str, ...]
    preview: str


def parse_rich_text(markup: Optional[str]) -> RichTextResult:
    """
    Replace every bracket answer in a markup string with an input fragment.

    Each fragment embeds the question number twice: as the visible
    placeholder label and as the data-question-id used to collect the
    submission.

    Args:
        markup: Authoring markup; None or "" yields an empty result

    Returns:
        RichTextResult with student markup and answers numbered from 1

    Example:
        >>> result = parse_rich_text("<p>Capital: [Paris]</p>")
        >>> result.answers[0].id, result.answers[0].value
        ('rich_text_1', 'Paris')
    """
    if not markup:
        return RichTextResult(html="", answers=())

    answers: list[ExtractedAnswer] = []

    def _replace(match: re.Match) -> str:
        value = match.group(1).strip()
        if not value:
            return match.group(0)
        number = len(answers) + 1
        answers.append(
            ExtractedAnswer(
                id=f"rich_text_{number}",
                question_number=number,
                source_kind="rich_text",
                value=value,
                span=AnswerSpan(match.start(), match.end()),
            )
        )
        return INPUT_FRAGMENT.format(n=number)

    student = ANSWER_PATTERN.sub(_replace, markup)
    logger.info(f"Parsed rich text: {len(answers)} answer(s)")
    return RichTextResult(html=student, answers=tuple(answers))


def build_admin_preview(
    markup: Optional[str],
    config: Optional[ExtractionConfig] = None,
) -> AdminPreview:
    """
    Build the author's preview: original markup, answer list, numbered text.

    The preview uses the same numbered placeholders as text runs in a
    document tree.
    """
    if not markup:
        return AdminPreview(content="", answers=(), preview="")
    run = extract_text_answers(markup, 1, config)
    return AdminPreview(
        content=markup,
        answers=tuple(a.value for a in run.answers),
        preview=run.text,
    )


def render_student_html(
    text: str,
    submitted: Optional[Mapping[str, str]] = None,
    *,
    readonly: bool = False,
) -> str:
    """
    Turn numbered placeholders into input elements for the student view.

    Args:
        text: Student text containing "[ N ]" placeholders
        submitted: Answers so far keyed by question number
        readonly: Render plain values (or "___") instead of inputs

    Returns:
        HTML string with submitted values escaped
    """
    submitted = {str(k): v for k, v in (submitted or {}).items()}

    def _replace(match: re.Match) -> str:
        number = int(match.group(1))
        value = html.escape(str(submitted.get(str(number)) or ""), quote=True)
        if readonly:
            return READONLY_VALUE.format(n=number, value=value or "___")
        return STUDENT_INPUT.format(n=number, value=value)

    return NUMBERED_BLANK_PATTERN.sub(_replace, text)
