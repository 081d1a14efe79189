"""
Module: answers

Purpose:
    Provides the ExtractedAnswer dataclass (one correct answer found while
    transforming an authoring document) and AnswerSpan (where a bracket
    answer sat in its original text run).

Key Functions:
    - ExtractedAnswer.for_text(): Answer found in a text run
    - ExtractedAnswer.for_node(): Answer derived from a question node
    - ExtractedAnswer.to_dict() / ExtractedAnswer.from_dict(): Serialization

Dependencies:
    - dataclasses (std)

Used By:
    - extraction.patterns
    - extraction.structured
    - extraction.transformer
    - grading.answer_key
    - grading.comparator
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class AnswerSpan:
    """
    Half-open character range [start, end) in the original text.

    Structured question nodes use the empty span (0, 0).
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Span start cannot be negative: {self.start}")
        if self.end < self.start:
            raise ValueError(f"Span end ({self.end}) must be >= start ({self.start})")

    @classmethod
    def empty(cls) -> AnswerSpan:
        return cls(0, 0)

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnswerSpan:
        return cls(int(data.get("start", 0)), int(data.get("end", 0)))


@dataclass(frozen=True, slots=True)
class ExtractedAnswer:
    """
    A correct answer discovered during one transformation pass.

    Attributes:
        id: Kind-tagged identifier, e.g. "text_answer_3" or "mcq_5"
        question_number: Display number assigned to the question (>= 1)
        source_kind: Answer category ("text", "mcq", "form", "matching", "rich_text")
        value: Canonical correct value as a string
        span: Where the answer sat in its text run, or (0, 0)

    Invariants:
        - question_number >= 1
        - id is unique within one pass (it embeds question_number)

    Example:
        >>> a = ExtractedAnswer.for_text(3, "Paris", AnswerSpan(15, 22))
        >>> a.id
        'text_answer_3'
    """

    id: str
    question_number: int
    source_kind: str
    value: str
    span: AnswerSpan = AnswerSpan(0, 0)

    def __post_init__(self) -> None:
        """Validate answer on construction."""
        if self.question_number < 1:
            raise ValueError(f"Question number must be >= 1: {self.question_number}")
        if not self.id:
            raise ValueError("Answer id cannot be empty")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def for_text(cls, question_number: int, value: str, span: AnswerSpan) -> ExtractedAnswer:
        """Answer taken from a bracket span inside a text run."""
        return cls(
            id=f"text_answer_{question_number}",
            question_number=question_number,
            source_kind="text",
            value=value,
            span=span,
        )

    @classmethod
    def for_node(cls, question_number: int, category: str, value: str) -> ExtractedAnswer:
        """
        Answer derived from a structured question node.

        Single-blank nodes share the "text" category with bracket answers
        and get the same id shape.
        """
        prefix = "text_answer" if category == "text" else category
        return cls(
            id=f"{prefix}_{question_number}",
            question_number=question_number,
            source_kind=category,
            value=value,
            span=AnswerSpan.empty(),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "questionNumber": self.question_number,
            "sourceKind": self.source_kind,
            "value": self.value,
            "span": self.span.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExtractedAnswer:
        return cls(
            id=data["id"],
            question_number=int(data["questionNumber"]),
            source_kind=data.get("sourceKind", "text"),
            value=str(data.get("value", "")),
            span=AnswerSpan.from_dict(data.get("span") or {}),
        )

    def __repr__(self) -> str:
        return f"ExtractedAnswer({self.question_number}, {self.source_kind}, {self.value!r})"
