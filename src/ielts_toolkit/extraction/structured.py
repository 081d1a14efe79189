"""
Module: extraction.structured

Purpose:
    Answer extraction for structured question nodes (short answer,
    multiple choice, sentence completion, matching, map diagram). Derives
    one canonical answer string per node and returns the student version
    of the node with authoring data cleared and its display number set.

Key Functions:
    - extract_node_answer(): Extract one question node
    - answer_value(): Canonical answer string for a node
    - ANSWER_CATEGORIES: Node kind -> storage answer category

Dependencies:
    - json (std)
    - core.models: DocumentNode, NodeKind, ExtractedAnswer

Used By:
    - extraction.transformer: Called for every question node
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from ..core.models.answers import ExtractedAnswer
from ..core.models.nodes import DocumentNode, NodeKind
from .config import ExtractionConfig

logger = logging.getLogger(__name__)

# Answer categories understood by the submission store
ANSWER_CATEGORIES: dict[NodeKind, str] = {
    NodeKind.SHORT_ANSWER: "text",
    NodeKind.MCQ: "mcq",
    NodeKind.SENTENCE_COMPLETION: "form",
    NodeKind.MATCHING: "matching",
    NodeKind.MAP_DIAGRAM: "form",
}


@dataclass(frozen=True)
class NodeResult:
    """
    Outcome of extracting one question node.

    Attributes:
        node: Student version of the node
        answer: Extracted answer, or None when the node had no usable value
        category: Answer category for the node kind
        next_number: Question number after the one this node consumed
    """
    node: DocumentNode
    answer: Optional[ExtractedAnswer]
    category: str
    next_number: int


# ─────────────────────────────────────────────────────────────────────────────
# Attribute Access
# ─────────────────────────────────────────────────────────────────────────────

def _list_attr(node: DocumentNode, key: str) -> list:
    """Read a list attribute, treating missing or malformed values as empty."""
    value = node.attrs.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    logger.warning(f"{node.type}: attribute {key!r} is not a list ({type(value).__name__}), ignoring")
    return []


def _correct_index(node: DocumentNode) -> int:
    """Read the correct option index; missing means 0, unreadable means -1."""
    value = node.attrs.get("correctIndex", node.attrs.get("correct_index"))
    if value is None:
        return 0
    if isinstance(value, bool):
        return -1
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    logger.warning(f"{node.type}: unreadable correctIndex {value!r}")
    return -1


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


# ─────────────────────────────────────────────────────────────────────────────
# Per-Kind Values
# ─────────────────────────────────────────────────────────────────────────────

def answer_value(node: DocumentNode, config: Optional[ExtractionConfig] = None) -> str:
    """
    Derive the canonical answer string for a question node.

    An empty string means "no answer extracted".

    Args:
        node: Question node (any other kind yields "")
        config: Extraction settings (join separator)

    Returns:
        Canonical answer value

    Example:
        >>> node = DocumentNode("mcq", {"options": ["A", "B", "C"], "correctIndex": 1})
        >>> answer_value(node)
        'B'
    """
    config = config or ExtractionConfig()
    sep = config.join_separator
    kind = node.kind

    if kind == NodeKind.SHORT_ANSWER or kind == NodeKind.SENTENCE_COMPLETION:
        candidates = [_text(a) for a in _list_attr(node, "answers")]
        return sep.join(a for a in candidates if a)

    if kind == NodeKind.MCQ:
        options = _list_attr(node, "options")
        index = _correct_index(node)
        if 0 <= index < len(options):
            return _text(options[index])
        if options:
            logger.warning(f"mcq: correctIndex {index} outside {len(options)} options")
        return ""

    if kind == NodeKind.MATCHING:
        left = [_text(item) for item in _list_attr(node, "left")]
        right = [_text(item) for item in _list_attr(node, "right")]
        if not left and not right:
            return ""
        return json.dumps({"left": left, "right": right}, ensure_ascii=False)

    if kind == NodeKind.MAP_DIAGRAM:
        answers = [
            _text(box.get("answer")) if isinstance(box, Mapping) else ""
            for box in _list_attr(node, "boxes")
        ]
        if not any(answers):
            return ""
        return sep.join(answers)

    return ""


# ─────────────────────────────────────────────────────────────────────────────
# Student Node
# ─────────────────────────────────────────────────────────────────────────────

def _student_attrs(node: DocumentNode, number: int, config: ExtractionConfig) -> dict:
    """Attributes for the student version of a question node."""
    attrs = copy.deepcopy(dict(node.attrs))
    attrs["admin"] = False
    attrs["number"] = number

    kind = node.kind
    if kind == NodeKind.SHORT_ANSWER:
        attrs["answers"] = [""]
    elif config.redact_structured_answers:
        if kind == NodeKind.MCQ:
            attrs.pop("correctIndex", None)
            attrs.pop("correct_index", None)
        elif kind == NodeKind.SENTENCE_COMPLETION:
            attrs["answers"] = ["" for _ in _list_attr(node, "answers")]
        elif kind == NodeKind.MAP_DIAGRAM:
            attrs["boxes"] = [
                {**box, "answer": ""} if isinstance(box, Mapping) else box
                for box in _list_attr(node, "boxes")
            ]
    return attrs


def extract_node_answer(
    node: DocumentNode,
    question_number: int,
    config: Optional[ExtractionConfig] = None,
) -> NodeResult:
    """
    Extract the answer of one question node and build its student version.

    The node always consumes `question_number`, even when it yields no
    value, so display numbers stay stable for the student.

    Args:
        node: Question node in authoring form
        question_number: Number to assign to this node (>= 1)
        config: Extraction settings

    Returns:
        NodeResult with the student node, the answer (or None) and
        question_number + 1

    Raises:
        ValueError: If node is not a question kind
    """
    if not node.is_question:
        raise ValueError(f"Not a question node: {node.type!r}")
    config = config or ExtractionConfig()

    category = ANSWER_CATEGORIES[node.kind]
    value = answer_value(node, config) if node.is_authoring else ""
    answer = ExtractedAnswer.for_node(question_number, category, value) if value else None

    if answer is None:
        logger.warning(f"Question {question_number} ({node.type}) has no answer; number reserved")
    else:
        logger.debug(f"Question {question_number} ({node.type}): {value!r}")

    student = replace(
        node,
        attrs=_student_attrs(node, question_number, config),
        extra=copy.deepcopy(dict(node.extra)),
    )
    return NodeResult(
        node=student,
        answer=answer,
        category=category,
        next_number=question_number + 1,
    )
