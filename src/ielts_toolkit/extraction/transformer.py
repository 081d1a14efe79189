"""
Module: extraction.transformer

Purpose:
    Converts an authoring document into its student version. Walks the
    node tree depth-first in document order, sends text runs to the
    bracket extractor and question nodes to the structured extractor, and
    threads one QuestionCursor through the whole walk so question numbers
    rise strictly left to right whatever the node kind.

Key Functions:
    - transform_document(): Authoring tree -> (student tree, answers, total)
    - preview_answers(): Answers of an authoring tree only

Key Classes:
    - QuestionCursor: Next free question number, passed by reference
    - TransformResult: Container for transformation output

Dependencies:
    - core.models: DocumentNode, NodeKind, ExtractedAnswer
    - core.schemas: validate_document
    - extraction.patterns / extraction.structured

Used By:
    - cli: transform command
    - grading (callers build answer keys from TransformResult.answers)
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional, Tuple, Union

from ..core.models.answers import ExtractedAnswer
from ..core.models.nodes import DocumentNode, NodeKind
from ..core.schemas.validator import validate_document
from .config import ExtractionConfig
from .patterns import extract_text_answers
from .structured import extract_node_answer

logger = logging.getLogger(__name__)

DocumentInput = Union[DocumentNode, Mapping[str, Any], None]


class QuestionCursor:
    """
    Next free question number for one transformation pass.

    Created fresh per pass and handed to every extractor by reference;
    there is no module-level counter, so documents can be transformed
    concurrently.
    """

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f"Question numbers start at 1, got {start}")
        self.next_number = start
        self._start = start

    def advance_to(self, number: int) -> None:
        """Move the cursor forward; numbers never go backwards."""
        if number < self.next_number:
            raise ValueError(
                f"Cursor cannot move back from {self.next_number} to {number}"
            )
        self.next_number = number

    @property
    def assigned_count(self) -> int:
        return self.next_number - self._start

    @property
    def highest_assigned(self) -> int:
        """Highest number handed out so far (0 if none)."""
        return self.next_number - 1 if self.assigned_count else 0

    def __repr__(self) -> str:
        return f"QuestionCursor(next={self.next_number})"


@dataclass(frozen=True)
class TransformResult:
    """
    Output of one transformation pass.

    Attributes:
        document: Student tree, or None when no document was supplied
        answers: Extracted answers in increasing question-number order
        total_questions: Highest question number assigned, including
            numbers reserved by question nodes that had no answer
    """
    document: Optional[DocumentNode]
    answers: Tuple[ExtractedAnswer, ...] = ()
    total_questions: int = 0

    @classmethod
    def empty(cls) -> TransformResult:
        return cls(document=None)

    @property
    def missing_numbers(self) -> Tuple[int, ...]:
        """Displayed question numbers that have no answer-key entry."""
        keyed = {a.question_number for a in self.answers}
        return tuple(n for n in range(1, self.total_questions + 1) if n not in keyed)


# ─────────────────────────────────────────────────────────────────────────────
# Tree Walk
# ─────────────────────────────────────────────────────────────────────────────

def _walk(
    node: DocumentNode,
    cursor: QuestionCursor,
    answers: List[ExtractedAnswer],
    config: ExtractionConfig,
) -> DocumentNode:
    """Transform one node (and its subtree) in document order."""
    kind = node.kind

    if kind == NodeKind.TEXT:
        if not node.text:
            return _clone(node)
        run = extract_text_answers(node.text, cursor.next_number, config)
        cursor.advance_to(run.next_number)
        answers.extend(run.answers)
        return replace(_clone(node), text=run.text)

    if kind.is_question:
        result = extract_node_answer(node, cursor.next_number, config)
        cursor.advance_to(result.next_number)
        if result.answer is not None:
            answers.append(result.answer)
        return result.node

    if kind == NodeKind.UNKNOWN:
        if node.content:
            logger.debug(f"Walking unknown node type {node.type!r} as a container")
        else:
            logger.debug(f"Passing through unknown node type {node.type!r}")

    # Containers, and unknown kinds with children, are walked in place
    children = tuple(_walk(child, cursor, answers, config) for child in node.content)
    return replace(_clone(node), content=children)


def _clone(node: DocumentNode) -> DocumentNode:
    """Copy a node's mutable mappings so the student tree shares nothing."""
    return replace(
        node,
        attrs=copy.deepcopy(dict(node.attrs)),
        extra=copy.deepcopy(dict(node.extra)),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def transform_document(
    document: DocumentInput,
    config: Optional[ExtractionConfig] = None,
    *,
    validate: bool = True,
) -> TransformResult:
    """
    Convert an authoring document into a student document and answer list.

    Args:
        document: Root node, as a DocumentNode or document JSON mapping.
            None (or an empty mapping) yields an empty result.
        config: Extraction settings
        validate: Check the node-kind contract of mapping input first

    Returns:
        TransformResult with the student tree, answers and total count

    Raises:
        ValidationError: If mapping input violates the node-kind contract

    Example:
        >>> doc = {"type": "doc", "content": [
        ...     {"type": "paragraph", "content": [
        ...         {"type": "text", "text": "Capital: [Paris]"}]}]}
        >>> result = transform_document(doc)
        >>> result.total_questions, result.answers[0].value
        (1, 'Paris')
    """
    if document is None or (isinstance(document, Mapping) and not document):
        logger.debug("No document supplied; returning empty result")
        return TransformResult.empty()

    if not isinstance(document, DocumentNode):
        if validate:
            validate_document(document)
        document = DocumentNode.from_dict(document)

    config = config or ExtractionConfig()
    cursor = QuestionCursor()
    answers: List[ExtractedAnswer] = []

    student = _walk(document, cursor, answers, config)
    total = cursor.highest_assigned

    logger.info(f"Transformed document: {len(answers)} answer(s), {total} question(s)")
    if len(answers) < total:
        logger.warning(f"{total - len(answers)} question number(s) reserved without an answer")

    return TransformResult(document=student, answers=tuple(answers), total_questions=total)


def preview_answers(
    document: DocumentInput,
    config: Optional[ExtractionConfig] = None,
) -> Tuple[ExtractedAnswer, ...]:
    """
    List the answers an authoring document would produce.

    Uses the same numbering as transform_document, so the preview shown
    to the author matches what students see.
    """
    return transform_document(document, config).answers
