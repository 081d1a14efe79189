"""
Serialization Utilities

Provides to/from JSON utilities for documents, answer lists, submissions
and grading reports.

- `serialize_*` / `deserialize_*` work on dictionaries
- `load_*` / `save_*` work on files
- Validation runs before deserialization; file errors surface as
  ValidationError carrying the file path
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from ..models.answers import ExtractedAnswer
from ..models.grading import GradingReport
from ..models.nodes import DocumentNode
from ..schemas.validator import validate_document, validate_submission, ValidationError


ANSWER_KEY_SCHEMA_VERSION = 1


# ─────────────────────────────────────────────────────────────────────────────
# Document Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_document(document: DocumentNode) -> dict[str, Any]:
    """
    Serialize a document tree to the editor's JSON shape.

    Args:
        document: Root node to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    return document.to_dict()


def deserialize_document(
    data: Mapping[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> DocumentNode:
    """
    Deserialize a document tree from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to check the node-kind contract first
        strict: Also validate against the JSON schema

    Returns:
        DocumentNode tree

    Raises:
        ValidationError: If validate=True and data is malformed
    """
    if validate:
        validate_document(data, strict=strict)
    return DocumentNode.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Answer Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_answers(answers: Iterable[ExtractedAnswer]) -> list[dict[str, Any]]:
    return [answer.to_dict() for answer in answers]


def deserialize_answers(data: Iterable[Mapping[str, Any]]) -> tuple[ExtractedAnswer, ...]:
    """
    Deserialize an answer list.

    Raises:
        ValidationError: If an entry is missing id or questionNumber
    """
    answers = []
    for i, item in enumerate(data):
        try:
            answers.append(ExtractedAnswer.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(
                f"Invalid answer entry {i}: {e}",
                path=f"answers[{i}]",
                errors=[str(e)],
            )
    return tuple(answers)


def serialize_report(report: GradingReport) -> dict[str, Any]:
    return report.to_dict()


# ─────────────────────────────────────────────────────────────────────────────
# File Utilities
# ─────────────────────────────────────────────────────────────────────────────

def _read_json(path: Path) -> Any:
    """Read a JSON file, wrapping decode errors."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Invalid JSON in {path}: {e}",
                path=str(path),
                errors=[str(e)],
            )


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_document_json(path: Path, *, validate: bool = True) -> DocumentNode | None:
    """
    Load a document tree from a JSON file.

    Returns:
        DocumentNode, or None if the file holds null or an empty object
    """
    data = _read_json(path)
    if not data:
        return None
    return deserialize_document(data, validate=validate)


def save_document_json(document: DocumentNode, path: Path) -> None:
    _write_json(path, serialize_document(document))


def save_answer_key_json(
    path: Path,
    answers: Iterable[ExtractedAnswer],
    mapping: Mapping[str, str],
    total_questions: int,
) -> None:
    """
    Save the answer list and flat answer key side by side.

    Args:
        path: Output path for the key file
        answers: Extracted answers (kept for grading)
        mapping: Flat key from create_answer_mapping (kept for storage)
        total_questions: Highest question number in the document
    """
    _write_json(path, {
        "schema_version": ANSWER_KEY_SCHEMA_VERSION,
        "total_questions": total_questions,
        "answers": serialize_answers(answers),
        "mapping": dict(mapping),
    })


def load_answer_key_json(path: Path) -> tuple[ExtractedAnswer, ...]:
    """
    Load the answer list from a key file written by save_answer_key_json.

    Raises:
        ValidationError: If the schema version or answers are invalid
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValidationError(f"Answer key must be an object: {path}", path=str(path))
    version = data.get("schema_version")
    if version != ANSWER_KEY_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported answer key schema version: {version} (expected {ANSWER_KEY_SCHEMA_VERSION})",
            path="schema_version",
        )
    return deserialize_answers(data.get("answers", []))


def load_submission_json(path: Path) -> dict[str, Any]:
    """Load a question-number keyed submission map."""
    data = _read_json(path)
    validate_submission(data)
    return {str(k): v for k, v in data.items()}


def save_report_json(report: GradingReport, path: Path) -> None:
    _write_json(path, serialize_report(report))
