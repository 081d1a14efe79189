"""
Schema Validation Utilities

Validates document JSON and submission maps before they reach the
extraction and grading code.

Only the node-kind contract is enforced here (a node is a mapping with a
string type, children in a list, attributes in a mapping, text as a
string). Missing or oddly-typed question attributes are NOT errors: the
extractors degrade those to "no answer extracted".
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import jsonschema


_QUESTION_TYPES = ("short_answer", "mcq", "sentence_completion", "matching", "map_diagram")

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data violates the document or submission contract."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_document(data: Any, *, strict: bool = False) -> None:
    """
    Validate a document tree against the node-kind contract.

    Args:
        data: Root node mapping (usually type "doc")
        strict: If True, also validate against document.schema.json

    Raises:
        ValidationError: If any node is structurally malformed
    """
    _validate_node(data, "doc")

    if strict:
        schema = _load_schema("document")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            )


def _validate_node(data: Any, path: str) -> None:
    """Validate a node recursively."""
    if not isinstance(data, Mapping):
        raise ValidationError(
            f"Node must be a mapping, got {type(data).__name__}",
            path=path,
        )

    node_type = data.get("type")
    if not isinstance(node_type, str) or not node_type:
        raise ValidationError(
            f"Invalid node type: {node_type!r}",
            path=f"{path}.type",
        )

    if "attrs" in data and data["attrs"] is not None and not isinstance(data["attrs"], Mapping):
        raise ValidationError(
            "attrs must be a mapping",
            path=f"{path}.attrs",
        )

    if "text" in data and not isinstance(data["text"], str):
        raise ValidationError(
            "text must be a string",
            path=f"{path}.text",
        )

    children = data.get("content")
    if children is None:
        return
    if not isinstance(children, list):
        raise ValidationError(
            "content must be a list",
            path=f"{path}.content",
        )
    if children and node_type == "text":
        raise ValidationError(
            "Text nodes cannot have children",
            path=f"{path}.content",
        )
    if children and node_type in _QUESTION_TYPES:
        raise ValidationError(
            f"Question node {node_type!r} cannot have children",
            path=f"{path}.content",
        )
    for i, child in enumerate(children):
        _validate_node(child, f"{path}.content[{i}]")


def validate_submission(data: Any) -> None:
    """
    Validate a student submission map.

    Keys are question numbers (strings or ints); values are strings or
    None. Anything else is a contract violation.

    Raises:
        ValidationError: If data is not a valid submission map
    """
    if not isinstance(data, Mapping):
        raise ValidationError(
            f"Submission must be a mapping, got {type(data).__name__}",
        )

    bad_keys = [k for k in data if isinstance(k, bool) or not isinstance(k, (str, int))]
    if bad_keys:
        raise ValidationError(
            f"Submission keys must be question numbers: {bad_keys!r}",
            errors=[f"Invalid key: {k!r}" for k in bad_keys],
        )

    bad_values = [k for k, v in data.items() if v is not None and not isinstance(v, (str, int, float))]
    if bad_values:
        raise ValidationError(
            f"Submission values must be strings: {bad_values!r}",
            path=str(bad_values[0]),
            errors=[f"Invalid value for {k!r}" for k in bad_values],
        )
