"""
Module: nodes

Purpose:
    Provides the DocumentNode dataclass - an immutable tree node mirroring
    the editor's document JSON. A node is a container (doc, paragraph),
    a text run, or one of the structured question kinds. NodeKind
    classifies a node so callers can dispatch on a closed set of kinds.

Key Functions:
    - DocumentNode.kind: Classify the node (container, text, question...)
    - DocumentNode.iter_all(): Iterate over node and descendants (pre-order)
    - DocumentNode.iter_questions(): Iterate over question nodes only
    - DocumentNode.to_dict() / DocumentNode.from_dict(): Serialization

Dependencies:
    - copy (std)
    - dataclasses (std)
    - typing (std)

Used By:
    - extraction.transformer
    - extraction.structured
    - core.utils.serialization
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Optional, Tuple


class NodeKind(str, Enum):
    """Closed set of node kinds the extractor understands."""
    CONTAINER = "container"
    TEXT = "text"
    SHORT_ANSWER = "short_answer"              # Single blank
    MCQ = "mcq"                                # Multiple choice
    SENTENCE_COMPLETION = "sentence_completion"  # Several blanks, one key
    MATCHING = "matching"                      # Left/right pairing
    MAP_DIAGRAM = "map_diagram"                # Labelled boxes on an image
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def is_question(self) -> bool:
        return self in QUESTION_KINDS


QUESTION_KINDS = frozenset({
    NodeKind.SHORT_ANSWER,
    NodeKind.MCQ,
    NodeKind.SENTENCE_COMPLETION,
    NodeKind.MATCHING,
    NodeKind.MAP_DIAGRAM,
})

CONTAINER_TYPES = frozenset({"doc", "paragraph", "container"})

# Keys DocumentNode models explicitly; everything else lands in `extra`.
_MODELLED_KEYS = ("type", "attrs", "content", "text")


@dataclass(frozen=True, slots=True)
class DocumentNode:
    """
    One node of an authoring or student document (immutable).

    The tree structure is:
        doc
        ├── paragraph
        │   ├── text ("The capital is [Paris]")
        │   └── short_answer (attrs.answers=["Paris"])
        └── mcq (attrs.options, attrs.correctIndex)

    Attributes:
        type: Raw node type string from the document JSON
        attrs: Node attributes (question data, admin flag, display number)
        content: Child nodes; only containers (or unknown kinds) have them
        text: Literal body of a text run
        extra: Any other keys of the JSON node, carried through untouched

    Invariants:
        - A text run never has children
        - Question kinds never have children

    Example:
        >>> node = DocumentNode.from_dict({"type": "text", "text": "Hi [x]"})
        >>> node.kind
        <NodeKind.TEXT: 'text'>
    """

    type: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    content: Tuple[DocumentNode, ...] = ()
    text: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate node shape on construction."""
        if not isinstance(self.type, str) or not self.type:
            raise ValueError(f"Node type must be a non-empty string, got {self.type!r}")
        if self.content and self.type == NodeKind.TEXT.value:
            raise ValueError("Text nodes cannot have children")
        if self.content and self.type in {k.value for k in QUESTION_KINDS}:
            raise ValueError(f"Question node {self.type!r} cannot have children")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def kind(self) -> NodeKind:
        """Classify this node by its type string."""
        if self.type in CONTAINER_TYPES:
            return NodeKind.CONTAINER
        try:
            return NodeKind(self.type)
        except ValueError:
            return NodeKind.UNKNOWN

    @property
    def is_question(self) -> bool:
        return self.kind.is_question

    @property
    def is_authoring(self) -> bool:
        """
        True unless the node is already in student form.

        Only an explicit `admin: false` marks student form; authored nodes
        often omit the flag.
        """
        return self.attrs.get("admin") is not False

    @property
    def display_number(self) -> Optional[int]:
        number = self.attrs.get("number")
        return number if isinstance(number, int) else None

    # ─────────────────────────────────────────────────────────────────────────
    # Iteration Methods
    # ─────────────────────────────────────────────────────────────────────────

    def iter_all(self) -> Iterator[DocumentNode]:
        """
        Iterate over this node and all descendants (pre-order).

        Yields:
            This node, then all descendants in document order
        """
        yield self
        for child in self.content:
            yield from child.iter_all()

    def iter_questions(self) -> Iterator[DocumentNode]:
        """Iterate over question nodes in document order."""
        for node in self.iter_all():
            if node.is_question:
                yield node

    def iter_text(self) -> Iterator[str]:
        """Iterate over text-run bodies in document order."""
        for node in self.iter_all():
            if node.kind == NodeKind.TEXT and node.text:
                yield node.text

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to the document JSON shape.

        Returns:
            Dict representation of this node and its children
        """
        d: dict[str, Any] = {"type": self.type}
        if self.attrs:
            d["attrs"] = copy.deepcopy(dict(self.attrs))
        if self.content:
            d["content"] = [child.to_dict() for child in self.content]
        if self.text is not None:
            d["text"] = self.text
        for key, value in self.extra.items():
            d[key] = copy.deepcopy(value)
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocumentNode:
        """
        Deserialize from the document JSON shape.

        Attribute values are deep-copied so the returned tree never shares
        mutable state with `data`.

        Args:
            data: Dict representation (already structurally validated)

        Returns:
            DocumentNode instance
        """
        content = tuple(cls.from_dict(child) for child in data.get("content") or [])
        return cls(
            type=data["type"],
            attrs=copy.deepcopy(dict(data.get("attrs") or {})),
            content=content,
            text=data.get("text"),
            extra={
                key: copy.deepcopy(value)
                for key, value in data.items()
                if key not in _MODELLED_KEYS
            },
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        if self.text is not None:
            return f"DocumentNode({self.type!r}, text={self.text[:30]!r})"
        child_str = f", children={len(self.content)}" if self.content else ""
        return f"DocumentNode({self.type!r}{child_str})"
