"""
Unit Tests for DocumentNode Model

Tests for node classification, iteration and dict round trips.
"""

import pytest

from ielts_toolkit.core.models.nodes import DocumentNode, NodeKind, QUESTION_KINDS


class TestNodeKind:
    """Tests for kind classification."""

    @pytest.mark.parametrize("node_type", ["doc", "paragraph", "container"])
    def test_kind_when_container_type_then_container(self, node_type):
        assert DocumentNode(node_type).kind == NodeKind.CONTAINER

    def test_kind_when_question_type_then_question(self):
        node = DocumentNode("mcq", {"options": ["A"]})
        assert node.kind == NodeKind.MCQ
        assert node.is_question

    def test_kind_when_unrecognized_type_then_unknown(self):
        node = DocumentNode("callout")
        assert node.kind == NodeKind.UNKNOWN
        assert not node.is_question

    def test_question_kinds_cover_five_kinds(self):
        assert len(QUESTION_KINDS) == 5
        assert NodeKind.TEXT not in QUESTION_KINDS


class TestNodeValidation:
    """Tests for construction-time checks."""

    def test_init_when_empty_type_then_raises(self):
        with pytest.raises(ValueError):
            DocumentNode("")

    def test_init_when_text_has_children_then_raises(self):
        with pytest.raises(ValueError, match="Text nodes"):
            DocumentNode("text", content=(DocumentNode("text", text="x"),))

    def test_init_when_question_has_children_then_raises(self):
        with pytest.raises(ValueError, match="cannot have children"):
            DocumentNode("mcq", content=(DocumentNode("text", text="x"),))

    def test_init_when_unknown_has_children_then_allowed(self):
        node = DocumentNode("callout", content=(DocumentNode("text", text="x"),))
        assert len(node.content) == 1


class TestNodeProperties:
    """Tests for admin flag and display number."""

    def test_is_authoring_when_admin_true(self):
        assert DocumentNode("mcq", {"admin": True}).is_authoring

    def test_is_authoring_when_admin_missing_then_true(self):
        assert DocumentNode("mcq").is_authoring

    def test_is_authoring_when_admin_false_then_false(self):
        assert not DocumentNode("mcq", {"admin": False}).is_authoring

    def test_display_number_when_set(self):
        assert DocumentNode("mcq", {"number": 5}).display_number == 5

    def test_display_number_when_not_int_then_none(self):
        assert DocumentNode("mcq", {"number": "5"}).display_number is None


class TestNodeIteration:
    """Tests for tree iteration helpers."""

    def test_iter_all_is_pre_order(self, authoring_doc):
        root = DocumentNode.from_dict(authoring_doc)
        types = [n.type for n in root.iter_all()]
        assert types[:4] == ["doc", "paragraph", "text", "short_answer"]
        assert types[4:] == ["mcq", "sentence_completion", "matching", "map_diagram"]

    def test_iter_questions_yields_document_order(self, authoring_doc):
        root = DocumentNode.from_dict(authoring_doc)
        kinds = [n.kind for n in root.iter_questions()]
        assert kinds == [
            NodeKind.SHORT_ANSWER,
            NodeKind.MCQ,
            NodeKind.SENTENCE_COMPLETION,
            NodeKind.MATCHING,
            NodeKind.MAP_DIAGRAM,
        ]

    def test_iter_text(self, capital_doc):
        root = DocumentNode.from_dict(capital_doc)
        assert list(root.iter_text()) == ["Capital: [Paris]"]


class TestNodeSerialization:
    """Tests for to_dict/from_dict."""

    def test_round_trip_preserves_document(self, authoring_doc):
        assert DocumentNode.from_dict(authoring_doc).to_dict() == authoring_doc

    def test_from_dict_keeps_unmodelled_keys(self):
        data = {"type": "text", "text": "bold", "marks": [{"type": "bold"}]}
        node = DocumentNode.from_dict(data)
        assert node.extra == {"marks": [{"type": "bold"}]}
        assert node.to_dict() == data

    def test_from_dict_does_not_alias_input(self, authoring_doc):
        node = DocumentNode.from_dict(authoring_doc)
        authoring_doc["content"][1]["attrs"]["options"].append("D")
        mcq = next(n for n in node.iter_questions() if n.kind == NodeKind.MCQ)
        assert mcq.attrs["options"] == ["A", "B", "C"]

    def test_to_dict_does_not_alias_node(self):
        node = DocumentNode("mcq", {"options": ["A", "B"]})
        data = node.to_dict()
        data["attrs"]["options"].append("C")
        assert node.attrs["options"] == ["A", "B"]

    def test_repr_is_concise(self):
        assert repr(DocumentNode("text", text="hello")) == "DocumentNode('text', text='hello')"
