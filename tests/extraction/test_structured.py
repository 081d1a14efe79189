"""
Unit Tests for Structured Question Extraction

Tests for answer_value and extract_node_answer across every question kind.
"""

import json
import logging

import pytest

from ielts_toolkit.core.models.nodes import DocumentNode
from ielts_toolkit.extraction.config import ExtractionConfig
from ielts_toolkit.extraction.structured import answer_value, extract_node_answer


class TestAnswerValue:
    """Tests for answer_value function."""

    def test_short_answer_joins_candidates(self):
        node = DocumentNode("short_answer", {"answers": ["river", "Seine"]})
        assert answer_value(node) == "river, Seine"

    def test_short_answer_when_candidates_blank_then_empty(self):
        node = DocumentNode("short_answer", {"answers": ["", "  "]})
        assert answer_value(node) == ""

    def test_mcq_takes_option_at_index(self):
        node = DocumentNode("mcq", {"options": ["A", "B", "C"], "correctIndex": 1})
        assert answer_value(node) == "B"

    def test_mcq_when_index_missing_then_first_option(self):
        node = DocumentNode("mcq", {"options": ["A", "B"]})
        assert answer_value(node) == "A"

    @pytest.mark.parametrize("index", [3, -1, "x", True, "--1", "\u00b2", "-"])
    def test_mcq_when_index_unusable_then_empty(self, index):
        node = DocumentNode("mcq", {"options": ["A", "B", "C"], "correctIndex": index})
        assert answer_value(node) == ""

    def test_mcq_when_index_is_numeric_string_then_used(self):
        node = DocumentNode("mcq", {"options": ["A", "B", "C"], "correctIndex": " 2 "})
        assert answer_value(node) == "C"

    def test_mcq_accepts_snake_case_index(self):
        node = DocumentNode("mcq", {"options": ["A", "B", "C"], "correct_index": 2})
        assert answer_value(node) == "C"

    def test_sentence_completion_joins_answers(self):
        node = DocumentNode("sentence_completion", {"answers": ["north", "east"]})
        assert answer_value(node) == "north, east"

    def test_matching_keeps_both_lists(self):
        node = DocumentNode("matching", {"left": ["1", "2"], "right": ["x", "y"]})
        assert json.loads(answer_value(node)) == {"left": ["1", "2"], "right": ["x", "y"]}

    def test_matching_when_lists_missing_then_empty(self):
        assert answer_value(DocumentNode("matching")) == ""

    def test_map_diagram_joins_box_answers_in_order(self):
        node = DocumentNode("map_diagram", {"boxes": [{"answer": "Library"}, {"answer": "Cafe"}]})
        assert answer_value(node) == "Library, Cafe"

    def test_map_diagram_when_all_blank_then_empty(self):
        node = DocumentNode("map_diagram", {"boxes": [{"answer": ""}, {}]})
        assert answer_value(node) == ""

    def test_malformed_list_attr_treated_as_empty(self, caplog):
        caplog.set_level(logging.WARNING)
        node = DocumentNode("sentence_completion", {"answers": "north"})
        assert answer_value(node) == ""
        assert "is not a list" in caplog.text

    def test_custom_join_separator(self):
        node = DocumentNode("sentence_completion", {"answers": ["a", "b"]})
        assert answer_value(node, ExtractionConfig(join_separator=" / ")) == "a / b"


class TestExtractNodeAnswer:
    """Tests for extract_node_answer function."""

    def test_extract_mcq_at_number_five(self):
        node = DocumentNode("mcq", {"admin": True, "options": ["A", "B", "C"], "correctIndex": 1})

        result = extract_node_answer(node, 5)

        assert result.answer.value == "B"
        assert result.answer.id == "mcq_5"
        assert result.category == "mcq"
        assert result.node.attrs["admin"] is False
        assert result.node.attrs["number"] == 5
        assert result.node.attrs["options"] == ["A", "B", "C"]
        assert result.next_number == 6

    @pytest.mark.parametrize("node_type,category", [
        ("short_answer", "text"),
        ("sentence_completion", "form"),
        ("matching", "matching"),
        ("map_diagram", "form"),
    ])
    def test_extract_category_per_kind(self, node_type, category):
        result = extract_node_answer(DocumentNode(node_type), 1)
        assert result.category == category

    def test_extract_short_answer_clears_candidates(self):
        node = DocumentNode("short_answer", {"admin": True, "answers": ["river"]})
        result = extract_node_answer(node, 2)
        assert result.answer.id == "text_answer_2"
        assert result.node.attrs["answers"] == [""]

    def test_extract_when_no_value_then_number_still_consumed(self, caplog):
        caplog.set_level(logging.WARNING)
        node = DocumentNode("mcq", {"admin": True, "options": ["A"], "correctIndex": 4})

        result = extract_node_answer(node, 3)

        assert result.answer is None
        assert result.next_number == 4
        assert result.node.attrs["number"] == 3
        assert "number reserved" in caplog.text

    def test_extract_when_already_student_form_then_no_answer(self):
        node = DocumentNode("mcq", {"admin": False, "options": ["A", "B"], "correctIndex": 1})
        result = extract_node_answer(node, 1)
        assert result.answer is None

    def test_extract_keeps_structural_attrs_by_default(self):
        node = DocumentNode("map_diagram", {"boxes": [{"x": 1, "answer": "Library"}]})
        result = extract_node_answer(node, 1)
        assert result.node.attrs["boxes"] == [{"x": 1, "answer": "Library"}]

    def test_extract_when_redacting_then_answers_removed(self):
        config = ExtractionConfig(redact_structured_answers=True)
        mcq = DocumentNode("mcq", {"options": ["A", "B"], "correctIndex": 1})
        diagram = DocumentNode("map_diagram", {"boxes": [{"x": 1, "answer": "Library"}]})
        sentence = DocumentNode("sentence_completion", {"answers": ["north", "east"]})

        assert "correctIndex" not in extract_node_answer(mcq, 1, config).node.attrs
        assert extract_node_answer(diagram, 2, config).node.attrs["boxes"] == [{"x": 1, "answer": ""}]
        assert extract_node_answer(sentence, 3, config).node.attrs["answers"] == ["", ""]

    def test_extract_when_redacting_then_value_still_extracted(self):
        config = ExtractionConfig(redact_structured_answers=True)
        mcq = DocumentNode("mcq", {"options": ["A", "B"], "correctIndex": 1})
        assert extract_node_answer(mcq, 1, config).answer.value == "B"

    def test_extract_does_not_mutate_input_node(self):
        attrs = {"admin": True, "answers": ["river"]}
        node = DocumentNode("short_answer", attrs)
        extract_node_answer(node, 1)
        assert attrs == {"admin": True, "answers": ["river"]}

    def test_extract_when_not_question_then_raises(self):
        with pytest.raises(ValueError, match="Not a question"):
            extract_node_answer(DocumentNode("paragraph"), 1)
