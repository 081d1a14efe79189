"""
Module: extraction

Purpose:
    Turns authoring content into student content plus an answer list.
    Handles document trees (text runs and structured question nodes) and
    flat markup strings.

Key Functions:
    - transform_document(): Main entry point for document trees
    - parse_rich_text(): Entry point for flat markup

Key Classes:
    - ExtractionConfig: Configuration for extraction settings
    - TransformResult: Container for transformation output

Dependencies:
    - ielts_toolkit.core.models: DocumentNode, ExtractedAnswer
"""

from .config import ExtractionConfig
from .patterns import extract_text_answers, TextRunResult
from .structured import extract_node_answer, answer_value, ANSWER_CATEGORIES, NodeResult
from .transformer import transform_document, preview_answers, QuestionCursor, TransformResult
from .rich_text import parse_rich_text, build_admin_preview, render_student_html, RichTextResult, AdminPreview

__all__ = [
    "ExtractionConfig",
    "extract_text_answers",
    "TextRunResult",
    "extract_node_answer",
    "answer_value",
    "ANSWER_CATEGORIES",
    "NodeResult",
    "transform_document",
    "preview_answers",
    "QuestionCursor",
    "TransformResult",
    "parse_rich_text",
    "build_admin_preview",
    "render_student_html",
    "RichTextResult",
    "AdminPreview",
]
