"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    serialize_document,
    deserialize_document,
    serialize_answers,
    deserialize_answers,
    serialize_report,
    load_document_json,
    save_document_json,
    save_answer_key_json,
    load_answer_key_json,
    load_submission_json,
    save_report_json,
)

__all__ = [
    "serialize_document",
    "deserialize_document",
    "serialize_answers",
    "deserialize_answers",
    "serialize_report",
    "load_document_json",
    "save_document_json",
    "save_answer_key_json",
    "load_answer_key_json",
    "load_submission_json",
    "save_report_json",
]
