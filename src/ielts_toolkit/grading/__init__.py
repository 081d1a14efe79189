"""
Module: grading

Purpose:
    Answer keys, submission grading and result output.

Key Functions:
    - create_answer_mapping(): Answer list -> flat answer key
    - validate_answers(): Submission -> GradingReport
    - band_score() / overall_band_score(): Band conversion
    - render_grading_report(): Report PDF

Dependencies:
    - reportlab: PDF generation
    - ielts_toolkit.core.models: ExtractedAnswer, GradingReport
"""

from .answer_key import create_answer_mapping, lookup_answer
from .comparator import normalize_answer, answers_match, validate_answers
from .bands import band_score, overall_band_score
from .report_pdf import render_grading_report

__all__ = [
    "create_answer_mapping",
    "lookup_answer",
    "normalize_answer",
    "answers_match",
    "validate_answers",
    "band_score",
    "overall_band_score",
    "render_grading_report",
]
