"""
Module: grading.report_pdf

Purpose:
    Render a grading report to a printable A4 PDF: score summary, optional
    band score, then one line per question with the submitted and
    expected values.

Key Functions:
    - render_grading_report(): Create report PDF

Dependencies:
    - reportlab: PDF generation
    - ielts_toolkit.core.models.grading: GradingReport
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from ..core.models.grading import GradingReport, QuestionResult

logger = logging.getLogger(__name__)

# Constants
A4_WIDTH, A4_HEIGHT = A4
MARGIN = 50
LINE_HEIGHT = 18
MAX_VALUE_CHARS = 40

COLUMNS = (("Q", 0), ("Submitted", 40), ("Expected", 240), ("Result", 440))


def _clip(value: str) -> str:
    value = " ".join(value.split())
    if len(value) <= MAX_VALUE_CHARS:
        return value
    return value[: MAX_VALUE_CHARS - 3] + "..."


def _draw_header(c: canvas.Canvas, y: float) -> float:
    c.setFont("Helvetica-Bold", 10)
    for label, offset in COLUMNS:
        c.drawString(MARGIN + offset, y, label)
    c.line(MARGIN, y - 4, A4_WIDTH - MARGIN, y - 4)
    return y - LINE_HEIGHT


def _draw_row(c: canvas.Canvas, result: QuestionResult, y: float) -> None:
    c.setFont("Helvetica", 10)
    values = (
        str(result.question_number),
        _clip(result.submitted) or "-",
        _clip(result.expected),
        "correct" if result.correct else "wrong",
    )
    for (_, offset), value in zip(COLUMNS, values):
        c.drawString(MARGIN + offset, y, value)


def render_grading_report(
    report: GradingReport,
    output_path: Path,
    *,
    title: str = "Test Results Report",
    band: Optional[float] = None,
) -> None:
    """
    Write a grading report PDF.

    Args:
        report: Graded submission
        output_path: Path to write the PDF
        title: Heading on the first page
        band: Band score to print under the raw score, if known

    Example:
        >>> render_grading_report(report, Path("output/results.pdf"), band=6.5)
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(str(output_path), pagesize=A4)
    y = A4_HEIGHT - MARGIN

    c.setFont("Helvetica-Bold", 16)
    c.drawString(MARGIN, y, title)
    y -= LINE_HEIGHT * 1.5

    c.setFont("Helvetica", 11)
    c.drawString(
        MARGIN, y,
        f"Score: {report.correct_count}/{report.total_questions} ({report.percentage}%)",
    )
    y -= LINE_HEIGHT
    if band is not None:
        c.drawString(MARGIN, y, f"Band score: {band:.1f}")
        y -= LINE_HEIGHT
    y -= LINE_HEIGHT / 2

    pages = 1
    y = _draw_header(c, y)
    for result in report.per_question:
        if y < MARGIN:
            c.showPage()
            pages += 1
            y = _draw_header(c, A4_HEIGHT - MARGIN)
        _draw_row(c, result, y)
        y -= LINE_HEIGHT

    if not report.per_question:
        logger.warning("Grading report has no questions")

    c.showPage()
    c.save()
    logger.info(f"Wrote grading report ({pages} page(s)) to {output_path}")
