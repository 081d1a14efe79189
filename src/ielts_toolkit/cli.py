"""Command-line entry point.

Commands:
- transform: authoring document JSON -> student document + answer key
- grade: answer key + submission -> grading report (JSON, optional PDF)
- rich-text: authoring markup file -> student markup + answer key
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .core.schemas.validator import ValidationError
from .core.utils.serialization import (
    load_answer_key_json,
    load_document_json,
    load_submission_json,
    save_answer_key_json,
    save_document_json,
    save_report_json,
)
from .extraction import ExtractionConfig, parse_rich_text, transform_document
from .grading import band_score, create_answer_mapping, render_grading_report, validate_answers

logger = logging.getLogger(__name__)


def _cmd_transform(args: argparse.Namespace) -> int:
    document = load_document_json(args.document)
    config = ExtractionConfig(redact_structured_answers=args.redact)
    result = transform_document(document, config)
    if result.document is None:
        print("No document content; nothing written")
        return 0

    save_document_json(result.document, args.out)
    save_answer_key_json(
        args.key,
        result.answers,
        create_answer_mapping(result.answers),
        result.total_questions,
    )
    print(f"Questions: {result.total_questions} ({len(result.answers)} with answers)")
    if result.missing_numbers:
        print(f"  No answer for: {', '.join(str(n) for n in result.missing_numbers)}")
    print(f"Student document: {args.out}")
    print(f"Answer key: {args.key}")
    return 0


def _cmd_grade(args: argparse.Namespace) -> int:
    answers = load_answer_key_json(args.key)
    submission = load_submission_json(args.submission)
    report = validate_answers(submission, answers)

    band = band_score(report.correct_count, args.section) if args.section else None
    print(f"Score: {report.correct_count}/{report.total_questions} ({report.percentage}%)")
    if band is not None:
        print(f"Band: {band:.1f}")
    for result in report.incorrect:
        print(f"  Q{result.question_number}: {result.submitted!r} (expected {result.expected!r})")

    if args.out:
        save_report_json(report, args.out)
        print(f"Report: {args.out}")
    if args.pdf:
        render_grading_report(report, args.pdf, band=band)
        print(f"PDF: {args.pdf}")
    return 0


def _cmd_rich_text(args: argparse.Namespace) -> int:
    markup = args.markup.read_text(encoding="utf-8")
    result = parse_rich_text(markup)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(result.html, encoding="utf-8")
    save_answer_key_json(
        args.key,
        result.answers,
        create_answer_mapping(result.answers),
        result.total_questions,
    )
    print(f"Questions: {result.total_questions}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ielts-toolkit",
        description="Convert authoring tests to student tests and grade submissions",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("transform", help="Build student document and answer key")
    p.add_argument("document", type=Path, help="Authoring document JSON")
    p.add_argument("--out", type=Path, required=True, help="Student document JSON to write")
    p.add_argument("--key", type=Path, required=True, help="Answer key JSON to write")
    p.add_argument("--redact", action="store_true", help="Also strip answers from structured questions")
    p.set_defaults(func=_cmd_transform)

    p = sub.add_parser("grade", help="Grade a submission against an answer key")
    p.add_argument("key", type=Path, help="Answer key JSON")
    p.add_argument("submission", type=Path, help="Submission JSON keyed by question number")
    p.add_argument("--section", choices=("listening", "reading"), help="Report a band score")
    p.add_argument("--out", type=Path, help="Grading report JSON to write")
    p.add_argument("--pdf", type=Path, help="Grading report PDF to write")
    p.set_defaults(func=_cmd_grade)

    p = sub.add_parser("rich-text", help="Build student markup from bracketed markup")
    p.add_argument("markup", type=Path, help="Authoring markup file")
    p.add_argument("--out", type=Path, required=True, help="Student markup to write")
    p.add_argument("--key", type=Path, required=True, help="Answer key JSON to write")
    p.set_defaults(func=_cmd_rich_text)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )
    try:
        return args.func(args)
    except (FileNotFoundError, ValidationError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
