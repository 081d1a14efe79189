"""
Tests for the ielts-toolkit command line.
"""

import json

import pytest

from ielts_toolkit.cli import build_parser, main


@pytest.fixture
def doc_path(tmp_path, capital_doc):
    path = tmp_path / "authoring.json"
    path.write_text(json.dumps(capital_doc), encoding="utf-8")
    return path


class TestTransformCommand:
    """Tests for `transform`."""

    def test_transform_writes_student_doc_and_key(self, doc_path, tmp_path, capsys):
        out = tmp_path / "student.json"
        key = tmp_path / "key.json"

        assert main(["transform", str(doc_path), "--out", str(out), "--key", str(key)]) == 0

        student = json.loads(out.read_text(encoding="utf-8"))
        assert student["content"][0]["content"][0]["text"] == "Capital: [    1    ]"
        key_data = json.loads(key.read_text(encoding="utf-8"))
        assert key_data["total_questions"] == 2
        assert key_data["mapping"]["1"] == "Paris"
        assert key_data["mapping"]["text_answer_1"] == "Paris"
        assert "Questions: 2" in capsys.readouterr().out

    def test_transform_when_missing_file_then_returns_error(self, tmp_path):
        code = main([
            "transform", str(tmp_path / "missing.json"),
            "--out", str(tmp_path / "s.json"), "--key", str(tmp_path / "k.json"),
        ])
        assert code == 1

    def test_transform_when_malformed_then_returns_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"type": "doc", "content": "oops"}), encoding="utf-8")
        code = main([
            "transform", str(path),
            "--out", str(tmp_path / "s.json"), "--key", str(tmp_path / "k.json"),
        ])
        assert code == 1


class TestGradeCommand:
    """Tests for `grade`."""

    def test_grade_after_transform(self, doc_path, tmp_path, capsys):
        key = tmp_path / "key.json"
        main(["transform", str(doc_path), "--out", str(tmp_path / "s.json"), "--key", str(key)])
        submission = tmp_path / "submission.json"
        submission.write_text(json.dumps({"1": " paris", "2": "wrong"}), encoding="utf-8")
        report_path = tmp_path / "report.json"
        pdf_path = tmp_path / "report.pdf"
        capsys.readouterr()

        code = main([
            "grade", str(key), str(submission),
            "--section", "reading", "--out", str(report_path), "--pdf", str(pdf_path),
        ])

        assert code == 0
        output = capsys.readouterr().out
        assert "Score: 1/2 (50%)" in output
        assert "Band: 2.5" in output
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert report["correctCount"] == 1
        assert pdf_path.read_bytes().startswith(b"%PDF")


class TestRichTextCommand:
    """Tests for `rich-text`."""

    def test_rich_text_writes_markup_and_key(self, tmp_path):
        markup = tmp_path / "passage.html"
        markup.write_text("<p>The river is [Seine].</p>", encoding="utf-8")
        out = tmp_path / "student.html"
        key = tmp_path / "key.json"

        assert main(["rich-text", str(markup), "--out", str(out), "--key", str(key)]) == 0

        assert 'data-question-id="1"' in out.read_text(encoding="utf-8")
        assert json.loads(key.read_text(encoding="utf-8"))["mapping"]["rich_text_1"] == "Seine"


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
