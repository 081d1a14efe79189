import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import ielts_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def authoring_doc() -> dict:
    """Authoring document mixing text runs and every question kind."""
    return {
        "type": "doc",
        "content": [
            {
                "type": "paragraph",
                "content": [
                    {"type": "text", "text": "The capital is [Paris] and it has [2500000] people."},
                    {"type": "short_answer", "attrs": {"admin": True, "answers": ["river", "Seine"]}},
                ],
            },
            {
                "type": "mcq",
                "attrs": {"admin": True, "options": ["A", "B", "C"], "correctIndex": 1},
            },
            {
                "type": "sentence_completion",
                "attrs": {"admin": True, "answers": ["north", "east"]},
            },
            {
                "type": "matching",
                "attrs": {"admin": True, "left": ["Speaker 1", "Speaker 2"], "right": ["likes tea", "likes coffee"]},
            },
            {
                "type": "map_diagram",
                "attrs": {
                    "admin": True,
                    "imageUrl": "map.png",
                    "boxes": [{"id": 1, "x": 10, "y": 20, "answer": "Library"}, {"id": 2, "x": 50, "y": 60, "answer": "Cafe"}],
                },
            },
        ],
    }


@pytest.fixture
def capital_doc() -> dict:
    """Small document: one bracket answer followed by a matching question."""
    return {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": "Capital: [Paris]"}]},
            {"type": "matching", "attrs": {"admin": True, "left": ["1", "2"], "right": ["x", "y"]}},
        ],
    }
