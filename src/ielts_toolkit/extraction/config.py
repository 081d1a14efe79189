"""
Module: extraction.config

Purpose:
    Configuration dataclass for the answer extraction pipeline. Provides
    immutable settings for placeholder formatting and answer joining.

Key Classes:
    - ExtractionConfig: Main configuration for extraction

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - extraction.patterns: Placeholder width
    - extraction.structured: Join separator, redaction
    - extraction.transformer: Passes config through the walk
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for answer extraction.

    Attributes:
        placeholder_padding: Spaces either side of the number in a text-run
            placeholder. Default 4 gives "[    3    ]".
        join_separator: Separator for multi-value answers (default ", ").
        redact_structured_answers: Also strip correctIndex, sentence
            completion answers and box answers from student nodes.
            Off by default; those attributes stay for rendering.
    """
    placeholder_padding: int = 4
    join_separator: str = ", "
    redact_structured_answers: bool = False

    def __post_init__(self) -> None:
        if self.placeholder_padding < 1:
            # Unpadded "[3]" would be indistinguishable from an authored answer
            raise ValueError(f"placeholder_padding must be >= 1: {self.placeholder_padding}")

    def placeholder(self, question_number: int) -> str:
        """Numbered blank that replaces a bracket answer in a text run."""
        pad = " " * self.placeholder_padding
        return f"[{pad}{question_number}{pad}]"
