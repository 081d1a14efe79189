"""
Module: grading.bands

Purpose:
    Converts raw section scores (out of 40) to IELTS band scores and
    combines section bands into an overall band.

Key Functions:
    - band_score(): Raw correct count -> band for listening or reading
    - overall_band_score(): Average of section bands, nearest 0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Tuple

Section = Literal["listening", "reading"]

MIN_BAND = 1.0


@dataclass(frozen=True, slots=True)
class BandRange:
    """Inclusive raw-score range mapped to one band."""
    low: int
    high: int
    band: float

    def contains(self, correct: int) -> bool:
        return self.low <= correct <= self.high


LISTENING_BANDS: Tuple[BandRange, ...] = (
    BandRange(39, 40, 9.0),
    BandRange(37, 38, 8.5),
    BandRange(35, 36, 8.0),
    BandRange(32, 34, 7.5),
    BandRange(30, 31, 7.0),
    BandRange(26, 29, 6.5),
    BandRange(23, 25, 6.0),
    BandRange(18, 22, 5.5),
    BandRange(16, 17, 5.0),
    BandRange(13, 15, 4.5),
    BandRange(10, 12, 4.0),
    BandRange(6, 9, 3.5),
    BandRange(4, 5, 3.0),
    BandRange(3, 3, 2.5),
    BandRange(0, 2, 1.0),
)

# Academic module
READING_BANDS: Tuple[BandRange, ...] = (
    BandRange(39, 40, 9.0),
    BandRange(37, 38, 8.5),
    BandRange(35, 36, 8.0),
    BandRange(33, 34, 7.5),
    BandRange(30, 32, 7.0),
    BandRange(27, 29, 6.5),
    BandRange(23, 26, 6.0),
    BandRange(19, 22, 5.5),
    BandRange(15, 18, 5.0),
    BandRange(11, 14, 4.5),
    BandRange(8, 10, 4.0),
    BandRange(5, 7, 3.5),
    BandRange(3, 4, 3.0),
    BandRange(1, 2, 2.5),
    BandRange(0, 0, 1.0),
)


def band_score(correct: int, section: Section) -> float:
    """
    Convert a raw correct count to a band.

    Args:
        correct: Number of correct answers
        section: "listening" or "reading"

    Returns:
        Band score; counts outside every range give MIN_BAND

    Raises:
        ValueError: If section is unknown
    """
    if section == "listening":
        table = LISTENING_BANDS
    elif section == "reading":
        table = READING_BANDS
    else:
        raise ValueError(f"Unknown section: {section!r}")

    for band_range in table:
        if band_range.contains(correct):
            return band_range.band
    return MIN_BAND


def overall_band_score(*bands: float) -> float:
    """
    Average the non-zero section bands, rounded to the nearest 0.5.

    Halves round up (6.25 -> 6.5), as the published band rules do.
    """
    valid = [b for b in bands if b > 0]
    if not valid:
        return MIN_BAND
    average = sum(valid) / len(valid)
    return math.floor(average * 2 + 0.5) / 2
