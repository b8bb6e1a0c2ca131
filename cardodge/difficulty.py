from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DifficultyLevel:
    min_score: int
    tick_duration: float  # seconds
    level: int


# hardest first; the first row whose threshold is <= score wins
DIFFICULTY_TABLE = (
    DifficultyLevel(20, 0.018, 5),
    DifficultyLevel(15, 0.028, 4),
    DifficultyLevel(10, 0.040, 3),
    DifficultyLevel(5, 0.055, 2),
    DifficultyLevel(0, 0.070, 1),
)


def current_difficulty(score: int) -> DifficultyLevel:
    """Map a score to its difficulty row. Negative scores get level 1."""
    for row in DIFFICULTY_TABLE:
        if score >= row.min_score:
            return row
    return DIFFICULTY_TABLE[-1]
