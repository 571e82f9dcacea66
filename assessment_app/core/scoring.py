"""Score percentage, result tiers and elapsed-time formatting."""

from __future__ import annotations

from enum import Enum

from assessment_app.constants.assessment_constants import (
    GOOD_THRESHOLD_PERCENT,
    GREAT_THRESHOLD_PERCENT,
    PERFECT_THRESHOLD_PERCENT,
)


class ResultTier(Enum):
    """Qualitative bucket for a finished session's score."""

    PERFECT = "perfect"
    GREAT = "great"
    GOOD = "good"
    NEEDS_PRACTICE = "needs_practice"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


# Inclusive lower bounds, checked in descending order.
_TIER_THRESHOLDS: tuple[tuple[float, ResultTier], ...] = (
    (PERFECT_THRESHOLD_PERCENT, ResultTier.PERFECT),
    (GREAT_THRESHOLD_PERCENT, ResultTier.GREAT),
    (GOOD_THRESHOLD_PERCENT, ResultTier.GOOD),
)


def percentage(score: int, total_questions: int) -> float:
    """Return the score as a percentage of the question count."""
    if total_questions <= 0:
        raise ValueError("Total question count must be positive.")
    if not 0 <= score <= total_questions:
        raise ValueError(f"Score {score} is outside 0..{total_questions}.")
    # Multiply first so exact boundaries such as 3/5 land on 60.0.
    return score * 100 / total_questions


def tier_for_percentage(value: float) -> ResultTier:
    for threshold, tier in _TIER_THRESHOLDS:
        if value >= threshold:
            return tier
    return ResultTier.NEEDS_PRACTICE


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as ``m:ss`` for timer displays."""
    whole_seconds = max(0, int(seconds))
    minutes, secs = divmod(whole_seconds, 60)
    return f"{minutes}:{secs:02d}"
