import pytest

from assessment_app.core.scoring import (
    ResultTier,
    format_elapsed,
    percentage,
    tier_for_percentage,
)


@pytest.mark.parametrize(
    ("score", "total", "tier"),
    [
        (5, 5, ResultTier.PERFECT),
        (4, 5, ResultTier.GREAT),
        (9, 10, ResultTier.GREAT),
        (3, 5, ResultTier.GOOD),
        (7, 10, ResultTier.GOOD),
        (2, 5, ResultTier.NEEDS_PRACTICE),
        (0, 5, ResultTier.NEEDS_PRACTICE),
    ],
)
def test_tier_thresholds_are_inclusive_lower_bounds(score, total, tier):
    assert tier_for_percentage(percentage(score, total)) is tier


def test_just_below_threshold_falls_to_next_tier():
    assert tier_for_percentage(79.99) is ResultTier.GOOD
    assert tier_for_percentage(59.99) is ResultTier.NEEDS_PRACTICE
    assert tier_for_percentage(99.99) is ResultTier.GREAT


def test_tier_label_is_human_readable():
    assert ResultTier.NEEDS_PRACTICE.label == "needs practice"
    assert ResultTier.PERFECT.label == "perfect"


def test_percentage_rejects_invalid_input():
    with pytest.raises(ValueError):
        percentage(1, 0)
    with pytest.raises(ValueError):
        percentage(6, 5)


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "0:00"), (9.9, "0:09"), (50, "0:50"), (61, "1:01"), (600, "10:00")],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected
