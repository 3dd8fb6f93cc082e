"""Dynamic color-bucket ranges derived from the current player population."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping, Sequence

from coacheval.models import PlayerSummary, RangeBand, ScoreRangeModel


_FRACTIONS = (0.0, 0.2, 0.4, 0.6, 0.8, 1.0)

SCORE_FALLBACK = RangeBand(min=2.0, max=8.0, breakpoints=(2.0, 3.2, 4.4, 5.6, 6.8, 8.0))
VELOCITY_FALLBACK = RangeBand(min=60.0, max=85.0, breakpoints=(60.0, 65.0, 70.0, 75.0, 80.0, 85.0))


class ScoreBucket(str, Enum):
    POOR = "poor"
    BELOW = "below"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"
    MISSING = "missing"


BUCKET_COLORS: Mapping[ScoreBucket, str] = {
    ScoreBucket.EXCELLENT: "#22c55e",
    ScoreBucket.GOOD: "#84cc16",
    ScoreBucket.AVERAGE: "#eab308",
    ScoreBucket.BELOW: "#f97316",
    ScoreBucket.POOR: "#dc2626",
    ScoreBucket.MISSING: "#6b7280",
}


def _band(values: Iterable[float], fallback: RangeBand) -> RangeBand:
    pool = [value for value in values if value > 0]
    if not pool:
        return fallback
    low = min(pool)
    high = max(pool)
    span = high - low
    # The top breakpoint is the observed max itself, not low + span.
    return RangeBand(
        min=low,
        max=high,
        breakpoints=tuple(low + span * fraction for fraction in _FRACTIONS[:-1]) + (high,),
    )


def compute_ranges(summaries: Sequence[PlayerSummary]) -> ScoreRangeModel:
    """Pool every non-zero category score and overall, and every non-zero velocity."""

    scores: list[float] = []
    velocities: list[float] = []
    for summary in summaries:
        scores.extend(summary.scores_by_category.values())
        scores.append(summary.overall)
        velocities.append(summary.velocity)

    return ScoreRangeModel(
        score=_band(scores, SCORE_FALLBACK),
        velocity=_band(velocities, VELOCITY_FALLBACK),
    )


def classify(value: float, breakpoints: Sequence[float]) -> ScoreBucket:
    """Place a value into a bucket, checking the highest threshold first."""

    if value <= 0:
        return ScoreBucket.MISSING
    if value >= breakpoints[4]:
        return ScoreBucket.EXCELLENT
    if value >= breakpoints[3]:
        return ScoreBucket.GOOD
    if value >= breakpoints[2]:
        return ScoreBucket.AVERAGE
    if value >= breakpoints[1]:
        return ScoreBucket.BELOW
    return ScoreBucket.POOR


def classify_score(value: float, ranges: ScoreRangeModel) -> ScoreBucket:
    return classify(value, ranges.score.breakpoints)


def classify_velocity(value: float, ranges: ScoreRangeModel) -> ScoreBucket:
    return classify(value, ranges.velocity.breakpoints)


def bucket_color(bucket: ScoreBucket) -> str:
    return BUCKET_COLORS[bucket]


__all__ = [
    "BUCKET_COLORS",
    "SCORE_FALLBACK",
    "VELOCITY_FALLBACK",
    "ScoreBucket",
    "bucket_color",
    "classify",
    "classify_score",
    "classify_velocity",
    "compute_ranges",
]
