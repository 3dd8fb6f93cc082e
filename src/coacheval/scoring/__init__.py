"""Aggregation and color-range scoring over evaluation records."""

from .aggregate import aggregate
from .ranges import (
    BUCKET_COLORS,
    ScoreBucket,
    bucket_color,
    classify,
    classify_score,
    classify_velocity,
    compute_ranges,
)

__all__ = [
    "BUCKET_COLORS",
    "ScoreBucket",
    "aggregate",
    "bucket_color",
    "classify",
    "classify_score",
    "classify_velocity",
    "compute_ranges",
]
