"""Derived structures produced by the scoring layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple

from .evaluation import EvaluationRecord


@dataclass(frozen=True)
class PlayerSummary:
    """Per-player averages recomputed on every aggregation."""

    name: str
    scores_by_category: Mapping[str, float]
    velocity: float
    overall: float
    records: Tuple[EvaluationRecord, ...]

    def score(self, category: str) -> float:
        return self.scores_by_category.get(category, 0.0)


@dataclass(frozen=True)
class RangeBand:
    """Observed span and the six linear breakpoints used for color buckets."""

    min: float
    max: float
    breakpoints: Tuple[float, ...]


@dataclass(frozen=True)
class ScoreRangeModel:
    score: RangeBand
    velocity: RangeBand
