"""Evaluation records and the summaries derived from them."""

from .evaluation import (
    BattingEvaluation,
    CatchingEvaluation,
    EvaluationRecord,
    EvaluationType,
    InfieldEvaluation,
    NewEvaluation,
    OutfieldEvaluation,
    PitchingEvaluation,
    Rating,
    SpeedEvaluation,
    parse_evaluation,
)
from .summary import PlayerSummary, RangeBand, ScoreRangeModel

__all__ = [
    "BattingEvaluation",
    "CatchingEvaluation",
    "EvaluationRecord",
    "EvaluationType",
    "InfieldEvaluation",
    "NewEvaluation",
    "OutfieldEvaluation",
    "PitchingEvaluation",
    "PlayerSummary",
    "RangeBand",
    "Rating",
    "ScoreRangeModel",
    "SpeedEvaluation",
    "parse_evaluation",
]
