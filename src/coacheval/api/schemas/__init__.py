"""Pydantic models for API I/O."""

from .evaluation import EvaluationResponse, ValidationErrorItem, to_evaluation_response
from .board import (
    CategoryBreakdownResponse,
    HeatmapCellResponse,
    HeatmapResponse,
    HeatmapRowResponse,
    PlayerProfileResponse,
    PlayerSummaryResponse,
    RangeBandResponse,
    ScoreRangeResponse,
    to_heatmap_response,
    to_profile_response,
    to_ranges_response,
    to_summary_response,
)

__all__ = [
    "CategoryBreakdownResponse",
    "EvaluationResponse",
    "HeatmapCellResponse",
    "HeatmapResponse",
    "HeatmapRowResponse",
    "PlayerProfileResponse",
    "PlayerSummaryResponse",
    "RangeBandResponse",
    "ScoreRangeResponse",
    "ValidationErrorItem",
    "to_evaluation_response",
    "to_heatmap_response",
    "to_profile_response",
    "to_ranges_response",
    "to_summary_response",
]
