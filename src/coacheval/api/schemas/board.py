from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from coacheval.board import BoardSnapshot, HeatmapRow, PlayerProfile
from coacheval.models import PlayerSummary, RangeBand, ScoreRangeModel

from .evaluation import EvaluationResponse, to_evaluation_response


class PlayerSummaryResponse(BaseModel):
    name: str
    scores_by_category: Dict[str, float]
    velocity: float
    overall: float
    evaluations: int


class RangeBandResponse(BaseModel):
    min: float
    max: float
    breakpoints: List[float]


class ScoreRangeResponse(BaseModel):
    score: RangeBandResponse
    velocity: RangeBandResponse


class HeatmapCellResponse(BaseModel):
    field: str
    value: float
    bucket: str
    color: str
    display: str


class HeatmapRowResponse(BaseModel):
    name: str
    cells: List[HeatmapCellResponse]


class HeatmapResponse(BaseModel):
    sort: str
    direction: str
    rows: List[HeatmapRowResponse]
    ranges: ScoreRangeResponse


class CategoryBreakdownResponse(BaseModel):
    evaluation_type: str
    label: str
    score: float
    evaluations: int
    criteria_averages: Dict[str, float]


class PlayerProfileResponse(BaseModel):
    player: PlayerSummaryResponse
    categories: List[CategoryBreakdownResponse]
    evaluators: List[str]
    evaluations: List[EvaluationResponse]


def to_summary_response(summary: PlayerSummary) -> PlayerSummaryResponse:
    return PlayerSummaryResponse(
        name=summary.name,
        scores_by_category=dict(summary.scores_by_category),
        velocity=summary.velocity,
        overall=summary.overall,
        evaluations=len(summary.records),
    )


def _band(band: RangeBand) -> RangeBandResponse:
    return RangeBandResponse(min=band.min, max=band.max, breakpoints=list(band.breakpoints))


def to_ranges_response(ranges: ScoreRangeModel) -> ScoreRangeResponse:
    return ScoreRangeResponse(score=_band(ranges.score), velocity=_band(ranges.velocity))


def to_heatmap_response(
    rows: List[HeatmapRow],
    snapshot: BoardSnapshot,
    *,
    sort: str,
    direction: str,
) -> HeatmapResponse:
    return HeatmapResponse(
        sort=sort,
        direction=direction,
        rows=[
            HeatmapRowResponse(
                name=row.name,
                cells=[
                    HeatmapCellResponse(
                        field=cell.field,
                        value=cell.value,
                        bucket=cell.bucket.value,
                        color=cell.color,
                        display=cell.display,
                    )
                    for cell in row.cells
                ],
            )
            for row in rows
        ],
        ranges=to_ranges_response(snapshot.ranges),
    )


def to_profile_response(profile: PlayerProfile) -> PlayerProfileResponse:
    return PlayerProfileResponse(
        player=to_summary_response(profile.summary),
        categories=[
            CategoryBreakdownResponse(
                evaluation_type=category.evaluation_type,
                label=category.label,
                score=category.score,
                evaluations=category.evaluations,
                criteria_averages=dict(category.criteria_averages),
            )
            for category in profile.categories
        ],
        evaluators=list(profile.evaluators),
        evaluations=[to_evaluation_response(record) for record in profile.summary.records],
    )
