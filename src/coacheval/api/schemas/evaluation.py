from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel

from coacheval.models import EvaluationRecord, Rating


class EvaluationResponse(BaseModel):
    id: int
    player_name: str
    evaluator_name: str
    evaluation_type: str
    velocity: float | None = None
    ratings: List[Rating]
    notes: str | None = None
    average_score: float
    created_at: datetime
    updated_at: datetime | None = None


class ValidationErrorItem(BaseModel):
    loc: List[str | int]
    msg: str
    type: str


def to_evaluation_response(record: EvaluationRecord) -> EvaluationResponse:
    return EvaluationResponse(
        id=record.id,
        player_name=record.player_name,
        evaluator_name=record.evaluator_name,
        evaluation_type=record.evaluation_type,
        velocity=getattr(record, "velocity", None),
        ratings=list(record.ratings),
        notes=record.notes,
        average_score=record.average_score,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
