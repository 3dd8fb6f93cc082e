"""Canonical evaluation models shared across ingestion, scoring and storage."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator
from pydantic.config import ConfigDict


EvaluationType = Literal["pitching", "infield", "outfield", "batting", "catching", "speed"]


class Rating(BaseModel):
    """Single criterion rating inside an evaluation."""

    criteria: str
    rating: float
    time: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class _EvaluationBase(BaseModel):
    id: int
    player_name: str = Field(..., min_length=1)
    evaluator_name: str = ""
    ratings: List[Rating] = Field(default_factory=list)
    notes: Optional[str] = None
    average_score: float = 0.0
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Mixed naive/aware timestamps cannot be ordered against each other.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class PitchingEvaluation(_EvaluationBase):
    evaluation_type: Literal["pitching"] = "pitching"
    velocity: Optional[float] = None


class InfieldEvaluation(_EvaluationBase):
    evaluation_type: Literal["infield"] = "infield"


class OutfieldEvaluation(_EvaluationBase):
    evaluation_type: Literal["outfield"] = "outfield"


class BattingEvaluation(_EvaluationBase):
    evaluation_type: Literal["batting"] = "batting"


class CatchingEvaluation(_EvaluationBase):
    evaluation_type: Literal["catching"] = "catching"


class SpeedEvaluation(_EvaluationBase):
    evaluation_type: Literal["speed"] = "speed"


EvaluationRecord = Annotated[
    Union[
        PitchingEvaluation,
        InfieldEvaluation,
        OutfieldEvaluation,
        BattingEvaluation,
        CatchingEvaluation,
        SpeedEvaluation,
    ],
    Field(discriminator="evaluation_type"),
]

_RECORD_ADAPTER: TypeAdapter[Any] = TypeAdapter(EvaluationRecord)


def parse_evaluation(data: Any) -> EvaluationRecord:
    """Validate a raw payload into the matching evaluation variant."""

    return _RECORD_ADAPTER.validate_python(data)


class NewEvaluation(BaseModel):
    """Evaluation payload ready to be stored; the store assigns id and timestamps."""

    player_name: str = Field(..., min_length=1)
    evaluator_name: str
    evaluation_type: EvaluationType
    velocity: Optional[float] = None
    ratings: List[Rating]
    notes: Optional[str] = None
    average_score: float

    model_config = ConfigDict(frozen=True)
