"""Validated evaluation submissions and their conversion to storable payloads."""

from __future__ import annotations

from math import fsum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator
from pydantic.config import ConfigDict

from coacheval.config.criteria import (
    RATING_MAX,
    RATING_MIN,
    SIXTY_TIME_MAX,
    SIXTY_TIME_MIN,
    VELOCITY_MAX,
    get_criteria,
)
from coacheval.models import NewEvaluation, Rating


# 60-yard time anchors: at or under the fast anchor earns the top rating,
# at or over the slow anchor the bottom one.
SIXTY_FAST_SECONDS = 6.0
SIXTY_SLOW_SECONDS = 8.0


def time_to_rating(seconds: float) -> float:
    """Convert a 60-yard time to a 2-8 rating; faster times rate higher."""

    if seconds <= SIXTY_FAST_SECONDS:
        return RATING_MAX
    if seconds >= SIXTY_SLOW_SECONDS:
        return RATING_MIN
    fraction = (seconds - SIXTY_FAST_SECONDS) / (SIXTY_SLOW_SECONDS - SIXTY_FAST_SECONDS)
    return RATING_MAX - fraction * (RATING_MAX - RATING_MIN)


class _SubmissionBase(BaseModel):
    player_name: str = Field(..., min_length=1)
    evaluator_name: str = Field(..., min_length=1)
    notes: Optional[str] = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("notes")
    @classmethod
    def _blank_notes(cls, value: str | None) -> str | None:
        return value or None


class _RatedSubmission(_SubmissionBase):
    ratings: Dict[str, float]

    @model_validator(mode="after")
    def _check_ratings(self) -> "_RatedSubmission":
        expected = get_criteria(self.evaluation_type).criteria  # type: ignore[attr-defined]
        missing = [criteria for criteria in expected if criteria not in self.ratings]
        if missing:
            raise ValueError(f"Missing ratings for: {', '.join(missing)}")
        unknown = [criteria for criteria in self.ratings if criteria not in expected]
        if unknown:
            raise ValueError(f"Unknown criteria: {', '.join(unknown)}")
        for criteria, value in self.ratings.items():
            if not RATING_MIN <= value <= RATING_MAX:
                raise ValueError(f"Rating for {criteria} must be between 2-8")
        return self


class PitchingSubmission(_RatedSubmission):
    evaluation_type: Literal["pitching"] = "pitching"
    velocity: float = Field(..., gt=0.0, le=VELOCITY_MAX)


class InfieldSubmission(_RatedSubmission):
    evaluation_type: Literal["infield"] = "infield"


class OutfieldSubmission(_RatedSubmission):
    evaluation_type: Literal["outfield"] = "outfield"


class BattingSubmission(_RatedSubmission):
    evaluation_type: Literal["batting"] = "batting"


class CatchingSubmission(_RatedSubmission):
    evaluation_type: Literal["catching"] = "catching"


class SpeedSubmission(_SubmissionBase):
    evaluation_type: Literal["speed"] = "speed"
    sixty_time: float = Field(..., ge=SIXTY_TIME_MIN, le=SIXTY_TIME_MAX)


EvaluationSubmission = Annotated[
    Union[
        PitchingSubmission,
        InfieldSubmission,
        OutfieldSubmission,
        BattingSubmission,
        CatchingSubmission,
        SpeedSubmission,
    ],
    Field(discriminator="evaluation_type"),
]

_SUBMISSION_ADAPTER: TypeAdapter[Any] = TypeAdapter(EvaluationSubmission)


def parse_submission(data: Any) -> EvaluationSubmission:
    """Validate a raw form payload, raising ``pydantic.ValidationError`` on bad input."""

    return _SUBMISSION_ADAPTER.validate_python(data)


def build_new_evaluation(submission: EvaluationSubmission) -> NewEvaluation:
    """Produce the storable payload, with ratings in criteria order and their mean."""

    criteria = get_criteria(submission.evaluation_type).criteria
    velocity: float | None = None

    if isinstance(submission, SpeedSubmission):
        rating = time_to_rating(submission.sixty_time)
        ratings: List[Rating] = [
            Rating(criteria=criteria[0], rating=rating, time=f"{submission.sixty_time:g}s")
        ]
    else:
        ratings = [Rating(criteria=name, rating=submission.ratings[name]) for name in criteria]
        if isinstance(submission, PitchingSubmission):
            velocity = submission.velocity

    average_score = fsum(item.rating for item in ratings) / len(ratings)
    return NewEvaluation(
        player_name=submission.player_name,
        evaluator_name=submission.evaluator_name,
        evaluation_type=submission.evaluation_type,
        velocity=velocity,
        ratings=ratings,
        notes=submission.notes,
        average_score=average_score,
    )
