"""Evaluation criteria for each supported skill category."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class EvaluationCriteria:
    evaluation_type: str
    label: str
    criteria: Tuple[str, ...]


EVALUATION_TYPES: Tuple[str, ...] = (
    "pitching",
    "infield",
    "outfield",
    "batting",
    "catching",
    "speed",
)

RATING_MIN = 2.0
RATING_MAX = 8.0
VELOCITY_MAX = 120.0
SIXTY_TIME_MIN = 5.0
SIXTY_TIME_MAX = 10.0

_CRITERIA: Dict[str, EvaluationCriteria] = {
    "pitching": EvaluationCriteria(
        evaluation_type="pitching",
        label="Pitching",
        criteria=("Mechanics", "Control"),
    ),
    "infield": EvaluationCriteria(
        evaluation_type="infield",
        label="Infield",
        criteria=("Range/Feet", "Glove", "Mechanics", "Arm Strength"),
    ),
    "outfield": EvaluationCriteria(
        evaluation_type="outfield",
        label="Outfield",
        criteria=("Range/Speed", "Mechanics", "Arm Strength"),
    ),
    "batting": EvaluationCriteria(
        evaluation_type="batting",
        label="Batting",
        criteria=("Mechanics", "Contact", "Power"),
    ),
    "catching": EvaluationCriteria(
        evaluation_type="catching",
        label="Catching",
        criteria=("Receiving", "Blocking", "Pop Time"),
    ),
    "speed": EvaluationCriteria(
        evaluation_type="speed",
        label="Speed & Agility",
        criteria=("60 Time",),
    ),
}


def iter_criteria() -> Iterable[EvaluationCriteria]:
    """Return configured criteria in canonical category order."""

    return (_CRITERIA[key] for key in EVALUATION_TYPES)


def get_criteria(evaluation_type: str) -> EvaluationCriteria:
    """Fetch criteria for an evaluation type, raising KeyError if unknown."""

    key = evaluation_type.strip().lower()
    if key not in _CRITERIA:
        raise KeyError(f"No criteria configured for evaluation_type={evaluation_type!r}")
    return _CRITERIA[key]


EVALUATION_LABELS: Mapping[str, str] = {key: value.label for key, value in _CRITERIA.items()}
