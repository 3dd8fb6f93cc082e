"""Group evaluation records into per-player category averages."""

from __future__ import annotations

from collections import defaultdict
from math import fsum
from typing import Dict, Iterable, List, Sequence

from coacheval.config.criteria import EVALUATION_TYPES
from coacheval.models import EvaluationRecord, PlayerSummary


def _mean(values: Sequence[float]) -> float:
    # fsum is exactly rounded, so the result does not depend on input order.
    if not values:
        return 0.0
    return fsum(values) / len(values)


def _recency_key(record: EvaluationRecord) -> tuple:
    return (record.created_at, record.id)


def _summarize(name: str, records: List[EvaluationRecord]) -> PlayerSummary:
    by_type: Dict[str, List[EvaluationRecord]] = defaultdict(list)
    for record in records:
        by_type[record.evaluation_type].append(record)

    scores: Dict[str, float] = {}
    evaluated: List[float] = []
    for category in EVALUATION_TYPES:
        partition = by_type.get(category, [])
        if partition:
            score = _mean([record.average_score for record in partition])
            evaluated.append(score)
        else:
            score = 0.0
        scores[category] = score

    velocities = [
        record.velocity
        for record in by_type.get("pitching", [])
        if record.velocity is not None and record.velocity > 0
    ]

    return PlayerSummary(
        name=name,
        scores_by_category=scores,
        velocity=_mean(velocities),
        overall=_mean(evaluated),
        records=tuple(sorted(records, key=_recency_key, reverse=True)),
    )


def aggregate(records: Iterable[EvaluationRecord]) -> list[PlayerSummary]:
    """Return one summary per distinct player name, ordered case-insensitively.

    Category scores average ``average_score`` over that player's records of the
    category (0 when there are none). ``overall`` averages only the categories
    the player was evaluated in, so every evaluated category carries equal
    weight regardless of how many records it holds. ``velocity`` averages the
    positive velocities of pitching records.

    Names are compared as given; "alex" and "Alex" are two players.
    """

    grouped: Dict[str, List[EvaluationRecord]] = defaultdict(list)
    for record in records:
        grouped[record.player_name].append(record)

    names = sorted(grouped, key=lambda name: (name.casefold(), name))
    return [_summarize(name, grouped[name]) for name in names]


__all__ = ["aggregate"]
