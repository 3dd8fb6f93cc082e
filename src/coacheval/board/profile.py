"""Per-player drill-down built from a player summary."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from math import fsum
from typing import Dict, List, Mapping, Tuple

from coacheval.config.criteria import EVALUATION_TYPES, get_criteria
from coacheval.models import PlayerSummary


@dataclass(frozen=True)
class CategoryBreakdown:
    evaluation_type: str
    label: str
    score: float
    evaluations: int
    criteria_averages: Mapping[str, float]


@dataclass(frozen=True)
class PlayerProfile:
    summary: PlayerSummary
    categories: Tuple[CategoryBreakdown, ...]
    evaluators: Tuple[str, ...]


def build_player_profile(summary: PlayerSummary) -> PlayerProfile:
    """Average each criterion across the player's records, per evaluated category."""

    ratings: Dict[str, Dict[str, List[float]]] = defaultdict(lambda: defaultdict(list))
    counts: Dict[str, int] = defaultdict(int)
    for record in summary.records:
        counts[record.evaluation_type] += 1
        for rating in record.ratings:
            ratings[record.evaluation_type][rating.criteria].append(rating.rating)

    categories: list[CategoryBreakdown] = []
    for category in EVALUATION_TYPES:
        if not counts.get(category):
            continue
        config = get_criteria(category)
        observed = ratings[category]
        # Configured criteria first, then anything older records carried.
        ordered = [name for name in config.criteria if name in observed]
        ordered += sorted(name for name in observed if name not in config.criteria)
        categories.append(
            CategoryBreakdown(
                evaluation_type=category,
                label=config.label,
                score=summary.score(category),
                evaluations=counts[category],
                criteria_averages={
                    name: fsum(observed[name]) / len(observed[name]) for name in ordered
                },
            )
        )

    evaluators = sorted(
        {record.evaluator_name for record in summary.records if record.evaluator_name},
        key=str.casefold,
    )
    return PlayerProfile(summary=summary, categories=tuple(categories), evaluators=tuple(evaluators))
