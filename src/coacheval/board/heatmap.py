"""Sortable heatmap rows with color-bucketed cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence, Tuple, get_args

from coacheval.models import PlayerSummary, ScoreRangeModel
from coacheval.scoring import ScoreBucket, bucket_color, classify_score, classify_velocity


SortField = Literal[
    "name",
    "pitching",
    "velocity",
    "infield",
    "outfield",
    "batting",
    "catching",
    "speed",
    "overall",
]
SortDirection = Literal["asc", "desc", "none"]

SORT_FIELDS: Tuple[str, ...] = get_args(SortField)
SORT_DIRECTIONS: Tuple[str, ...] = get_args(SortDirection)

HEATMAP_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("name", "Player Name"),
    ("pitching", "Pitching"),
    ("velocity", "Velocity"),
    ("infield", "Infield"),
    ("outfield", "Outfield"),
    ("batting", "Batting"),
    ("catching", "Catching"),
    ("speed", "Speed"),
    ("overall", "Overall Avg"),
)


@dataclass(frozen=True)
class HeatmapCell:
    field: str
    value: float
    bucket: ScoreBucket
    color: str
    display: str


@dataclass(frozen=True)
class HeatmapRow:
    name: str
    cells: Tuple[HeatmapCell, ...]


def _field_value(player: PlayerSummary, field: str) -> float:
    if field == "overall":
        return player.overall
    if field == "velocity":
        return player.velocity
    return player.score(field)


def sort_players(
    players: Sequence[PlayerSummary],
    field: str = "name",
    direction: str = "asc",
) -> list[PlayerSummary]:
    """Order players for display; ``none`` keeps the incoming order."""

    if field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field {field!r}")
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction {direction!r}")
    if direction == "none":
        return list(players)

    reverse = direction == "desc"
    if field == "name":
        return sorted(players, key=lambda player: player.name.casefold(), reverse=reverse)
    return sorted(players, key=lambda player: _field_value(player, field), reverse=reverse)


def next_sort_direction(current_field: str, current_direction: str, clicked_field: str) -> str:
    """Clicking the active column cycles asc, desc, none; a new column starts at asc."""

    if clicked_field != current_field:
        return "asc"
    if current_direction == "asc":
        return "desc"
    if current_direction == "desc":
        return "none"
    return "asc"


def _cell(field: str, value: float, ranges: ScoreRangeModel) -> HeatmapCell:
    if field == "velocity":
        bucket = classify_velocity(value, ranges)
        display = f"{value:.1f} MPH"
    else:
        bucket = classify_score(value, ranges)
        display = f"{value:.1f}"
    if bucket is ScoreBucket.MISSING:
        display = "-"
    return HeatmapCell(field=field, value=value, bucket=bucket, color=bucket_color(bucket), display=display)


def build_heatmap_rows(
    players: Sequence[PlayerSummary],
    ranges: ScoreRangeModel,
) -> list[HeatmapRow]:
    rows: list[HeatmapRow] = []
    for player in players:
        cells = tuple(
            _cell(field, _field_value(player, field), ranges)
            for field, _ in HEATMAP_COLUMNS
            if field != "name"
        )
        rows.append(HeatmapRow(name=player.name, cells=cells))
    return rows


__all__ = [
    "HEATMAP_COLUMNS",
    "SORT_DIRECTIONS",
    "SORT_FIELDS",
    "HeatmapCell",
    "HeatmapRow",
    "build_heatmap_rows",
    "next_sort_direction",
    "sort_players",
]
