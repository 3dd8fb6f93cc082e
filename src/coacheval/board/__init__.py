"""Board views over aggregated evaluations (heatmap, profiles, export)."""

from .export import export_heatmap_to_csv
from .heatmap import (
    HEATMAP_COLUMNS,
    SORT_DIRECTIONS,
    SORT_FIELDS,
    HeatmapCell,
    HeatmapRow,
    build_heatmap_rows,
    next_sort_direction,
    sort_players,
)
from .profile import CategoryBreakdown, PlayerProfile, build_player_profile
from .service import BoardSnapshot, LiveBoard, build_board

__all__ = [
    "HEATMAP_COLUMNS",
    "SORT_DIRECTIONS",
    "SORT_FIELDS",
    "BoardSnapshot",
    "CategoryBreakdown",
    "HeatmapCell",
    "HeatmapRow",
    "LiveBoard",
    "PlayerProfile",
    "build_board",
    "build_heatmap_rows",
    "build_player_profile",
    "export_heatmap_to_csv",
    "next_sort_direction",
    "sort_players",
]
