"""CSV export of the player heatmap."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from coacheval.models import PlayerSummary


_HEADER = ("Player", "Pitching", "Velocity", "Infield", "Outfield", "Batting", "Catching", "Speed", "Overall")
_VALUE_COLUMNS = ("pitching", "velocity", "infield", "outfield", "batting", "catching", "speed")


def _value(value: float) -> str:
    return repr(value) if value > 0 else ""


def export_heatmap_to_csv(players: Sequence[PlayerSummary]) -> str:
    """Full-precision heatmap values, blank where the player has no data."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(_HEADER)

    for player in players:
        row = [player.name]
        for column in _VALUE_COLUMNS:
            value = player.velocity if column == "velocity" else player.score(column)
            row.append(_value(value))
        row.append(_value(player.overall))
        writer.writerow(row)

    return buffer.getvalue()


__all__ = ["export_heatmap_to_csv"]
