"""Keep an aggregated board snapshot in step with the evaluation store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence, Tuple

from coacheval.models import EvaluationRecord, PlayerSummary, ScoreRangeModel
from coacheval.persistence import ChangeCallback, ChangeEvent, Subscription
from coacheval.scoring import aggregate, compute_ranges


logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.INFO)


class EvaluationSource(Protocol):
    def fetch_all(self) -> Sequence[EvaluationRecord]: ...

    def subscribe(self, callback: ChangeCallback) -> Subscription: ...


@dataclass(frozen=True)
class BoardSnapshot:
    records: Tuple[EvaluationRecord, ...]
    players: Tuple[PlayerSummary, ...]
    ranges: ScoreRangeModel

    def find_player(self, name: str) -> Optional[PlayerSummary]:
        for player in self.players:
            if player.name == name:
                return player
        return None


def build_board(records: Iterable[EvaluationRecord]) -> BoardSnapshot:
    """Aggregate records into player summaries, then derive color ranges."""

    record_list = tuple(records)
    players = tuple(aggregate(record_list))
    return BoardSnapshot(
        records=record_list,
        players=players,
        ranges=compute_ranges(players),
    )


class LiveBoard:
    """Rebuilds the board from a full fetch whenever the store reports a change."""

    def __init__(self, source: EvaluationSource):
        self._source = source
        self._snapshot = build_board(source.fetch_all())
        self._subscription: Subscription | None = source.subscribe(self._on_change)
        logger.info(
            "Board loaded with %s evaluations across %s players",
            len(self._snapshot.records),
            len(self._snapshot.players),
        )

    @property
    def snapshot(self) -> BoardSnapshot:
        return self._snapshot

    def reload(self) -> BoardSnapshot:
        self._snapshot = build_board(self._source.fetch_all())
        return self._snapshot

    def _on_change(self, event: ChangeEvent) -> None:
        snapshot = self.reload()
        logger.info(
            "Board rebuilt after %s of evaluation %s (%s players)",
            event.kind,
            event.evaluation_id,
            len(snapshot.players),
        )

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def __enter__(self) -> "LiveBoard":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
