"""Persistence layer for evaluation records with change notification."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from coacheval.models import EvaluationRecord, NewEvaluation, parse_evaluation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    kind: str
    evaluation_id: int


ChangeCallback = Callable[[ChangeEvent], None]


class Subscription:
    """Handle returned by ``EvaluationStore.subscribe``; cancel to stop delivery."""

    def __init__(self, store: "EvaluationStore", callback: ChangeCallback):
        self._store = store
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._store._remove_listener(self._callback)


class EvaluationStore:
    """Simple SQLite-backed store for evaluation records."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv("COACHEVAL_DB_PATH")
        if env_db:
            if env_db.startswith("file:"):
                self.db_path = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        else:
            self.db_path = Path(db_path)
        self._listeners: list[ChangeCallback] = []
        self._listeners_lock = threading.Lock()
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except (OSError, sqlite3.OperationalError):
            fallback_dir = Path(tempfile.gettempdir()) / "coacheval-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / "coacheval.sqlite"
            logger.warning("Cannot open %s; using fallback database %s", self.db_path, fallback)
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS evaluations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                player_name TEXT NOT NULL,
                evaluator_name TEXT NOT NULL,
                evaluation_type TEXT NOT NULL,
                velocity REAL,
                ratings_json TEXT NOT NULL,
                notes TEXT,
                average_score REAL NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_evaluations_created_at ON evaluations (created_at)"
        )
        conn.commit()

    def add_evaluation(
        self,
        evaluation: NewEvaluation,
        *,
        created_at: Optional[datetime] = None,
    ) -> EvaluationRecord:
        created_at = created_at or datetime.now(timezone.utc)
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO evaluations (
                    player_name, evaluator_name, evaluation_type, velocity,
                    ratings_json, notes, average_score, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    evaluation.player_name,
                    evaluation.evaluator_name,
                    evaluation.evaluation_type,
                    evaluation.velocity,
                    json.dumps([rating.model_dump(exclude_none=True) for rating in evaluation.ratings]),
                    evaluation.notes,
                    evaluation.average_score,
                    created_at.isoformat(),
                    created_at.isoformat(),
                ),
            )
            evaluation_id = int(cursor.lastrowid)
            conn.commit()

        record = self.get_evaluation(evaluation_id)
        if record is None:  # pragma: no cover
            raise KeyError(f"Evaluation {evaluation_id} not found after insert")
        logger.info(
            "Stored %s evaluation %s for %s",
            record.evaluation_type,
            evaluation_id,
            record.player_name,
        )
        self._notify(ChangeEvent(kind="insert", evaluation_id=evaluation_id))
        return record

    def get_evaluation(self, evaluation_id: int) -> Optional[EvaluationRecord]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM evaluations WHERE id = ?", (evaluation_id,)
            ).fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    def fetch_all(self) -> List[EvaluationRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM evaluations ORDER BY datetime(created_at) DESC, id DESC"
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def list_recent(self, limit: int = 20) -> List[EvaluationRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM evaluations ORDER BY datetime(created_at) DESC, id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def list_for_player(self, player_name: str) -> List[EvaluationRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM evaluations
                WHERE player_name = ?
                ORDER BY datetime(created_at) DESC, id DESC
                """,
                (player_name,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def subscribe(self, callback: ChangeCallback) -> Subscription:
        with self._listeners_lock:
            self._listeners.append(callback)
        return Subscription(self, callback)

    def _remove_listener(self, callback: ChangeCallback) -> None:
        with self._listeners_lock:
            try:
                self._listeners.remove(callback)
            except ValueError:
                pass

    def _notify(self, event: ChangeEvent) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for callback in listeners:
            try:
                callback(event)
            except Exception:
                logger.exception("Change listener failed for %s event %s", event.kind, event.evaluation_id)

    def _row_to_record(self, row: sqlite3.Row) -> EvaluationRecord:
        payload = {
            "id": row["id"],
            "player_name": row["player_name"],
            "evaluator_name": row["evaluator_name"],
            "evaluation_type": row["evaluation_type"],
            "ratings": json.loads(row["ratings_json"]),
            "notes": row["notes"],
            "average_score": row["average_score"],
            "created_at": datetime.fromisoformat(row["created_at"]),
            "updated_at": datetime.fromisoformat(row["updated_at"]),
        }
        if row["evaluation_type"] == "pitching":
            payload["velocity"] = row["velocity"]
        return parse_evaluation(payload)


__all__ = [
    "ChangeCallback",
    "ChangeEvent",
    "EvaluationStore",
    "Subscription",
]
