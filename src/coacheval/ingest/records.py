"""Load evaluation records exported from the hosted store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

from pydantic import ValidationError

from coacheval.models import EvaluationRecord, parse_evaluation


logger = logging.getLogger(__name__)


def records_from_rows(rows: Iterable[Any]) -> List[EvaluationRecord]:
    records: List[EvaluationRecord] = []
    for index, row in enumerate(rows):
        try:
            records.append(parse_evaluation(row))
        except ValidationError as exc:
            raise ValueError(f"Invalid evaluation at row {index}: {exc}") from exc
    return records


def load_records_from_json(path: Path) -> List[EvaluationRecord]:
    """Read a JSON array of evaluation rows into typed records."""

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of evaluations")
    records = records_from_rows(data)
    logger.info("Loaded %s evaluations from %s", len(records), path)
    return records
