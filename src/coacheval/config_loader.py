"""Persist and load the CLI evaluator profile."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path


@dataclass
class EvaluatorProfile:
    evaluator_name: str

    @classmethod
    def load(cls, path: Path) -> "EvaluatorProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(evaluator_name=str(data.get("evaluator_name", "")).strip())

    def save(self, path: Path) -> None:
        payload = {"evaluator_name": self.evaluator_name}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
