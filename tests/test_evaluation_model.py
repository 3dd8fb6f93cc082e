from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from coacheval.models import BattingEvaluation, PitchingEvaluation, parse_evaluation


def _payload(**overrides):
    payload = {
        "id": 1,
        "player_name": "Alex",
        "evaluator_name": "Coach Lee",
        "evaluation_type": "pitching",
        "velocity": 72.5,
        "ratings": [{"criteria": "Mechanics", "rating": 6}, {"criteria": "Control", "rating": 5}],
        "average_score": 5.5,
        "created_at": "2024-04-02T18:30:00+00:00",
    }
    payload.update(overrides)
    return payload


def test_parse_evaluation_selects_variant_by_type():
    record = parse_evaluation(_payload())
    assert isinstance(record, PitchingEvaluation)
    assert record.velocity == pytest.approx(72.5)
    assert [rating.criteria for rating in record.ratings] == ["Mechanics", "Control"]

    batting = parse_evaluation(_payload(evaluation_type="batting", velocity=None))
    assert isinstance(batting, BattingEvaluation)
    assert not hasattr(batting, "velocity")


def test_parse_evaluation_ignores_velocity_on_non_pitching_rows():
    record = parse_evaluation(_payload(evaluation_type="speed", velocity=80))
    assert record.evaluation_type == "speed"
    assert "velocity" not in record.model_dump()


def test_parse_evaluation_rejects_unknown_type():
    with pytest.raises(ValidationError):
        parse_evaluation(_payload(evaluation_type="bunting"))


def test_naive_timestamps_are_treated_as_utc():
    record = parse_evaluation(_payload(created_at="2024-04-02T18:30:00"))
    assert record.created_at == datetime(2024, 4, 2, 18, 30, tzinfo=timezone.utc)


def test_evaluation_record_is_frozen():
    record = parse_evaluation(_payload())

    with pytest.raises((TypeError, ValidationError)):
        record.player_name = "Sam"  # type: ignore[misc]
