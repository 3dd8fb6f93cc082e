"""Input adapters that turn form payloads and exports into evaluation records."""

from .forms import (
    EvaluationSubmission,
    PitchingSubmission,
    SpeedSubmission,
    build_new_evaluation,
    parse_submission,
    time_to_rating,
)
from .records import load_records_from_json, records_from_rows

__all__ = [
    "EvaluationSubmission",
    "PitchingSubmission",
    "SpeedSubmission",
    "build_new_evaluation",
    "load_records_from_json",
    "parse_submission",
    "records_from_rows",
    "time_to_rating",
]
