"""Configuration helpers for evaluation criteria and runtime settings."""

from .criteria import (
    EVALUATION_LABELS,
    EVALUATION_TYPES,
    EvaluationCriteria,
    get_criteria,
    iter_criteria,
)
from .settings import Settings, load_settings

__all__ = [
    "EVALUATION_LABELS",
    "EVALUATION_TYPES",
    "EvaluationCriteria",
    "Settings",
    "get_criteria",
    "iter_criteria",
    "load_settings",
]
