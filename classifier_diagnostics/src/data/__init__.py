"""Sample validation: label normalization and score coercion.

Every evaluator accepts only the normalized form produced here (a boolean
label vector and numeric scores with explicit missing values).
"""

from __future__ import annotations

from .sample import (
    as_observed_scores,
    as_score_series,
    check_lengths,
    normalize_labels,
)

__all__ = [
    "normalize_labels",
    "as_score_series",
    "as_observed_scores",
    "check_lengths",
]
