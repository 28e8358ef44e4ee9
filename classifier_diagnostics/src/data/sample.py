"""Validation and normalization of a ``(label, score)`` sample.

Every downstream component accepts only the normalized form produced here:

- labels become a boolean NumPy vector (``True`` = positive class);
- scores become either a nullable ``Float64`` Series (binning path, where
  missing values are kept as ``pd.NA`` and stay aligned by position) or a plain
  float array with no missing values (concordance / separation path).

Label normalization
-------------------
A boolean vector is already normalized and passes through unchanged, so an
all-``True`` sample reaches the evaluators and fails there as a degenerate
class. Any other vector must hold exactly two distinct, non-missing values;
the *second value in sorted order* maps to ``True`` (``0/1`` -> ``1``,
``"bad"/"good"`` -> ``"good"``).
"""

from __future__ import annotations

from typing import Any, Sequence, Union

import numpy as np
import pandas as pd

from classifier_diagnostics.src.exceptions import (
    InvalidArgumentError,
    LengthMismatchError,
)

ArrayLike = Union[pd.Series, pd.Index, Sequence[Any], np.ndarray]


def _to_series(values: ArrayLike, name: str) -> pd.Series:
    """Convert input values to a positional pandas Series."""
    if isinstance(values, pd.DataFrame):
        if values.shape[1] != 1:
            raise InvalidArgumentError(
                f"Expected a single-column DataFrame for {name}, got shape={values.shape}."
            )
        values = values.iloc[:, 0]
    if isinstance(values, (pd.Series, pd.Index)):
        s = pd.Series(values.array, name=name)
    else:
        arr = np.asarray(values, dtype=object if _has_none(values) else None)
        if arr.ndim != 1:
            raise InvalidArgumentError(f"{name} must be one-dimensional, got shape={arr.shape}.")
        s = pd.Series(arr, name=name)
    return s


def _has_none(values: Any) -> bool:
    return isinstance(values, (list, tuple)) and any(v is None for v in values)


def normalize_labels(label: ArrayLike) -> np.ndarray:
    """Reduce a 2-level label vector to a boolean "positive class" indicator.

    Raises
    ------
    InvalidArgumentError
        When labels are missing, unorderable, or do not have exactly two levels.
    """
    s = _to_series(label, "label")

    if s.isna().any():
        raise InvalidArgumentError(
            f"label contains {int(s.isna().sum())} missing value(s); labels must be fully observed."
        )

    if s.dtype == bool:
        return s.to_numpy(dtype=bool)

    try:
        levels = np.sort(s.unique())
    except TypeError as exc:
        raise InvalidArgumentError("label levels cannot be ordered; use a single value type.") from exc

    if len(levels) != 2:
        shown = list(levels[:5])
        raise InvalidArgumentError(
            f"label should have exactly 2 levels, got {len(levels)}: {shown}"
            + (" ..." if len(levels) > 5 else "")
        )

    return (s == levels[1]).to_numpy(dtype=bool)


def as_score_series(score: ArrayLike) -> pd.Series:
    """Coerce scores to a nullable ``Float64`` Series (missing -> ``pd.NA``)."""
    s = _to_series(score, "score")
    try:
        numeric = pd.to_numeric(s, errors="raise")
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"score must be numeric: {exc}") from exc
    return numeric.astype("Float64")


def as_observed_scores(score: ArrayLike, *, name: str = "score") -> np.ndarray:
    """Return scores as a float array, refusing missing values.

    Concordance and separation operate on fully observed pairs; filtering is
    the caller's responsibility.
    """
    s = as_score_series(score)
    n_missing = int(s.isna().sum())
    if n_missing:
        raise InvalidArgumentError(
            f"{name} contains {n_missing} missing value(s); drop them before this step."
        )
    return s.to_numpy(dtype=float)


def check_lengths(label: ArrayLike, score: ArrayLike) -> int:
    """Return the common length of ``label`` and ``score``."""
    n_label = len(label)
    n_score = len(score)
    if n_label != n_score:
        raise LengthMismatchError(
            f"label and score should have the same length: {n_label} vs {n_score}"
        )
    return n_label


__all__ = [
    "normalize_labels",
    "as_score_series",
    "as_observed_scores",
    "check_lengths",
]
