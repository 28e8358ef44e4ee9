"""Tests for label normalization and score coercion."""
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from classifier_diagnostics.src.data.sample import (
    as_observed_scores,
    as_score_series,
    check_lengths,
    normalize_labels,
)
from classifier_diagnostics.src.exceptions import (
    DiagnosticsError,
    InvalidArgumentError,
    LengthMismatchError,
)


class TestNormalizeLabels:
    def test_integer_levels_map_second_sorted_value_to_true(self) -> None:
        out = normalize_labels([1, 0, 0, 1])
        assert out.dtype == bool
        assert out.tolist() == [True, False, False, True]

    def test_string_levels(self) -> None:
        out = normalize_labels(["good", "bad", "good"])
        assert out.tolist() == [True, False, True]

    def test_boolean_passes_through_even_if_single_level(self) -> None:
        """Booleans are already normalized; degeneracy is reported downstream."""
        out = normalize_labels(np.array([True, True, True]))
        assert out.tolist() == [True, True, True]

    def test_series_index_is_ignored(self) -> None:
        out = normalize_labels(pd.Series([1, 0], index=[10, 20]))
        assert out.tolist() == [True, False]

    def test_three_levels_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="exactly 2 levels"):
            normalize_labels([0, 1, 2])

    def test_single_non_boolean_level_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            normalize_labels([1, 1, 1])

    def test_missing_label_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="missing"):
            normalize_labels([0, None, 1])


class TestScores:
    def test_missing_values_become_na(self) -> None:
        s = as_score_series([0.1, None, np.nan, 0.4])
        assert str(s.dtype) == "Float64"
        assert s.isna().tolist() == [False, True, True, False]

    def test_non_numeric_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            as_score_series(["a", "b"])

    def test_observed_scores_refuse_missing(self) -> None:
        with pytest.raises(InvalidArgumentError, match="1 missing"):
            as_observed_scores([0.2, None, 0.3])

    def test_observed_scores_are_float(self) -> None:
        out = as_observed_scores([1, 2, 3])
        assert out.dtype == float
        assert out.tolist() == [1.0, 2.0, 3.0]


class TestLengths:
    def test_mismatch(self) -> None:
        with pytest.raises(LengthMismatchError, match="3 vs 2"):
            check_lengths([0, 1, 0], [0.1, 0.2])

    def test_errors_are_value_errors(self) -> None:
        assert issubclass(LengthMismatchError, DiagnosticsError)
        assert issubclass(DiagnosticsError, ValueError)
