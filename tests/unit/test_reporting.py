"""Tests for lift tables, calibration points and the utility curve."""
from __future__ import annotations

import numpy as np
import pytest

from classifier_diagnostics.src.evaluation.aggregate import aggregate
from classifier_diagnostics.src.exceptions import InvalidArgumentError
from classifier_diagnostics.src.reporting.tables import (
    LiftRow,
    calibration_points,
    cumulative_lift_table,
    lift_table,
    table_to_frame,
    utility_curve,
)


@pytest.fixture
def perfect():
    return aggregate([0, 0, 0, 1, 1, 1], [0.1, 0.1, 0.1, 0.8, 0.8, 0.8], groups=2)


class TestLiftTables:
    def test_lift_rows(self, perfect) -> None:
        rows = lift_table(perfect)
        assert rows[0] == LiftRow(
            bin=0,
            depth=0.5,
            count=3,
            count1=3,
            predicted1=pytest.approx(2.4),
            response_rate_obs=1.0,
            response_rate_pred=pytest.approx(0.8),
            lift_obs=2.0,
            lift_pred=pytest.approx(1.6),
        )
        assert rows[1].lift_obs == 0.0

    def test_cumulative_rows_end_at_baserate(self, scored_sample) -> None:
        d = aggregate(*scored_sample, groups=10)
        rows = cumulative_lift_table(d)
        assert len(rows) == d.n_bins
        assert rows[-1].count == d.n
        assert rows[-1].count1 == d.n1
        assert rows[-1].response_rate_obs == pytest.approx(d.baserate)
        assert rows[-1].lift_obs == pytest.approx(1.0)
        assert rows[0].lift_obs > 1.0

    def test_lift_is_rate_over_baserate(self, scored_sample) -> None:
        d = aggregate(*scored_sample, groups=10)
        for row in lift_table(d):
            assert row.lift_obs == pytest.approx(row.response_rate_obs / d.baserate)
            assert row.lift_pred == pytest.approx(row.response_rate_pred / d.baserate)

    def test_frame_adapter(self, scored_sample) -> None:
        d = aggregate(*scored_sample, groups=10)
        frame = table_to_frame(lift_table(d))
        assert list(frame.columns) == [
            "bin",
            "depth",
            "count",
            "count1",
            "predicted1",
            "response_rate_obs",
            "response_rate_pred",
            "lift_obs",
            "lift_pred",
        ]
        assert len(frame) == d.n_bins
        assert frame["count"].sum() == d.n

    def test_frame_adapter_empty(self) -> None:
        frame = table_to_frame([])
        assert frame.empty
        assert "lift_obs" in frame.columns


class TestCalibration:
    def test_points(self, perfect) -> None:
        points = calibration_points(perfect)
        assert points["response_rate_obs"].tolist() == [1.0, 0.0]
        assert points["response_rate_pred"].tolist() == pytest.approx([0.8, 0.1])


class TestUtilityCurve:
    def test_accuracy_of_perfect_classifier(self, perfect) -> None:
        curve = utility_curve(perfect)
        assert curve.utility.tolist() == pytest.approx([1.0, 0.5])
        assert curve.best == pytest.approx(1.0)
        assert curve.best_index == 0
        assert curve.best_depth == 0.5
        assert curve.perfect == pytest.approx(1.0)
        assert curve.random_half == pytest.approx(0.5)
        assert curve.random_baserate == pytest.approx(0.5)

    def test_flagging_everyone_earns_baserate(self, scored_sample) -> None:
        d = aggregate(*scored_sample, groups=20)
        curve = utility_curve(d)
        assert curve.utility[-1] == pytest.approx(d.baserate)
        assert curve.best >= curve.utility[-1]

    def test_custom_utilities(self, perfect) -> None:
        # reward only true positives: utility grows with cdf1
        curve = utility_curve(perfect, util=[1.0, 0.0, 0.0, 0.0])
        assert np.all(np.diff(curve.utility) >= 0)
        assert curve.perfect == pytest.approx(perfect.baserate)

    def test_util_needs_four_values(self, perfect) -> None:
        with pytest.raises(InvalidArgumentError, match="4 values"):
            utility_curve(perfect, util=[1.0, 0.0, 1.0])
