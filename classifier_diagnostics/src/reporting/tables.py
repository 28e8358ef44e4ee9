"""Read-only report views over a :class:`Diagnostics` record.

- :func:`lift_table` / :func:`cumulative_lift_table`: per-bin rows with
  ``lift = response rate / baserate``;
- :func:`utility_curve`: expected utility at each depth for a utility vector
  ``[TP, FN, FP, TN]`` (``(1, 0, 0, 1)`` gives plain accuracy);
- :func:`calibration_points`: predicted vs. observed response rate per bin.

Nothing here recomputes statistics. Rows are plain frozen dataclasses, and
:func:`table_to_frame` is the thin adapter to a pandas DataFrame.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Sequence

import numpy as np
import pandas as pd

from classifier_diagnostics.src.evaluation.aggregate import Diagnostics
from classifier_diagnostics.src.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class LiftRow:
    bin: int
    depth: float
    count: int
    count1: int
    predicted1: float
    response_rate_obs: float
    response_rate_pred: float
    lift_obs: float
    lift_pred: float


def _rows(
    d: Diagnostics,
    count: np.ndarray,
    count1: np.ndarray,
    predicted1: np.ndarray,
    rate_obs: np.ndarray,
    rate_pred: np.ndarray,
) -> List[LiftRow]:
    return [
        LiftRow(
            bin=int(d.bin[i]),
            depth=float(d.depth[i]),
            count=int(count[i]),
            count1=int(count1[i]),
            predicted1=float(predicted1[i]),
            response_rate_obs=float(rate_obs[i]),
            response_rate_pred=float(rate_pred[i]),
            lift_obs=float(rate_obs[i] / d.baserate),
            lift_pred=float(rate_pred[i] / d.baserate),
        )
        for i in range(d.bin.shape[0])
    ]


def lift_table(d: Diagnostics) -> List[LiftRow]:
    """Per-bin lift table."""
    return _rows(d, d.count, d.count1, d.predicted1, d.response_rate_obs, d.response_rate_pred)


def cumulative_lift_table(d: Diagnostics) -> List[LiftRow]:
    """Cumulative lift table: each row covers every bin up to and including it."""
    return _rows(
        d,
        d.cum_count,
        d.cum_count1,
        d.cum_predicted1,
        d.cum_response_rate_obs,
        d.cum_response_rate_pred,
    )


def table_to_frame(rows: Sequence[LiftRow]) -> pd.DataFrame:
    """Convert lift rows to a DataFrame (one column per field)."""
    columns = list(LiftRow.__dataclass_fields__)
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([asdict(r) for r in rows], columns=columns)


def calibration_points(d: Diagnostics) -> pd.DataFrame:
    """Predicted vs. observed response rate per bin (calibration view input)."""
    return pd.DataFrame(
        {
            "bin": d.bin,
            "response_rate_pred": d.response_rate_pred,
            "response_rate_obs": d.response_rate_obs,
        }
    )


@dataclass(frozen=True)
class UtilityCurve:
    """Expected utility per bin depth and reference classifiers."""

    depth: np.ndarray
    utility: np.ndarray
    best: float
    best_index: int
    best_depth: float
    perfect: float              # perfect classifier
    random_half: float          # 50/50 random classifier
    random_baserate: float      # random classifier flagging at the base rate


def utility_curve(d: Diagnostics, util: Sequence[float] = (1.0, 0.0, 0.0, 1.0)) -> UtilityCurve:
    """Utility of flagging everything down to each depth.

    ``util`` holds the utilities of ``[TP, FN, FP, TN]`` outcomes. With
    ``p = baserate`` and ``q = 1 - p`` the rate of each outcome at a depth is
    ``[p*cdf1, p*(1 - cdf1), q*cdf0, q*(1 - cdf0)]``.
    """
    u = np.asarray(util, dtype=float).reshape(-1)
    if u.shape[0] != 4:
        raise InvalidArgumentError(f"util should have 4 values [TP, FN, FP, TN], got {u.shape[0]}.")

    p = d.baserate
    q = 1.0 - p

    outcomes = np.column_stack(
        [p * d.cdf1, p * (1.0 - d.cdf1), q * d.cdf0, q * (1.0 - d.cdf0)]
    )
    utility = outcomes @ u
    best_index = int(np.argmax(utility))

    return UtilityCurve(
        depth=d.depth,
        utility=utility,
        best=float(utility[best_index]),
        best_index=best_index,
        best_depth=float(d.depth[best_index]),
        perfect=float(np.dot([p, 0.0, 0.0, q], u)),
        random_half=float(np.dot([0.5 * p, 0.5 * p, 0.5 * q, 0.5 * q], u)),
        random_baserate=float(np.dot([p * p, p * q, p * q, q * q], u)),
    )


__all__ = [
    "LiftRow",
    "lift_table",
    "cumulative_lift_table",
    "table_to_frame",
    "calibration_points",
    "UtilityCurve",
    "utility_curve",
]
