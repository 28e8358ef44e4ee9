"""Diagnostics of a binary classifier: one record for every report.

:func:`aggregate` combines

- :func:`~classifier_diagnostics.src.evaluation.separation.max_separation`
  (``n, n1, n0, baserate, ks, ksarg, ksdep``),
- :func:`~classifier_diagnostics.src.evaluation.concordance.count_pairs`
  (``concordant, tied, discordant, auc, gini``),
- :func:`~classifier_diagnostics.src.evaluation.binning.rank_and_bin` plus
  per-bin sums (lift / calibration tables)

into an immutable :class:`Diagnostics`. Calibration, KS, ROC, accuracy and
lift views all read from it.

Per-bin fields (bin id ascending; with ``rev=True`` bin 0 holds the highest
scores):

- ``count``, ``count1``: population and positives in the bin;
- ``predicted1``: sum of scores in the bin, i.e. the expected number of
  positives under the model (a sum of probabilities, not a count);
- ``response_rate_obs = count1 / count``,
  ``response_rate_pred = predicted1 / count``.

Running totals give ``cum_*``, ``depth = cum_count / n``,
``cdf1 = cum_count1 / n1`` and ``cdf0 = (cum_count - cum_count1) / n0``.

Rows with a missing score are dropped before anything else (``n_missing``
records how many), so every statistic describes the observed rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from classifier_diagnostics.src.data.sample import (
    ArrayLike,
    as_score_series,
    check_lengths,
    normalize_labels,
)
from classifier_diagnostics.src.evaluation.binning import RankMethod, rank_and_bin
from classifier_diagnostics.src.evaluation.concordance import TieLike, count_pairs
from classifier_diagnostics.src.evaluation.separation import max_separation
from classifier_diagnostics.src.utils.config import DiagnosticsConfig

logger = logging.getLogger(__name__)

_ARRAY_FIELDS = (
    "bin",
    "depth",
    "cdf1",
    "cdf0",
    "count",
    "count1",
    "predicted1",
    "response_rate_obs",
    "response_rate_pred",
    "cum_count",
    "cum_count1",
    "cum_predicted1",
    "cum_response_rate_obs",
    "cum_response_rate_pred",
)


def _frozen(values: Any, dtype: Any) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Diagnostics:
    """Diagnostic properties of a binary classifier on one sample."""

    n: int                          # observations (observed score)
    n1: int                         # class 1
    n0: int                         # class 0
    baserate: float                 # class 1 incidence
    ks: float                       # maximum separation
    ksarg: float                    # score at maximum separation
    ksdep: float                    # depth at maximum separation

    concordant: int
    tied: int
    discordant: int
    auc: float                      # (concordant + 0.5 tied) / pairs
    gini: float                     # 2 auc - 1

    bin: np.ndarray                 # bin id
    depth: np.ndarray               # cum_count / n
    cdf1: np.ndarray                # true positive rate
    cdf0: np.ndarray                # false positive rate

    count: np.ndarray
    count1: np.ndarray
    predicted1: np.ndarray
    response_rate_obs: np.ndarray
    response_rate_pred: np.ndarray

    cum_count: np.ndarray
    cum_count1: np.ndarray
    cum_predicted1: np.ndarray
    cum_response_rate_obs: np.ndarray
    cum_response_rate_pred: np.ndarray

    n_missing: int = 0              # rows dropped for a missing score

    @property
    def n_bins(self) -> int:
        """Number of non-empty bins."""
        return int(self.bin.shape[0])

    def to_dict(self) -> Dict[str, Any]:
        """Scalar fields as a plain dict (per-bin arrays excluded)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in _ARRAY_FIELDS
        }

    def summary(self) -> str:
        return (
            f"Base rate: {self.baserate:.4f}   n: {self.n}   n1: {self.n1}   n0: {self.n0}\n"
            f"ks:        {self.ks:.4f}   occurs at value of {self.ksarg} depth of {self.ksdep}\n"
            f"auroc:     {self.auc:.4f}   concordant: {self.concordant}"
            f"   tied: {self.tied}   discordant: {self.discordant}\n"
            f"Gini:      {self.gini:.4f}"
        )

    def __str__(self) -> str:
        return f"{self.ks:.4f}   {self.auc:.4f}"


def aggregate(
    label: ArrayLike,
    score: ArrayLike,
    groups: int = 100,
    rev: bool = True,
    tie: TieLike = 1e-6,
    rank_method: RankMethod = "average",
) -> Diagnostics:
    """Perform diagnostics of a binary classifier.

    Parameters
    ----------
    label:
        Boolean labels or any 2-level vector; the second level in sorted
        order is the positive class.
    score:
        Predicted probability of the positive class. Missing values are
        dropped together with their labels.
    groups:
        Number of bins for the lift / calibration tables.
    rev:
        True orders scores from high to low.
    tie:
        Tolerance (or tie window) within which scores count as tied for the
        concordance statistics.
    rank_method:
        Ranking strategy used for binning.

    Returns
    -------
    Diagnostics
    """
    check_lengths(label, score)
    y = normalize_labels(label)
    s = as_score_series(score)

    observed = s.notna().to_numpy()
    n_missing = int((~observed).sum())
    if n_missing:
        logger.warning("Dropping %d of %d rows with a missing score.", n_missing, observed.shape[0])

    y = y[observed]
    x = s[observed].to_numpy(dtype=float)

    sep = max_separation(y, x, rev=rev)
    pairs = count_pairs(x[y], x[~y], tie=tie)
    binned = rank_and_bin(x, groups=groups, rev=rev, rank_method=rank_method)

    frame = pd.DataFrame(
        {
            "bin": binned.bins.to_numpy(dtype=np.int64),
            "label": y.astype(np.int64),
            "score": x,
        }
    )
    grouped = frame.groupby("bin", sort=True)
    count = grouped.size().to_numpy(dtype=np.int64)
    count1 = grouped["label"].sum().to_numpy(dtype=np.int64)
    predicted1 = grouped["score"].sum().to_numpy(dtype=float)
    bins = grouped.size().index.to_numpy(dtype=np.int64)

    cum_count = np.cumsum(count)
    cum_count1 = np.cumsum(count1)
    cum_predicted1 = np.cumsum(predicted1)

    n, n1, n0 = sep.n, sep.n1, sep.n0

    logger.debug(
        "aggregate: n=%d n1=%d n0=%d bins=%d ks=%.4f auc=%.4f",
        n, n1, n0, bins.shape[0], sep.ks, pairs.auc,
    )

    return Diagnostics(
        n=n,
        n1=n1,
        n0=n0,
        baserate=sep.baserate,
        ks=sep.ks,
        ksarg=sep.ksarg,
        ksdep=sep.ksdep,
        concordant=pairs.concordant,
        tied=pairs.tied,
        discordant=pairs.discordant,
        auc=pairs.auc,
        gini=pairs.gini,
        bin=_frozen(bins, np.int64),
        depth=_frozen(cum_count / n, float),
        cdf1=_frozen(cum_count1 / n1, float),
        cdf0=_frozen((cum_count - cum_count1) / n0, float),
        count=_frozen(count, np.int64),
        count1=_frozen(count1, np.int64),
        predicted1=_frozen(predicted1, float),
        response_rate_obs=_frozen(count1 / count, float),
        response_rate_pred=_frozen(predicted1 / count, float),
        cum_count=_frozen(cum_count, np.int64),
        cum_count1=_frozen(cum_count1, np.int64),
        cum_predicted1=_frozen(cum_predicted1, float),
        cum_response_rate_obs=_frozen(cum_count1 / cum_count, float),
        cum_response_rate_pred=_frozen(cum_predicted1 / cum_count, float),
        n_missing=n_missing,
    )


def aggregate_from_config(
    label: ArrayLike,
    score: ArrayLike,
    config: Optional[DiagnosticsConfig] = None,
) -> Diagnostics:
    """Run :func:`aggregate` with the settings of a :class:`DiagnosticsConfig`."""
    cfg = (config or DiagnosticsConfig()).validate()
    return aggregate(
        label,
        score,
        groups=cfg.groups,
        rev=cfg.rev,
        tie=cfg.tie,
        rank_method=cfg.rank_method,
    )


__all__ = ["Diagnostics", "aggregate", "aggregate_from_config"]
