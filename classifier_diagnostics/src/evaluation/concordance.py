"""Concordant / tied / discordant pair counting (AUROC without O(n1*n0)).

Every (positive, negative) score pair is classified as

- concordant: the negative lies strictly below the positive's tie window;
- tied: the negative lies inside the window;
- discordant: the negative lies above the window.

Algorithm
---------
Both subsets are sorted ascending (``c1`` positives, ``c0`` negatives). The
positives are scanned in ascending order while two pointers into ``c0`` move
forward only:

- ``low``  advances while ``c0[low] <  lower(v)``;
- ``high`` advances while ``c0[high] <= upper(v)``.

For each ``v``: ``concordant += low`` and ``tied += high - low``. Discordant
pairs are never counted directly: ``discordant = n1 * n0 - concordant - tied``.
Total pointer movement is O(n0), so the cost is dominated by the two sorts.

For a fixed tolerance the window bounds are computed for all positives at once
and the pointer positions come from a single ``np.searchsorted`` pass (the same
positions the scan would visit). A callable window runs the explicit scan.

Precondition
------------
Window bounds must be non-decreasing in ``v``; otherwise the forward-only
pointers would miss pairs. The scan checks this and raises
:class:`InvalidArgumentError` when a bound moves backwards.

With ``tie=0`` only exact equality ties. Floating-point scores that should tie
exactly must be rounded by the caller beforehand.

Related rank-order measures (see :class:`PairCount`):

- Somers' D = gini = (C - D) / total;
- Goodman-Kruskal gamma = (C - D) / (C + D), no penalty for ties.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Tuple, Union

import numpy as np

from classifier_diagnostics.src.data.sample import (
    ArrayLike,
    as_observed_scores,
    check_lengths,
    normalize_labels,
)
from classifier_diagnostics.src.exceptions import DegenerateClassError, InvalidArgumentError

logger = logging.getLogger(__name__)

BoundsFunction = Callable[[float], Tuple[float, float]]


# ---------------------------------------------------------------------------
# Tie window strategies
# ---------------------------------------------------------------------------


class TieWindow:
    """Maps a positive's score ``v`` to its inclusive ``(lower, upper)`` window.

    Implementations must be monotonic: ``v <= w`` implies
    ``lower(v) <= lower(w)`` and ``upper(v) <= upper(w)``.
    """

    def bounds(self, v: float) -> Tuple[float, float]:
        raise NotImplementedError

    def bounds_array(self, values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Window bounds for many values; defaults to calling :meth:`bounds`."""
        lows = np.empty(values.shape[0], dtype=float)
        highs = np.empty(values.shape[0], dtype=float)
        for i, v in enumerate(values):
            lows[i], highs[i] = self.bounds(float(v))
        return lows, highs


@dataclass(frozen=True)
class FixedTolerance(TieWindow):
    """Window ``[v - eps, v + eps]``."""

    eps: float = 1e-6

    def __post_init__(self) -> None:
        if not np.isfinite(self.eps) or self.eps < 0:
            raise InvalidArgumentError(f"tie tolerance must be a finite value >= 0, got {self.eps}.")

    def bounds(self, v: float) -> Tuple[float, float]:
        return v - self.eps, v + self.eps

    def bounds_array(self, values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        return values - self.eps, values + self.eps


@dataclass(frozen=True)
class CallableTieWindow(TieWindow):
    """Window given by a user function ``v -> (lower, upper)``."""

    func: BoundsFunction

    def bounds(self, v: float) -> Tuple[float, float]:
        lower, upper = self.func(v)
        return float(lower), float(upper)


TieLike = Union[float, int, TieWindow, BoundsFunction]


def resolve_tie_window(tie: TieLike) -> TieWindow:
    """Turn a tolerance, strategy object or bounds function into a :class:`TieWindow`."""
    if isinstance(tie, TieWindow):
        return tie
    if callable(tie):
        return CallableTieWindow(tie)
    if isinstance(tie, (bool, np.bool_)):
        raise InvalidArgumentError("tie must be a number, a TieWindow or a callable, not a bool.")
    try:
        eps = float(tie)
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            f"tie must be a number, a TieWindow or a callable, got {type(tie).__name__}."
        ) from None
    return FixedTolerance(eps)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PairCount:
    """Counts over all ``n1 * n0`` (positive, negative) pairs."""

    concordant: int
    tied: int
    discordant: int

    @property
    def pairs(self) -> int:
        return self.concordant + self.tied + self.discordant

    @property
    def auc(self) -> float:
        """Area under the ROC curve, ties counted as half."""
        return (self.concordant + 0.5 * self.tied) / self.pairs

    @property
    def gini(self) -> float:
        return 2.0 * self.auc - 1.0

    @property
    def gamma(self) -> float:
        """Goodman-Kruskal gamma; NaN when every pair is tied."""
        untied = self.concordant + self.discordant
        if untied == 0:
            return float("nan")
        return (self.concordant - self.discordant) / untied


# ---------------------------------------------------------------------------
# Counting
# ---------------------------------------------------------------------------


def _merge_scan(c1: np.ndarray, c0: np.ndarray, window: TieWindow) -> Tuple[int, int]:
    """Two-pointer scan of sorted positives ``c1`` against sorted negatives ``c0``."""
    n0 = c0.shape[0]
    conc = 0
    tied = 0
    low = 0
    high = 0
    prev_lower = -np.inf
    prev_upper = -np.inf

    for v in c1:
        lower, upper = window.bounds(float(v))
        if lower < prev_lower or upper < prev_upper:
            raise InvalidArgumentError(
                f"tie window is not monotonic at value {v}: "
                f"({lower}, {upper}) follows ({prev_lower}, {prev_upper})."
            )
        prev_lower, prev_upper = lower, upper

        while low < n0 and c0[low] < lower:
            low += 1
        while high < n0 and c0[high] <= upper:
            high += 1

        conc += low
        # A window whose upper bound sits below its lower bound holds nothing.
        tied += max(high - low, 0)

    return conc, tied


def _vectorized_scan(c1: np.ndarray, c0: np.ndarray, window: TieWindow) -> Tuple[int, int]:
    """Pointer positions of :func:`_merge_scan` for every positive at once."""
    lowers, uppers = window.bounds_array(c1)
    low = np.searchsorted(c0, lowers, side="left")
    high = np.searchsorted(c0, uppers, side="right")
    conc = int(low.sum(dtype=np.int64))
    tied = int(np.maximum(high - low, 0).sum(dtype=np.int64))
    return conc, tied


def count_pairs(positives: ArrayLike, negatives: ArrayLike, tie: TieLike = 1e-6) -> PairCount:
    """Count concordant, tied and discordant (positive, negative) pairs.

    Parameters
    ----------
    positives, negatives:
        Scores of the positive / negative class. Missing values are refused.
    tie:
        Fixed tolerance ``eps >= 0``, a :class:`TieWindow`, or a monotonic
        callable ``v -> (lower, upper)`` (both bounds inclusive).

    Raises
    ------
    DegenerateClassError
        When either subset is empty.
    InvalidArgumentError
        On missing scores, a negative tolerance or a non-monotonic window.
    """
    c1 = np.sort(as_observed_scores(positives, name="positives"))
    c0 = np.sort(as_observed_scores(negatives, name="negatives"))
    n1 = int(c1.shape[0])
    n0 = int(c0.shape[0])

    if n1 == 0:
        raise DegenerateClassError(f"there are no class 1 observations (n1=0, n0={n0}).")
    if n0 == 0:
        raise DegenerateClassError(f"there are no class 0 observations (n1={n1}, n0=0).")

    window = resolve_tie_window(tie)
    if isinstance(window, FixedTolerance):
        conc, tied = _vectorized_scan(c1, c0, window)
    else:
        conc, tied = _merge_scan(c1, c0, window)

    disc = n1 * n0 - conc - tied
    logger.debug("count_pairs: n1=%d n0=%d concordant=%d tied=%d discordant=%d", n1, n0, conc, tied, disc)
    return PairCount(concordant=conc, tied=tied, discordant=disc)


def concordance(label: ArrayLike, score: ArrayLike, tie: TieLike = 1e-6) -> PairCount:
    """Pair counts for a labelled sample (labels normalized, then partitioned)."""
    check_lengths(label, score)
    y = normalize_labels(label)
    x = as_observed_scores(score)
    return count_pairs(x[y], x[~y], tie=tie)


__all__ = [
    "TieWindow",
    "FixedTolerance",
    "CallableTieWindow",
    "PairCount",
    "resolve_tie_window",
    "count_pairs",
    "concordance",
]
