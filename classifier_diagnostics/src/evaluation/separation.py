"""Two-sample Kolmogorov-Smirnov style separation.

All records are put in one order by score (descending when ``rev``) with a
stable sort, so tied records keep their input order and each record keeps
its own position; ties are not merged the way binning merges them. Walking
that order:

    cdf1 = positives seen / n1      (true positive rate)
    cdf0 = negatives seen / n0      (false positive rate)
    sep  = cdf1 - cdf0

``ks`` is the maximum of ``sep`` over all prefixes (the first one when
several reach it), ``ksarg`` the score at that position and ``ksdep`` its
depth, ``(position + 1) / n``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

import numpy as np

from classifier_diagnostics.src.data.sample import (
    ArrayLike,
    as_observed_scores,
    check_lengths,
    normalize_labels,
)
from classifier_diagnostics.src.exceptions import DegenerateClassError


@dataclass(frozen=True)
class SeparationResult:
    n: int
    n1: int
    n0: int
    baserate: float
    ks: float
    ksarg: float
    ksdep: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def max_separation(label: ArrayLike, score: ArrayLike, rev: bool = True) -> SeparationResult:
    """Maximum separation between the positive and negative score CDFs.

    Parameters
    ----------
    label:
        Boolean labels, or any 2-level vector (normalized by sorted order).
    score:
        Fully observed scores.
    rev:
        When True (default) depth is counted from the highest score down.

    Raises
    ------
    LengthMismatchError
        When ``label`` and ``score`` differ in length.
    DegenerateClassError
        When either class is empty.
    """
    n = check_lengths(label, score)
    y = normalize_labels(label)
    x = as_observed_scores(score)

    n1 = int(y.sum())
    n0 = n - n1
    if n1 == 0:
        raise DegenerateClassError(f"there are no class 1 observations (n={n}, n1=0).")
    if n0 == 0:
        raise DegenerateClassError(f"there are no class 0 observations (n={n}, n0=0).")

    order = np.argsort(-x if rev else x, kind="stable")
    tgt = y[order]
    cdf1 = np.cumsum(tgt) / n1
    cdf0 = np.cumsum(~tgt) / n0
    sep = cdf1 - cdf0

    ksidx = int(np.argmax(sep))
    return SeparationResult(
        n=n,
        n1=n1,
        n0=n0,
        baserate=n1 / n,
        ks=float(sep[ksidx]),
        ksarg=float(x[order[ksidx]]),
        ksdep=(ksidx + 1) / n,
    )


__all__ = ["SeparationResult", "max_separation"]
