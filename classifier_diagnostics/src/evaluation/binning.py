"""Tie-consistent equal-population binning.

Scores are first ranked, then ranks are mapped to bin ids with::

    bin = floor(rank * groups / (n_obs + 1))

With the default mid-rank (``"average"``) strategy, equal scores share one
rank and therefore always land in the same bin. The grouping matches
SAS ``PROC RANK groups=n ties=mean``.

Missing scores are left out of the ranking: observed ranks span
``[1, n_obs]`` and ``n_obs`` is the denominator. The missing positions come
back as ``pd.NA`` in both outputs, so results stay aligned with the input.

Because ``rank <= n_obs``, ``rank * groups / (n_obs + 1) < groups`` and bin
ids always fall in ``[0, groups - 1]``.
"""

from __future__ import annotations

from typing import Callable, Dict, NamedTuple, Union

import numpy as np
import pandas as pd

from classifier_diagnostics.src.data.sample import ArrayLike, as_score_series
from classifier_diagnostics.src.exceptions import InvalidArgumentError

RankFunction = Callable[[np.ndarray, bool], np.ndarray]
RankMethod = Union[str, RankFunction]

# Public strategy names -> pandas ``Series.rank(method=...)``.
_PANDAS_RANK_METHODS: Dict[str, str] = {
    "average": "average",
    "tied": "average",
    "ordinal": "first",
    "first": "first",
    "min": "min",
    "competition": "min",
    "dense": "dense",
}


class RankedBins(NamedTuple):
    """Ranks and bin ids, position-aligned with the input scores."""

    ranks: pd.arrays.FloatingArray
    bins: pd.arrays.IntegerArray


def _pandas_ranker(method: str) -> RankFunction:
    def _rank(values: np.ndarray, rev: bool) -> np.ndarray:
        return pd.Series(values).rank(method=method, ascending=not rev).to_numpy(dtype=float)

    _rank.__name__ = f"rank_{method}"
    return _rank


def resolve_rank_method(rank_method: RankMethod) -> RankFunction:
    """Return a ranking callable ``(values, rev) -> ranks`` for a strategy."""
    if callable(rank_method):
        return rank_method
    try:
        return _pandas_ranker(_PANDAS_RANK_METHODS[str(rank_method).lower()])
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown rank_method {rank_method!r}; expected one of {sorted(_PANDAS_RANK_METHODS)} or a callable."
        ) from None


def rank_and_bin(
    score: ArrayLike,
    groups: int = 10,
    rev: bool = False,
    rank_method: RankMethod = "average",
) -> RankedBins:
    """Rank ``score`` and bin the ranks into ``groups`` equal-population bins.

    Parameters
    ----------
    score:
        Numeric scores; ``None`` / ``NaN`` / ``pd.NA`` are treated as missing.
    groups:
        Number of bins (>= 2).
    rev:
        When True, rank 1 is the largest score, so bin 0 holds the highest
        scores.
    rank_method:
        ``"average"`` (default), ``"ordinal"``, ``"min"``, ``"dense"``, or a
        callable ``(values, rev) -> ranks`` applied to the observed values.

    Returns
    -------
    RankedBins
        ``ranks`` as a ``Float64`` array and ``bins`` as an ``Int64`` array,
        both with ``pd.NA`` where the score is missing.

    Raises
    ------
    InvalidArgumentError
        When fewer than 2 scores are observed or ``groups < 2``.
    """
    values = as_score_series(score)
    missing = values.isna().to_numpy()
    observed = values[~missing].to_numpy(dtype=float)
    n_obs = int(observed.shape[0])

    if n_obs < 2:
        raise InvalidArgumentError(f"score should have >= 2 observed values, got {n_obs}.")
    if int(groups) < 2:
        raise InvalidArgumentError(f"groups should be >= 2, got {groups}.")
    groups = int(groups)

    ranker = resolve_rank_method(rank_method)
    obs_ranks = np.asarray(ranker(observed, bool(rev)), dtype=float)
    if obs_ranks.shape != observed.shape:
        raise InvalidArgumentError(
            f"rank_method returned shape {obs_ranks.shape}, expected {observed.shape}."
        )

    obs_bins = np.floor(obs_ranks * groups / (n_obs + 1)).astype(np.int64)

    rank_values = np.zeros(missing.shape[0], dtype=float)
    bin_values = np.zeros(missing.shape[0], dtype=np.int64)
    rank_values[~missing] = obs_ranks
    bin_values[~missing] = obs_bins

    return RankedBins(
        ranks=pd.arrays.FloatingArray(rank_values, missing.copy()),
        bins=pd.arrays.IntegerArray(bin_values, missing.copy()),
    )


def bin_ids(
    score: ArrayLike,
    groups: int = 10,
    rev: bool = False,
    rank_method: RankMethod = "average",
) -> pd.arrays.IntegerArray:
    """Convenience wrapper returning only the bin ids of :func:`rank_and_bin`."""
    return rank_and_bin(score, groups=groups, rev=rev, rank_method=rank_method).bins


__all__ = [
    "RankedBins",
    "RankMethod",
    "rank_and_bin",
    "bin_ids",
    "resolve_rank_method",
]
