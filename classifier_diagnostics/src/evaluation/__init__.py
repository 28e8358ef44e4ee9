"""Rank-based evaluation primitives.

- :mod:`.binning`: tie-consistent equal-population bins from tied ranks;
- :mod:`.concordance`: concordant / tied / discordant pairs, AUROC and Gini;
- :mod:`.separation`: two-sample KS statistic and its location;
- :mod:`.aggregate`: the :class:`Diagnostics` record read by every report.
"""

from __future__ import annotations

from .aggregate import Diagnostics, aggregate, aggregate_from_config
from .binning import RankedBins, bin_ids, rank_and_bin, resolve_rank_method
from .concordance import (
    CallableTieWindow,
    FixedTolerance,
    PairCount,
    TieWindow,
    concordance,
    count_pairs,
    resolve_tie_window,
)
from .separation import SeparationResult, max_separation

__all__ = [
    "Diagnostics",
    "aggregate",
    "aggregate_from_config",
    "RankedBins",
    "rank_and_bin",
    "bin_ids",
    "resolve_rank_method",
    "TieWindow",
    "FixedTolerance",
    "CallableTieWindow",
    "PairCount",
    "count_pairs",
    "concordance",
    "resolve_tie_window",
    "SeparationResult",
    "max_separation",
]
