"""Report tables computed from a :class:`Diagnostics` record."""

from __future__ import annotations

from .tables import (
    LiftRow,
    UtilityCurve,
    calibration_points,
    cumulative_lift_table,
    lift_table,
    table_to_frame,
    utility_curve,
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
