"""Error kinds raised by the diagnostics primitives.

All of them derive from :class:`ValueError` so that callers catching the usual
input-validation error keep working. They are raised where the problem is
detected and never retried internally.
"""

from __future__ import annotations


class DiagnosticsError(ValueError):
    """Base class for invalid diagnostics input."""


class LengthMismatchError(DiagnosticsError):
    """``label`` and ``score`` have different lengths."""


class DegenerateClassError(DiagnosticsError):
    """One of the two classes has no members."""


class InvalidArgumentError(DiagnosticsError):
    """An argument violates a precondition (levels, sizes, groups, tie)."""


__all__ = [
    "DiagnosticsError",
    "LengthMismatchError",
    "DegenerateClassError",
    "InvalidArgumentError",
]
