"""Source package for the binary classifier diagnostics project.

Package layout
--------------
- data: label normalization and score coercion (the validated sample)
- evaluation: rank binning, concordance, KS separation, and the aggregator
- reporting: lift / cumulative lift views and the utility curve
- utils: logging and YAML configuration

We intentionally keep this ``__init__`` lightweight so that importing the
package does not pull pandas in before it is needed.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "data",
    "evaluation",
    "reporting",
    "utils",
]
